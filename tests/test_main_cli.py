import asyncio

import pytest

import main
from models.routing import RoutingOutcome
from tests.conftest import FakeBackend


def test_format_outcome_mentions_fallback():
    outcome = RoutingOutcome(
        backend_used="openai",
        answer="4",
        latency_ms=850,
        fallback_from="groq",
        primary_error_message="groq timed out after 12s",
    )
    text = main.format_outcome(outcome)
    assert text.startswith("[openai in 850 ms, fell back from groq: groq timed out after 12s]")
    assert text.endswith("\n4")


def test_ask_prints_answer(capsys, make_router):
    router = make_router(FakeBackend("groq", answer="4"), FakeBackend("openai"))
    code = asyncio.run(main.ask(router, "2+2?", "cheap", 64))

    assert code == 0
    assert "[groq in" in capsys.readouterr().out


def test_ask_reports_routing_failure(capsys, make_router):
    router = make_router(FakeBackend("groq", error=ConnectionError("down")), FakeBackend("openai"))
    code = asyncio.run(main.ask(router, "2+2?", "cheap", 64))

    assert code == 1
    assert "down" in capsys.readouterr().err


def test_out_of_range_max_tokens_is_rejected():
    with pytest.raises(SystemExit) as exc_info:
        main.main(["--max-tokens", "10000", "hi"])
    assert exc_info.value.code == 2


def test_missing_credentials_exit_early(monkeypatch, capsys):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(main.Config, "__init__", _config_without_dotenv)

    assert main.main(["hi"]) == 2
    assert "GROQ_API_KEY" in capsys.readouterr().err


def _config_without_dotenv(self):
    self.GROQ_API_KEY = None
    self.OPENAI_API_KEY = None


@pytest.mark.parametrize(
    "quality,present,missing",
    [
        ("cheap", "GROQ_API_KEY", "OPENAI_API_KEY"),
        ("best", "OPENAI_API_KEY", "GROQ_API_KEY"),
    ],
)
def test_single_backend_tier_needs_only_its_key(
    monkeypatch, capsys, make_router, quality, present, missing
):
    def config_with_one_key(self):
        _config_without_dotenv(self)
        setattr(self, present, "test-key")

    router = make_router(FakeBackend("groq", answer="fast"), FakeBackend("openai", answer="slow"))
    monkeypatch.setattr(main.Config, "__init__", config_with_one_key)
    monkeypatch.setattr(main.Router, "from_config", lambda config: router)

    assert main.main(["--quality", quality, "hi"]) == 0
    assert missing not in capsys.readouterr().err


def test_free_tier_needs_both_keys(monkeypatch, capsys):
    def config_with_groq_only(self):
        _config_without_dotenv(self)
        self.GROQ_API_KEY = "test-key"

    monkeypatch.setattr(main.Config, "__init__", config_with_groq_only)

    assert main.main(["--quality", "free", "hi"]) == 2
    assert "OPENAI_API_KEY" in capsys.readouterr().err


def test_required_credentials_follow_the_plan():
    assert main.required_credentials("free") == ["GROQ_API_KEY", "OPENAI_API_KEY"]
    assert main.required_credentials("cheap") == ["GROQ_API_KEY"]
    assert main.required_credentials("best") == ["OPENAI_API_KEY"]
