"""
FastAPI contract tests for /route, /ui and /health.

A Router over in-memory fake backends is injected with dependency overrides,
so no provider is called and no network is used.
"""

import pytest
from fastapi.testclient import TestClient

from server.app import create_app
from server.dependencies import get_router
from tests.conftest import FakeBackend

pytestmark = pytest.mark.integration


@pytest.fixture
def client_for(make_router):
    def _client(fast_backend, quality_backend, **deadlines):
        app = create_app()
        router = make_router(fast_backend, quality_backend, **deadlines)
        app.dependency_overrides[get_router] = lambda: router
        return TestClient(app)

    return _client


def test_health(client_for, fast, quality):
    r = client_for(fast, quality).get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_route_primary_success(client_for, quality):
    fast = FakeBackend("groq", answer="4")
    r = client_for(fast, quality).post("/route", json={"prompt": "2+2?", "quality": "free"})

    assert r.status_code == 200
    data = r.json()
    assert data["provider_used"] == "groq"
    assert data["answer"] == "4"
    assert isinstance(data["latency_ms"], int)
    assert "fallback_from" not in data
    assert "error_from_primary" not in data


def test_route_applies_defaults(client_for, fast, quality):
    r = client_for(fast, quality).post("/route", json={"prompt": "hello"})
    assert r.status_code == 200
    assert fast.calls == [("hello", 512)]


def test_route_fallback_reports_provenance(client_for, quality):
    fast = FakeBackend("groq", error=ConnectionError("connection refused"))
    r = client_for(fast, quality).post("/route", json={"prompt": "2+2?", "max_tokens": 100})

    assert r.status_code == 200
    data = r.json()
    assert data["provider_used"] == "openai"
    assert data["fallback_from"] == "groq"
    assert data["error_from_primary"] == "connection refused"
    assert quality.calls == [("2+2?", 100)]


def test_route_best_timeout_is_routing_failure(client_for, fast):
    quality = FakeBackend("openai", delay_s=5.0)
    r = client_for(fast, quality, quality_deadline_s=0.05).post(
        "/route", json={"prompt": "2+2?", "quality": "best"}
    )

    assert r.status_code == 502
    data = r.json()
    assert data["type"] == "routing_failure"
    assert "provider_used" not in data
    assert [a["code"] for a in data["attempts"]] == ["timeout"]
    assert fast.calls == []


def test_route_both_fail(client_for):
    fast = FakeBackend("groq", error=ConnectionError("down"))
    quality = FakeBackend("openai", error=RuntimeError("also down"))
    r = client_for(fast, quality).post("/route", json={"prompt": "hi"})

    assert r.status_code == 502
    data = r.json()
    assert "down" in data["error"]
    assert [a["provider"] for a in data["attempts"]] == ["groq", "openai"]


@pytest.mark.parametrize(
    "body",
    [
        {"prompt": ""},
        {"prompt": "2+2?", "max_tokens": 10000},
        {"prompt": "2+2?", "max_tokens": 8},
        {"prompt": "2+2?", "max_tokens": 12.5},
        {"prompt": "2+2?", "max_tokens": "512"},
        {"prompt": "2+2?", "quality": "premium"},
        {"quality": "free"},
    ],
)
def test_route_rejects_invalid_body_before_routing(client_for, fast, quality, body):
    r = client_for(fast, quality).post("/route", json=body)

    assert r.status_code == 400
    data = r.json()
    assert data["type"] == "validation_error"
    assert data["error"]
    assert fast.calls == []
    assert quality.calls == []


def test_ui_renders_empty_form(client_for, fast, quality):
    r = client_for(fast, quality).get("/ui")
    assert r.status_code == 200
    assert "<form" in r.text
    assert fast.calls == []


def test_ui_blank_query_renders_form_without_routing(client_for, fast, quality):
    r = client_for(fast, quality).get("/ui", params={"q": "   "})
    assert r.status_code == 200
    assert fast.calls == []


def test_ui_routes_and_escapes_output(client_for, quality):
    fast = FakeBackend("groq", answer="<b>bold</b> & more")
    r = client_for(fast, quality).get("/ui", params={"q": " <script>alert(1)</script> "})

    assert r.status_code == 200
    assert "<script>" not in r.text
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in r.text
    assert "&lt;b&gt;bold&lt;/b&gt; &amp; more" in r.text
    assert "groq" in r.text
    assert fast.calls == [("<script>alert(1)</script>", 500)]


def test_ui_shows_routing_failure(client_for):
    fast = FakeBackend("groq", error=ConnectionError("down"))
    quality = FakeBackend("openai", error=ConnectionError("<down too>"))
    r = client_for(fast, quality).get("/ui", params={"q": "hi"})

    assert r.status_code == 502
    assert "&lt;down too&gt;" in r.text
