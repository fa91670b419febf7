import asyncio

import pytest

from orchestrator.router import Router
from orchestrator.routing_types import BackendRole


class FakeBackend:
    """In-memory backend; records calls and can fail, stall or answer."""

    def __init__(
        self,
        provider_name: str,
        answer: str = "ok",
        error: Exception | None = None,
        delay_s: float = 0.0,
    ):
        self.provider_name = provider_name
        self.answer = answer
        self.error = error
        self.delay_s = delay_s
        self.calls: list[tuple[str, int]] = []
        self.cancelled = False

    async def generate(self, prompt: str, max_tokens: int) -> str:
        self.calls.append((prompt, max_tokens))
        if self.delay_s:
            try:
                await asyncio.sleep(self.delay_s)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def fast():
    return FakeBackend("groq", answer="fast answer")


@pytest.fixture
def quality():
    return FakeBackend("openai", answer="quality answer")


@pytest.fixture
def make_router():
    """Build a Router over the given fakes with short deadlines."""

    def _make(fast_backend, quality_backend, fast_deadline_s=0.5, quality_deadline_s=0.5):
        return Router(
            fast_backend=fast_backend,
            quality_backend=quality_backend,
            deadlines_s={
                BackendRole.FAST: fast_deadline_s,
                BackendRole.QUALITY: quality_deadline_s,
            },
        )

    return _make
