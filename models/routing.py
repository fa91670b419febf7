from dataclasses import dataclass
from typing import Any

DEFAULT_QUALITY_TIER = "free"
DEFAULT_MAX_TOKENS = 512
MIN_MAX_TOKENS = 16
MAX_MAX_TOKENS = 2048


@dataclass(frozen=True)
class RoutingRequest:
    prompt: str
    quality_tier: str = DEFAULT_QUALITY_TIER
    max_tokens: int = DEFAULT_MAX_TOKENS


@dataclass(frozen=True)
class RoutingOutcome:
    backend_used: str
    answer: str
    latency_ms: int
    fallback_from: str | None = None
    primary_error_message: str | None = None

    def __post_init__(self):
        if not self.backend_used:
            raise ValueError("backend_used must identify the backend that answered")
        if self.latency_ms < 0:
            raise ValueError("latency_ms must be non-negative")
        if (self.fallback_from is None) != (self.primary_error_message is None):
            raise ValueError("fallback_from and primary_error_message must be set together")

    @property
    def used_fallback(self) -> bool:
        return self.fallback_from is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "provider_used": self.backend_used,
            "latency_ms": self.latency_ms,
            "answer": self.answer,
        }
        if self.used_fallback:
            data["fallback_from"] = self.fallback_from
            data["error_from_primary"] = self.primary_error_message
        return data
