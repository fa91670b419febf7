from typing import Any

BACKEND_ERROR_CODES = {"timeout", "auth", "rate_limit", "bad_request", "provider_error", "unknown"}


class BackendError(Exception):
    """A single backend invocation failed (provider error or deadline exceeded)."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        code: str = "provider_error",
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.code = code if code in BACKEND_ERROR_CODES else "unknown"
        self.retryable = retryable
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }


class RoutingFailure(Exception):
    """Every backend in the plan failed; no outcome was produced."""

    def __init__(self, message: str, attempts: list[BackendError] | tuple[BackendError, ...]):
        super().__init__(message)
        self.message = message
        self.attempts = tuple(attempts)
