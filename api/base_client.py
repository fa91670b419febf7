import time
from typing import Any, Protocol, runtime_checkable

import openai

from models.errors import BackendError
from utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Backend(Protocol):
    """
    Capability every routing backend exposes.

    Any object with a ``provider_name`` and an async ``generate`` is a valid
    backend; the router never checks for a base class.
    """

    provider_name: str

    async def generate(self, prompt: str, max_tokens: int) -> str: ...


class OpenAICompatibleClient:
    """
    Single-turn chat completion over any OpenAI-compatible endpoint.

    Subclasses only pin the provider name, default model and base URL.
    Every failure is raised as BackendError; deadlines are the caller's job.
    """

    provider_name = "openai"
    default_model = "gpt-4o-mini"
    base_url: str | None = None

    def __init__(
        self,
        api_key: str,
        model_name: str | None = None,
        *,
        base_url: str | None = None,
        temperature: float = 0.2,
    ):
        """
        Args:
            api_key: API key for the provider
            model_name: Model to use (defaults to the subclass default)
            base_url: Override the provider endpoint
            temperature: Sampling temperature sent with every request
        """
        self.model_name = model_name or self.default_model
        self.temperature = temperature
        # A missing key must not fall through to OPENAI_API_KEY for other providers;
        # the provider rejects the call and it surfaces as an auth BackendError.
        # The router owns retry policy: one request per attempt.
        self.client = openai.AsyncOpenAI(
            api_key=api_key or "",
            base_url=base_url or self.base_url,
            max_retries=0,
        )

    async def generate(self, prompt: str, max_tokens: int) -> str:
        start_time = time.monotonic()

        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"{self.provider_name} completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "provider": self.provider_name,
                        "model": self.model_name,
                        "error_code": error.code,
                        "error_message": error.message,
                        "retryable": error.retryable,
                        "latency_ms": self._measure_latency(start_time),
                    }
                },
            )
            raise error from e

        text = self._extract_text(response)

        logger.info(
            f"{self.provider_name} completion successful",
            extra={
                "extra_fields": {
                    "provider": self.provider_name,
                    "model": self.model_name,
                    "latency_ms": self._measure_latency(start_time),
                    "tokens": getattr(getattr(response, "usage", None), "total_tokens", None),
                }
            },
        )
        return text

    def _extract_text(self, response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise BackendError(
                "Provider returned no choices",
                provider=self.provider_name,
                code="provider_error",
            )

        content = getattr(choices[0].message, "content", None)
        if not content:
            raise BackendError(
                "Provider returned an empty completion",
                provider=self.provider_name,
                code="provider_error",
                details={"finish_reason": getattr(choices[0], "finish_reason", None)},
            )
        return content

    def _normalize_error(self, error: Exception) -> BackendError:
        """Map an SDK exception onto a BackendError with a stable code."""
        if isinstance(error, BackendError):
            return error

        details: dict[str, Any] = {"exception_type": type(error).__name__}
        status_code = getattr(error, "status_code", None)
        if status_code is not None:
            details["status_code"] = status_code

        if isinstance(error, openai.APITimeoutError):
            code, retryable = "timeout", True
        elif isinstance(error, openai.APIConnectionError):
            code, retryable = "provider_error", True
        elif isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
            code, retryable = "auth", False
        elif isinstance(error, openai.RateLimitError):
            code, retryable = "rate_limit", True
        elif isinstance(error, (openai.BadRequestError, openai.NotFoundError)):
            code, retryable = "bad_request", False
        elif isinstance(error, openai.APIStatusError):
            code, retryable = "provider_error", status_code is not None and status_code >= 500
        else:
            code, retryable = "unknown", False

        return BackendError(
            str(error),
            provider=self.provider_name,
            code=code,
            retryable=retryable,
            details=details,
        )

    @staticmethod
    def _measure_latency(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model_name='{self.model_name}')"
