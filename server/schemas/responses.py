"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field


class RouteResponseDTO(BaseModel):
    provider_used: str
    latency_ms: int
    answer: str
    fallback_from: str | None = None
    error_from_primary: str | None = None

    @classmethod
    def from_outcome(cls, outcome):
        """Convert RoutingOutcome to DTO."""
        return cls(**outcome.to_dict())


class AttemptErrorDTO(BaseModel):
    provider: str
    code: str
    message: str
    retryable: bool = False


class ErrorResponseDTO(BaseModel):
    error: str
    type: str
    attempts: list[AttemptErrorDTO] = Field(default_factory=list)

    @classmethod
    def from_routing_failure(cls, failure):
        return cls(
            error=failure.message,
            type="routing_failure",
            attempts=[AttemptErrorDTO(**attempt.to_dict()) for attempt in failure.attempts],
        )


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
