"""Pydantic request models for FastAPI endpoints."""

from typing import Literal

from pydantic import BaseModel, Field

from models.routing import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_QUALITY_TIER,
    MAX_MAX_TOKENS,
    MIN_MAX_TOKENS,
    RoutingRequest,
)


class RouteRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    quality: Literal["free", "cheap", "best"] = DEFAULT_QUALITY_TIER
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=MIN_MAX_TOKENS, le=MAX_MAX_TOKENS, strict=True)

    def to_routing_request(self) -> RoutingRequest:
        return RoutingRequest(
            prompt=self.prompt, quality_tier=self.quality, max_tokens=self.max_tokens
        )
