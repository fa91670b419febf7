from dataclasses import dataclass
from enum import Enum


class QualityTier(str, Enum):
    FREE = "free"
    CHEAP = "cheap"
    BEST = "best"


class BackendRole(str, Enum):
    FAST = "fast"
    QUALITY = "quality"


@dataclass(frozen=True)
class BackendPlan:
    steps: tuple[BackendRole, ...]

    def __post_init__(self):
        if not 1 <= len(self.steps) <= 2:
            raise ValueError("a plan has one primary step and at most one fallback")

    @property
    def primary(self) -> BackendRole:
        return self.steps[0]

    @property
    def fallback(self) -> BackendRole | None:
        return self.steps[1] if len(self.steps) > 1 else None

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not None


class NextAction(str, Enum):
    FALLBACK = "fallback"
    STOP = "stop"


@dataclass(frozen=True)
class FallbackDecision:
    action: NextAction
    next_role: BackendRole | None
    reason: str
