from orchestrator.routing_types import BackendPlan, BackendRole, QualityTier

_PLANS: dict[QualityTier, BackendPlan] = {
    QualityTier.BEST: BackendPlan(steps=(BackendRole.QUALITY,)),
    QualityTier.CHEAP: BackendPlan(steps=(BackendRole.FAST,)),
    QualityTier.FREE: BackendPlan(steps=(BackendRole.FAST, BackendRole.QUALITY)),
}


class TierDecider:
    """Maps a requested quality tier onto an ordered backend plan."""

    def resolve_tier(self, tier) -> QualityTier:
        # Anything unrecognised is treated as the default tier
        try:
            return QualityTier(tier)
        except ValueError:
            return QualityTier.FREE

    def decide(self, tier) -> BackendPlan:
        return _PLANS[self.resolve_tier(tier)]
