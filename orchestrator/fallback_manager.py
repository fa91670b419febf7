from orchestrator.routing_types import BackendPlan, FallbackDecision, NextAction


class FallbackManager:
    def decide(self, *, plan: BackendPlan, attempt_index: int) -> FallbackDecision:
        if attempt_index > 0:
            return FallbackDecision(action=NextAction.STOP, next_role=None, reason="fallback_exhausted")

        if not plan.has_fallback:
            return FallbackDecision(action=NextAction.STOP, next_role=None, reason="no_fallback")

        return FallbackDecision(
            action=NextAction.FALLBACK, next_role=plan.fallback, reason="primary_failed"
        )
