"""
Router - picks backends for a quality tier and runs them under deadlines.

Each call to ``route`` is independent: the plan, the attempt errors and the
timing all live on the stack of that call, so one Router instance serves any
number of concurrent requests.
"""

import asyncio
import time

from api.base_client import Backend
from models.errors import BackendError, RoutingFailure
from models.routing import RoutingOutcome, RoutingRequest
from orchestrator.fallback_manager import FallbackManager
from orchestrator.routing_types import BackendPlan, BackendRole, NextAction
from orchestrator.tier_decider import TierDecider
from utils.logger import get_logger

logger = get_logger(__name__)

FAST_DEADLINE_S = 12.0
QUALITY_DEADLINE_S = 20.0


def _discard_result(task: asyncio.Task) -> None:
    """Retrieve and drop the result of an abandoned backend call."""
    if task.cancelled():
        return
    exc = task.exception()
    logger.debug(
        "Discarded late result from abandoned backend call",
        extra={"extra_fields": {"late_error": str(exc) if exc else None}},
    )


def _wrap_backend_exception(name: str, error: Exception) -> BackendError:
    # Third-party backends may raise anything
    return BackendError(
        str(error) or type(error).__name__,
        provider=name,
        code="unknown",
        details={"exception_type": type(error).__name__},
    )


class Router:
    """
    Routes a RoutingRequest to one backend, with at most one fallback hop.

    Example usage:
        router = Router(fast_backend=GroqClient(...), quality_backend=OpenAIClient(...))
        outcome = await router.route(RoutingRequest(prompt="2+2?"))
        print(outcome.backend_used, outcome.latency_ms, outcome.answer)
    """

    def __init__(
        self,
        fast_backend: Backend,
        quality_backend: Backend,
        *,
        deadlines_s: dict[BackendRole, float] | None = None,
        tier_decider: TierDecider | None = None,
        fallback_manager: FallbackManager | None = None,
    ):
        """
        Args:
            fast_backend: Low-cost backend, primary for the free and cheap tiers
            quality_backend: High-quality backend, primary for best and fallback for free
            deadlines_s: Per-role deadline overrides in seconds
            tier_decider: Plan selection strategy
            fallback_manager: Transition policy after a failed attempt
        """
        self._backends: dict[BackendRole, Backend] = {
            BackendRole.FAST: fast_backend,
            BackendRole.QUALITY: quality_backend,
        }
        self._deadlines_s: dict[BackendRole, float] = {
            BackendRole.FAST: FAST_DEADLINE_S,
            BackendRole.QUALITY: QUALITY_DEADLINE_S,
        }
        if deadlines_s:
            self._deadlines_s.update(deadlines_s)
        self.tier_decider = tier_decider or TierDecider()
        self.fallback_manager = fallback_manager or FallbackManager()

    @classmethod
    def from_config(cls, config) -> "Router":
        """Build a router over the Groq and OpenAI clients described by config."""
        from api.groq_client import GroqClient
        from api.openai_client import OpenAIClient

        return cls(
            fast_backend=GroqClient(
                api_key=config.GROQ_API_KEY,
                model_name=config.FAST_MODEL,
                base_url=config.GROQ_BASE_URL,
                temperature=config.TEMPERATURE,
            ),
            quality_backend=OpenAIClient(
                api_key=config.OPENAI_API_KEY,
                model_name=config.QUALITY_MODEL,
                temperature=config.TEMPERATURE,
            ),
        )

    def backend_name(self, role: BackendRole) -> str:
        return self._backends[role].provider_name

    def deadline_for(self, role: BackendRole) -> float:
        return self._deadlines_s[role]

    def plan_for(self, quality_tier) -> BackendPlan:
        return self.tier_decider.decide(quality_tier)

    async def route(self, request: RoutingRequest) -> RoutingOutcome:
        """
        Run the plan for ``request.quality_tier`` and return the first answer.

        Raises:
            RoutingFailure: Every attempted backend failed or timed out.
        """
        started = time.monotonic()
        plan = self.plan_for(request.quality_tier)
        errors: list[BackendError] = []

        logger.info(
            "Routing request",
            extra={
                "extra_fields": {
                    "quality_tier": str(request.quality_tier),
                    "plan": [self.backend_name(role) for role in plan.steps],
                    "max_tokens": request.max_tokens,
                    "prompt_chars": len(request.prompt),
                }
            },
        )

        role = plan.primary
        for attempt_index in range(len(plan.steps)):
            try:
                answer = await self._call_with_deadline(role, request)
            except BackendError as error:
                errors.append(error)
                decision = self.fallback_manager.decide(plan=plan, attempt_index=attempt_index)
                logger.warning(
                    f"Backend {self.backend_name(role)} failed: {error.code}",
                    extra={
                        "extra_fields": {
                            "provider": self.backend_name(role),
                            "attempt": attempt_index + 1,
                            "error_code": error.code,
                            "error_message": error.message,
                            "next_action": decision.action.value,
                            "reason": decision.reason,
                        }
                    },
                )
                if decision.action is NextAction.STOP:
                    break
                role = decision.next_role
                continue

            outcome = self._build_outcome(plan, role, answer, errors, started)
            logger.info(
                "Routing complete",
                extra={
                    "extra_fields": {
                        "provider_used": outcome.backend_used,
                        "fallback_from": outcome.fallback_from,
                        "latency_ms": outcome.latency_ms,
                    }
                },
            )
            return outcome

        failure = RoutingFailure(
            "All backends failed: "
            + "; ".join(f"{error.provider}: {error.message}" for error in errors),
            attempts=errors,
        )
        logger.error(
            "Routing failed",
            extra={
                "extra_fields": {
                    "quality_tier": str(request.quality_tier),
                    "attempts": [error.to_dict() for error in errors],
                    "latency_ms": int((time.monotonic() - started) * 1000),
                }
            },
        )
        raise failure from errors[-1]

    async def _call_with_deadline(self, role: BackendRole, request: RoutingRequest) -> str:
        """
        Race one backend call against its deadline.

        A call that misses the deadline is cancelled and its eventual result
        is discarded.
        """
        backend = self._backends[role]
        name = backend.provider_name
        deadline_s = self._deadlines_s[role]

        try:
            task = asyncio.create_task(backend.generate(request.prompt, request.max_tokens))
        except BackendError:
            raise
        except Exception as e:
            # generate raised before suspending, or returned a non-awaitable
            raise _wrap_backend_exception(name, e) from e

        try:
            done, _ = await asyncio.wait({task}, timeout=deadline_s)
        finally:
            if not task.done():
                task.cancel()
                task.add_done_callback(_discard_result)

        if task not in done:
            raise BackendError(
                f"{name} timed out after {deadline_s:g}s",
                provider=name,
                code="timeout",
                retryable=True,
                details={"deadline_s": deadline_s},
            )

        try:
            return task.result()
        except BackendError:
            raise
        except Exception as e:
            raise _wrap_backend_exception(name, e) from e

    def _build_outcome(
        self,
        plan: BackendPlan,
        role: BackendRole,
        answer: str,
        errors: list[BackendError],
        started: float,
    ) -> RoutingOutcome:
        latency_ms = int((time.monotonic() - started) * 1000)
        if role is plan.primary:
            return RoutingOutcome(
                backend_used=self.backend_name(role), answer=answer, latency_ms=latency_ms
            )

        primary_error = errors[0]
        return RoutingOutcome(
            backend_used=self.backend_name(role),
            answer=answer,
            latency_ms=latency_ms,
            fallback_from=self.backend_name(plan.primary),
            primary_error_message=primary_error.message or primary_error.code,
        )
