"""Routing endpoint for programmatic callers (n8n, scripts)."""

from fastapi import APIRouter, Depends

from orchestrator.router import Router
from server.dependencies import get_router
from server.schemas.requests import RouteRequest
from server.schemas.responses import ErrorResponseDTO, RouteResponseDTO

router = APIRouter(tags=["Route"])


@router.post(
    "/route",
    response_model=RouteResponseDTO,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponseDTO}, 502: {"model": ErrorResponseDTO}},
)
async def route(request: RouteRequest, llm_router: Router = Depends(get_router)):
    """
    Route a prompt to a backend chosen by quality tier.

    RoutingFailure propagates to the app-level handler, which renders a 502.
    """
    outcome = await llm_router.route(request.to_routing_request())
    return RouteResponseDTO.from_outcome(outcome)
