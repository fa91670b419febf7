"""Minimal HTML form used from the browser and the browser extension."""

from html import escape

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse

from models.errors import RoutingFailure
from models.routing import RoutingRequest
from orchestrator.router import Router
from server.dependencies import get_router

router = APIRouter(tags=["UI"])

UI_QUALITY_TIER = "free"
UI_MAX_TOKENS = 500

PAGE = """<html><body style="font-family: sans-serif; max-width: 900px; margin: 40px auto;">
  <h2>LLM Router</h2>
  <form method="GET" action="/ui">
    <input name="q" value="{query}" style="width: 100%; padding: 12px; font-size: 16px;" placeholder="Ask something..." />
    <button style="margin-top: 12px; padding: 10px 14px;">Ask</button>
  </form>
  {result}
</body></html>"""

RESULT = """<p style="color:#666;">Provider: <b>{provider}</b> &bull; Latency: <b>{latency_ms}</b> ms</p>
  <pre style="white-space: pre-wrap; font-size: 15px; line-height: 1.4; padding: 14px; background: #f6f6f6; border-radius: 10px;">{answer}</pre>"""

ERROR = """<p style="color:#b00020;">Error: {error}</p>"""


def _safe(value) -> str:
    return escape(str(value if value is not None else ""), quote=True)


def render_page(query: str = "", result: str = "") -> str:
    return PAGE.format(query=_safe(query), result=result)


@router.get("/ui", response_class=HTMLResponse)
async def ui(q: str = "", llm_router: Router = Depends(get_router)):
    query = q.strip()
    if not query:
        return HTMLResponse(render_page())

    request = RoutingRequest(prompt=query, quality_tier=UI_QUALITY_TIER, max_tokens=UI_MAX_TOKENS)
    try:
        outcome = await llm_router.route(request)
    except RoutingFailure as failure:
        return HTMLResponse(
            render_page(query, ERROR.format(error=_safe(failure.message))),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    result = RESULT.format(
        provider=_safe(outcome.backend_used),
        latency_ms=_safe(outcome.latency_ms),
        answer=_safe(outcome.answer),
    )
    return HTMLResponse(render_page(query, result))
