"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.config import Config
from models.errors import RoutingFailure
from server.routes import health, route, ui
from server.schemas.responses import ErrorResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config = Config()
    logger.info(
        "LLM Router starting up",
        extra={"extra_fields": {"backends": config.get_model_info()}},
    )
    config.validate()

    yield

    logger.info("LLM Router shutting down")


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation_error(exc)
    logger.info(
        "Rejected invalid request",
        extra={"extra_fields": {"path": request.url.path, "error": message}},
    )
    body = ErrorResponseDTO(error=message, type="validation_error")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(exclude={"attempts"})
    )


async def routing_failure_handler(request: Request, exc: RoutingFailure):
    body = ErrorResponseDTO.from_routing_failure(exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=body.model_dump())


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="LLM Router",
        description="Routes prompts to Groq or OpenAI by quality tier, with fallback",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RoutingFailure, routing_failure_handler)

    app.include_router(health.router)
    app.include_router(route.router)
    app.include_router(ui.router)

    return app
