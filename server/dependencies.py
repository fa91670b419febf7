"""FastAPI dependencies for router access."""

from config.config import Config
from orchestrator.router import Router


def get_router() -> Router:
    """Dependency to get the router instance (singleton pattern)."""
    if not hasattr(get_router, "_instance"):
        get_router._instance = Router.from_config(Config())
    return get_router._instance
