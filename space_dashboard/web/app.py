"""
FastAPI/ASGI application for the web dashboard.

Run with: uvicorn space_dashboard.web.app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from space_dashboard import __version__
from space_dashboard.config.settings import Settings, get_settings
from space_dashboard.core.cache import TTLCache
from space_dashboard.core.handlers import register_exception_handlers
from space_dashboard.core.middleware import RequestLoggingMiddleware
from space_dashboard.database import init_db
from space_dashboard.space_logging import get_logger
from space_dashboard.web.api import router as api_router
from space_dashboard.web.pages import router as pages_router
from space_dashboard.web.upstream import close_clients

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """CMS pages live in the shared database; make sure the tables exist. Close upstream clients on shutdown."""
    try:
        init_db()
    except Exception as e:
        logger.warning("web_init_db_skip", error=str(e))
    yield
    closed = close_clients()
    logger.info("web_upstream_clients_closed", count=closed)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Space Dashboard",
        description="ISS telemetry, OSDR datasets, JWST images and astronomy events.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.jwst_cache = TTLCache(settings.jwst_cache_ttl)
    app.state.astro_cache = TTLCache(settings.astro_cache_ttl)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(pages_router)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        """Liveness probe: API is up."""
        return {"status": "ok"}

    register_exception_handlers(app)
    return app


app = create_app()

__all__ = ["app", "create_app"]
