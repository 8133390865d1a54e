"""
FastAPI/ASGI application for the telemetry collector.

Build and configure the ASGI app; background fetch loops start in lifespan.
Run with: uvicorn space_dashboard.telemetry.app:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI

from space_dashboard import __version__
from space_dashboard.config.settings import Settings, get_settings
from space_dashboard.core.handlers import register_exception_handlers
from space_dashboard.core.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from space_dashboard.database import init_db
from space_dashboard.space_logging import get_logger
from space_dashboard.telemetry.routes import router
from space_dashboard.worker.runner import join_background_tasks, start_background_tasks

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, start fetch loops in background threads; signal stop on shutdown."""
    settings: Settings = app.state.settings
    init_db()
    stop_event = threading.Event()
    threads: list[threading.Thread] = []
    if settings.background_enabled:
        threads = start_background_tasks(settings, stop_event)
        logger.info("telemetry_background_started", jobs=[t.name for t in threads])
    else:
        logger.info("telemetry_background_disabled")

    yield

    stop_event.set()
    join_background_tasks(threads)
    logger.info("telemetry_background_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Space Dashboard Telemetry",
        description="ISS, OSDR and NASA/SpaceX data collected on a schedule and served from the database.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(RateLimitMiddleware, max_requests=settings.rate_limit_per_sec, window_sec=1.0)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(router)
    register_exception_handlers(app)
    return app


app = create_app()

__all__ = ["app", "create_app"]
