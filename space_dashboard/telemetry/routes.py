"""
Collector API routes.

Reads from the database; /fetch, /osdr/sync and /space/refresh trigger the
corresponding fetchers synchronously before answering.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from space_dashboard.config.settings import Settings
from space_dashboard.core.exceptions import UpstreamError
from space_dashboard.database import repositories
from space_dashboard.fetchers import space as space_fetchers
from space_dashboard.fetchers.iss import fetch_and_store_iss
from space_dashboard.fetchers.osdr import fetch_and_store_osdr
from space_dashboard.space_logging import get_logger
from space_dashboard.telemetry.schemas import (
    HealthResponse,
    OsdrListResponse,
    OsdrSyncResponse,
    SpaceRefreshResponse,
    TrendResponse,
)
from space_dashboard.telemetry.trend import compute_trend

logger = get_logger(__name__)

router = APIRouter()

NO_DATA = {"message": "no data"}


def get_app_settings(request: Request) -> Settings:
    """Dependency: settings the app was built with."""
    return request.app.state.settings


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness probe: API is up."""
    return HealthResponse(status="ok", now=datetime.now(timezone.utc).isoformat())


@router.get("/last")
def last_iss() -> dict[str, Any]:
    """Newest ISS sample, or {"message": "no data"}."""
    return repositories.latest_iss() or dict(NO_DATA)


@router.get("/fetch")
def trigger_iss(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Fetch ISS position now, then answer like /last. Upstream failures fall back to the stored sample."""
    try:
        fetch_and_store_iss(settings)
    except UpstreamError as e:
        logger.warning("iss_fetch_on_demand_failed", error=e.message)
    return repositories.latest_iss() or dict(NO_DATA)


@router.get("/iss/trend", response_model=TrendResponse)
def iss_trend() -> dict[str, Any]:
    return compute_trend(repositories.recent_iss_samples(2))


@router.get("/osdr/sync", response_model=OsdrSyncResponse)
def osdr_sync(settings: Settings = Depends(get_app_settings)) -> OsdrSyncResponse:
    return OsdrSyncResponse(written=fetch_and_store_osdr(settings))


@router.get("/osdr/list", response_model=OsdrListResponse)
def osdr_list(
    limit: int | None = Query(None, ge=1, le=500),
    settings: Settings = Depends(get_app_settings),
) -> OsdrListResponse:
    return OsdrListResponse(items=repositories.list_osdr(limit or settings.osdr_list_limit))


@router.get("/space/summary")
def space_summary() -> dict[str, Any]:
    """Newest payload per source plus ISS and OSDR count; missing entries are {}."""
    summary: dict[str, Any] = {}
    for source in space_fetchers.SOURCES:
        summary[source] = repositories.latest_cache(source) or {}
    summary["iss"] = repositories.latest_iss() or {}
    summary["osdr_count"] = repositories.count_osdr()
    return summary


@router.get("/space/refresh", response_model=SpaceRefreshResponse)
def space_refresh(
    src: str = Query(",".join(space_fetchers.SOURCES), description="Comma-separated sources"),
    settings: Settings = Depends(get_app_settings),
) -> SpaceRefreshResponse:
    """Run the named fetchers now. Unknown names are ignored."""
    refreshed: list[str] = []
    failed: list[str] = []
    for name in [s.strip().lower() for s in src.split(",") if s.strip()]:
        fetcher = space_fetchers.FETCHERS.get(name)
        if fetcher is None or name in refreshed or name in failed:
            continue
        try:
            fetcher(settings)
            refreshed.append(name)
        except UpstreamError as e:
            logger.warning("space_refresh_failed", source=name, error=e.message)
            failed.append(name)
    return SpaceRefreshResponse(refreshed=refreshed, failed=failed)


@router.get("/space/{src}/latest")
def space_latest(src: str) -> dict[str, Any]:
    source = src.strip().lower()
    return repositories.latest_cache(source) or {"source": source, **NO_DATA}
