"""
Web app JSON endpoints: ISS proxy, JWST feed, astronomical events.

/api/iss/* pass the collector's JSON through untouched. JWST and AstronomyAPI
responses are cached in-process per query for a few minutes.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from space_dashboard.config.settings import DEFAULT_LAT, DEFAULT_LON
from space_dashboard.core.cache import TTLCache
from space_dashboard.space_logging import get_logger
from space_dashboard.web.upstream import (
    AstronomyClient,
    JwstClient,
    TelemetryClient,
    get_astronomy_client,
    get_jwst_client,
    get_telemetry_client,
    jwst_path,
    normalize_jwst_items,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

JWST_MAX_PER_PAGE = 60
JWST_DEFAULT_PER_PAGE = 24
ASTRO_MAX_DAYS = 30
ASTRO_DEFAULT_DAYS = 7
ASTRO_BODIES = ("sun", "moon")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def get_jwst_cache(request: Request) -> TTLCache:
    return request.app.state.jwst_cache


def get_astro_cache(request: Request) -> TTLCache:
    return request.app.state.astro_cache


@router.get("/iss/last")
def iss_last(client: TelemetryClient = Depends(get_telemetry_client)) -> Any:
    """Last-known ISS telemetry, proxied from the collector."""
    return client.last()


@router.get("/iss/trend")
def iss_trend(request: Request, client: TelemetryClient = Depends(get_telemetry_client)) -> Any:
    """ISS movement trend, proxied from the collector with the query string forwarded."""
    return client.trend(params=list(request.query_params.multi_items()) or None)


@router.get("/jwst/feed")
def jwst_feed(
    request: Request,
    source: str = Query("jpg", pattern="^(jpg|suffix|program)$"),
    suffix: str = Query("", max_length=64),
    program: str = Query("", max_length=32),
    instrument: str = Query("", max_length=32),
    page: int = Query(1),
    per_page: int = Query(JWST_DEFAULT_PER_PAGE, alias="perPage"),
    cache: TTLCache = Depends(get_jwst_cache),
    client: JwstClient = Depends(get_jwst_client),
) -> dict[str, Any]:
    """JWST images as gallery items. perPage is clamped to 1..60, page to >= 1."""
    if source == "program" and not program:
        program = request.app.state.settings.jwst_program_id
    path = jwst_path(source, suffix=suffix.strip(), program=program.strip())
    page = max(1, page)
    per_page = _clamp(per_page, 1, JWST_MAX_PER_PAGE)
    key = (path, instrument.strip().upper(), page, per_page)

    def _load() -> dict[str, Any]:
        data = client.feed(path, page=page, per_page=per_page)
        items = normalize_jwst_items(data, instrument=instrument, limit=per_page)
        logger.info("jwst_feed_loaded", path=path, page=page, count=len(items))
        return {"source": path, "count": len(items), "items": items}

    return cache.get_or_set(key, _load)


@router.get("/astro/events")
def astro_events(
    lat: float = Query(DEFAULT_LAT, ge=-90, le=90),
    lon: float = Query(DEFAULT_LON, ge=-180, le=180),
    days: int = Query(ASTRO_DEFAULT_DAYS),
    body: str = Query("sun"),
    cache: TTLCache = Depends(get_astro_cache),
    client: AstronomyClient = Depends(get_astronomy_client),
) -> Any:
    """Rise/set/eclipse events for a body over the next `days` days (1..30)."""
    days = _clamp(days, 1, ASTRO_MAX_DAYS)
    body = body.strip().lower()
    if body not in ASTRO_BODIES:
        body = "sun"
    key = (body, round(lat, 4), round(lon, 4), days)
    return cache.get_or_set(key, lambda: client.body_events(body, lat, lon, days))
