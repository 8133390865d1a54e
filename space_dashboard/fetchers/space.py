"""
NASA APOD, NeoWs, DONKI and SpaceX fetchers.

Each writes the raw upstream payload to space_cache under a short source
name; the collector API serves the newest row per source.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Callable

from space_dashboard.config.settings import Settings
from space_dashboard.database import repositories
from space_dashboard.fetchers.http import get_json
from space_dashboard.space_logging import bind_source

NASA_API_BASE = "https://api.nasa.gov"
SPACEX_NEXT_URL = "https://api.spacexdata.com/v4/launches/next"

SOURCE_APOD = "apod"
SOURCE_NEO = "neo"
SOURCE_FLR = "flr"
SOURCE_CME = "cme"
SOURCE_SPACEX = "spacex"
SOURCES = (SOURCE_APOD, SOURCE_NEO, SOURCE_FLR, SOURCE_CME, SOURCE_SPACEX)

NEO_WINDOW_DAYS = 2
DONKI_WINDOW_DAYS = 5


def _store(source: str, payload: Any) -> Any:
    repositories.write_cache(source, payload)
    bind_source(source).info("space_source_fetched")
    return payload


def fetch_apod(settings: Settings) -> Any:
    payload = get_json(
        f"{NASA_API_BASE}/planetary/apod",
        service=SOURCE_APOD,
        params={"thumbs": "true", "api_key": settings.nasa_key_or_demo},
    )
    return _store(SOURCE_APOD, payload)


def fetch_neo_feed(settings: Settings, today: date | None = None) -> Any:
    """Near-Earth objects for the last two days."""
    end = today or date.today()
    start = end - timedelta(days=NEO_WINDOW_DAYS)
    payload = get_json(
        f"{NASA_API_BASE}/neo/rest/v1/feed",
        service=SOURCE_NEO,
        params={
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "api_key": settings.nasa_key_or_demo,
        },
    )
    return _store(SOURCE_NEO, payload)


def _fetch_donki(settings: Settings, kind: str, source: str, today: date | None) -> Any:
    end = today or date.today()
    start = end - timedelta(days=DONKI_WINDOW_DAYS)
    payload = get_json(
        f"{NASA_API_BASE}/DONKI/{kind}",
        service=source,
        params={
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "api_key": settings.nasa_key_or_demo,
        },
    )
    return _store(source, payload)


def fetch_donki_flr(settings: Settings, today: date | None = None) -> Any:
    """Solar flares, last five days."""
    return _fetch_donki(settings, "FLR", SOURCE_FLR, today)


def fetch_donki_cme(settings: Settings, today: date | None = None) -> Any:
    """Coronal mass ejections, last five days."""
    return _fetch_donki(settings, "CME", SOURCE_CME, today)


def fetch_donki(settings: Settings) -> None:
    fetch_donki_flr(settings)
    fetch_donki_cme(settings)


def fetch_spacex_next(settings: Settings) -> Any:
    payload = get_json(SPACEX_NEXT_URL, service=SOURCE_SPACEX)
    return _store(SOURCE_SPACEX, payload)


FETCHERS: dict[str, Callable[[Settings], Any]] = {
    SOURCE_APOD: fetch_apod,
    SOURCE_NEO: fetch_neo_feed,
    SOURCE_FLR: fetch_donki_flr,
    SOURCE_CME: fetch_donki_cme,
    SOURCE_SPACEX: fetch_spacex_next,
}
