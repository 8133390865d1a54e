"""
HTTP clients for the web app's upstreams: the telemetry collector, the JWST
API and AstronomyAPI.

All three share UpstreamClient: base URL, timeout and auth set once; any
transport failure, non-2xx status or non-JSON body raises UpstreamError.
Routes receive clients through FastAPI dependencies (get_*_client) so tests
can swap them via app.dependency_overrides.
"""

from __future__ import annotations

import functools
import threading
from datetime import date, timedelta
from typing import Any
from urllib.parse import urlsplit

import httpx
from fastapi import Depends, Request

from space_dashboard import __version__
from space_dashboard.config.settings import Settings
from space_dashboard.core.exceptions import ConfigurationError, UpstreamError

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
LINK_SCHEMES = ("http", "https")


class UpstreamClient:
    """Thin httpx.Client wrapper that decodes JSON and raises UpstreamError."""

    service = "upstream"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": f"space-dashboard/{__version__}", **(headers or {})},
            auth=auth,
            transport=transport,
        )

    def get_json(self, path: str, params: Any = None) -> Any:
        try:
            resp = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(self.service, f"request failed: {e}") from e
        if resp.is_error:
            raise UpstreamError(self.service, f"HTTP {resp.status_code}", status=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(self.service, "invalid JSON body", status=resp.status_code) from e

    def close(self) -> None:
        self._client.close()


class TelemetryClient(UpstreamClient):
    """Collector API (rust_iss in the compose setup)."""

    service = "telemetry"

    def last(self) -> Any:
        return self.get_json("/last")

    def trend(self, params: Any = None) -> Any:
        return self.get_json("/iss/trend", params=params)

    def osdr_list(self, limit: int | None = None) -> list[dict[str, Any]]:
        data = self.get_json("/osdr/list", params={"limit": limit} if limit else None)
        items = data.get("items") if isinstance(data, dict) else None
        return items if isinstance(items, list) else []


class JwstClient(UpstreamClient):
    """api.jwstapi.com; every call needs the X-API-KEY header."""

    service = "jwst"

    def __init__(self, base_url: str, api_key: str, *, email: str = "", **kwargs: Any) -> None:
        if not api_key:
            raise ConfigurationError("JWST_API_KEY is not set", service=self.service)
        headers = {"X-API-KEY": api_key}
        if email:
            headers["X-API-EMAIL"] = email
        super().__init__(base_url, headers=headers, **kwargs)

    def feed(self, path: str, page: int, per_page: int) -> Any:
        return self.get_json(path, params={"page": page, "perPage": per_page})


class AstronomyClient(UpstreamClient):
    """AstronomyAPI (basic auth with application id and secret)."""

    service = "astronomy"

    def __init__(self, base_url: str, app_id: str, app_secret: str, **kwargs: Any) -> None:
        if not app_id or not app_secret:
            raise ConfigurationError("ASTRO_APP_ID/ASTRO_APP_SECRET are not set", service=self.service)
        super().__init__(base_url, auth=(app_id, app_secret), **kwargs)

    def body_events(self, body: str, lat: float, lon: float, days: int, today: date | None = None) -> Any:
        start = today or date.today()
        end = start + timedelta(days=days)
        return self.get_json(
            f"/bodies/events/{body}",
            params={
                "latitude": lat,
                "longitude": lon,
                "elevation": 0,
                "from_date": start.isoformat(),
                "to_date": end.isoformat(),
                "time": "00:00:00",
            },
        )


# -----------------------------------------------------------------------------
# JWST feed normalization
# -----------------------------------------------------------------------------


def jwst_path(source: str, suffix: str = "", program: str = "") -> str:
    """Upstream path for a feed source: jpg (default), suffix or program."""
    if source == "suffix" and suffix:
        return f"/all/suffix/{suffix.lstrip('_')}"
    if source == "program" and program:
        return f"/program/id/{program}"
    return "/all/type/jpg"


def safe_http_url(value: Any) -> str | None:
    """value if it is an absolute http(s) URL with a host, else None."""
    if not isinstance(value, str):
        return None
    url = value.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme.lower() not in LINK_SCHEMES or not parts.netloc:
        return None
    return url


def _is_image(url: str) -> bool:
    return safe_http_url(url) is not None and url.lower().split("?")[0].endswith(IMAGE_EXTENSIONS)


def normalize_jwst_items(data: Any, instrument: str = "", limit: int | None = None) -> list[dict[str, Any]]:
    """
    Turn the upstream body into gallery items {url, obs, program, suffix, inst, caption, link}.
    Non-image files are dropped; instrument filter is case-insensitive.
    """
    raw = data.get("body") if isinstance(data, dict) else data
    if not isinstance(raw, list):
        return []
    want_inst = instrument.strip().upper()
    items: list[dict[str, Any]] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        url = ""
        for key in ("location", "thumbnail", "url"):
            candidate = entry.get(key)
            if isinstance(candidate, str) and _is_image(candidate):
                url = candidate
                break
        if not url:
            continue
        details = entry.get("details") if isinstance(entry.get("details"), dict) else {}
        instruments = [
            str(i.get("instrument")).upper()
            for i in details.get("instruments") or []
            if isinstance(i, dict) and i.get("instrument")
        ]
        if want_inst and want_inst not in instruments:
            continue
        obs = str(entry.get("observation_id") or entry.get("id") or "")
        program = str(entry.get("program") or "")
        suffix = str(details.get("suffix") or "")
        caption = " · ".join(
            part for part in (obs, f"P{program}" if program else "", suffix, "/".join(instruments)) if part
        )
        items.append(
            {
                "url": url,
                "obs": obs,
                "program": program,
                "suffix": suffix,
                "inst": instruments,
                "caption": caption,
                "link": safe_http_url(entry.get("location")) or url,
            }
        )
        if limit is not None and len(items) >= limit:
            break
    return items


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_web_settings(request: Request) -> Settings:
    """Dependency: settings the app was built with."""
    return request.app.state.settings


# Settings is a frozen dataclass, so it can key the client caches: one
# pooled httpx.Client per configuration. Every client built here is also kept
# in _open_clients so close_clients() can release it, evicted or not.

_open_clients: list[UpstreamClient] = []
_open_clients_lock = threading.Lock()


def _track(client: UpstreamClient) -> Any:
    with _open_clients_lock:
        _open_clients.append(client)
    return client


@functools.lru_cache(maxsize=4)
def _telemetry_client(settings: Settings) -> TelemetryClient:
    return _track(TelemetryClient(settings.iss_base_url, timeout=settings.upstream_timeout_sec))


@functools.lru_cache(maxsize=4)
def _jwst_client(settings: Settings) -> JwstClient:
    return _track(
        JwstClient(
            settings.jwst_host,
            settings.jwst_api_key,
            email=settings.jwst_email,
            timeout=settings.upstream_timeout_sec,
        )
    )


@functools.lru_cache(maxsize=4)
def _astronomy_client(settings: Settings) -> AstronomyClient:
    return _track(
        AstronomyClient(
            settings.astro_base_url,
            settings.astro_app_id,
            settings.astro_app_secret,
            timeout=settings.upstream_timeout_sec,
        )
    )


def get_telemetry_client(settings: Settings = Depends(get_web_settings)) -> TelemetryClient:
    return _telemetry_client(settings)


def get_jwst_client(settings: Settings = Depends(get_web_settings)) -> JwstClient:
    return _jwst_client(settings)


def get_astronomy_client(settings: Settings = Depends(get_web_settings)) -> AstronomyClient:
    return _astronomy_client(settings)


def close_clients() -> int:
    """Close every cached upstream client and empty the caches. Returns how many were closed."""
    with _open_clients_lock:
        clients = list(_open_clients)
        _open_clients.clear()
    for cache in (_telemetry_client, _jwst_client, _astronomy_client):
        cache.cache_clear()
    for client in clients:
        client.close()
    return len(clients)
