"""
Shared requests session for fetchers.
"""

from __future__ import annotations

from typing import Any

import requests

from space_dashboard import __version__
from space_dashboard.core.exceptions import UpstreamError

DEFAULT_TIMEOUT_SEC = 20.0
USER_AGENT = f"space-dashboard/{__version__}"

_session: requests.Session | None = None


def get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    return _session


def get_json(
    url: str,
    *,
    service: str,
    params: dict[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SEC,
) -> Any:
    """GET url and decode JSON. Raises UpstreamError on transport errors, non-2xx or invalid JSON."""
    try:
        resp = get_session().get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise UpstreamError(service, f"request failed: {e}") from e
    if not resp.ok:
        raise UpstreamError(service, f"HTTP {resp.status_code}", status=resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(service, "invalid JSON body", status=resp.status_code) from e
