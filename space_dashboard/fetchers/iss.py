"""
ISS position fetcher (wheretheiss.at).
"""

from __future__ import annotations

from typing import Any

from space_dashboard.config.settings import Settings
from space_dashboard.database import repositories
from space_dashboard.fetchers.http import get_json
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)


def fetch_and_store_iss(settings: Settings) -> dict[str, Any]:
    """Fetch current ISS position and append it to iss_fetch_log. Returns the payload."""
    payload = get_json(settings.where_iss_url, service="iss")
    row_id = repositories.insert_iss_sample(settings.where_iss_url, payload)
    logger.info(
        "iss_fetched",
        row_id=row_id,
        latitude=payload.get("latitude") if isinstance(payload, dict) else None,
        longitude=payload.get("longitude") if isinstance(payload, dict) else None,
    )
    return payload
