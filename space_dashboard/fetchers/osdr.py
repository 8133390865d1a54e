"""
NASA OSDR dataset fetcher.

The biodata API has shipped several response shapes over time: a bare list,
a wrapper object with items/results, or a mapping keyed by dataset id
({"OSD-1": {"REST_URL": ...}, ...}). extract_items() normalizes all of them.
"""

from __future__ import annotations

from typing import Any

from space_dashboard.config.settings import Settings
from space_dashboard.core.jsonpick import s_pick, t_pick
from space_dashboard.database import repositories
from space_dashboard.fetchers.http import get_json
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)

ID_KEYS = ("dataset_id", "id", "uuid", "studyId", "accession", "osdr_id")
TITLE_KEYS = ("title", "name", "label")
STATUS_KEYS = ("status", "state", "lifecycle")
UPDATED_KEYS = ("updated", "updated_at", "modified", "lastUpdated", "timestamp")


def extract_items(data: Any) -> list[tuple[str | None, dict[str, Any]]]:
    """
    Return (key_hint, item) pairs. key_hint is the mapping key when the
    response is keyed by dataset id, else None.
    """
    if isinstance(data, list):
        return [(None, item) for item in data if isinstance(item, dict)]
    if not isinstance(data, dict):
        return []
    for wrapper in ("items", "results"):
        inner = data.get(wrapper)
        if isinstance(inner, list):
            return [(None, item) for item in inner if isinstance(item, dict)]
    if data and all(isinstance(v, dict) for v in data.values()):
        return [(str(k), v) for k, v in data.items()]
    return [(None, data)]


def fetch_and_store_osdr(settings: Settings) -> int:
    """Fetch OSDR dataset list and upsert each dataset. Returns number of datasets written."""
    data = get_json(settings.nasa_api_url, service="osdr", timeout=30.0)
    written = 0
    skipped = 0
    for key_hint, item in extract_items(data):
        dataset_id = s_pick(item, ID_KEYS) or key_hint
        if not dataset_id:
            skipped += 1
            continue
        repositories.upsert_osdr_item(
            dataset_id,
            title=s_pick(item, TITLE_KEYS),
            status=s_pick(item, STATUS_KEYS),
            updated_at=t_pick(item, UPDATED_KEYS),
            raw=item,
        )
        written += 1
    logger.info("osdr_synced", written=written, skipped_no_id=skipped)
    return written
