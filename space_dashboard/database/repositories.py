"""
Repository functions over the Space Dashboard tables.

Plain functions returning dicts (or primitives), one session per call.
Callers never see ORM objects, so sessions never leak across threads.
"""

from __future__ import annotations

import time
from typing import Any

from sqlalchemy import func

from space_dashboard.database.models import CmsPage, IssFetchLog, OsdrItem, SpaceCache
from space_dashboard.database.session import session_scope
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# ISS
# -----------------------------------------------------------------------------


def insert_iss_sample(source_url: str, payload: Any, fetched_at: int | None = None) -> int:
    """Append one ISS sample. Returns the new row id."""
    ts = fetched_at if fetched_at is not None else int(time.time())
    with session_scope() as session:
        row = IssFetchLog(fetched_at=ts, source_url=source_url, payload=payload)
        session.add(row)
        session.flush()
        return row.id


def latest_iss() -> dict[str, Any] | None:
    """Newest ISS sample as dict (id, fetched_at, source_url, payload) or None."""
    with session_scope() as session:
        row = session.query(IssFetchLog).order_by(IssFetchLog.fetched_at.desc(), IssFetchLog.id.desc()).first()
        return row.to_dict() if row else None


def recent_iss_samples(limit: int = 2) -> list[tuple[int, Any]]:
    """(fetched_at, payload) for the newest samples, newest first."""
    with session_scope() as session:
        rows = (
            session.query(IssFetchLog.fetched_at, IssFetchLog.payload)
            .order_by(IssFetchLog.fetched_at.desc(), IssFetchLog.id.desc())
            .limit(limit)
            .all()
        )
        return [(r[0], r[1]) for r in rows]


# -----------------------------------------------------------------------------
# OSDR
# -----------------------------------------------------------------------------


def upsert_osdr_item(
    dataset_id: str,
    *,
    title: str | None,
    status: str | None,
    updated_at: int | None,
    raw: Any,
    now: int | None = None,
) -> bool:
    """
    Insert or update one dataset keyed by dataset_id.
    Returns True if inserted, False if an existing row was updated.
    """
    ts = now if now is not None else int(time.time())
    with session_scope() as session:
        row = session.query(OsdrItem).filter(OsdrItem.dataset_id == dataset_id).first()
        if row is None:
            session.add(
                OsdrItem(
                    dataset_id=dataset_id,
                    title=title,
                    status=status,
                    updated_at=updated_at,
                    inserted_at=ts,
                    raw=raw,
                )
            )
            return True
        row.title = title
        row.status = status
        row.updated_at = updated_at
        row.raw = raw
        return False


def list_osdr(limit: int = 20) -> list[dict[str, Any]]:
    """Newest datasets first."""
    with session_scope() as session:
        rows = (
            session.query(OsdrItem)
            .order_by(OsdrItem.inserted_at.desc(), OsdrItem.id.desc())
            .limit(max(1, limit))
            .all()
        )
        return [r.to_dict() for r in rows]


def count_osdr() -> int:
    with session_scope() as session:
        return int(session.query(func.count(OsdrItem.id)).scalar() or 0)


# -----------------------------------------------------------------------------
# Space cache (APOD, NEO, DONKI, SpaceX)
# -----------------------------------------------------------------------------


def write_cache(source: str, payload: Any, fetched_at: int | None = None) -> None:
    ts = fetched_at if fetched_at is not None else int(time.time())
    with session_scope() as session:
        session.add(SpaceCache(source=source, fetched_at=ts, payload=payload))
    logger.debug("space_cache_written", source=source)


def latest_cache(source: str) -> dict[str, Any] | None:
    """Newest cached payload for source as dict (source, fetched_at, payload) or None."""
    with session_scope() as session:
        row = (
            session.query(SpaceCache)
            .filter(SpaceCache.source == source)
            .order_by(SpaceCache.fetched_at.desc(), SpaceCache.id.desc())
            .first()
        )
        return row.to_dict() if row else None


# -----------------------------------------------------------------------------
# CMS pages
# -----------------------------------------------------------------------------


def normalize_slug(slug: str | None) -> str:
    """Slugs are stored without surrounding whitespace or slashes."""
    return (slug or "").strip().strip("/")


def get_page(slug: str) -> dict[str, Any] | None:
    slug = normalize_slug(slug)
    with session_scope() as session:
        row = session.query(CmsPage).filter(CmsPage.slug == slug).first()
        return row.to_dict() if row else None


def upsert_page(slug: str, title: str, body: str) -> bool:
    """Create or replace a page. Returns True if created."""
    slug = normalize_slug(slug)
    if not slug:
        raise ValueError("slug must be non-empty")
    if len(slug) > 255:
        raise ValueError("slug must be at most 255 characters")
    now = int(time.time())
    with session_scope() as session:
        row = session.query(CmsPage).filter(CmsPage.slug == slug).first()
        if row is None:
            session.add(CmsPage(slug=slug, title=title, body=body, created_at=now, updated_at=now))
            logger.info("cms_page_created", slug=slug)
            return True
        row.title = title
        row.body = body
        row.updated_at = now
    logger.info("cms_page_updated", slug=slug)
    return False


def list_pages() -> list[dict[str, Any]]:
    with session_scope() as session:
        rows = session.query(CmsPage).order_by(CmsPage.slug).all()
        return [r.to_dict() for r in rows]


def delete_page(slug: str) -> bool:
    """Delete a page by slug. Returns True if a row was removed."""
    slug = normalize_slug(slug)
    with session_scope() as session:
        deleted = session.query(CmsPage).filter(CmsPage.slug == slug).delete()
    return bool(deleted)
