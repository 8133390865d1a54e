"""
SQLAlchemy models.

Timestamps are stored as Unix seconds (Integer); upstream payloads are kept
verbatim in JSON columns so new upstream fields need no migration.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Column, Integer, String, Text
from sqlalchemy.orm import declarative_base

from space_dashboard.core.jsonpick import iso_utc

Base = declarative_base()


class IssFetchLog(Base):
    """One ISS position sample (append-only)."""

    __tablename__ = "iss_fetch_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fetched_at = Column(Integer, nullable=False, index=True)
    source_url = Column(String(512), nullable=False)
    payload = Column(JSON, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fetched_at": iso_utc(self.fetched_at),
            "source_url": self.source_url,
            "payload": self.payload,
        }


class OsdrItem(Base):
    """
    NASA OSDR dataset, upserted by dataset_id on every sync.
    """

    __tablename__ = "osdr_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dataset_id = Column(String(128), unique=True, nullable=False, index=True)
    title = Column(Text, nullable=True)
    status = Column(String(64), nullable=True)
    updated_at = Column(Integer, nullable=True)  # Unix, as reported upstream
    inserted_at = Column(Integer, nullable=False, index=True)
    raw = Column(JSON, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "dataset_id": self.dataset_id,
            "title": self.title,
            "status": self.status,
            "updated_at": iso_utc(self.updated_at),
            "inserted_at": iso_utc(self.inserted_at),
            "raw": self.raw,
        }


class SpaceCache(Base):
    """Latest payloads from APOD, NEO, DONKI and SpaceX (append-only, read newest)."""

    __tablename__ = "space_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(32), nullable=False, index=True)
    fetched_at = Column(Integer, nullable=False, index=True)
    payload = Column(JSON, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "fetched_at": iso_utc(self.fetched_at),
            "payload": self.payload,
        }


class CmsPage(Base):
    """Slug-addressed page; body is admin-authored HTML."""

    __tablename__ = "cms_pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(512), nullable=False)
    body = Column(Text, nullable=False, default="")
    created_at = Column(Integer, nullable=False)
    updated_at = Column(Integer, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "body": self.body,
            "created_at": iso_utc(self.created_at),
            "updated_at": iso_utc(self.updated_at),
        }
