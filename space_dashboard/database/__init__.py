"""
Database layer: ISS samples, OSDR datasets, space data cache, CMS pages.

SQLAlchemy-backed; PostgreSQL when DATABASE_URL is set, SQLite otherwise.
"""

from space_dashboard.database.models import Base, CmsPage, IssFetchLog, OsdrItem, SpaceCache
from space_dashboard.database.session import init_db, reset_engine_for_test, session_scope

__all__ = [
    "Base",
    "CmsPage",
    "IssFetchLog",
    "OsdrItem",
    "SpaceCache",
    "init_db",
    "reset_engine_for_test",
    "session_scope",
]
