"""
Engine and session management (DATABASE_URL → Postgres, else SQLite).

The engine is created lazily and cached per process; reset_engine_for_test()
drops it so tests can point SPACE_DB_PATH at a temporary file.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from space_dashboard.config.env import get_database_url
from space_dashboard.database.models import Base
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)

_engine = None
_SessionLocal: sessionmaker | None = None

SQLITE_TIMEOUT_SEC = 5.0


def _sqlite_wal(dbapi_conn: Any, connection_record: Any) -> None:
    # fetch threads write while API requests read
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.close()


def _redact(url: str) -> str:
    """Host/path part of the URL only; never log credentials."""
    return url.split("?")[0].split("@")[-1].split("//")[-1]


def get_engine() -> Any:
    """Create or return cached engine."""
    global _engine
    if _engine is None:
        url = get_database_url()
        connect_args: dict[str, Any] = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
            connect_args["timeout"] = SQLITE_TIMEOUT_SEC
        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        if url.startswith("sqlite"):
            event.listen(_engine, "connect", _sqlite_wal)
        logger.info("database_engine_created", url=_redact(url))
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=get_engine())
    return _SessionLocal


@contextmanager
def session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    factory = _get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """
    Create all tables if they do not exist. Safe to call on every startup.
    """
    try:
        engine = get_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("database_init", url=_redact(get_database_url()))
    except Exception as e:
        logger.exception("database_init_failed", error=str(e))
        raise


def reset_engine_for_test() -> None:
    """
    Dispose and clear cached engine and session factory. For tests only.
    """
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
