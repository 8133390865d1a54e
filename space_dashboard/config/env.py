"""
Environment variable loading for Space Dashboard.

- Loads .env from project root when available.
- Typed getters fall back to the default on missing or malformed values.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is space_dashboard/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SQLITE_PATH = "space_dashboard.db"


def load_space_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides the real environment."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH, override=False)


def env_str(key: str, default: str = "") -> str:
    return (os.getenv(key) or "").strip() or default


def env_int(key: str, default: int) -> int:
    """Return int env value; default when unset or not a number."""
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(key: str, default: float) -> float:
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(key: str, default: bool) -> bool:
    raw = (os.getenv(key) or "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


def get_database_url() -> str:
    """
    Resolve the SQLAlchemy database URL.

    Order: DATABASE_URL (Postgres, mapped to the psycopg driver) > SQLite at
    SPACE_DB_PATH > space_dashboard.db in the working directory.
    """
    load_space_env()
    url = env_str("DATABASE_URL")
    if url:
        if url.startswith("postgres://"):
            url = "postgresql+psycopg://" + url[len("postgres://"):]
        elif url.startswith("postgresql://"):
            url = "postgresql+psycopg://" + url[len("postgresql://"):]
        return url
    path = env_str("SPACE_DB_PATH", DEFAULT_SQLITE_PATH)
    return f"sqlite:///{path}"
