"""
Field pickers for loosely-typed upstream JSON.

Upstream payloads (OSDR datasets, ISS samples) name the same field several
ways. Each picker walks a list of candidate keys and returns the first usable
value, handling missing keys and wrong types safely.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Iterable


def s_pick(obj: Any, keys: Iterable[str]) -> str | None:
    """First non-empty string among keys; numbers are stringified."""
    if not isinstance(obj, dict):
        return None
    for key in keys:
        val = obj.get(key)
        if isinstance(val, bool):
            continue
        if isinstance(val, str):
            val = val.strip()
            if val:
                return val
        elif isinstance(val, (int, float)):
            return str(val)
    return None


def n_pick(obj: Any, keys: Iterable[str]) -> float | None:
    """First numeric value among keys; numeric strings are parsed."""
    if not isinstance(obj, dict):
        return None
    for key in keys:
        val = obj.get(key)
        if isinstance(val, bool):
            continue
        if isinstance(val, (int, float)):
            num = float(val)
        elif isinstance(val, str):
            try:
                num = float(val.strip())
            except ValueError:
                continue
        else:
            continue
        if math.isfinite(num):
            return num
    return None


# Values above this are epoch milliseconds (1e11 s is year 5138)
MILLIS_THRESHOLD = 1e11
# 9999-12-31T23:59:59Z
MAX_EPOCH_SEC = 253402300799


def _epoch_seconds(num: float) -> int | None:
    if not math.isfinite(num):
        return None
    if abs(num) > MILLIS_THRESHOLD:
        num /= 1000.0
    if abs(num) > MAX_EPOCH_SEC:
        return None
    return int(num)


def parse_timestamp(val: Any) -> int | None:
    """
    Convert a timestamp-ish value to unix seconds.

    Accepts unix seconds or milliseconds (int/float/numeric string), ISO 8601 /
    RFC 3339 strings (a trailing Z is allowed) and 'YYYY-MM-DD HH:MM:SS' (taken
    as UTC). Non-finite numbers give None.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        return _epoch_seconds(float(val))
    if not isinstance(val, str):
        return None
    raw = val.strip()
    if not raw:
        return None
    try:
        num = float(raw)
    except ValueError:
        num = None
    if num is not None:
        return _epoch_seconds(num)
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        try:
            dt = datetime.strptime(raw, "%Y-%m-%d %H:%M:%S")
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return int(dt.timestamp())
    except (OverflowError, ValueError, OSError):
        return None


def t_pick(obj: Any, keys: Iterable[str]) -> int | None:
    """First parseable timestamp among keys, as unix seconds."""
    if not isinstance(obj, dict):
        return None
    for key in keys:
        ts = parse_timestamp(obj.get(key))
        if ts is not None:
            return ts
    return None


def iso_utc(ts: int | None) -> str | None:
    """Unix seconds to ISO 8601 UTC string ('...Z'); None for None or out-of-range values."""
    if ts is None:
        return None
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    except (OverflowError, ValueError, OSError):
        return None
