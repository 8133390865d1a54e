"""
In-process TTL cache.

Keeps the last upstream responses (JWST feed pages, astronomy events) for a
few minutes so page refreshes don't burn third-party API quotas.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Hashable


class TTLCache:
    """Thread-safe dict with per-entry expiry. ttl_sec <= 0 disables caching."""

    def __init__(self, ttl_sec: float, max_entries: int = 256, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_sec = ttl_sec
        self.max_entries = max_entries
        self._clock = clock
        self._data: dict[Hashable, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Any | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._data[key]
                return None
            return value

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl_sec <= 0:
            return
        with self._lock:
            if key not in self._data and len(self._data) >= self.max_entries:
                self._evict()
            self._data[key] = (self._clock() + self.ttl_sec, value)

    def get_or_set(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return cached value or compute, store and return it. Exceptions from factory are not cached."""
        value = self.get(key)
        if value is not None:
            return value
        value = factory()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _evict(self) -> None:
        # Caller holds the lock: drop expired entries, then the oldest expiry.
        now = self._clock()
        for key in [k for k, (exp, _) in self._data.items() if exp <= now]:
            del self._data[key]
        if len(self._data) >= self.max_entries:
            oldest = min(self._data, key=lambda k: self._data[k][0])
            del self._data[oldest]
