"""
HTTP middleware: request logging and rate limiting.

- RequestLoggingMiddleware: one structured log line per request (method,
  path, status, duration_ms).
- RateLimitMiddleware: global fixed-window limit for the collector API;
  excess requests get 429 with Retry-After.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with status and latency."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response


class FixedWindowLimiter:
    """At most max_requests per window_sec across all callers. max_requests <= 0 means unlimited."""

    def __init__(self, max_requests: int, window_sec: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._window_start = clock()
        self._count = 0
        self._lock = threading.Lock()

    def allow(self) -> bool:
        if self.max_requests <= 0:
            return True
        with self._lock:
            now = self._clock()
            if now - self._window_start >= self.window_sec:
                self._window_start = now
                self._count = 0
            if self._count >= self.max_requests:
                return False
            self._count += 1
            return True


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests over the global limit with 429."""

    def __init__(self, app: Any, max_requests: int, window_sec: float = 1.0) -> None:
        super().__init__(app)
        self.limiter = FixedWindowLimiter(max_requests, window_sec)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        if not self.limiter.allow():
            logger.warning("rate_limit_exceeded", path=request.url.path, limit=self.limiter.max_requests)
            return JSONResponse(
                status_code=429,
                content={"detail": "rate limit exceeded"},
                headers={"Retry-After": str(max(1, int(self.limiter.window_sec)))},
            )
        return await call_next(request)
