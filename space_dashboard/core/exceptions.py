"""
Application-level exceptions.

Raised by upstream clients, fetchers and config checks; mapped to HTTP
responses by the web app's exception handlers.
"""

from __future__ import annotations


class SpaceDashboardError(Exception):
    """Base class for all Space Dashboard errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, service: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.service = service

    def to_dict(self) -> dict[str, str | None]:
        return {"code": self.code, "message": self.message, "service": self.service}


class UpstreamError(SpaceDashboardError):
    """An upstream HTTP service failed, timed out or returned an unusable body."""

    code = "UPSTREAM_ERROR"

    def __init__(self, service: str, message: str, *, status: int | None = None) -> None:
        super().__init__(message, service=service)
        self.status = status


class ConfigurationError(SpaceDashboardError):
    """Required configuration (API key, credentials) is missing."""

    code = "NOT_CONFIGURED"
