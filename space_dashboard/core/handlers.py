"""
Exception handlers shared by both FastAPI apps.

Domain errors become {"ok": false, "error": {code, message, service}};
HTTPException keeps FastAPI's {"detail": ...} shape.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from space_dashboard.core.exceptions import ConfigurationError, SpaceDashboardError, UpstreamError
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, exc: SpaceDashboardError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": exc.to_dict()})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UpstreamError)
    def upstream_error_handler(request: Any, exc: UpstreamError) -> JSONResponse:
        logger.warning(
            "upstream_error",
            path=request.url.path,
            service=exc.service,
            upstream_status=exc.status,
            error=exc.message,
        )
        return _error_response(502, exc)

    @app.exception_handler(ConfigurationError)
    def configuration_error_handler(request: Any, exc: ConfigurationError) -> JSONResponse:
        logger.warning("configuration_error", path=request.url.path, service=exc.service, error=exc.message)
        return _error_response(503, exc)

    @app.exception_handler(HTTPException)
    def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
        """Consistent JSON error response for HTTPException."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )
