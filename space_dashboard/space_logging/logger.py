"""
Structured logging for both services.

Every record carries timestamp, level, event_type and the service name
(SPACE_SERVICE: web or telemetry), so the two processes can share one log sink.
Modules call get_logger(__name__) and log snake_case events with key/value
fields (source, url, status, duration_ms, ...).

Only stdlib logging and structlog here; importing space_dashboard modules
from this file would create an import cycle.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _add_service(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    service = os.getenv("SPACE_SERVICE", "").strip().lower()
    if service:
        event_dict.setdefault("service", service)
    return event_dict


def _normalize_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's 'event' becomes event_type; message mirrors it unless given."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog. Called once at import with LOG_LEVEL/LOG_FORMAT;
    main.py calls it again when the CLI overrides them.

    fmt "json" renders one JSON object per line (payload values that are not
    JSON-native are str()'d); anything else uses the console renderer.
    """
    level_value = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _add_service,
        _normalize_event,
    ]
    if (fmt or LOG_FORMAT) == "json":
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Structured logger for a module.

        logger = get_logger(__name__)
        logger.info("iss_fetched", source_url=url, latitude=51.6)
    Output (JSON): {"event_type": "iss_fetched", "source_url": "...", "latitude": 51.6,
    "timestamp": "...", "level": "info", "logger": "space_dashboard.fetchers.iss"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_source(source: str) -> structlog.BoundLogger:
    """Logger with the upstream source (apod, neo, flr, ...) bound to every call."""
    return get_logger("space_dashboard.fetchers").bind(source=source)
