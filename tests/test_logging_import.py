"""
Test that space_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from space_logging and use the logger."""
    from space_dashboard.space_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_event_renamed_to_event_type():
    from space_dashboard.space_logging.logger import _add_timestamp, _normalize_event

    out = _normalize_event(None, "info", {"event": "iss_fetch_failed", "source": "iss"})
    assert out["event_type"] == "iss_fetch_failed"
    assert out["message"] == "iss_fetch_failed"
    assert "event" not in out
    assert "timestamp" in _add_timestamp(None, "info", {})


def test_bind_source():
    from space_dashboard.space_logging import bind_source

    bind_source("apod").info("space_cache_written")


def test_service_name_added_from_env(monkeypatch):
    from space_dashboard.space_logging.logger import _add_service

    monkeypatch.delenv("SPACE_SERVICE", raising=False)
    assert "service" not in _add_service(None, "info", {})
    monkeypatch.setenv("SPACE_SERVICE", "Telemetry")
    assert _add_service(None, "info", {})["service"] == "telemetry"
    # explicit service=... on the call wins (UpstreamError logs pass one)
    assert _add_service(None, "info", {"service": "jwst"})["service"] == "jwst"
