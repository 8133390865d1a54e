"""
Structured logging for Space Dashboard.

JSON logs with timestamp, level and event_type. Use get_logger() in every module.
"""

from space_dashboard.space_logging.logger import bind_source, configure_logging, get_logger

__all__ = ["bind_source", "configure_logging", "get_logger"]
