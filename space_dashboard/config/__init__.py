"""
Configuration management for Space Dashboard.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for both the web app and the collector.
"""

from space_dashboard.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
