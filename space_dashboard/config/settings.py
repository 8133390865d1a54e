"""
Application settings.

Responsibilities:
- Gather every environment-driven knob into one typed, immutable object.
- Provide defaults matching the public upstream services.

Both services call get_settings() at app construction; tests build Settings
directly or monkeypatch the environment before calling it.
"""

from __future__ import annotations

from dataclasses import dataclass

from space_dashboard.config.env import (
    env_bool,
    env_float,
    env_int,
    env_str,
    load_space_env,
)

DEFAULT_NASA_API_URL = "https://visualization.osdr.nasa.gov/biodata/api/v2/datasets/?format=json"
DEFAULT_WHERE_ISS_URL = "https://api.wheretheiss.at/v1/satellites/25544"
DEFAULT_ISS_BASE_URL = "http://rust_iss:3000"
DEFAULT_JWST_HOST = "https://api.jwstapi.com"
DEFAULT_ASTRO_URL = "https://api.astronomyapi.com/api/v2"

# Moscow; AstronomyAPI needs an observer position
DEFAULT_LAT = 55.7558
DEFAULT_LON = 37.6176


@dataclass(frozen=True)
class Settings:
    """All runtime configuration for the web app and the telemetry collector."""

    # Collector upstreams
    nasa_api_url: str = DEFAULT_NASA_API_URL
    nasa_api_key: str = ""
    where_iss_url: str = DEFAULT_WHERE_ISS_URL

    # Collector loop intervals (seconds)
    every_osdr: int = 600
    every_iss: int = 120
    every_apod: int = 43200
    every_neo: int = 7200
    every_donki: int = 3600
    every_spacex: int = 3600
    background_enabled: bool = True

    osdr_list_limit: int = 20
    rate_limit_per_sec: int = 5

    # Web app upstreams
    iss_base_url: str = DEFAULT_ISS_BASE_URL
    jwst_host: str = DEFAULT_JWST_HOST
    jwst_api_key: str = ""
    jwst_email: str = ""
    jwst_program_id: str = ""
    astro_base_url: str = DEFAULT_ASTRO_URL
    astro_app_id: str = ""
    astro_app_secret: str = ""
    upstream_timeout_sec: float = 5.0
    jwst_cache_ttl: float = 300.0
    astro_cache_ttl: float = 600.0

    @property
    def nasa_key_or_demo(self) -> str:
        return self.nasa_api_key or "DEMO_KEY"


def get_settings() -> Settings:
    """
    Return the current application settings read from the environment.

    Not cached: reads env on every call so tests and reloads see changes.
    """
    load_space_env()
    return Settings(
        nasa_api_url=env_str("NASA_API_URL", DEFAULT_NASA_API_URL),
        nasa_api_key=env_str("NASA_API_KEY"),
        where_iss_url=env_str("WHERE_ISS_URL", DEFAULT_WHERE_ISS_URL),
        every_osdr=env_int("FETCH_EVERY_SECONDS", 600),
        every_iss=env_int("ISS_EVERY_SECONDS", 120),
        every_apod=env_int("APOD_EVERY_SECONDS", 43200),
        every_neo=env_int("NEO_EVERY_SECONDS", 7200),
        every_donki=env_int("DONKI_EVERY_SECONDS", 3600),
        every_spacex=env_int("SPACEX_EVERY_SECONDS", 3600),
        background_enabled=env_bool("TELEMETRY_BACKGROUND", True),
        osdr_list_limit=env_int("OSDR_LIST_LIMIT", 20),
        rate_limit_per_sec=env_int("RATE_LIMIT_PER_SEC", 5),
        iss_base_url=env_str("ISS_BASE_URL", DEFAULT_ISS_BASE_URL).rstrip("/"),
        jwst_host=env_str("JWST_HOST", DEFAULT_JWST_HOST).rstrip("/"),
        jwst_api_key=env_str("JWST_API_KEY"),
        jwst_email=env_str("JWST_EMAIL"),
        jwst_program_id=env_str("JWST_PROGRAM_ID"),
        astro_base_url=env_str("ASTRO_BASE_URL", DEFAULT_ASTRO_URL).rstrip("/"),
        astro_app_id=env_str("ASTRO_APP_ID"),
        astro_app_secret=env_str("ASTRO_APP_SECRET"),
        upstream_timeout_sec=env_float("UPSTREAM_TIMEOUT_SEC", 5.0),
        jwst_cache_ttl=env_float("JWST_CACHE_TTL", 300.0),
        astro_cache_ttl=env_float("ASTRO_CACHE_TTL", 600.0),
    )
