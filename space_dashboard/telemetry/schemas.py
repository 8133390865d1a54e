"""
Response models for the collector API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field("ok", description="Always 'ok' when the API is up")
    now: str = Field(..., description="Server time, ISO 8601 UTC")


class TrendResponse(BaseModel):
    """GET /iss/trend: movement between the two newest ISS samples."""

    movement: bool = Field(..., description="True when the station moved more than 0.1 km")
    delta_km: float = Field(..., ge=0, description="Great-circle distance between samples")
    dt_sec: float = Field(..., description="Seconds between samples")
    velocity_kmh: float | None = Field(None, description="Velocity reported in the newest sample")
    from_time: str | None = None
    to_time: str | None = None
    from_lat: float | None = None
    from_lon: float | None = None
    to_lat: float | None = None
    to_lon: float | None = None


class OsdrSyncResponse(BaseModel):
    written: int = Field(..., ge=0, description="Datasets inserted or updated")


class OsdrListResponse(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)


class SpaceRefreshResponse(BaseModel):
    refreshed: list[str] = Field(default_factory=list, description="Sources fetched successfully")
    failed: list[str] = Field(default_factory=list, description="Sources whose fetch raised")
