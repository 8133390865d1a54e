"""
ISS movement between the two newest samples.
"""

from __future__ import annotations

from typing import Any, Sequence

from space_dashboard.core.geo import haversine_km
from space_dashboard.core.jsonpick import iso_utc, n_pick

# Below this the station is considered not to have moved (sample jitter)
MOVEMENT_THRESHOLD_KM = 0.1

LAT_KEYS = ("latitude", "lat")
LON_KEYS = ("longitude", "lon", "lng")
VELOCITY_KEYS = ("velocity", "velocity_kmh")


def compute_trend(samples: Sequence[tuple[int, Any]]) -> dict[str, Any]:
    """
    samples: (fetched_at, payload) newest first, as returned by
    repositories.recent_iss_samples(2). Older entries beyond two are ignored.
    """
    trend: dict[str, Any] = {
        "movement": False,
        "delta_km": 0.0,
        "dt_sec": 0.0,
        "velocity_kmh": None,
        "from_time": None,
        "to_time": None,
        "from_lat": None,
        "from_lon": None,
        "to_lat": None,
        "to_lon": None,
    }
    if len(samples) < 2:
        return trend
    (t_new, p_new), (t_old, p_old) = samples[0], samples[1]
    lat1, lon1 = n_pick(p_old, LAT_KEYS), n_pick(p_old, LON_KEYS)
    lat2, lon2 = n_pick(p_new, LAT_KEYS), n_pick(p_new, LON_KEYS)
    trend.update(
        from_time=iso_utc(t_old),
        to_time=iso_utc(t_new),
        from_lat=lat1,
        from_lon=lon1,
        to_lat=lat2,
        to_lon=lon2,
        dt_sec=float(t_new - t_old),
        velocity_kmh=n_pick(p_new, VELOCITY_KEYS),
    )
    if None in (lat1, lon1, lat2, lon2):
        return trend
    delta_km = haversine_km(lat1, lon1, lat2, lon2)
    trend["delta_km"] = round(delta_km, 3)
    trend["movement"] = delta_km > MOVEMENT_THRESHOLD_KM
    return trend
