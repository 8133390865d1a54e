"""
Pytest tests for ISS movement trend between the two newest samples.
"""

from __future__ import annotations

import pytest

from space_dashboard.telemetry.trend import compute_trend


def test_trend_needs_two_samples():
    """Zero or one sample: movement false, zeros and nulls."""
    for samples in ([], [(1700000000, {"latitude": 1, "longitude": 2})]):
        t = compute_trend(samples)
        assert t["movement"] is False
        assert t["delta_km"] == 0.0
        assert t["dt_sec"] == 0.0
        assert t["velocity_kmh"] is None
        assert t["from_time"] is None and t["to_lat"] is None


def test_trend_moving_station():
    newer = (1700000120, {"latitude": 1.0, "longitude": 0.0, "velocity": 27580.5})
    older = (1700000000, {"latitude": 0.0, "longitude": 0.0, "velocity": 27600.0})
    t = compute_trend([newer, older])
    assert t["movement"] is True
    assert t["delta_km"] == pytest.approx(111.195, rel=1e-3)
    assert t["dt_sec"] == 120.0
    assert t["velocity_kmh"] == 27580.5
    assert t["from_time"] == "2023-11-14T22:13:20Z"
    assert t["to_time"] == "2023-11-14T22:15:20Z"
    assert (t["from_lat"], t["from_lon"], t["to_lat"], t["to_lon"]) == (0.0, 0.0, 1.0, 0.0)


def test_trend_stationary_below_threshold():
    newer = (1700000060, {"latitude": "10.0000", "longitude": "20.0000"})
    older = (1700000000, {"latitude": "10.0001", "longitude": "20.0000"})
    t = compute_trend([newer, older])
    assert t["movement"] is False
    assert t["delta_km"] < 0.1


def test_trend_missing_coordinates_keeps_times():
    t = compute_trend([(1700000060, {"foo": 1}), (1700000000, {"latitude": 1, "longitude": 1})])
    assert t["movement"] is False
    assert t["delta_km"] == 0.0
    assert t["dt_sec"] == 60.0
    assert t["to_lat"] is None


def test_trend_non_finite_coordinates_are_missing():
    newer = (1700000120, {"latitude": "nan", "longitude": 0.0})
    older = (1700000000, {"latitude": 0.0, "longitude": "-inf"})
    t = compute_trend([newer, older])
    assert t["movement"] is False
    assert t["delta_km"] == 0.0
    assert t["to_lat"] is None and t["from_lon"] is None
