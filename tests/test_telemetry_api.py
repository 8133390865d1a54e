"""
Pytest tests for the telemetry collector API (TestClient, temporary DB, fetchers mocked).
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from space_dashboard.core.exceptions import UpstreamError


def test_health(telemetry_client):
    r = telemetry_client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "now" in body


def test_last_without_data(telemetry_client):
    r = telemetry_client.get("/last")
    assert r.status_code == 200
    assert r.json() == {"message": "no data"}


def test_last_returns_newest_sample(telemetry_client, db):
    db.insert_iss_sample("https://iss.test", {"latitude": 1.0}, fetched_at=1700000000)
    db.insert_iss_sample("https://iss.test", {"latitude": 2.0}, fetched_at=1700000060)
    body = telemetry_client.get("/last").json()
    assert body["payload"] == {"latitude": 2.0}
    assert body["fetched_at"] == "2023-11-14T22:14:20Z"
    assert set(body) == {"id", "fetched_at", "source_url", "payload"}


def test_fetch_stores_then_returns_last(telemetry_client, db):
    def fake_fetch(settings):
        db.insert_iss_sample(settings.where_iss_url, {"latitude": 5.0})

    with patch("space_dashboard.telemetry.routes.fetch_and_store_iss", side_effect=fake_fetch):
        body = telemetry_client.get("/fetch").json()
    assert body["payload"] == {"latitude": 5.0}


def test_fetch_upstream_failure_falls_back_to_stored(telemetry_client, db):
    db.insert_iss_sample("https://iss.test", {"latitude": 9.0}, fetched_at=1700000000)
    with patch(
        "space_dashboard.telemetry.routes.fetch_and_store_iss",
        side_effect=UpstreamError("iss", "HTTP 503", status=503),
    ):
        r = telemetry_client.get("/fetch")
    assert r.status_code == 200
    assert r.json()["payload"] == {"latitude": 9.0}


def test_trend_endpoint(telemetry_client, db):
    r = telemetry_client.get("/iss/trend")
    assert r.status_code == 200
    assert r.json()["movement"] is False

    db.insert_iss_sample("u", {"latitude": 0.0, "longitude": 0.0}, fetched_at=1700000000)
    db.insert_iss_sample("u", {"latitude": 1.0, "longitude": 0.0, "velocity": 27600}, fetched_at=1700000120)
    body = telemetry_client.get("/iss/trend").json()
    assert body["movement"] is True
    assert body["dt_sec"] == 120.0
    assert body["velocity_kmh"] == 27600.0
    assert 111 < body["delta_km"] < 112


def test_osdr_sync_and_list(telemetry_client, db):
    def fake_sync(settings):
        for i in range(3):
            db.upsert_osdr_item(f"OSD-{i}", title=f"T{i}", status=None, updated_at=None, raw={}, now=100 + i)
        return 3

    with patch("space_dashboard.telemetry.routes.fetch_and_store_osdr", side_effect=fake_sync):
        r = telemetry_client.get("/osdr/sync")
    assert r.status_code == 200
    assert r.json() == {"written": 3}

    items = telemetry_client.get("/osdr/list").json()["items"]
    assert [i["dataset_id"] for i in items] == ["OSD-2", "OSD-1", "OSD-0"]
    assert len(telemetry_client.get("/osdr/list?limit=1").json()["items"]) == 1
    assert telemetry_client.get("/osdr/list?limit=0").status_code == 422


def test_osdr_sync_upstream_error_is_502(telemetry_client):
    with patch(
        "space_dashboard.telemetry.routes.fetch_and_store_osdr",
        side_effect=UpstreamError("osdr", "HTTP 500", status=500),
    ):
        r = telemetry_client.get("/osdr/sync")
    assert r.status_code == 502
    body = r.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "UPSTREAM_ERROR"
    assert body["error"]["service"] == "osdr"


def test_space_latest(telemetry_client, db):
    assert telemetry_client.get("/space/apod/latest").json() == {"source": "apod", "message": "no data"}
    db.write_cache("apod", {"title": "Nebula"}, fetched_at=1700000000)
    body = telemetry_client.get("/space/APOD/latest").json()
    assert body == {"source": "apod", "fetched_at": "2023-11-14T22:13:20Z", "payload": {"title": "Nebula"}}


def test_space_refresh_runs_named_sources(telemetry_client):
    apod = MagicMock()
    neo = MagicMock(side_effect=UpstreamError("neo", "HTTP 429", status=429))
    with patch.dict("space_dashboard.fetchers.space.FETCHERS", {"apod": apod, "neo": neo}, clear=True):
        body = telemetry_client.get("/space/refresh?src=apod,neo,bogus,apod").json()
    assert body == {"refreshed": ["apod"], "failed": ["neo"]}
    apod.assert_called_once()


def test_space_summary(telemetry_client, db):
    db.write_cache("spacex", {"name": "Crew-12"})
    db.insert_iss_sample("u", {"latitude": 1.0})
    db.upsert_osdr_item("OSD-1", title=None, status=None, updated_at=None, raw={})
    body = telemetry_client.get("/space/summary").json()
    assert body["apod"] == {}
    assert body["spacex"]["payload"] == {"name": "Crew-12"}
    assert body["iss"]["payload"] == {"latitude": 1.0}
    assert body["osdr_count"] == 1
    assert set(body) == {"apod", "neo", "flr", "cme", "spacex", "iss", "osdr_count"}


def test_rate_limit_rejects_excess_requests(db, settings):
    from dataclasses import replace

    from fastapi.testclient import TestClient

    from space_dashboard.telemetry.app import create_app

    client = TestClient(create_app(replace(settings, rate_limit_per_sec=2)))
    codes = [client.get("/health").status_code for _ in range(5)]
    assert codes[:2] == [200, 200]
    assert 429 in codes[2:]


def test_osdr_sync_tolerates_bad_timestamps(telemetry_client, db):
    from space_dashboard.fetchers import osdr

    data = [
        {"id": "OSD-1", "lastUpdated": 1700000000000},
        {"id": "OSD-2", "updated": "Infinity"},
        {"id": "OSD-3", "modified": float("inf")},
    ]
    with patch.object(osdr, "get_json", return_value=data):
        r = telemetry_client.get("/osdr/sync")
    assert r.status_code == 200
    assert r.json() == {"written": 3}

    r = telemetry_client.get("/osdr/list")
    assert r.status_code == 200
    updated = {i["dataset_id"]: i["updated_at"] for i in r.json()["items"]}
    assert updated == {"OSD-1": "2023-11-14T22:13:20Z", "OSD-2": None, "OSD-3": None}


def test_osdr_list_survives_out_of_range_stored_timestamp(telemetry_client, db):
    db.upsert_osdr_item("OSD-9", title="Old row", status=None, updated_at=1700000000000, raw={}, now=100)
    r = telemetry_client.get("/osdr/list")
    assert r.status_code == 200
    assert r.json()["items"][0]["updated_at"] is None


def test_trend_with_non_finite_latitude(telemetry_client, db):
    db.insert_iss_sample("u", {"latitude": 0.0, "longitude": 0.0}, fetched_at=1700000000)
    db.insert_iss_sample("u", {"latitude": "inf", "longitude": 0.0}, fetched_at=1700000120)
    r = telemetry_client.get("/iss/trend")
    assert r.status_code == 200
    body = r.json()
    assert body["movement"] is False
    assert body["to_lat"] is None
    assert body["delta_km"] == 0.0
