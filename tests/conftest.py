"""
Pytest fixtures for Space Dashboard tests. Uses a temporary SQLite DB per test.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from space_dashboard.config.settings import Settings


@pytest.fixture
def db(tmp_path, monkeypatch):
    """
    Point the database layer at a temporary SQLite file and create tables.
    Resets the engine cache so each test gets a fresh DB. Unset DATABASE_URL so we use SQLite.
    Returns the repositories module.
    """
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("SPACE_DB_PATH", str(tmp_path / "space_dashboard.db"))

    from space_dashboard.database import repositories
    from space_dashboard.database.session import init_db, reset_engine_for_test

    reset_engine_for_test()
    init_db()
    yield repositories
    reset_engine_for_test()


@pytest.fixture
def settings():
    """Settings with background loops and rate limiting off, and test credentials."""
    return Settings(
        background_enabled=False,
        rate_limit_per_sec=0,
        where_iss_url="https://iss.test/v1/satellites/25544",
        nasa_api_url="https://osdr.test/datasets",
        iss_base_url="http://telemetry.test",
        jwst_api_key="jwst-key",
        astro_app_id="astro-id",
        astro_app_secret="astro-secret",
    )


@pytest.fixture
def telemetry_client(db, settings):
    """Collector TestClient. Lifespan is not entered, so no background threads run."""
    from fastapi.testclient import TestClient

    from space_dashboard.telemetry.app import create_app

    return TestClient(create_app(settings))


@pytest.fixture
def fake_upstreams():
    """MagicMock stand-ins for the web app's three upstream clients."""
    telemetry = MagicMock(name="telemetry")
    telemetry.last.return_value = {
        "id": 7,
        "fetched_at": "2026-10-18T12:00:00Z",
        "source_url": "https://iss.test",
        "payload": {"latitude": 51.6, "longitude": -0.1, "altitude": 420.5, "velocity": 27600.0},
    }
    telemetry.trend.return_value = {"movement": True, "delta_km": 512.3, "dt_sec": 120.0}
    telemetry.osdr_list.return_value = [
        {
            "id": 1,
            "dataset_id": "OSD-1",
            "title": "Rodent Research",
            "status": "public",
            "updated_at": None,
            "inserted_at": "2026-10-18T11:00:00Z",
            "raw": {"REST_URL": "https://osdr.test/OSD-1"},
        }
    ]
    jwst = MagicMock(name="jwst")
    jwst.feed.return_value = {
        "body": [
            {
                "observation_id": "jw02731-o001",
                "program": 2731,
                "details": {"suffix": "_i2d", "instruments": [{"instrument": "NIRCAM"}]},
                "location": "https://stsci.test/jw02731_i2d.jpg",
            }
        ]
    }
    astro = MagicMock(name="astro")
    astro.body_events.return_value = {"data": {"rows": []}}
    return {"telemetry": telemetry, "jwst": jwst, "astro": astro}


@pytest.fixture
def web_client(db, settings, fake_upstreams):
    """Web app TestClient with upstream clients replaced by fakes."""
    from fastapi.testclient import TestClient

    from space_dashboard.web import upstream
    from space_dashboard.web.app import create_app

    app = create_app(settings)
    app.dependency_overrides[upstream.get_telemetry_client] = lambda: fake_upstreams["telemetry"]
    app.dependency_overrides[upstream.get_jwst_client] = lambda: fake_upstreams["jwst"]
    app.dependency_overrides[upstream.get_astronomy_client] = lambda: fake_upstreams["astro"]
    return TestClient(app)
