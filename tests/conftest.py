"""Shared test fixtures: a temporary SQLite database and an API client."""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from space_fleet_api.app.core.config import settings
from space_fleet_api.app.core.db import init_db
from space_fleet_api.app.main import app
from space_fleet_api.app.schemas.ship import Ship, ShipType, to_epoch_millis


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated SQLite file."""
    path = tmp_path / "ships.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def api_client(db_path):
    """TestClient bound to the temporary database."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_ship():
    """Factory for in-memory ``Ship`` objects with sensible defaults."""
    def _make(**overrides):
        fields = dict(
            id=1,
            name="Eagle",
            planet="Earth",
            ship_type=ShipType.TRANSPORT,
            prod_date=datetime(3000, 6, 15),
            is_used=False,
            speed=0.5,
            crew_size=50,
            rating=2.0,
        )
        fields.update(overrides)
        return Ship(**fields)

    return _make


@pytest.fixture
def eagle_json():
    """JSON body for the reference ship used throughout the API tests."""
    return {
        "name": "Eagle",
        "planet": "Earth",
        "shipType": "TRANSPORT",
        "prodDate": to_epoch_millis(datetime(3000, 6, 15)),
        "speed": 0.5,
        "crewSize": 50,
    }
