"""Shared test fixtures."""

import sqlite3
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import yaml

from weatherdash.config.schema import AppConfig, ProviderConfig
from weatherdash.ingest.forecast_filter import noon_readings
from weatherdash.models.weather import ForecastEntry, WeatherSnapshot
from weatherdash.session.controller import SessionController
from weatherdash.session.recent_searches import RecentSearches
from weatherdash.storage.database import connect
from weatherdash.storage.kv_store import MemoryStore

TEST_BASE_URL = "https://test-owm.example.com/data/2.5"


def make_current_payload(name: str = "Paris", condition: str = "Rain") -> dict:
    """A /weather response shaped like OpenWeatherMap's."""
    return {
        "coord": {"lon": 2.3488, "lat": 48.8534},
        "weather": [
            {"id": 500, "main": condition, "description": "light rain", "icon": "10d"}
        ],
        "main": {
            "temp": 17.6,
            "feels_like": 17.2,
            "temp_min": 16.1,
            "temp_max": 19.4,
            "pressure": 1012,
            "humidity": 72,
        },
        "wind": {"speed": 4.1, "deg": 230},
        "dt": 1792310400,
        "sys": {"country": "FR", "sunrise": 1792296000, "sunset": 1792335600},
        "timezone": 7200,
        "name": name,
        "cod": 200,
    }


def make_forecast_readings(
    start: datetime = datetime(2026, 10, 18, 0, 0),
    days: int = 5,
    skip: set[datetime] | None = None,
) -> list[dict]:
    """Readings every 3 hours from ``start``, one temperature per slot."""
    skip = skip or set()
    readings = []
    t = start
    end = start + timedelta(days=days)
    while t < end:
        if t not in skip:
            readings.append(
                {
                    "dt": int(t.timestamp()),
                    "main": {"temp": 10.0 + t.hour},
                    "weather": [{"main": "Clouds", "description": "few clouds", "icon": "02d"}],
                    "dt_txt": t.strftime("%Y-%m-%d %H:%M:%S"),
                }
            )
        t += timedelta(hours=3)
    return readings


def make_forecast_payload(**kwargs) -> dict:
    readings = make_forecast_readings(**kwargs)
    return {"cod": "200", "cnt": len(readings), "list": readings, "city": {"name": "Paris"}}


def make_snapshot(name: str = "Paris", condition: str = "Rain") -> WeatherSnapshot:
    return WeatherSnapshot(
        location_name=name,
        country="FR",
        temperature=17.6,
        feels_like=17.2,
        temp_min=16.1,
        temp_max=19.4,
        humidity=72,
        pressure=1012,
        condition=condition,
        description="light rain",
        icon="10d",
        wind_speed=4.1,
        sunrise=1792296000,
        sunset=1792335600,
        timezone_offset=7200,
        observed_at=1792310400,
    )


def make_forecast_entries() -> list[ForecastEntry]:
    return list(noon_readings(make_forecast_readings()))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    yield conn
    conn.close()


@pytest.fixture
def fake_client() -> AsyncMock:
    """Client stand-in whose lookups succeed for "Paris" by default."""
    client = AsyncMock()
    client.fetch_current.return_value = make_snapshot()
    client.fetch_forecast.return_value = make_forecast_entries()
    return client


@pytest.fixture
def controller(fake_client: AsyncMock, store: MemoryStore) -> SessionController:
    return SessionController(fake_client, RecentSearches(store))


@pytest.fixture
def test_config() -> AppConfig:
    return AppConfig(provider=ProviderConfig(base_url=TEST_BASE_URL, api_key="test-key"))


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML pointing at the test provider URL."""
    data = {
        "provider": {"base_url": TEST_BASE_URL, "api_key": "yaml-key"},
        "storage": {"db_path": str(tmp_path / "cli.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
