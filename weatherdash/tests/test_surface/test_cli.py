"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from weatherdash.cli import main
from weatherdash.config.loader import API_KEY_ENV
from weatherdash.storage.database import connect
from weatherdash.storage.kv_store import SqliteStore
from weatherdash.tests.conftest import (
    TEST_BASE_URL,
    make_current_payload,
    make_forecast_payload,
)


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)


def _stored_recent(db_path: Path) -> list[str]:
    conn = connect(db_path)
    try:
        raw = SqliteStore(conn).get("recent_searches")
    finally:
        conn.close()
    return json.loads(raw) if raw else []


def _mock_provider(name: str = "Paris") -> None:
    respx.get(f"{TEST_BASE_URL}/weather").mock(
        return_value=httpx.Response(200, json=make_current_payload(name))
    )
    respx.get(f"{TEST_BASE_URL}/forecast").mock(
        return_value=httpx.Response(200, json=make_forecast_payload())
    )


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    @respx.mock
    def test_search(self, config_yaml_path: Path, tmp_path: Path, capsys):
        _mock_provider()
        result = main(["--config", str(config_yaml_path), "search", "Paris"])
        assert result == 0
        out = capsys.readouterr().out
        assert "=== Paris, FR ===" in out
        assert "Forecast:" in out
        assert _stored_recent(tmp_path / "cli.db") == ["Paris"]

    @respx.mock
    def test_search_multiword_city(self, config_yaml_path: Path):
        route = respx.get(f"{TEST_BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=make_current_payload("New York"))
        )
        respx.get(f"{TEST_BASE_URL}/forecast").mock(
            return_value=httpx.Response(200, json=make_forecast_payload())
        )
        assert main(["--config", str(config_yaml_path), "search", "New", "York"]) == 0
        assert route.calls.last.request.url.params["q"] == "New York"

    @respx.mock
    def test_search_not_found(self, config_yaml_path: Path, tmp_path: Path, capsys):
        respx.get(f"{TEST_BASE_URL}/weather").mock(return_value=httpx.Response(404))
        respx.get(f"{TEST_BASE_URL}/forecast").mock(return_value=httpx.Response(404))
        result = main(["--config", str(config_yaml_path), "search", "Atlantis"])
        assert result == 1
        assert "City not found: Atlantis" in capsys.readouterr().out
        assert _stored_recent(tmp_path / "cli.db") == []

    def test_search_blank(self, config_yaml_path: Path):
        assert main(["--config", str(config_yaml_path), "search", "  "]) == 1

    @respx.mock
    def test_locate_with_flags(self, config_yaml_path: Path):
        route = respx.get(f"{TEST_BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=make_current_payload())
        )
        respx.get(f"{TEST_BASE_URL}/forecast").mock(
            return_value=httpx.Response(200, json=make_forecast_payload())
        )
        result = main([
            "--config", str(config_yaml_path), "locate", "--lat", "48.85", "--lon", "2.35",
        ])
        assert result == 0
        params = route.calls.last.request.url.params
        assert params["lat"] == "48.85"
        assert params["lon"] == "2.35"

    def test_locate_without_position(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "locate"])
        assert result == 1
        assert "Geolocation is not available" in capsys.readouterr().out

    @respx.mock
    def test_recent_list_and_clear(self, config_yaml_path: Path, tmp_path: Path, capsys):
        _mock_provider()
        main(["--config", str(config_yaml_path), "search", "Paris"])
        capsys.readouterr()

        assert main(["--config", str(config_yaml_path), "recent"]) == 0
        assert "1. Paris" in capsys.readouterr().out

        assert main(["--config", str(config_yaml_path), "recent", "clear"]) == 0
        assert "cleared" in capsys.readouterr().out
        assert _stored_recent(tmp_path / "cli.db") == []

        main(["--config", str(config_yaml_path), "recent"])
        assert "No recent searches" in capsys.readouterr().out

    def test_db_flag_overrides_config(self, config_yaml_path: Path, tmp_path: Path):
        db_path = tmp_path / "other.db"
        assert main(["--config", str(config_yaml_path), "--db", str(db_path), "recent"]) == 0
        assert db_path.exists()

    def test_config_show_masks_key(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config", "show"]) == 0
        out = capsys.readouterr().out
        assert "metric" in out
        assert "yaml-key" not in out
        assert "***" in out

    def test_config_get(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config", "get", "session.max_recent"]) == 0
        assert capsys.readouterr().out.strip() == "5"

    def test_config_get_unknown(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config", "get", "nope.key"]) == 1

    @respx.mock
    def test_health(self, config_yaml_path: Path, capsys):
        respx.get(f"{TEST_BASE_URL}/weather").mock(return_value=httpx.Response(200, json={}))
        assert main(["--config", str(config_yaml_path), "health"]) == 0
        out = capsys.readouterr().out
        assert "DB: OK" in out
        assert "OpenWeather API: OK" in out
