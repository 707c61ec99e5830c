"""OpenWeatherMap API client for current conditions and the 5-day forecast."""

import logging
from collections.abc import Iterator

import httpx

from weatherdash.config.schema import OPENWEATHER_BASE_URL, Units
from weatherdash.errors import NetworkError, NotFound
from weatherdash.ingest.forecast_filter import noon_readings
from weatherdash.models.common import Coordinates, Locator
from weatherdash.models.weather import ForecastEntry, WeatherSnapshot

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        units: Units | str = Units.METRIC,
        timeout: float | None = 30.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = Units(units)
        self.timeout = timeout

    async def fetch_current(self, locator: Locator) -> WeatherSnapshot:
        """Fetch current conditions for a city name or coordinates."""
        raw = await self._get("weather", locator)
        return _extract_snapshot(raw)

    async def fetch_forecast(self, locator: Locator) -> Iterator[ForecastEntry]:
        """Fetch the 5-day/3-hour forecast, reduced to one noon reading per day."""
        raw = await self._get("forecast", locator)
        return noon_readings(raw.get("list", []))

    async def _get(self, endpoint: str, locator: Locator) -> dict:
        url = f"{self.base_url}/{endpoint}"
        params = {
            **_locator_params(locator),
            "units": self.units.value,
            "appid": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("OpenWeather %s request failed for %s: %s", endpoint, locator, e)
            raise NetworkError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            logger.warning(
                "OpenWeather %s returned %d for %s", endpoint, resp.status_code, locator
            )
            raise NotFound(locator, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("OpenWeather %s returned an unreadable body", endpoint)
            raise NetworkError("malformed provider response") from e
        if not isinstance(data, dict):
            raise NetworkError("malformed provider response")
        return data


def _locator_params(locator: Locator) -> dict[str, str | float]:
    if isinstance(locator, Coordinates):
        return {"lat": locator.latitude, "lon": locator.longitude}
    return {"q": locator.strip()}


def _extract_snapshot(raw: dict) -> WeatherSnapshot:
    """Build a snapshot from a /weather response, defaulting missing fields."""
    main = raw.get("main", {})
    sys_ = raw.get("sys", {})
    conditions = raw.get("weather") or [{}]
    return WeatherSnapshot(
        location_name=raw.get("name", ""),
        country=sys_.get("country", ""),
        temperature=float(main.get("temp", 0.0)),
        feels_like=float(main.get("feels_like", 0.0)),
        temp_min=float(main.get("temp_min", 0.0)),
        temp_max=float(main.get("temp_max", 0.0)),
        humidity=int(main.get("humidity", 0)),
        pressure=int(main.get("pressure", 0)),
        condition=conditions[0].get("main", ""),
        description=conditions[0].get("description", ""),
        icon=conditions[0].get("icon", ""),
        wind_speed=float(raw.get("wind", {}).get("speed", 0.0)),
        sunrise=int(sys_.get("sunrise", 0)),
        sunset=int(sys_.get("sunset", 0)),
        timezone_offset=int(raw.get("timezone", 0)),
        observed_at=int(raw.get("dt", 0)),
    )
