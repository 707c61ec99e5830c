"""Session controller: view transitions, lookups, and the recent-search list.

One controller owns one session. Lookups follow an ignore-while-loading
policy: a query, recent selection, or location request issued while another
is in flight is dropped without a fetch.
"""

import asyncio
import logging

from weatherdash.config.schema import AppConfig
from weatherdash.errors import GeolocationError, WeatherLookupError
from weatherdash.ingest.geolocation import Geolocator, UnsupportedGeolocator
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.common import Locator
from weatherdash.models.session import SessionState, ViewState
from weatherdash.session.recent_searches import RecentSearches
from weatherdash.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong, please try again"


class SessionController:
    def __init__(
        self,
        client: OpenWeatherClient,
        recent: RecentSearches,
        geolocator: Geolocator | None = None,
    ):
        self.client = client
        self.recent = recent
        self.geolocator = geolocator or UnsupportedGeolocator()
        self.state = SessionState()

    # --- View transitions ---

    def open_search(self) -> None:
        self.state.view = ViewState.SEARCH

    def go_home(self) -> None:
        self.state.view = ViewState.LANDING

    # --- Lookups ---

    async def submit_query(self, city_name: str) -> bool:
        """Look up a city. Returns True when the dashboard was reached."""
        name = (city_name or "").strip()
        if not name:
            logger.debug("Ignoring empty query")
            return False
        if not self._begin():
            return False
        try:
            return await self._lookup(name)
        finally:
            self.state.loading = False

    async def select_recent(self, name: str) -> bool:
        return await self.submit_query(name)

    async def use_my_location(self, geolocator: Geolocator | None = None) -> bool:
        """Look up the current position reported by ``geolocator``."""
        if not self._begin():
            return False
        source = geolocator or self.geolocator
        try:
            try:
                coords = await source.current_position()
            except GeolocationError as e:
                logger.warning("Geolocation failed: %s", e)
                self.state.error = str(e)
                return False
            except Exception:
                logger.exception("Geolocation source failed")
                self.state.error = UNEXPECTED_ERROR_MESSAGE
                return False
            return await self._lookup(coords)
        finally:
            self.state.loading = False

    # --- Recent searches ---

    @property
    def recent_searches(self) -> list[str]:
        return self.recent.items

    def record_recent(self, name: str) -> list[str]:
        return self.recent.record(name)

    def clear_recent(self) -> None:
        self.recent.clear()

    # --- Internals ---

    def _begin(self) -> bool:
        if self.state.loading:
            logger.info("Lookup already in progress, ignoring new request")
            return False
        self.state.loading = True
        self.state.error = None
        return True

    async def _lookup(self, locator: Locator) -> bool:
        """Fetch weather and forecast together; commit only if both succeed.

        The recent-search list is persisted before the new weather is shown,
        so a storage failure leaves the previous state in place.
        """
        try:
            results = await asyncio.gather(
                self.client.fetch_current(locator),
                self.client.fetch_forecast(locator),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            weather, forecast = results
            entries = tuple(forecast)
            if weather.location_name:
                self.recent.record(weather.location_name)
        except WeatherLookupError as e:
            logger.warning("Lookup failed for %s: %s", locator, e)
            self.state.error = str(e)
            return False
        except Exception:
            logger.exception("Unexpected error looking up %s", locator)
            self.state.error = UNEXPECTED_ERROR_MESSAGE
            return False

        self.state.weather = weather
        self.state.forecast = entries
        self.state.view = ViewState.DASHBOARD
        logger.info(
            "Loaded %s (%d forecast days)", weather.location_name or locator, len(entries)
        )
        return True


def build_session(
    config: AppConfig,
    store: KeyValueStore,
    geolocator: Geolocator | None = None,
) -> SessionController:
    """Wire a controller from config. Loads the recent-search list from ``store``."""
    client = OpenWeatherClient(
        api_key=config.provider.api_key,
        base_url=config.provider.base_url,
        units=config.provider.units,
        timeout=config.provider.timeout,
    )
    recent = RecentSearches(
        store,
        key=config.storage.recent_key,
        limit=config.session.max_recent,
    )
    if not config.provider.api_key:
        logger.warning("No OpenWeather API key configured; lookups will fail")
    return SessionController(client, recent, geolocator)
