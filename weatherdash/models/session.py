"""Session view-state models."""

from dataclasses import dataclass
from enum import StrEnum

from weatherdash.models.weather import ForecastEntry, WeatherSnapshot


class ViewState(StrEnum):
    LANDING = "landing"
    SEARCH = "search"
    DASHBOARD = "dashboard"


@dataclass
class SessionState:
    view: ViewState = ViewState.LANDING
    loading: bool = False
    error: str | None = None
    weather: WeatherSnapshot | None = None
    forecast: tuple[ForecastEntry, ...] = ()
