"""OpenWeatherMap current-conditions and forecast models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeatherSnapshot:
    location_name: str
    country: str
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int
    pressure: int
    condition: str  # provider category, e.g. "Rain"
    description: str  # e.g. "light rain"
    icon: str
    wind_speed: float
    sunrise: int  # epoch seconds
    sunset: int  # epoch seconds
    timezone_offset: int  # seconds east of UTC
    observed_at: int  # epoch seconds


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: int  # epoch seconds
    temperature: float
    icon: str
    description: str
    reading_time: datetime  # parsed from the provider's dt_txt
