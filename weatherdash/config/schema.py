"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    units: Units = Units.METRIC
    timeout: float | None = Field(default=30.0, gt=0.0)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/weatherdash.db"
    recent_key: str = "recent_searches"


class SessionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_recent: int = Field(default=5, ge=1)


class LocationConfig(BaseModel):
    """Fallback position used for "my location" lookups outside a browser."""

    model_config = {"extra": "forbid"}

    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @model_validator(mode="after")
    def _both_or_neither(self) -> "LocationConfig":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    storage: StorageConfig = StorageConfig()
    session: SessionConfig = SessionConfig()
    location: LocationConfig = LocationConfig()
    dashboard: DashboardConfig = DashboardConfig()
