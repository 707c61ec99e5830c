"""Lookup error hierarchy. ``str()`` of each error is the user-facing message."""

from weatherdash.models.common import Coordinates, Locator


class WeatherLookupError(Exception):
    """Base class for failures of a single lookup action."""


class NotFound(WeatherLookupError):
    """Provider answered with a non-success status (unknown city, bad key)."""

    def __init__(self, locator: Locator, status_code: int):
        self.locator = locator
        self.status_code = status_code
        if isinstance(locator, Coordinates):
            message = f"Location not found: {locator}"
        else:
            message = f"City not found: {locator}"
        super().__init__(message)


class NetworkError(WeatherLookupError):
    """Transport failure or an unreadable provider response."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class GeolocationError(WeatherLookupError):
    pass


class GeolocationDenied(GeolocationError):
    def __init__(self, message: str = "Location permission denied"):
        super().__init__(message)


class GeolocationUnsupported(GeolocationError):
    def __init__(self, message: str = "Geolocation is not available"):
        super().__init__(message)
