"""Sources for the "use my location" position.

The position itself comes from outside (config, CLI flags, a browser); these
classes only adapt it to an awaitable ``current_position()``.
"""

from typing import Protocol

from weatherdash.errors import GeolocationDenied, GeolocationUnsupported
from weatherdash.models.common import Coordinates


class Geolocator(Protocol):
    async def current_position(self) -> Coordinates: ...


class FixedGeolocator:
    def __init__(self, coords: Coordinates):
        self.coords = coords

    async def current_position(self) -> Coordinates:
        return self.coords


class DeniedGeolocator:
    async def current_position(self) -> Coordinates:
        raise GeolocationDenied()


class UnsupportedGeolocator:
    async def current_position(self) -> Coordinates:
        raise GeolocationUnsupported()


def geolocator_for(latitude: float | None, longitude: float | None) -> Geolocator:
    """Fixed position when both coordinates are known, otherwise unsupported."""
    if latitude is None or longitude is None:
        return UnsupportedGeolocator()
    return FixedGeolocator(Coordinates(latitude, longitude))
