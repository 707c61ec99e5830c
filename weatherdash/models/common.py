"""Common types and helpers shared across models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeAlias


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.4f}, {self.longitude:.4f}"


# A lookup target: a free-text city name or a lat/lon pair
Locator: TypeAlias = str | Coordinates


def utc_now() -> datetime:
    return datetime.now(UTC)


def epoch_now() -> int:
    return int(utc_now().timestamp())
