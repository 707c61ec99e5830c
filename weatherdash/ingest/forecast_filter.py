"""Reduce a 3-hourly forecast series to one noon reading per day."""

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time

from weatherdash.models.weather import ForecastEntry

logger = logging.getLogger(__name__)

NOON = time(12, 0)
DT_TXT_FORMAT = "%Y-%m-%d %H:%M:%S"


def noon_readings(readings: Iterable[dict]) -> Iterator[ForecastEntry]:
    """Yield the 12:00:00 reading of each day, lazily and in input order.

    Days without an exact noon reading are skipped; there is no nearest-hour
    fallback. A repeated noon reading for a day already yielded is dropped.
    """
    seen: set[date] = set()
    for r in readings:
        reading_time = parse_reading_time(r.get("dt_txt", ""))
        if reading_time is None or reading_time.time() != NOON:
            continue
        day = reading_time.date()
        if day in seen:
            logger.debug("Duplicate noon reading for %s dropped", day)
            continue
        seen.add(day)
        yield _to_entry(r, reading_time)


def parse_reading_time(dt_txt: str) -> datetime | None:
    """Parse the provider's ``dt_txt`` ("2026-10-18 12:00:00")."""
    try:
        return datetime.strptime(dt_txt, DT_TXT_FORMAT)
    except (TypeError, ValueError):
        logger.debug("Unparseable forecast timestamp: %r", dt_txt)
        return None


def _to_entry(r: dict, reading_time: datetime) -> ForecastEntry:
    conditions = r.get("weather") or [{}]
    return ForecastEntry(
        timestamp=int(r.get("dt", 0)),
        temperature=float(r.get("main", {}).get("temp", 0.0)),
        icon=conditions[0].get("icon", ""),
        description=conditions[0].get("description", ""),
        reading_time=reading_time,
    )
