"""Output formatters and derived display values for a session."""

from datetime import UTC, datetime, timedelta, timezone
from typing import Any

from weatherdash.config.schema import Units
from weatherdash.models.common import epoch_now
from weatherdash.models.session import SessionState
from weatherdash.models.weather import ForecastEntry, WeatherSnapshot

TEMP_SYMBOLS = {Units.METRIC: "°C", Units.IMPERIAL: "°F", Units.STANDARD: " K"}
SPEED_UNITS = {Units.METRIC: "m/s", Units.IMPERIAL: "mph", Units.STANDARD: "m/s"}


def sun_progress(sunrise: int, sunset: int, now: int) -> float:
    """Fraction of daylight elapsed at ``now``, clamped to [0, 1]."""
    total = sunset - sunrise
    if total <= 0:
        return 0.0
    return max(0.0, min(1.0, (now - sunrise) / total))


def condition_theme(condition: str | None) -> str:
    """Map a provider condition category to a background theme name."""
    c = (condition or "").lower()
    if "cloud" in c:
        return "cloudy"
    if "rain" in c:
        return "rainy"
    if "clear" in c:
        return "clear"
    return "default"


def local_clock(epoch: int, offset_seconds: int) -> str:
    """HH:MM at the location, given its UTC offset in seconds."""
    tz = timezone(timedelta(seconds=offset_seconds))
    return datetime.fromtimestamp(epoch, tz).strftime("%H:%M")


def format_dashboard_text(
    state: SessionState,
    recent: list[str],
    units: Units = Units.METRIC,
    now: int | None = None,
) -> str:
    """Plain text rendering of the session for the CLI."""
    lines: list[str] = []
    if state.error:
        lines.append(f"Error: {state.error}")
    w = state.weather
    if w is not None:
        lines.extend(_weather_lines(w, units, epoch_now() if now is None else now))
        if state.forecast:
            lines.append("Forecast:")
            lines.extend(_forecast_line(e, units) for e in state.forecast)
    if recent:
        lines.append(f"Recent: {', '.join(recent)}")
    return "\n".join(lines)


def _weather_lines(w: WeatherSnapshot, units: Units, now: int) -> list[str]:
    deg = TEMP_SYMBOLS[units]
    title = f"{w.location_name}, {w.country}" if w.country else w.location_name
    progress = sun_progress(w.sunrise, w.sunset, now)
    return [
        f"=== {title} ===",
        f"{round(w.temperature)}{deg}  {w.description} ({w.condition})",
        f"Feels like {round(w.feels_like)}{deg} | "
        f"Min {round(w.temp_min)}{deg} / Max {round(w.temp_max)}{deg}",
        f"Wind {w.wind_speed} {SPEED_UNITS[units]} | Humidity {w.humidity}% | "
        f"Pressure {w.pressure} hPa",
        f"Sun cycle: {round(progress * 100)}% "
        f"({local_clock(w.sunrise, w.timezone_offset)} - "
        f"{local_clock(w.sunset, w.timezone_offset)})",
    ]


def _forecast_line(e: ForecastEntry, units: Units) -> str:
    return (
        f"  {e.reading_time.strftime('%a %d %b')}  "
        f"{round(e.temperature)}{TEMP_SYMBOLS[units]}  {e.description}"
    )


def format_state(
    state: SessionState,
    recent: list[str],
    units: Units = Units.METRIC,
    now: int | None = None,
) -> dict[str, Any]:
    """JSON-ready session payload for the API."""
    now = epoch_now() if now is None else now
    w = state.weather
    weather: dict[str, Any] | None = None
    if w is not None:
        weather = {
            "location_name": w.location_name,
            "country": w.country,
            "temperature": w.temperature,
            "feels_like": w.feels_like,
            "temp_min": w.temp_min,
            "temp_max": w.temp_max,
            "humidity": w.humidity,
            "pressure": w.pressure,
            "condition": w.condition,
            "description": w.description,
            "icon": w.icon,
            "wind_speed": w.wind_speed,
            "sunrise": w.sunrise,
            "sunset": w.sunset,
            "timezone_offset": w.timezone_offset,
            "observed_at": w.observed_at,
            "sun_progress": round(sun_progress(w.sunrise, w.sunset, now), 3),
        }
    return {
        "view": state.view.value,
        "loading": state.loading,
        "error": state.error,
        "units": units.value,
        "theme": condition_theme(w.condition if w else None),
        "weather": weather,
        "forecast": [
            {
                "timestamp": e.timestamp,
                "date": e.reading_time.date().isoformat(),
                "temperature": e.temperature,
                "icon": e.icon,
                "description": e.description,
            }
            for e in state.forecast
        ],
        "recent": recent,
        "generated_at": datetime.fromtimestamp(now, UTC).isoformat(),
    }
