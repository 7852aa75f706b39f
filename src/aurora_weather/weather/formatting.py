"""Human-readable labels for forecast timestamps and temperatures."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def resolve_zone(timezone: str | None) -> tzinfo:
    """IANA zone for `timezone`, falling back to UTC when absent or unknown."""
    if not timezone:
        return UTC
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


def _parse(value: str, zone: tzinfo) -> datetime | None:
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    # Open-Meteo reports naive wall-clock times in the requested timezone.
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def format_time(value: str | None, timezone: str | None = None) -> str:
    """Render a timestamp as ``"3:05 PM"`` in the forecast's timezone."""
    if not value:
        return "-"
    moment = _parse(value, resolve_zone(timezone))
    if moment is None:
        return value
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_day(value: str | None, timezone: str | None = None) -> str:
    """Render a date as ``"Mon, Jan 6"``."""
    if not value:
        return ""
    try:
        day: date = date.fromisoformat(value.strip())
    except ValueError:
        moment = _parse(value, resolve_zone(timezone))
        if moment is None:
            return value
        day = moment.date()
    return f"{day:%a}, {day:%b} {day.day}"


def comfort_message(temperature: Any, feels_like: Any) -> str:
    """Clothing hint from the feels-like temperature, or the air temperature without it."""
    reference = feels_like if _is_number(feels_like) else temperature
    if not _is_number(reference):
        return "Weather comfort: --"
    if reference < 12:
        return "Weather comfort: Cold · bring a jacket"
    if reference < 20:
        return "Weather comfort: Mild · a light sweater works"
    if reference < 28:
        return "Weather comfort: Pleasant · good for a walk"
    return "Weather comfort: Hot · drink water and avoid the sun"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
