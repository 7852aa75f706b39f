"""Reshape a raw Open-Meteo forecast payload into a display-ready WeatherModel.

Everything here is pure: no I/O, no shared state. Missing or malformed fields
degrade to ``None`` instead of raising, so a sparse payload still produces a
usable model.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .codes import as_code, classify_sky
from .models import (
    CurrentConditions,
    DailyEntry,
    GeoLocation,
    HourlyEntry,
    LocationSummary,
    WeatherModel,
)

HOURLY_LIMIT = 8
DAILY_LIMIT = 5
NEXT_RAIN_WINDOW = 12

_EMPTY: Mapping[str, Any] = {}


def js_round(value: Any) -> int | None:
    """Round half toward +inf like `Math.round`; non-finite/non-numeric -> None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if not math.isfinite(value):
        return None
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def format_coordinates(latitude: Any, longitude: Any) -> str:
    """Format as ``"lat, lon"`` with two decimals, ties rounded away from zero."""
    return f"{_fixed2(latitude)}, {_fixed2(longitude)}"


def _fixed2(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-"
    if isinstance(value, float) and not math.isfinite(value):
        return "-"
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _block(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else _EMPTY


def _series(block: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = block.get(key)
    if isinstance(value, (list, tuple)):
        return value
    return ()


def _at(series: Sequence[Any], index: int) -> Any:
    return series[index] if index < len(series) else None


def build_hourly(hourly: Mapping[str, Any], limit: int = HOURLY_LIMIT) -> tuple[HourlyEntry, ...]:
    """Aligned hourly entries, at most `limit`, driven by the `time` series."""
    temperatures = _series(hourly, "temperature_2m")
    precip = _series(hourly, "precipitation_probability")
    uv = _series(hourly, "uv_index")
    wind = _series(hourly, "wind_speed_10m")
    return tuple(
        HourlyEntry(
            time=_text(time),
            temperature=js_round(_at(temperatures, index)),
            precip=_number(_at(precip, index)),
            uv=_number(_at(uv, index)),
            wind=_number(_at(wind, index)),
        )
        for index, time in enumerate(_series(hourly, "time")[:limit])
    )


def build_daily(daily: Mapping[str, Any], limit: int = DAILY_LIMIT) -> tuple[DailyEntry, ...]:
    """Aligned daily entries, at most `limit`, driven by the `time` series."""
    minimums = _series(daily, "temperature_2m_min")
    maximums = _series(daily, "temperature_2m_max")
    # Legacy field name requested by the lookup; newer payloads use weather_code.
    codes = _series(daily, "weathercode") or _series(daily, "weather_code")
    uv = _series(daily, "uv_index_max")
    sunrise = _series(daily, "sunrise")
    sunset = _series(daily, "sunset")
    precip = _series(daily, "precipitation_probability_max")
    return tuple(
        DailyEntry(
            date=_text(date),
            temperature_min=js_round(_at(minimums, index)),
            temperature_max=js_round(_at(maximums, index)),
            code=as_code(_at(codes, index)),
            uv=_number(_at(uv, index)),
            sunrise=_text(_at(sunrise, index)),
            sunset=_text(_at(sunset, index)),
            precip=_number(_at(precip, index)),
        )
        for index, date in enumerate(_series(daily, "time")[:limit])
    )


def build_current(current: Mapping[str, Any]) -> CurrentConditions:
    return CurrentConditions(
        temperature=js_round(current.get("temperature_2m")),
        feels_like=js_round(current.get("apparent_temperature")),
        humidity=js_round(current.get("relative_humidity_2m")),
        precipitation=js_round(current.get("precipitation")),
        wind=js_round(current.get("wind_speed_10m")),
        uv=js_round(current.get("uv_index")),
        code=as_code(current.get("weather_code")),
    )


def pick_next_rain_hour(
    hours: Sequence[HourlyEntry], window: int = NEXT_RAIN_WINDOW
) -> HourlyEntry | None:
    """Hour with the highest positive rain probability; the earliest wins ties.

    Only the first `window` entries are scanned. `normalize` passes the hourly
    entries after truncation, so at most HOURLY_LIMIT hours are considered.
    """
    best: HourlyEntry | None = None
    for hour in hours[:window]:
        if hour.precip and hour.precip > (best.precip if best is not None else 0):
            best = hour
    return best


def normalize(
    location: GeoLocation,
    payload: Mapping[str, Any] | None,
    *,
    now: datetime | None = None,
) -> WeatherModel:
    """Build a WeatherModel from a geocoded location and a raw forecast payload.

    `now` only feeds the `last_updated` fallback when the current block has no
    timestamp.
    """
    if not isinstance(payload, Mapping):
        payload = _EMPTY
    current_block = _block(payload, "current")

    hourly = build_hourly(_block(payload, "hourly"))
    daily = build_daily(_block(payload, "daily"))
    current = build_current(current_block)

    last_updated = _text(current_block.get("time"))
    if not last_updated:
        moment = now or datetime.now(UTC)
        last_updated = moment.astimezone(UTC).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )

    return WeatherModel(
        timezone=_text(payload.get("timezone")),
        location=LocationSummary(
            name=location.name,
            country=location.country,
            region=location.region,
            coordinates=format_coordinates(location.latitude, location.longitude),
        ),
        current=current,
        hourly=hourly,
        daily=daily,
        next_rain_hour=pick_next_rain_hour(hourly),
        last_updated=last_updated,
        sky_theme=classify_sky(current.code),
    )
