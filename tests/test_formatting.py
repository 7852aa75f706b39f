"""Timestamp labels and comfort messages."""

from __future__ import annotations

from datetime import UTC
from typing import Any

import pytest

from aurora_weather.weather.formatting import (
    comfort_message,
    format_day,
    format_time,
    resolve_zone,
)


@pytest.mark.parametrize(
    ("value", "timezone", "expected"),
    [
        ("2026-01-06T14:05", "Europe/Amsterdam", "2:05 PM"),
        ("2026-01-06T13:05:00Z", "Europe/Amsterdam", "2:05 PM"),
        ("2026-01-06T00:30", None, "12:30 AM"),
        ("2026-01-06T12:00", "UTC", "12:00 PM"),
        ("2026-01-06T13:05:00Z", "Mars/Olympus_Mons", "1:05 PM"),
        ("2026-07-01T23:59:00+00:00", "Asia/Tokyo", "8:59 AM"),
    ],
)
def test_format_time(value: str, timezone: str | None, expected: str) -> None:
    assert format_time(value, timezone) == expected


@pytest.mark.parametrize("value", [None, ""])
def test_format_time_empty(value: Any) -> None:
    assert format_time(value, "Europe/Amsterdam") == "-"


def test_format_time_unparseable_returns_input() -> None:
    assert format_time("soon", "UTC") == "soon"


@pytest.mark.parametrize(
    ("value", "timezone", "expected"),
    [
        ("2026-01-06", "Europe/Amsterdam", "Tue, Jan 6"),
        ("2026-01-06", "America/Los_Angeles", "Tue, Jan 6"),
        ("2026-01-06T23:30:00Z", "Asia/Tokyo", "Wed, Jan 7"),
        ("2026-12-31", None, "Thu, Dec 31"),
    ],
)
def test_format_day(value: str, timezone: str | None, expected: str) -> None:
    assert format_day(value, timezone) == expected


def test_format_day_empty_and_garbage() -> None:
    assert format_day(None) == ""
    assert format_day("") == ""
    assert format_day("someday") == "someday"


def test_resolve_zone_falls_back_to_utc() -> None:
    assert resolve_zone(None) is UTC
    assert resolve_zone("") is UTC
    assert resolve_zone("Not/AZone") is UTC
    assert str(resolve_zone("Europe/Amsterdam")) == "Europe/Amsterdam"


@pytest.mark.parametrize(
    ("temperature", "feels_like", "expected"),
    [
        (None, None, "Weather comfort: --"),
        (30, 10, "Weather comfort: Cold · bring a jacket"),
        (15, None, "Weather comfort: Mild · a light sweater works"),
        (25, True, "Weather comfort: Pleasant · good for a walk"),
        (None, 28, "Weather comfort: Hot · drink water and avoid the sun"),
        (11.9, None, "Weather comfort: Cold · bring a jacket"),
        (12, None, "Weather comfort: Mild · a light sweater works"),
    ],
)
def test_comfort_message(temperature: Any, feels_like: Any, expected: str) -> None:
    assert comfort_message(temperature, feels_like) == expected
