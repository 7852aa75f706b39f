"""Weather-code descriptions, icons and sky themes."""

from __future__ import annotations

from typing import Any

import pytest

from aurora_weather.weather.codes import (
    FALLBACK_DESCRIPTION,
    FALLBACK_ICON,
    SKY_THEME_GROUPS,
    WEATHER_DESCRIPTIONS,
    WEATHER_ICONS,
    classify_sky,
    describe_code,
    icon_for_code,
)

KNOWN_CODES = [
    0, 1, 2, 3, 45, 48, 51, 53, 55, 56, 57, 61, 63, 65, 66, 67,
    71, 73, 75, 77, 80, 81, 82, 85, 86, 95, 96, 99,
]


@pytest.mark.parametrize(
    ("code", "theme"),
    [
        (95, "storm"),
        (96, "storm"),
        (99, "storm"),
        (61, "rain"),
        (67, "rain"),
        (82, "rain"),
        (71, "snow"),
        (86, "snow"),
        (2, "clouds"),
        (48, "clouds"),
        (0, "clear"),
        (1, "clear"),
        (51, "clear"),
        (9999, "clear"),
        (None, "clear"),
        ("95", "clear"),
        (95.0, "storm"),
    ],
)
def test_classify_sky(code: Any, theme: str) -> None:
    assert classify_sky(code) == theme


def test_sky_theme_groups_are_disjoint() -> None:
    seen: set[int] = set()
    for codes in SKY_THEME_GROUPS.values():
        assert not (seen & codes)
        seen |= codes


def test_description_table_covers_known_codes() -> None:
    assert sorted(WEATHER_DESCRIPTIONS) == KNOWN_CODES
    assert sorted(WEATHER_ICONS) == KNOWN_CODES


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (0, "Clear sky"),
        (45, "Fog"),
        (63, "Rain"),
        (96, "Storm with hail"),
        (99, "Severe storm"),
    ],
)
def test_describe_code(code: int, expected: str) -> None:
    assert describe_code(code) == expected


@pytest.mark.parametrize("code", [None, 4, 9999, True, "0", 2.5])
def test_describe_code_falls_back(code: Any) -> None:
    assert describe_code(code) == FALLBACK_DESCRIPTION == "Live update"
    assert describe_code(code, fallback="n/a") == "n/a"


def test_icon_for_code() -> None:
    assert icon_for_code(0) == "☀"
    assert icon_for_code(3) == "☁"
    assert icon_for_code(66) == "☂"
    assert icon_for_code(75) == "❄"
    assert icon_for_code(95) == "⚡"
    assert icon_for_code(None) == FALLBACK_ICON
    assert icon_for_code(12345) == FALLBACK_ICON


def test_lookup_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        WEATHER_DESCRIPTIONS[100] = "Meteor shower"  # type: ignore[index]
