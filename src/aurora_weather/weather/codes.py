"""WMO weather-code lookups used for descriptions, icons, and sky themes."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

SkyTheme = Literal["clear", "clouds", "rain", "snow", "storm"]

FALLBACK_DESCRIPTION = "Live update"
FALLBACK_ICON = "⛅"

WEATHER_DESCRIPTIONS: Mapping[int, str] = MappingProxyType(
    {
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
        45: "Fog",
        48: "Rime fog",
        51: "Light drizzle",
        53: "Drizzle",
        55: "Heavy drizzle",
        56: "Freezing drizzle",
        57: "Heavy freezing drizzle",
        61: "Light rain",
        63: "Rain",
        65: "Heavy rain",
        66: "Freezing rain",
        67: "Heavy freezing rain",
        71: "Light snow",
        73: "Snow",
        75: "Heavy snow",
        77: "Snow grains",
        80: "Light showers",
        81: "Showers",
        82: "Violent showers",
        85: "Snow showers",
        86: "Heavy snow showers",
        95: "Thunderstorm",
        96: "Storm with hail",
        99: "Severe storm",
    }
)

_SUN = "☀"
_SUN_CLOUD = "⛅"
_CLOUD = "☁"
_RAIN = "☔"
_UMBRELLA = "☂"
_SNOW = "❄"
_STORM = "⚡"

WEATHER_ICONS: Mapping[int, str] = MappingProxyType(
    {
        0: _SUN,
        1: _SUN_CLOUD,
        2: _SUN_CLOUD,
        3: _CLOUD,
        45: _CLOUD,
        48: _CLOUD,
        51: _RAIN,
        53: _RAIN,
        55: _RAIN,
        56: _UMBRELLA,
        57: _UMBRELLA,
        61: _RAIN,
        63: _RAIN,
        65: _RAIN,
        66: _UMBRELLA,
        67: _UMBRELLA,
        71: _SNOW,
        73: _SNOW,
        75: _SNOW,
        77: _SNOW,
        80: _RAIN,
        81: _RAIN,
        82: _RAIN,
        85: _SNOW,
        86: _SNOW,
        95: _STORM,
        96: _STORM,
        99: _STORM,
    }
)

# Groups are disjoint; anything not listed is "clear".
SKY_THEME_GROUPS: Mapping[SkyTheme, frozenset[int]] = MappingProxyType(
    {
        "storm": frozenset({95, 96, 99}),
        "rain": frozenset({61, 63, 65, 80, 81, 82, 66, 67}),
        "snow": frozenset({71, 73, 75, 77, 85, 86}),
        "clouds": frozenset({2, 3, 45, 48}),
    }
)


def as_code(code: Any) -> int | None:
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, float) and code.is_integer():
        return int(code)
    return None


def describe_code(code: Any, fallback: str = FALLBACK_DESCRIPTION) -> str:
    """Short English description for a weather code, or `fallback` if unknown."""
    key = as_code(code)
    if key is None:
        return fallback
    return WEATHER_DESCRIPTIONS.get(key, fallback)


def icon_for_code(code: Any, fallback: str = FALLBACK_ICON) -> str:
    """Unicode glyph for a weather code, or `fallback` if unknown."""
    key = as_code(code)
    if key is None:
        return fallback
    return WEATHER_ICONS.get(key, fallback)


def classify_sky(code: Any) -> SkyTheme:
    """Coarse sky theme for a weather code; null and unknown codes are "clear"."""
    key = as_code(code)
    if key is None:
        return "clear"
    for theme, codes in SKY_THEME_GROUPS.items():
        if key in codes:
            return theme
    return "clear"
