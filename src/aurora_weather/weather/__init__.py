"""Open-Meteo integration and forecast normalization."""

from .base import ForecastProvider, GeocodingProvider
from .codes import SkyTheme, classify_sky, describe_code, icon_for_code
from .models import (
    CurrentConditions,
    DailyEntry,
    GeoLocation,
    HourlyEntry,
    LocationSummary,
    WeatherModel,
)
from .normalizer import js_round, normalize
from .open_meteo import OpenMeteoClient

__all__ = [
    "CurrentConditions",
    "DailyEntry",
    "ForecastProvider",
    "GeoLocation",
    "GeocodingProvider",
    "HourlyEntry",
    "LocationSummary",
    "OpenMeteoClient",
    "SkyTheme",
    "WeatherModel",
    "classify_sky",
    "describe_code",
    "icon_for_code",
    "js_round",
    "normalize",
]
