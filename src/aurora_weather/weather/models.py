"""Typed models for geocoded locations and normalized weather snapshots."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .codes import SkyTheme


class GeoLocation(BaseModel):
    """One geocoding candidate resolved from a place name or coordinates."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str
    country: str | None = None
    region: str | None = Field(default=None, description="First-level admin area (admin1)")
    latitude: float
    longitude: float
    timezone: str | None = Field(default=None, description="IANA timezone identifier")

    @property
    def label(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


class LocationSummary(BaseModel):
    """Display fields for the resolved location."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    region: str | None = None
    coordinates: str


class CurrentConditions(BaseModel):
    """Current block, rounded to whole numbers."""

    model_config = ConfigDict(frozen=True)

    temperature: int | None = None
    feels_like: int | None = None
    humidity: int | None = None
    precipitation: int | None = None
    wind: int | None = None
    uv: int | None = None
    code: int | None = None


class HourlyEntry(BaseModel):
    """One hour of forecast; only the temperature is rounded."""

    model_config = ConfigDict(frozen=True)

    time: str | None = None
    temperature: int | None = None
    precip: int | float | None = None
    uv: int | float | None = None
    wind: int | float | None = None


class DailyEntry(BaseModel):
    """One day of forecast; min/max temperatures are rounded."""

    model_config = ConfigDict(frozen=True)

    date: str | None = None
    temperature_min: int | None = None
    temperature_max: int | None = None
    code: int | None = None
    uv: int | float | None = None
    sunrise: str | None = None
    sunset: str | None = None
    precip: int | float | None = None


class WeatherModel(BaseModel):
    """Display-ready snapshot built from one Open-Meteo forecast payload."""

    model_config = ConfigDict(frozen=True)

    timezone: str | None = None
    location: LocationSummary
    current: CurrentConditions = Field(default_factory=CurrentConditions)
    hourly: tuple[HourlyEntry, ...] = ()
    daily: tuple[DailyEntry, ...] = ()
    next_rain_hour: HourlyEntry | None = None
    last_updated: str
    sky_theme: SkyTheme = "clear"
