"""Geocode -> forecast -> normalize lookups."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from .exceptions import WeatherLookupError, WeatherProviderError
from .weather.base import ForecastProvider, GeocodingProvider
from .weather.models import GeoLocation, WeatherModel
from .weather.normalizer import normalize


class LookupResult(BaseModel):
    """Resolved location, normalized model, and the raw payload it came from."""

    model_config = ConfigDict(frozen=True)

    location: GeoLocation
    weather: WeatherModel
    raw_forecast_payload: dict[str, Any]


class WeatherService:
    """Runs one lookup cycle against a geocoder and a forecast provider."""

    def __init__(
        self,
        geocoder: GeocodingProvider,
        forecaster: ForecastProvider,
        logger: logging.Logger,
        suggestion_count: int = 6,
    ) -> None:
        self.geocoder = geocoder
        self.forecaster = forecaster
        self.logger = logger
        self.suggestion_count = suggestion_count

    def lookup_city(self, query: str, *, now: datetime | None = None) -> LookupResult:
        """Forecast for the first geocoding match of `query`."""
        name = (query or "").strip()
        if not name:
            raise WeatherLookupError("Please enter a city to explore.")

        candidates = self.geocoder.search(name, count=1)
        if not candidates:
            raise WeatherLookupError("City not found. Try another search.")
        location = candidates[0]
        self.logger.info("Resolved %r to %s", name, location.label, extra={"query": name})
        return self._forecast_for(location, location.latitude, location.longitude, now=now)

    def lookup_coordinates(
        self,
        latitude: float,
        longitude: float,
        *,
        now: datetime | None = None,
    ) -> LookupResult:
        """Forecast for the requested coordinates, named after the nearest place."""
        candidates = self.geocoder.reverse(latitude, longitude)
        if not candidates:
            raise WeatherLookupError("Location lookup failed. Try typing a city.")
        location = candidates[0]
        self.logger.info(
            "Reverse geocoded to %s",
            location.label,
            extra={"latitude": latitude, "longitude": longitude},
        )
        # The forecast uses the caller's coordinates, not the matched place's.
        return self._forecast_for(location, latitude, longitude, now=now)

    def suggest(self, query: str) -> list[GeoLocation]:
        """Autocomplete candidates for a partial query; failures yield no suggestions."""
        name = (query or "").strip()
        if not name:
            return []
        try:
            return self.geocoder.search(name, count=self.suggestion_count)
        except WeatherProviderError as exc:
            self.logger.warning("Suggestion lookup failed: %s", exc, extra={"query": name})
            return []

    def _forecast_for(
        self,
        location: GeoLocation,
        latitude: float,
        longitude: float,
        *,
        now: datetime | None,
    ) -> LookupResult:
        payload = self.forecaster.fetch_forecast(latitude, longitude, timezone=location.timezone)
        weather = normalize(location, payload, now=now)
        return LookupResult(location=location, weather=weather, raw_forecast_payload=payload)
