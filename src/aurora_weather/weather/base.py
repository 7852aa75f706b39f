"""Provider-agnostic geocoding and forecast contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import GeoLocation


class GeocodingProvider(ABC):
    """Resolves place names (or coordinates) to candidate locations."""

    @abstractmethod
    def search(self, query: str, *, count: int = 1) -> list[GeoLocation]:
        """Return up to `count` candidates for a free-text place name."""

    @abstractmethod
    def reverse(self, latitude: float, longitude: float) -> list[GeoLocation]:
        """Return candidates near the given coordinates."""


class ForecastProvider(ABC):
    """Fetches raw forecast payloads for a coordinate pair."""

    @abstractmethod
    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str | None = None,
    ) -> dict[str, Any]:
        """Fetch the raw current/hourly/daily forecast payload."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
