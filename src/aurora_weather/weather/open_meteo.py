"""Open-Meteo geocoding and forecast client."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import ForecastProviderError, GeocodingError, WeatherProviderError
from ..redaction import sanitize_for_logging, sanitize_text
from .base import ForecastProvider, GeocodingProvider
from .models import GeoLocation

CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
    "uv_index",
)
HOURLY_FIELDS = (
    "temperature_2m",
    "precipitation_probability",
    "uv_index",
    "wind_speed_10m",
)
DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "weathercode",
    "uv_index_max",
    "sunrise",
    "sunset",
    "precipitation_probability_max",
)


class OpenMeteoClient(GeocodingProvider, ForecastProvider):
    """Talks to the Open-Meteo geocoding and forecast APIs over one httpx client."""

    provider_name = "open-meteo"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        retry_delay_seconds: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._max_retries = settings.weather_max_retries
        self._retry_delay = retry_delay_seconds
        self._geocoding_base = str(settings.geocoding_base_url).rstrip("/")
        self._forecast_base = str(settings.forecast_base_url).rstrip("/")
        self._client = httpx.Client(
            timeout=settings.weather_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> OpenMeteoClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def search(self, query: str, *, count: int = 1) -> list[GeoLocation]:
        """Forward geocoding for a free-text place name."""
        name = query.strip()
        if not name:
            raise GeocodingError("Geocoding query must not be empty.")
        if count <= 0:
            raise GeocodingError(f"Invalid candidate count {count}; expected > 0.")
        payload = self._request_json(
            f"{self._geocoding_base}/search",
            params={"name": name, "count": count, "language": self.settings.geocoding_language},
            context="geocoding search",
            error_cls=GeocodingError,
        )
        return self._parse_results(payload)[:count]

    def reverse(self, latitude: float, longitude: float) -> list[GeoLocation]:
        """Reverse geocoding for a coordinate pair."""
        self._validate_coordinates(latitude, longitude, error_cls=GeocodingError)
        payload = self._request_json(
            f"{self._geocoding_base}/reverse",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "language": self.settings.geocoding_language,
            },
            context="reverse geocoding",
            error_cls=GeocodingError,
        )
        return self._parse_results(payload)

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str | None = None,
    ) -> dict[str, Any]:
        """Fetch current, hourly and daily blocks for the coordinates."""
        self._validate_coordinates(latitude, longitude, error_cls=ForecastProviderError)
        return self._request_json(
            f"{self._forecast_base}/forecast",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "timezone": timezone or "auto",
                "current": ",".join(CURRENT_FIELDS),
                "hourly": ",".join(HOURLY_FIELDS),
                "daily": ",".join(DAILY_FIELDS),
                "forecast_days": self.settings.forecast_days,
            },
            context="forecast fetch",
            error_cls=ForecastProviderError,
        )

    @staticmethod
    def _validate_coordinates(
        latitude: float,
        longitude: float,
        *,
        error_cls: type[WeatherProviderError],
    ) -> None:
        if not (-90 <= latitude <= 90):
            raise error_cls(f"Invalid latitude {latitude}; expected between -90 and 90.")
        if not (-180 <= longitude <= 180):
            raise error_cls(f"Invalid longitude {longitude}; expected between -180 and 180.")

    def _request_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        context: str,
        error_cls: type[WeatherProviderError],
    ) -> dict[str, Any]:
        query = dict(params)
        if self.settings.open_meteo_api_key:
            query["apikey"] = self.settings.open_meteo_api_key
        self.logger.debug(
            "Open-Meteo %s request",
            context,
            extra={"url": url, "query": sanitize_for_logging(query)},
        )

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            can_retry = attempt < self._max_retries
            try:
                response = self._client.get(url, params=query)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                last_error = exc
                # Only rate limiting and server errors are retried.
                if can_retry and (status == 429 or status >= 500):
                    self._pause_before_retry(context, f"HTTP {status}", status_code=status)
                    continue
                raise self._status_error(exc.response, url, context, error_cls) from exc
            except httpx.HTTPError as exc:
                last_error = exc
                if can_retry:
                    self._pause_before_retry(context, type(exc).__name__)
                    continue
                raise error_cls(
                    f"Open-Meteo {context} request failed at {url}: {sanitize_text(str(exc))}"
                ) from exc
            return self._decode(response, url, context, error_cls)

        raise error_cls(
            f"Open-Meteo {context} failed after retries: {sanitize_text(str(last_error))}"
        )

    def _pause_before_retry(
        self, context: str, reason: str, status_code: int | None = None
    ) -> None:
        self.logger.warning(
            "Open-Meteo %s failed (%s); retrying",
            context,
            reason,
            extra={"status_code": status_code},
        )
        time.sleep(self._retry_delay)

    @staticmethod
    def _status_error(
        response: httpx.Response,
        url: str,
        context: str,
        error_cls: type[WeatherProviderError],
    ) -> WeatherProviderError:
        return error_cls(
            f"Open-Meteo {context} failed with status {response.status_code} "
            f"at {url}: {sanitize_text(response.text[:300])}"
        )

    @staticmethod
    def _decode(
        response: httpx.Response,
        url: str,
        context: str,
        error_cls: type[WeatherProviderError],
    ) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise error_cls(f"Open-Meteo {context} returned non-JSON response at {url}.") from exc

        if not isinstance(payload, dict):
            raise error_cls(
                f"Open-Meteo {context} returned unexpected payload type "
                f"{type(payload).__name__} at {url}."
            )
        # Bad parameters come back as {"error": true, "reason": "..."}.
        if payload.get("error") is True:
            reason = payload.get("reason") or "unknown reason"
            raise error_cls(
                f"Open-Meteo {context} rejected the request: {sanitize_text(str(reason))}"
            )
        return payload

    def _parse_results(self, payload: dict[str, Any]) -> list[GeoLocation]:
        # No "results" key at all means zero matches.
        results = payload.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise GeocodingError("Open-Meteo geocoding payload 'results' is not a list.")

        locations: list[GeoLocation] = []
        for item in results:
            location = self._parse_location(item) if isinstance(item, dict) else None
            if location is None:
                self.logger.warning("Skipping malformed geocoding result")
                continue
            locations.append(location)
        return locations

    @classmethod
    def _parse_location(cls, item: dict[str, Any]) -> GeoLocation | None:
        name = cls._as_str(item.get("name"))
        latitude = cls._as_float(item.get("latitude"))
        longitude = cls._as_float(item.get("longitude"))
        if name is None or latitude is None or longitude is None:
            return None
        raw_id = item.get("id")
        return GeoLocation(
            id=raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else None,
            name=name,
            country=cls._as_str(item.get("country")),
            region=cls._as_str(item.get("admin1")),
            latitude=latitude,
            longitude=longitude,
            timezone=cls._as_str(item.get("timezone")),
        )

    @staticmethod
    def _as_str(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return None
