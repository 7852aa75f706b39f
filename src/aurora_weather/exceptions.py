"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class WeatherProviderError(Exception):
    """Raised when Open-Meteo requests or payload parsing fail."""


class GeocodingError(WeatherProviderError):
    """Raised when a geocoding search or reverse lookup fails."""


class ForecastProviderError(WeatherProviderError):
    """Raised when a forecast fetch fails."""


class WeatherLookupError(Exception):
    """Raised for lookups that cannot produce a forecast (empty query, no match)."""
