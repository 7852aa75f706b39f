"""Typed settings loader for the Aurora weather lookup tool."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    geocoding_base_url: AnyUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1",
        alias="GEOCODING_BASE_URL",
    )
    forecast_base_url: AnyUrl = Field(
        default="https://api.open-meteo.com/v1",
        alias="FORECAST_BASE_URL",
    )
    open_meteo_api_key: str | None = Field(
        default=None, alias="OPEN_METEO_API_KEY", repr=False
    )
    weather_timeout_seconds: float = Field(default=15.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_max_retries: int = Field(default=1, alias="WEATHER_MAX_RETRIES")
    forecast_days: int = Field(default=7, alias="FORECAST_DAYS")

    geocoding_language: str = Field(default="en", alias="GEOCODING_LANGUAGE")
    suggestion_count: int = Field(default=6, alias="SUGGESTION_COUNT")
    default_city: str = Field(default="Amsterdam", alias="DEFAULT_CITY")

    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    weather_raw_payload_dir: Path = Field(
        default=Path("./data/raw/weather"),
        alias="WEATHER_RAW_PAYLOAD_DIR",
    )
    weather_journal_raw_payloads: bool = Field(default=True, alias="WEATHER_JOURNAL_RAW_PAYLOADS")

    @field_validator("open_meteo_api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env-string API key as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric bounds and required non-empty strings."""
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if self.weather_max_retries < 0:
            raise ValueError("WEATHER_MAX_RETRIES must be >= 0.")
        # Open-Meteo serves at most 16 forecast days.
        if not (1 <= self.forecast_days <= 16):
            raise ValueError("FORECAST_DAYS must be between 1 and 16.")
        if not (1 <= self.suggestion_count <= 20):
            raise ValueError("SUGGESTION_COUNT must be between 1 and 20.")
        if not self.geocoding_language.strip():
            raise ValueError("GEOCODING_LANGUAGE must not be empty.")
        if not self.default_city.strip():
            raise ValueError("DEFAULT_CITY must not be empty.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no credentials)."""
        return {
            "app_env": self.app_env,
            "log_level": self.log_level,
            "geocoding_base_url": str(self.geocoding_base_url),
            "forecast_base_url": str(self.forecast_base_url),
            "api_key_configured": self.open_meteo_api_key is not None,
            "timeout_seconds": self.weather_timeout_seconds,
            "max_retries": self.weather_max_retries,
            "forecast_days": self.forecast_days,
            "language": self.geocoding_language,
            "suggestion_count": self.suggestion_count,
            "default_city": self.default_city,
            "weather_raw_journaling": self.weather_journal_raw_payloads,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
    return settings
