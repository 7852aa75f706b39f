"""CLI: look up a city (or coordinates), render the forecast, journal the lookup."""

from __future__ import annotations

import argparse
import logging
import sys
import uuid

from rich.console import Console

from .config import Settings, load_settings
from .exceptions import ConfigError, JournalError, WeatherLookupError, WeatherProviderError
from .journal import JournalWriter
from .log_setup import setup_logger
from .render import print_suggestions, print_weather
from .service import LookupResult, WeatherService
from .weather.open_meteo import OpenMeteoClient


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather lookup CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Look up current, hourly and 5-day weather for a city via Open-Meteo."
    )
    parser.add_argument(
        "city",
        nargs="?",
        default=None,
        help="City to search for. Defaults to DEFAULT_CITY.",
    )
    parser.add_argument("--lat", type=float, default=None, help="Latitude for a reverse lookup.")
    parser.add_argument("--lon", type=float, default=None, help="Longitude for a reverse lookup.")
    parser.add_argument(
        "--suggest",
        action="store_true",
        help="List matching places instead of fetching a forecast.",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=None,
        help="Number of hourly rows to print.",
    )
    return parser.parse_args(argv)


def _validate_cli_input(args: argparse.Namespace) -> None:
    if args.hours is not None and args.hours <= 0:
        raise WeatherLookupError("--hours must be > 0 when provided.")
    has_lat = args.lat is not None
    has_lon = args.lon is not None
    if has_lat != has_lon:
        raise WeatherLookupError("Pass both --lat and --lon for a coordinate lookup.")
    if has_lat and args.city:
        raise WeatherLookupError("Use either a city or --lat/--lon, not both.")
    if has_lat and args.suggest:
        raise WeatherLookupError("--suggest needs a city query, not coordinates.")
    if has_lat and not (-90 <= args.lat <= 90):
        raise WeatherLookupError(f"Invalid latitude {args.lat}; expected between -90 and 90.")
    if has_lon and not (-180 <= args.lon <= 180):
        raise WeatherLookupError(f"Invalid longitude {args.lon}; expected between -180 and 180.")


def _resolve_city(args: argparse.Namespace, settings: Settings) -> str:
    return args.city if args.city is not None else settings.default_city


def _journal_result(
    journal: JournalWriter,
    result: LookupResult,
    settings: Settings,
    session_id: str,
) -> None:
    raw_path: str | None = None
    if settings.weather_journal_raw_payloads:
        raw_path = str(
            journal.write_raw_snapshot("open_meteo_forecast", result.raw_forecast_payload)
        )
    journal.write_event(
        "weather_model_normalized",
        payload=result.weather.model_dump(mode="json"),
        metadata={"session_id": session_id, "raw_payload_path": raw_path},
    )
    journal.write_event(
        "weather_request_success",
        payload={
            "location": result.location.label,
            "hourly_count": len(result.weather.hourly),
            "daily_count": len(result.weather.daily),
            "sky_theme": result.weather.sky_theme,
        },
        metadata={"session_id": session_id},
    )


def main(argv: list[str] | None = None) -> int:
    """Run one weather lookup and return a process exit code."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]
    journal: JournalWriter | None = None

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    try:
        journal = JournalWriter(
            journal_dir=settings.journal_dir,
            raw_payload_dir=settings.weather_raw_payload_dir,
            session_id=session_id,
        )
        journal.write_event(
            event_type="weather_startup",
            payload={"config": settings.safe_summary()},
            metadata={"session_id": session_id},
        )
    except JournalError as exc:
        logger.error("Failed to initialize weather journal: %s", exc)
        return 3

    exit_code = 0
    try:
        _validate_cli_input(args)
        with OpenMeteoClient(settings=settings, logger=logger) as client:
            service = WeatherService(
                geocoder=client,
                forecaster=client,
                logger=logger,
                suggestion_count=settings.suggestion_count,
            )

            if args.suggest:
                query = _resolve_city(args, settings)
                suggestions = service.suggest(query)
                journal.write_event(
                    "weather_suggestions",
                    payload={"query": query, "labels": [item.label for item in suggestions]},
                    metadata={"session_id": session_id},
                )
                print_suggestions(console, query, suggestions)
                return exit_code

            if args.lat is not None and args.lon is not None:
                request_payload = {"mode": "coordinates", "lat": args.lat, "lon": args.lon}
                journal.write_event(
                    "weather_request_start",
                    payload=request_payload,
                    metadata={"session_id": session_id},
                )
                result = service.lookup_coordinates(args.lat, args.lon)
            else:
                query = _resolve_city(args, settings)
                journal.write_event(
                    "weather_request_start",
                    payload={"mode": "city", "query": query},
                    metadata={"session_id": session_id},
                )
                result = service.lookup_city(query)

            print_weather(console, result.weather, max_hours=args.hours)
            _journal_result(journal, result, settings, session_id)
    except WeatherLookupError as exc:
        exit_code = 4
        logger.error("Weather lookup failed: %s", exc)
        console.print(f"Heads up: {exc}")
        _write_failure(journal, logger, session_id, "weather_request_failure", exc)
    except WeatherProviderError as exc:
        exit_code = 4
        logger.error("Weather provider failure: %s", exc)
        console.print("Heads up: Could not fetch weather. Please retry.")
        _write_failure(journal, logger, session_id, "weather_request_failure", exc)
    except JournalError as exc:
        exit_code = 4
        logger.error("Weather journal write failed: %s", exc)
        console.print("Heads up: This lookup could not be saved to the journal.")
        _write_failure(journal, logger, session_id, "weather_journal_failure", exc)
    except Exception as exc:  # pragma: no cover - last-resort catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected weather CLI failure: %s", exc)
        _write_failure(journal, logger, session_id, "weather_request_failure_unhandled", exc)
    finally:
        if journal is not None:
            try:
                journal.write_event(
                    "weather_shutdown",
                    payload={"exit_code": exit_code},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to write weather_shutdown event.")

    return exit_code


def _write_failure(
    journal: JournalWriter,
    logger: logging.Logger,
    session_id: str,
    event_type: str,
    exc: Exception,
) -> None:
    try:
        journal.write_event(
            event_type,
            payload={"error": str(exc), "type": type(exc).__name__},
            metadata={"session_id": session_id},
        )
    except JournalError:
        logger.error("Failed to write %s event.", event_type)


if __name__ == "__main__":
    sys.exit(main())
