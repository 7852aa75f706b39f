"""Settings validation, secret redaction, JSON logging and the JSONL journal."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest

from aurora_weather.config import Settings, load_settings
from aurora_weather.exceptions import ConfigError, JournalError
from aurora_weather.journal import JournalWriter, _json_default
from aurora_weather.log_setup import JsonConsoleFormatter
from aurora_weather.redaction import REDACTED, sanitize_for_logging, sanitize_text
from aurora_weather.weather.models import GeoLocation


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in (
        "FORECAST_DAYS",
        "SUGGESTION_COUNT",
        "DEFAULT_CITY",
        "OPEN_METEO_API_KEY",
        "WEATHER_TIMEOUT_SECONDS",
        "WEATHER_MAX_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JOURNAL_DIR", str(tmp_path / "journal"))
    monkeypatch.setenv("WEATHER_RAW_PAYLOAD_DIR", str(tmp_path / "raw"))
    return tmp_path


def test_defaults_load_without_touching_the_filesystem(clean_env: Path) -> None:
    settings = load_settings()

    assert settings.default_city == "Amsterdam"
    assert settings.forecast_days == 7
    assert settings.suggestion_count == 6
    assert settings.open_meteo_api_key is None
    assert str(settings.forecast_base_url).startswith("https://api.open-meteo.com/v1")
    assert settings.journal_dir == clean_env / "journal"
    assert not (clean_env / "journal").exists()
    assert not (clean_env / "raw").exists()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("FORECAST_DAYS", "0"),
        ("FORECAST_DAYS", "17"),
        ("SUGGESTION_COUNT", "0"),
        ("WEATHER_TIMEOUT_SECONDS", "0"),
        ("WEATHER_MAX_RETRIES", "-1"),
        ("DEFAULT_CITY", "   "),
        ("APP_ENV", "qa"),
    ],
)
def test_invalid_settings_raise_config_error(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_empty_api_key_is_unset_and_summary_hides_key(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("OPEN_METEO_API_KEY", "  ")
    assert Settings().open_meteo_api_key is None

    monkeypatch.setenv("OPEN_METEO_API_KEY", "super-secret")
    settings = Settings()
    summary = settings.safe_summary()
    assert summary["api_key_configured"] is True
    assert "super-secret" not in json.dumps(summary)
    assert "super-secret" not in repr(settings)


def test_sanitize_text_redacts_query_string_key() -> None:
    url = "https://customer-api.open-meteo.com/v1/forecast?latitude=1&apikey=abc123&timezone=auto"
    sanitized = sanitize_text(url)
    assert "abc123" not in sanitized
    assert f"apikey={REDACTED}" in sanitized
    assert "timezone=auto" in sanitized


def test_sanitize_for_logging_redacts_nested_keys() -> None:
    payload = {
        "query": {"name": "Paris", "apikey": "abc123"},
        "headers": [{"Authorization": "Bearer xyz"}],
        "note": "token=zzz",
    }
    sanitized = sanitize_for_logging(payload)
    assert sanitized["query"] == {"name": "Paris", "apikey": REDACTED}
    assert sanitized["headers"][0]["Authorization"] == REDACTED
    assert "zzz" not in sanitized["note"]


def test_json_formatter_includes_context_and_redacts() -> None:
    record = logging.LogRecord(
        name="aurora_weather",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="retrying %s",
        args=("https://x.test/?apikey=abc123",),
        exc_info=None,
    )
    record.query = {"name": "Paris", "api_key": "abc123"}
    event = json.loads(JsonConsoleFormatter().format(record))

    assert event["level"] == "WARNING"
    assert event["logger"] == "aurora_weather"
    assert "abc123" not in event["message"]
    assert event["query"] == {"name": "Paris", "api_key": REDACTED}


def test_journal_writes_events_and_raw_snapshots(tmp_path: Path) -> None:
    journal = JournalWriter(
        journal_dir=tmp_path / "journal",
        raw_payload_dir=tmp_path / "raw",
        session_id="abc123",
    )
    location = GeoLocation(name="Oslo", country="Norway", latitude=59.91, longitude=10.75)
    journal.write_event(
        "weather_request_start",
        payload={"location": location, "apikey": "secret"},
        metadata={"when": datetime(2026, 1, 6, 12, 0)},
    )
    raw_path = journal.write_raw_snapshot("open/meteo forecast", {"timezone": "GMT"})

    lines = journal.events_path.read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[0])
    assert record["event_type"] == "weather_request_start"
    assert record["session_id"] == "abc123"
    assert record["payload"]["location"]["name"] == "Oslo"
    assert record["payload"]["apikey"] == REDACTED
    assert record["metadata"]["when"] == "2026-01-06T12:00:00+00:00"

    assert raw_path.name.endswith("_abc123_open_meteo_forecast.json")
    assert json.loads(raw_path.read_text(encoding="utf-8")) == {"timezone": "GMT"}


def test_journal_rejects_unserializable_payload(tmp_path: Path) -> None:
    journal = JournalWriter(tmp_path / "journal", tmp_path / "raw", session_id="s")
    with pytest.raises(JournalError, match="Failed writing event journal"):
        journal.write_event("bad", payload={"value": object()})


def test_json_default_handles_aware_datetimes_and_paths() -> None:
    aware = datetime(2026, 1, 6, 13, 0, tzinfo=UTC)
    assert _json_default(aware) == "2026-01-06T13:00:00+00:00"
    assert _json_default(Path("/tmp/x.json")) == "/tmp/x.json"

    class _Opaque:
        __slots__ = ()

    with pytest.raises(TypeError):
        _json_default(_Opaque())


def test_journal_directory_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(JournalError, match="Failed creating journal directories"):
        JournalWriter(blocker / "journal", tmp_path / "raw", session_id="s")