"""JSON console logging for the CLI and service layer."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_for_logging, sanitize_text

# Context attached via `logger.info(..., extra={...})` that is worth keeping in the record.
_CONTEXT_FIELDS = ("session_id", "query", "latitude", "longitude", "url", "status_code")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per log line, with secrets redacted."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        for field in _CONTEXT_FIELDS:
            if hasattr(record, field):
                event[field] = sanitize_for_logging(getattr(record, field))
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(name: str = "aurora_weather", level: int | str = logging.INFO) -> logging.Logger:
    """Create and configure the process-wide logger.

    `level` accepts either a numeric level or a name such as ``"DEBUG"``.
    Calling this twice reuses the existing handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
