"""Public engine logging API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class EngineLoggingConfig:
    """Where log records go and how they are rendered.

    ``console_format`` and ``file_format`` accept ``"text"`` or ``"json"``.
    A ``None`` ``file_path`` keeps output on the console only.
    """

    level_name: str = "INFO"
    console_format: str = "text"
    file_path: str | None = None
    file_format: str = "json"


class JsonFormatter(logging.Formatter):
    """Render one record per line as JSON, keeping ``extra`` fields under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: EngineLoggingConfig) -> None:
    """Install the engine logging pipeline described by ``config``."""
    from engine.runtime.logging import configure_engine_logging

    configure_engine_logging(config)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
