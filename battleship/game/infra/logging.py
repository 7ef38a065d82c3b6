"""App-level logging policy over engine logging API."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from engine.api.logging import EngineLoggingConfig, JsonFormatter, configure_logging
from battleship.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "build_logging_config", "setup_logging"]


def build_logging_config() -> EngineLoggingConfig:
    """Resolve logging config from env vars and the app-data logs dir."""
    level_name = os.getenv("BATTLESHIP_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    console_format = os.getenv("LOG_FORMAT", "text").lower()
    return EngineLoggingConfig(
        level_name=level_name,
        console_format=console_format,
        file_path=_resolve_run_log_file_path(),
        file_format="json",
    )


def setup_logging() -> None:
    """Configure application logging via engine logging API."""
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _resolve_run_log_file_path() -> str:
    base_dir = resolve_logs_dir()
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"battleship_run_{stamp}.jsonl")
