"""App-data paths for runtime output.

``BATTLESHIP_APP_DATA_DIR`` is resolved against the project root and
``BATTLESHIP_LOG_DIR`` against the app-data root when they are relative.
"""

from __future__ import annotations

import os
from pathlib import Path


def resolve_game_root() -> Path:
    """Directory holding the ``battleship`` package."""
    return Path(__file__).resolve().parents[3]


def resolve_app_data_root() -> Path:
    return _configured_dir("BATTLESHIP_APP_DATA_DIR", base=resolve_game_root(), default="appdata")


def resolve_logs_dir() -> Path:
    return _configured_dir("BATTLESHIP_LOG_DIR", base=resolve_app_data_root(), default="logs")


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create the app-data tree and return its directories by role."""
    paths = {"root": resolve_app_data_root(), "logs": resolve_logs_dir()}
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths


def _configured_dir(env_name: str, *, base: Path, default: str) -> Path:
    raw = os.getenv(env_name, "").strip()
    path = Path(raw) if raw else Path(default)
    return path if path.is_absolute() else base / path
