"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from battleship.game.core.models import (
    BOARD_SIZE,
    DEFAULT_SHIP_COUNT,
    MAX_SHIP_LENGTH,
    Difficulty,
)
from battleship.game.core.placement import PLACEMENT_DEBOUNCE_SECONDS
from battleship.game.infra.app_data import resolve_game_root


def parse_env_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; comments, blanks and malformed lines are skipped.

    An optional ``export`` prefix is accepted and one layer of matching quotes
    is stripped from values.
    """
    parsed: dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if line.startswith("export "):
            line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if line.startswith("#") or not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        parsed[key] = value
    return parsed


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Apply one env file to the process environment and return what it defined.

    Missing files are ignored. Existing variables are overwritten unless
    ``override_existing`` is false.
    """
    env_path = _resolve_env_path(path)
    if not env_path.is_file():
        return {}
    values = parse_env_lines(env_path.read_text(encoding="utf-8").splitlines())
    for key, value in values.items():
        if override_existing or key not in os.environ:
            os.environ[key] = value
    return values


DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] = DEFAULT_ENV_FILES
) -> None:
    """Load env files in order; later files win over earlier ones."""
    for path in paths:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Match options, normally sourced from ``BATTLESHIP_*`` env vars."""

    board_size: int = BOARD_SIZE
    ship_count: int = DEFAULT_SHIP_COUNT
    difficulty: Difficulty = Difficulty.DISABLED
    placement_debounce_seconds: float = PLACEMENT_DEBOUNCE_SECONDS
    seed: int | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.ship_count <= MAX_SHIP_LENGTH:
            raise ValueError(f"ship_count must be between 1 and {MAX_SHIP_LENGTH}")
        if self.board_size < self.ship_count:
            raise ValueError("board_size must fit the longest ship")
        if self.placement_debounce_seconds < 0.0:
            raise ValueError("placement_debounce_seconds must be >= 0")

    @property
    def single_player(self) -> bool:
        return self.difficulty is not Difficulty.DISABLED

    @classmethod
    def from_env(cls) -> GameSettings:
        """Build settings from the environment, falling back to defaults."""
        difficulty_raw = os.getenv("BATTLESHIP_DIFFICULTY", "").strip().upper()
        try:
            difficulty = Difficulty(difficulty_raw) if difficulty_raw else Difficulty.DISABLED
        except ValueError as exc:
            choices = ", ".join(level.value for level in Difficulty)
            raise ValueError(f"BATTLESHIP_DIFFICULTY must be one of {choices}") from exc
        return cls(
            board_size=_int("BATTLESHIP_BOARD_SIZE", BOARD_SIZE),
            ship_count=_int("BATTLESHIP_SHIP_COUNT", DEFAULT_SHIP_COUNT),
            difficulty=difficulty,
            placement_debounce_seconds=_int(
                "BATTLESHIP_PLACEMENT_DEBOUNCE_MS", int(PLACEMENT_DEBOUNCE_SECONDS * 1000)
            )
            / 1000.0,
            seed=_optional_int("BATTLESHIP_SEED"),
        )


def _int(name: str, default: int) -> int:
    value = _optional_int(name)
    return default if value is None else value


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _resolve_env_path(path: str) -> Path:
    """Prefer the working directory; fall back to the project root."""
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return resolve_game_root() / candidate
