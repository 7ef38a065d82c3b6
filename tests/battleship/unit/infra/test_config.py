from __future__ import annotations

import os

import pytest

from battleship.game.core.models import Difficulty
from battleship.game.infra.config import (
    GameSettings,
    load_default_env_files,
    load_env_file,
    parse_env_lines,
)

_SETTINGS_ENV = (
    "BATTLESHIP_BOARD_SIZE",
    "BATTLESHIP_SHIP_COUNT",
    "BATTLESHIP_DIFFICULTY",
    "BATTLESHIP_PLACEMENT_DEBOUNCE_MS",
    "BATTLESHIP_SEED",
)


@pytest.fixture
def clean_settings_env(monkeypatch):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_env_file_sets_values_with_overwrite_by_default(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "A=1\nB='two'\n#comment\nINVALID\nC=three\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("C", "already")
    monkeypatch.setenv("A", "unset")
    monkeypatch.setenv("B", "unset")
    load_env_file(str(env_file))
    assert os.environ.get("A") == "1"
    assert os.environ.get("B") == "two"
    assert os.environ.get("C") == "three"


def test_load_env_file_can_preserve_existing_values(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("C=three\n", encoding="utf-8")
    monkeypatch.setenv("C", "already")
    load_env_file(str(env_file), override_existing=False)
    assert os.environ.get("C") == "already"


def test_load_env_file_missing_is_noop(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("NEVER_SET", raising=False)
    load_env_file(str(tmp_path / ".env.missing"))
    assert "NEVER_SET" not in os.environ


def test_load_default_env_files_honors_order(tmp_path, monkeypatch) -> None:
    app_env = tmp_path / ".env.app"
    app_local_env = tmp_path / ".env.app.local"
    app_env.write_text("A=app\nB=app\n", encoding="utf-8")
    app_local_env.write_text("B=local\n", encoding="utf-8")
    monkeypatch.setenv("A", "unset")
    monkeypatch.setenv("B", "unset")

    load_default_env_files(paths=[str(app_env), str(app_local_env)])

    assert os.environ["A"] == "app"
    assert os.environ["B"] == "local"


def test_settings_defaults(clean_settings_env) -> None:
    settings = GameSettings.from_env()
    assert settings == GameSettings()
    assert settings.board_size == 10
    assert settings.ship_count == 5
    assert settings.difficulty is Difficulty.DISABLED
    assert settings.placement_debounce_seconds == pytest.approx(0.1)
    assert settings.seed is None
    assert not settings.single_player


def test_settings_read_from_env(clean_settings_env) -> None:
    clean_settings_env.setenv("BATTLESHIP_SHIP_COUNT", "3")
    clean_settings_env.setenv("BATTLESHIP_DIFFICULTY", "hard")
    clean_settings_env.setenv("BATTLESHIP_PLACEMENT_DEBOUNCE_MS", "250")
    clean_settings_env.setenv("BATTLESHIP_SEED", "42")

    settings = GameSettings.from_env()

    assert settings.ship_count == 3
    assert settings.difficulty is Difficulty.HARD
    assert settings.placement_debounce_seconds == pytest.approx(0.25)
    assert settings.seed == 42
    assert settings.single_player


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("BATTLESHIP_SHIP_COUNT", "7"),
        ("BATTLESHIP_SHIP_COUNT", "many"),
        ("BATTLESHIP_DIFFICULTY", "IMPOSSIBLE"),
        ("BATTLESHIP_BOARD_SIZE", "2"),
        ("BATTLESHIP_PLACEMENT_DEBOUNCE_MS", "-5"),
        ("BATTLESHIP_SEED", "abc"),
    ],
)
def test_settings_reject_bad_values(clean_settings_env, name: str, value: str) -> None:
    clean_settings_env.setenv(name, value)
    with pytest.raises(ValueError):
        GameSettings.from_env()


def test_parse_env_lines_handles_export_quotes_and_junk() -> None:
    parsed = parse_env_lines(
        [
            "export BATTLESHIP_SEED=7",
            "  BATTLESHIP_DIFFICULTY = \"MEDIUM\"  ",
            "# BATTLESHIP_SHIP_COUNT=2",
            "=orphan",
            "no_separator",
            "",
            "EMPTY=",
        ]
    )
    assert parsed == {"BATTLESHIP_SEED": "7", "BATTLESHIP_DIFFICULTY": "MEDIUM", "EMPTY": ""}


def test_load_env_file_returns_applied_values(tmp_path, clean_settings_env) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text("BATTLESHIP_SEED=3\n", encoding="utf-8")
    clean_settings_env.setenv("BATTLESHIP_SEED", "")
    assert load_env_file(str(env_file)) == {"BATTLESHIP_SEED": "3"}
    assert GameSettings.from_env().seed == 3
