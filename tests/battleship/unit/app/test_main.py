import logging

import pytest

from engine.runtime.logging import shutdown_engine_logging
from battleship.game.core.models import Difficulty
from battleship.main import build_parser, main, resolve_settings


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(tmp_path / "appdata"))
    for name in ("BATTLESHIP_SHIP_COUNT", "BATTLESHIP_DIFFICULTY", "BATTLESHIP_SEED", "BATTLESHIP_BOARD_SIZE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield monkeypatch
    shutdown_engine_logging()
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


def test_cli_flags_override_env(isolated_env) -> None:
    isolated_env.setenv("BATTLESHIP_SHIP_COUNT", "2")
    isolated_env.setenv("BATTLESHIP_DIFFICULTY", "EASY")

    settings = resolve_settings(build_parser().parse_args(["--difficulty", "HARD", "--seed", "3"]))

    assert settings.ship_count == 2
    assert settings.difficulty is Difficulty.HARD
    assert settings.seed == 3


def test_main_plays_demo_match_and_writes_run_log(isolated_env, tmp_path) -> None:
    assert main(["--ship-count", "2", "--seed", "8"]) == 0
    assert list((tmp_path / "appdata" / "logs").glob("battleship_run_*.jsonl"))
