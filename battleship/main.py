"""Application entry point."""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence

from engine.api.logging import get_logger
from engine.runtime.logging import shutdown_engine_logging
from battleship.game.app.services.autoplay import play_computer_match
from battleship.game.core.models import Difficulty, PlayerId
from battleship.game.infra.app_data import ensure_app_data_dirs
from battleship.game.infra.config import GameSettings, load_default_env_files
from battleship.game.infra.logging import setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a headless Battleship demonstration match.")
    parser.add_argument("--difficulty", choices=[level.value for level in Difficulty])
    parser.add_argument("--ship-count", type=int)
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--seed", type=int)
    return parser


def resolve_settings(args: argparse.Namespace) -> GameSettings:
    """Env-derived settings with any command-line overrides applied."""
    settings = GameSettings.from_env()
    overrides: dict[str, object] = {}
    if args.difficulty is not None:
        overrides["difficulty"] = Difficulty(args.difficulty)
    if args.ship_count is not None:
        overrides["ship_count"] = args.ship_count
    if args.board_size is not None:
        overrides["board_size"] = args.board_size
    if args.seed is not None:
        overrides["seed"] = args.seed
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: Sequence[str] | None = None) -> int:
    """Run a computer-vs-computer Battleship match."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    logger.info("app_data_paths root=%s logs=%s", paths["root"], paths["logs"])
    try:
        settings = resolve_settings(build_parser().parse_args(argv))
        summary = play_computer_match(settings)
        logger.info(
            "demo_result winner=%s remaining_p1=%d remaining_p2=%d",
            summary.winner.value if summary.winner else None,
            summary.remaining_hits[PlayerId.PLAYER_1],
            summary.remaining_hits[PlayerId.PLAYER_2],
        )
    finally:
        shutdown_engine_logging()
    return 0 if summary.winner is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
