"""Application service-layer helpers."""

from battleship.game.app.services.battle import AIAttack, build_ai_strategy, run_ai_turn

__all__ = [
    "AIAttack",
    "build_ai_strategy",
    "run_ai_turn",
]
