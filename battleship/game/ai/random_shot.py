"""Uniform random targeting."""

from __future__ import annotations

import random

from battleship.game.ai.strategy import AIStrategy
from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord, ShotResult


class RandomShotAI(AIStrategy):
    """Rejection-samples board coordinates until it finds an unshot cell."""

    def __init__(self, rng: random.Random) -> None:
        super().__init__()
        self._rng = rng

    def choose_shot(self, board: BoardState) -> Coord:
        if next(board.unshot_cells(), None) is None:
            raise RuntimeError("no unshot cells remain on the target board")
        while True:
            coord = self._sample(board)
            if not board.was_shot(coord):
                return coord

    def notify_result(self, coord: Coord, result: ShotResult) -> None:
        return None

    def _sample(self, board: BoardState) -> Coord:
        return Coord(row=self._rng.randrange(board.size), col=self._rng.randrange(board.size))
