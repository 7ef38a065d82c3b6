"""Oracle targeting that reads hidden ship positions."""

from __future__ import annotations

from battleship.game.ai.random_shot import RandomShotAI
from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord


class GuaranteedHitAI(RandomShotAI):
    """Samples random cells but only fires where an unhit ship segment sits."""

    def choose_shot(self, board: BoardState) -> Coord:
        if board.remaining_ship_cells() == 0:
            return super().choose_shot(board)
        while True:
            coord = self._sample(board)
            if board.has_ship(coord) and not board.was_shot(coord):
                return coord
