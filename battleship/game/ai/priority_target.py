"""Hunt/target AI: chase the neighbours of every hit before searching again."""

from __future__ import annotations

import random
from collections import deque

from battleship.game.ai.random_shot import RandomShotAI
from battleship.game.core.board import BoardState
from battleship.game.core.models import BOARD_SIZE, Coord, ShotResult


class PriorityTargetAI(RandomShotAI):
    """Consumes a FIFO of candidate cells seeded by hits; random search when empty.

    Candidates are deduplicated against the queue only, never against shot
    state. A popped candidate that was already shot comes back as
    ``ALREADY_SHOT`` from the turn controller and the caller simply asks for
    the next one; that fallback is intended.
    """

    def __init__(self, rng: random.Random, size: int = BOARD_SIZE) -> None:
        super().__init__(rng)
        self._size = size
        self._candidates: deque[Coord] = deque()

    @property
    def candidates(self) -> tuple[Coord, ...]:
        return tuple(self._candidates)

    def choose_shot(self, board: BoardState) -> Coord:
        if self._candidates:
            return self._candidates.popleft()
        return super().choose_shot(board)

    def notify_result(self, coord: Coord, result: ShotResult) -> None:
        if result is ShotResult.HIT:
            self._enqueue_neighbors(coord)

    def _enqueue_neighbors(self, coord: Coord) -> None:
        neighbors = (
            Coord(coord.row - 1, coord.col),
            Coord(coord.row + 1, coord.col),
            Coord(coord.row, coord.col - 1),
            Coord(coord.row, coord.col + 1),
        )
        for cell in neighbors:
            if not (0 <= cell.row < self._size and 0 <= cell.col < self._size):
                continue
            if cell in self._candidates:
                continue
            self._candidates.append(cell)
