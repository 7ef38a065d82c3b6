import random

import pytest

from battleship.game.ai.random_shot import RandomShotAI
from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord, ShotResult


def test_random_ai_never_picks_shot_cells() -> None:
    board = BoardState()
    ai = RandomShotAI(random.Random(7))
    seen: set[Coord] = set()
    for _ in range(100):
        shot = ai.choose_shot(board)
        assert shot not in seen
        seen.add(shot)
        board.shoot(shot)
        ai.notify_result(shot, ShotResult.MISS)
    assert len(seen) == 100


def test_random_ai_can_reach_row_and_column_zero() -> None:
    board = BoardState(size=2)
    ai = RandomShotAI(random.Random(3))
    picks = set()
    for _ in range(4):
        shot = ai.choose_shot(board)
        board.shoot(shot)
        picks.add(shot)
    assert Coord(0, 0) in picks


def test_random_ai_raises_when_board_exhausted() -> None:
    board = BoardState(size=1)
    board.shoot(Coord(0, 0))
    with pytest.raises(RuntimeError):
        RandomShotAI(random.Random(1)).choose_shot(board)
