from __future__ import annotations

import random

import pytest

from battleship.game.app.match import BattleshipMatch
from battleship.game.core.board import BoardState
from battleship.game.core.models import Difficulty
from battleship.game.infra.config import GameSettings
from tests.battleship.helpers import FakeClock, make_standard_board, place_rows


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def standard_board() -> BoardState:
    return make_standard_board()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def two_player_match(clock: FakeClock, seeded_rng: random.Random) -> BattleshipMatch:
    return BattleshipMatch(GameSettings(difficulty=Difficulty.DISABLED), rng=seeded_rng, time_source=clock)


@pytest.fixture
def battle_ready_match(two_player_match: BattleshipMatch, clock: FakeClock) -> BattleshipMatch:
    place_rows(two_player_match, clock)
    place_rows(two_player_match, clock)
    return two_player_match
