from __future__ import annotations

from battleship.game.app.match import BattleshipMatch
from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord, Orientation, PlayerId, ShipPlacement


class FakeClock:
    """Monotonic clock stand-in that moves only when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_standard_board(owner: PlayerId = PlayerId.PLAYER_1) -> BoardState:
    """Five ships of lengths 1..5 laid horizontally on even rows."""
    board = BoardState(owner=owner)
    for length in range(1, 6):
        board.place_ship(ShipPlacement(length, Coord(2 * (length - 1), 0), Orientation.HORIZONTAL))
    return board


def place_rows(match: BattleshipMatch, clock: FakeClock, first_row: int = 0) -> None:
    """Place the active placer's whole fleet horizontally, one ship per row."""
    player = match.active_player
    row = first_row
    while match.current_ship_length() is not None and match.active_player is player:
        outcome = match.submit_placement(Coord(row, 0), Orientation.HORIZONTAL)
        assert outcome.accepted
        clock.advance(0.2)
        row += 1
