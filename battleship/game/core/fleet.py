"""Fleet composition checks and random fleet generation."""

from __future__ import annotations

import random

from battleship.game.core.board import BoardState
from battleship.game.core.models import (
    MAX_SHIP_LENGTH,
    Coord,
    Orientation,
    ShipPlacement,
)
from battleship.game.core.placement import adjust_anchor


def fleet_lengths(ship_count: int) -> tuple[int, ...]:
    """Ship lengths for a fleet of ``ship_count`` ships: 1, 2, ..., N."""
    if not 1 <= ship_count <= MAX_SHIP_LENGTH:
        raise ValueError(f"ship count must be between 1 and {MAX_SHIP_LENGTH}, got {ship_count}")
    return tuple(range(1, ship_count + 1))


def validate_fleet(board: BoardState, ship_count: int) -> tuple[bool, str]:
    """Check a finished board holds exactly one ship of each length 1..N."""
    expected = list(fleet_lengths(ship_count))
    placed = sorted(ship.length for ship in board.fleet.values())
    if placed != expected:
        return False, f"Expected ship lengths {expected}, found {placed}."
    return True, ""


def random_ship_placement(
    board: BoardState,
    length: int,
    rng: random.Random,
    *,
    attempts: int = 10_000,
) -> ShipPlacement:
    """Pick a random legal placement by sampling anchors and sliding them on-board."""
    for _ in range(attempts):
        orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
        raw = Coord(row=rng.randrange(board.size), col=rng.randrange(board.size))
        anchor = adjust_anchor(raw, length, orientation, board.size)
        placement = ShipPlacement(length=length, bow=anchor, orientation=orientation)
        if board.can_place(placement):
            return placement
    raise RuntimeError(f"Failed to find a random placement for a ship of length {length}.")
