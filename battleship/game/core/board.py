"""Board state representation and mutation helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from battleship.game.core.models import (
    BOARD_SIZE,
    Cell,
    Coord,
    PlacementError,
    PlayerId,
    Ship,
    ShipPlacement,
    ShotResult,
    ShotState,
    cells_for_placement,
)


class InvalidPlacementError(ValueError):
    """Raised when a ship is placed out of bounds or over another ship."""

    def __init__(self, reason: PlacementError, placement: ShipPlacement) -> None:
        super().__init__(f"{reason.value} placing ship of length {placement.length} at {placement.bow}.")
        self.reason = reason
        self.placement = placement


@dataclass(slots=True)
class BoardState:
    """Numpy-backed board owned by one player.

    ``ships`` stores the ship id occupying each cell (0 for water) and
    ``shots`` stores a ``ShotState`` value per cell.
    """

    owner: PlayerId = PlayerId.PLAYER_1
    size: int = BOARD_SIZE
    ships: np.ndarray = field(init=False)
    shots: np.ndarray = field(init=False)
    fleet: dict[int, Ship] = field(default_factory=dict)
    ship_remaining: dict[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("board size must be positive")
        self.ships = np.zeros((self.size, self.size), dtype=np.int16)
        self.shots = np.zeros((self.size, self.size), dtype=np.int8)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def placement_error(self, placement: ShipPlacement) -> PlacementError | None:
        """Return why a placement is illegal, or None when it is legal."""
        if placement.length <= 0:
            return PlacementError.OUT_OF_BOUNDS
        cells = cells_for_placement(placement)
        if not all(self.in_bounds(cell) for cell in cells):
            return PlacementError.OUT_OF_BOUNDS
        if any(self.ships[cell.row, cell.col] != 0 for cell in cells):
            return PlacementError.OVERLAP
        return None

    def can_place(self, placement: ShipPlacement) -> bool:
        """Return whether a placement is valid and non-overlapping."""
        return self.placement_error(placement) is None

    def place_ship(self, placement: ShipPlacement) -> Ship:
        """Place a ship on the board and return it."""
        reason = self.placement_error(placement)
        if reason is not None:
            raise InvalidPlacementError(reason, placement)
        ship_id = len(self.fleet) + 1
        cells = tuple(cells_for_placement(placement))
        for cell in cells:
            self.ships[cell.row, cell.col] = ship_id
        ship = Ship(ship_id=ship_id, owner=self.owner, placement=placement, cells=cells)
        self.fleet[ship_id] = ship
        self.ship_remaining[ship_id] = len(cells)
        return ship

    def ship_at(self, coord: Coord) -> Ship | None:
        """Return the ship occupying a cell, if any."""
        if not self.in_bounds(coord):
            return None
        ship_id = int(self.ships[coord.row, coord.col])
        return self.fleet.get(ship_id)

    def has_ship(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self.ships[coord.row, coord.col] != 0

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return self.in_bounds(coord) and self.shots[coord.row, coord.col] != ShotState.UNSHOT

    def cell_at(self, coord: Coord) -> Cell:
        """Return a read-only view of one cell."""
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} is outside a {self.size}x{self.size} board")
        return Cell(
            coord=coord,
            ship=self.ship_at(coord),
            shot_state=ShotState(int(self.shots[coord.row, coord.col])),
        )

    def shoot(self, coord: Coord) -> tuple[ShotResult, Ship | None]:
        """Apply a shot and return result + the ship it sank, if any."""
        if not self.in_bounds(coord):
            return ShotResult.INVALID, None
        if self.was_shot(coord):
            return ShotResult.ALREADY_SHOT, None

        ship_id = int(self.ships[coord.row, coord.col])
        if ship_id == 0:
            self.shots[coord.row, coord.col] = ShotState.MISS
            return ShotResult.MISS, None

        self.shots[coord.row, coord.col] = ShotState.HIT
        self.ship_remaining[ship_id] -= 1
        if self.ship_remaining[ship_id] == 0:
            return ShotResult.HIT, self.fleet[ship_id]
        return ShotResult.HIT, None

    def is_sunk(self, ship: Ship) -> bool:
        return self.ship_remaining.get(ship.ship_id, 0) == 0

    def unshot_cells(self) -> Iterator[Coord]:
        """Yield every cell that has not been targeted yet, row-major."""
        rows, cols = np.nonzero(self.shots == ShotState.UNSHOT)
        for row, col in zip(rows.tolist(), cols.tolist(), strict=True):
            yield Coord(row, col)

    def remaining_ship_cells(self) -> int:
        """Count occupied cells that have not been hit."""
        return int(np.count_nonzero((self.ships != 0) & (self.shots == ShotState.UNSHOT)))

    def all_ships_sunk(self) -> bool:
        """Return whether every ship has been sunk."""
        return all(remaining == 0 for remaining in self.ship_remaining.values())
