"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 10
MAX_SHIP_LENGTH = 5
DEFAULT_SHIP_COUNT = 5


class Orientation(StrEnum):
    """Ship and carpet-bomb orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    def toggled(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class PlayerId(StrEnum):
    """Seat of a player in the match."""

    PLAYER_1 = "PLAYER_1"
    PLAYER_2 = "PLAYER_2"

    @property
    def opponent(self) -> PlayerId:
        if self is PlayerId.PLAYER_1:
            return PlayerId.PLAYER_2
        return PlayerId.PLAYER_1


class ShotState(IntEnum):
    """Per-cell shot state as stored in the board grid."""

    UNSHOT = 0
    MISS = 1
    HIT = 2


class ShotResult(StrEnum):
    """Result of resolving a single cell."""

    MISS = "MISS"
    HIT = "HIT"
    ALREADY_SHOT = "ALREADY_SHOT"
    INVALID = "INVALID"


class ShotType(StrEnum):
    """Shot shapes a player can fire."""

    NORMAL = "NORMAL"
    BOMB = "BOMB"
    CARPET_BOMB = "CARPET_BOMB"


class PlacementError(StrEnum):
    """Reason a placement was rejected."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"


class Difficulty(StrEnum):
    """Computer opponent tier; DISABLED means two human players."""

    DISABLED = "DISABLED"
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship, extending from its bow."""

    length: int
    bow: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class Ship:
    """A ship registered on a board. Geometry never changes once placed."""

    ship_id: int
    owner: PlayerId
    placement: ShipPlacement
    cells: tuple[Coord, ...]

    @property
    def length(self) -> int:
        return self.placement.length

    @property
    def orientation(self) -> Orientation:
        return self.placement.orientation


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board cell."""

    coord: Coord
    ship: Ship | None
    shot_state: ShotState

    @property
    def occupied(self) -> bool:
        return self.ship is not None


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.length):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result


def total_hits_for_fleet(ship_count: int) -> int:
    """Hits needed to sink a fleet of ships sized 1..ship_count."""
    return ship_count * (ship_count + 1) // 2
