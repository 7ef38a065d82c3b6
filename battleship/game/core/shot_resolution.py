"""Shot outcome evaluation for normal, bomb and carpet-bomb shots."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord, Orientation, Ship, ShotResult, ShotType

SPECIAL_SHOT_TYPES: frozenset[ShotType] = frozenset({ShotType.BOMB, ShotType.CARPET_BOMB})


@dataclass(frozen=True, slots=True)
class Volley:
    """Every cell a single shot resolved, in resolution order."""

    shot_type: ShotType
    target: Coord
    resolved: tuple[tuple[Coord, ShotResult], ...]
    sunk: tuple[Ship, ...] = ()

    @property
    def hits(self) -> int:
        return sum(1 for _, result in self.resolved if result is ShotResult.HIT)

    @property
    def result(self) -> ShotResult:
        """Single-cell view of the volley: HIT if anything was hit."""
        if self.shot_type is ShotType.NORMAL and self.resolved:
            return self.resolved[0][1]
        return ShotResult.HIT if self.hits else ShotResult.MISS


@dataclass(slots=True)
class Ammo:
    """Single-use special shot counters for one player."""

    bombs: int = 1
    carpet_bombs: int = 1

    def available(self, shot_type: ShotType) -> bool:
        if shot_type is ShotType.BOMB:
            return self.bombs > 0
        if shot_type is ShotType.CARPET_BOMB:
            return self.carpet_bombs > 0
        return True

    def consume(self, shot_type: ShotType) -> bool:
        """Spend one unit; returns False (and spends nothing) when empty."""
        if not self.available(shot_type):
            return False
        if shot_type is ShotType.BOMB:
            self.bombs -= 1
        elif shot_type is ShotType.CARPET_BOMB:
            self.carpet_bombs -= 1
        return True


@dataclass(slots=True)
class _VolleyBuilder:
    shot_type: ShotType
    target: Coord
    resolved: list[tuple[Coord, ShotResult]] = field(default_factory=list)
    sunk: list[Ship] = field(default_factory=list)

    def add(self, coord: Coord, result: ShotResult, sunk: Ship | None) -> None:
        self.resolved.append((coord, result))
        if sunk is not None:
            self.sunk.append(sunk)

    def build(self) -> Volley:
        return Volley(
            shot_type=self.shot_type,
            target=self.target,
            resolved=tuple(self.resolved),
            sunk=tuple(self.sunk),
        )


def resolve_normal(board: BoardState, coord: Coord) -> Volley:
    """Resolve exactly the targeted cell, reporting ALREADY_SHOT as-is."""
    builder = _VolleyBuilder(ShotType.NORMAL, coord)
    result, sunk = board.shoot(coord)
    builder.add(coord, result, sunk)
    return builder.build()


def bomb_area(board: BoardState, center: Coord) -> list[Coord]:
    """In-bounds cells of the 3x3 neighbourhood centred on ``center``."""
    cells = [
        Coord(center.row + dr, center.col + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)
    ]
    return [cell for cell in cells if board.in_bounds(cell)]


def carpet_area(board: BoardState, target: Coord, orientation: Orientation) -> list[Coord]:
    """Every cell of the target's row (horizontal) or column (vertical)."""
    if orientation is Orientation.HORIZONTAL:
        return [Coord(target.row, col) for col in range(board.size)]
    return [Coord(row, target.col) for row in range(board.size)]


def resolve_bomb(board: BoardState, center: Coord) -> Volley:
    """Resolve the unshot, in-bounds cells of a 3x3 area."""
    return _resolve_area(board, ShotType.BOMB, center, bomb_area(board, center))


def resolve_carpet_bomb(board: BoardState, target: Coord, orientation: Orientation) -> Volley:
    """Resolve the unshot cells of a full row or column."""
    return _resolve_area(
        board, ShotType.CARPET_BOMB, target, carpet_area(board, target, orientation)
    )


def resolve_shot(
    board: BoardState,
    coord: Coord,
    shot_type: ShotType = ShotType.NORMAL,
    orientation: Orientation = Orientation.HORIZONTAL,
) -> Volley:
    """Dispatch a shot of any shape against a board."""
    if shot_type is ShotType.BOMB:
        return resolve_bomb(board, coord)
    if shot_type is ShotType.CARPET_BOMB:
        return resolve_carpet_bomb(board, coord, orientation)
    return resolve_normal(board, coord)


def _resolve_area(
    board: BoardState, shot_type: ShotType, target: Coord, cells: Iterable[Coord]
) -> Volley:
    builder = _VolleyBuilder(shot_type, target)
    for cell in cells:
        if board.was_shot(cell):
            continue
        result, sunk = board.shoot(cell)
        builder.add(cell, result, sunk)
    return builder.build()
