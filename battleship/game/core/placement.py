"""Placement validation, anchor adjustment and two-player sequencing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from battleship.game.core.board import BoardState
from battleship.game.core.models import (
    Coord,
    Orientation,
    PlacementError,
    PlayerId,
    Ship,
    ShipPlacement,
    cells_for_placement,
)

PLACEMENT_DEBOUNCE_SECONDS = 0.1

logger = logging.getLogger(__name__)


def cells_for(anchor: Coord, length: int, orientation: Orientation) -> list[Coord]:
    """Cells a ship of ``length`` would occupy extending from ``anchor``."""
    return cells_for_placement(ShipPlacement(length=length, bow=anchor, orientation=orientation))


def validate_placement(
    board: BoardState, anchor: Coord, length: int, orientation: Orientation
) -> PlacementError | None:
    """Return the rejection reason for a placement, or None if it is legal."""
    return board.placement_error(ShipPlacement(length=length, bow=anchor, orientation=orientation))


def adjust_anchor(anchor: Coord, length: int, orientation: Orientation, size: int) -> Coord:
    """Slide an anchor inward so a ship of ``length`` fits on the board."""
    row = min(max(anchor.row, 0), size - 1)
    col = min(max(anchor.col, 0), size - 1)
    if orientation is Orientation.HORIZONTAL:
        col = min(col, size - length)
    else:
        row = min(row, size - length)
    return Coord(row=max(row, 0), col=max(col, 0))


def placement_debounced(
    now: float, last_accepted: float | None, threshold: float = PLACEMENT_DEBOUNCE_SECONDS
) -> bool:
    """Return whether a placement at ``now`` falls inside the debounce window."""
    if last_accepted is None:
        return False
    return (now - last_accepted) < threshold


class PlacementPhase(StrEnum):
    """Which seat is currently placing ships."""

    PLAYER_1_PLACING = "PLAYER_1_PLACING"
    PLAYER_2_PLACING = "PLAYER_2_PLACING"
    DONE = "DONE"


class PlacementListener(Protocol):
    """Collaborator notified as placement progresses."""

    def on_ship_placed(self, player: PlayerId, ship: Ship) -> None:
        """A ship was accepted on the player's board."""

    def on_placement_finished(self, player: PlayerId) -> None:
        """The player has placed every ship."""


@dataclass(slots=True)
class PlacementSession:
    """Per-player placement progress. ``ship_index`` is also the next ship length."""

    player: PlayerId
    ship_count: int
    ship_index: int = 1
    orientation: Orientation = Orientation.HORIZONTAL

    @property
    def remaining(self) -> int:
        return max(0, self.ship_count - self.ship_index + 1)

    @property
    def complete(self) -> bool:
        return self.ship_index > self.ship_count


@dataclass(frozen=True, slots=True)
class PlacementAttempt:
    """Result of one placement request."""

    accepted: bool
    player: PlayerId | None
    ship: Ship | None = None
    error: PlacementError | None = None
    debounced: bool = False


class PlacementSequencer:
    """Runs Player1Placing(1..N) -> Player2Placing(1..N) -> Done."""

    def __init__(
        self,
        boards: dict[PlayerId, BoardState],
        ship_count: int,
        listener: PlacementListener,
        *,
        debounce_seconds: float = PLACEMENT_DEBOUNCE_SECONDS,
    ) -> None:
        self._boards = boards
        self._listener = listener
        self._debounce_seconds = debounce_seconds
        self._sessions = {
            PlayerId.PLAYER_1: PlacementSession(PlayerId.PLAYER_1, ship_count),
            PlayerId.PLAYER_2: PlacementSession(PlayerId.PLAYER_2, ship_count),
        }
        self._phase = PlacementPhase.PLAYER_1_PLACING
        self._last_accepted: float | None = None

    @property
    def phase(self) -> PlacementPhase:
        return self._phase

    @property
    def active_player(self) -> PlayerId | None:
        if self._phase is PlacementPhase.PLAYER_1_PLACING:
            return PlayerId.PLAYER_1
        if self._phase is PlacementPhase.PLAYER_2_PLACING:
            return PlayerId.PLAYER_2
        return None

    def session(self, player: PlayerId) -> PlacementSession:
        return self._sessions[player]

    def current_ship_length(self) -> int | None:
        player = self.active_player
        if player is None:
            return None
        return self._sessions[player].ship_index

    def toggle_orientation(self) -> Orientation | None:
        """Rotate the orientation the active player places with."""
        player = self.active_player
        if player is None:
            return None
        session = self._sessions[player]
        session.orientation = session.orientation.toggled()
        return session.orientation

    def submit(self, anchor: Coord, orientation: Orientation, now: float) -> PlacementAttempt:
        """Adjust, validate and place the active player's next ship."""
        player = self.active_player
        if player is None:
            return PlacementAttempt(accepted=False, player=None)
        if placement_debounced(now, self._last_accepted, self._debounce_seconds):
            return PlacementAttempt(accepted=False, player=player, debounced=True)

        session = self._sessions[player]
        board = self._boards[player]
        length = session.ship_index
        adjusted = adjust_anchor(anchor, length, orientation, board.size)
        error = validate_placement(board, adjusted, length, orientation)
        if error is not None:
            logger.debug(
                "placement_rejected player=%s anchor=%s length=%d reason=%s",
                player.value,
                adjusted,
                length,
                error.value,
            )
            return PlacementAttempt(accepted=False, player=player, error=error)

        self._last_accepted = now
        return self._accept(player, ShipPlacement(length=length, bow=adjusted, orientation=orientation))

    def place_generated(self, placement: ShipPlacement) -> PlacementAttempt:
        """Place a computer-chosen ship; skips pointer adjustment and debounce."""
        player = self.active_player
        if player is None:
            return PlacementAttempt(accepted=False, player=None)
        if placement.length != self._sessions[player].ship_index:
            raise ValueError(
                f"expected a ship of length {self._sessions[player].ship_index}, got {placement.length}"
            )
        error = self._boards[player].placement_error(placement)
        if error is not None:
            return PlacementAttempt(accepted=False, player=player, error=error)
        return self._accept(player, placement)

    def _accept(self, player: PlayerId, placement: ShipPlacement) -> PlacementAttempt:
        session = self._sessions[player]
        ship = self._boards[player].place_ship(placement)
        session.ship_index += 1
        logger.debug(
            "ship_placed player=%s bow=%s length=%d orientation=%s",
            player.value,
            ship.placement.bow,
            ship.length,
            ship.orientation.value,
        )
        self._listener.on_ship_placed(player, ship)
        if session.complete:
            self._advance(player)
        return PlacementAttempt(accepted=True, player=player, ship=ship)

    def _advance(self, finished: PlayerId) -> None:
        if finished is PlayerId.PLAYER_1:
            self._phase = PlacementPhase.PLAYER_2_PLACING
        else:
            self._phase = PlacementPhase.DONE
        logger.info("placement_finished player=%s next_phase=%s", finished.value, self._phase.value)
        self._listener.on_placement_finished(finished)
