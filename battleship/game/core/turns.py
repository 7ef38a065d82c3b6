"""Turn sequencing, ammo bookkeeping and win detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from engine.api.flow import FlowContext, FlowTransition, create_flow_machine
from battleship.game.core.board import BoardState
from battleship.game.core.models import (
    Coord,
    Orientation,
    PlayerId,
    Ship,
    ShotType,
    total_hits_for_fleet,
)
from battleship.game.core.shot_resolution import SPECIAL_SHOT_TYPES, Ammo, Volley, resolve_shot

logger = logging.getLogger(__name__)


class TurnPhase(StrEnum):
    """Top-level match states."""

    PLACING = "PLACING"
    AWAITING_SHOT = "AWAITING_SHOT"
    SWAP_PENDING = "SWAP_PENDING"
    GAME_OVER = "GAME_OVER"


class FireStatus(StrEnum):
    """Why a shot was or was not accepted."""

    ACCEPTED = "ACCEPTED"
    WRONG_PHASE = "WRONG_PHASE"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    ALREADY_SHOT = "ALREADY_SHOT"
    INSUFFICIENT_AMMO = "INSUFFICIENT_AMMO"


class TurnListener(Protocol):
    """Collaborator notified about turn-level transitions."""

    def on_turn_changed(self, player: PlayerId) -> None:
        """``player`` is now the acting player."""

    def on_ship_sunk(self, ship: Ship, sunk_by: PlayerId) -> None:
        """``sunk_by`` took the last segment of ``ship``."""

    def on_swap_pending(self, next_player: PlayerId) -> None:
        """The match waits for ``next_player`` to take the seat."""

    def on_swap_resolved(self, player: PlayerId) -> None:
        """The swap was acknowledged and ``player`` may shoot."""

    def on_game_over(self, winner: PlayerId) -> None:
        """``winner`` sank the opposing fleet."""


@dataclass(slots=True)
class ShotContext:
    """Shot selection a player carries between ticks."""

    shot_type: ShotType = ShotType.NORMAL
    carpet_orientation: Orientation = Orientation.HORIZONTAL


@dataclass(slots=True)
class PlayerTurnState:
    """Per-player combat bookkeeping."""

    remaining_hits: int
    ammo: Ammo = field(default_factory=Ammo)
    context: ShotContext = field(default_factory=ShotContext)


@dataclass(frozen=True, slots=True)
class FireOutcome:
    """Result of one ``fire`` request."""

    status: FireStatus
    shooter: PlayerId | None
    volley: Volley | None = None

    @property
    def accepted(self) -> bool:
        return self.status is FireStatus.ACCEPTED


class TurnController:
    """Gates who may act and advances PLACING -> AWAITING_SHOT <-> SWAP_PENDING -> GAME_OVER.

    With ``swap_delay`` disabled (single-player), a legal shot hands the turn
    straight to the opponent without waiting for an acknowledgement.
    """

    def __init__(
        self,
        boards: dict[PlayerId, BoardState],
        ship_count: int,
        listener: TurnListener,
        *,
        swap_delay: bool = True,
    ) -> None:
        self._boards = boards
        self._listener = listener
        self._swap_delay = swap_delay
        self._active = PlayerId.PLAYER_1
        self._winner: PlayerId | None = None
        self._pointer_released = True
        self._players = {
            player: PlayerTurnState(remaining_hits=total_hits_for_fleet(ship_count))
            for player in PlayerId
        }
        self._flow = create_flow_machine(
            TurnPhase.PLACING,
            (
                FlowTransition("placement_done", TurnPhase.PLACING, TurnPhase.AWAITING_SHOT),
                FlowTransition(
                    "shot_fired",
                    TurnPhase.AWAITING_SHOT,
                    TurnPhase.SWAP_PENDING,
                    guard=self._swap_guard,
                    after=self._announce_swap,
                ),
                FlowTransition("shot_fired", TurnPhase.AWAITING_SHOT, TurnPhase.AWAITING_SHOT),
                FlowTransition(
                    "swap_acknowledged",
                    TurnPhase.SWAP_PENDING,
                    TurnPhase.AWAITING_SHOT,
                    guard=self._pointer_guard,
                    after=self._announce_swap_resolved,
                ),
                FlowTransition(
                    "fleet_destroyed",
                    None,
                    TurnPhase.GAME_OVER,
                    guard=self._winner_guard,
                ),
            ),
        )

    @property
    def phase(self) -> TurnPhase:
        return self._flow.state

    @property
    def active_player(self) -> PlayerId:
        return self._active

    @property
    def winner(self) -> PlayerId | None:
        return self._winner

    @property
    def swap_delay(self) -> bool:
        return self._swap_delay

    def player_state(self, player: PlayerId) -> PlayerTurnState:
        return self._players[player]

    def remaining_hits(self, player: PlayerId) -> int:
        return self._players[player].remaining_hits

    def is_game_over(self) -> bool:
        return self.phase is TurnPhase.GAME_OVER

    def hand_placement_to(self, player: PlayerId) -> None:
        """Placement moved to ``player``'s seat."""
        if self.phase is not TurnPhase.PLACING:
            return
        self._set_active(player)

    def begin_battle(self) -> bool:
        """Both fleets are placed; player 1 shoots first."""
        if not self._flow.trigger("placement_done"):
            return False
        logger.info("battle_started first_player=%s", PlayerId.PLAYER_1.value)
        self._set_active(PlayerId.PLAYER_1, force_notify=True)
        return True

    def select_shot_type(self, shot_type: ShotType) -> bool:
        """Choose the active player's next shot; refused when its ammo is spent."""
        state = self._players[self._active]
        if not state.ammo.available(shot_type):
            return False
        state.context.shot_type = shot_type
        return True

    def toggle_carpet_orientation(self) -> Orientation | None:
        """Flip the active player's carpet-bomb axis; None outside AWAITING_SHOT."""
        if self.phase is not TurnPhase.AWAITING_SHOT:
            return None
        context = self._players[self._active].context
        context.carpet_orientation = context.carpet_orientation.toggled()
        return context.carpet_orientation

    def release_pointer(self) -> None:
        """The pointer button went up; the next press may acknowledge a swap."""
        self._pointer_released = True

    def acknowledge_swap(self) -> bool:
        """Leave SWAP_PENDING; requires a pointer release since the last press."""
        if not self._flow.trigger("swap_acknowledged"):
            return False
        self._pointer_released = False
        return True

    def ships_hidden(self, player: PlayerId) -> bool:
        """Whether ``player``'s unsunk ships must be concealed right now."""
        phase = self.phase
        if phase is TurnPhase.GAME_OVER:
            return False
        if phase is TurnPhase.SWAP_PENDING:
            return True
        return player is not self._active

    def fire(
        self,
        coord: Coord,
        shot_type: ShotType | None = None,
        orientation: Orientation | None = None,
    ) -> FireOutcome:
        """Resolve the active player's shot against the opponent's board."""
        shooter = self._active
        if self.phase is not TurnPhase.AWAITING_SHOT:
            return FireOutcome(FireStatus.WRONG_PHASE, shooter)

        state = self._players[shooter]
        selected = shot_type if shot_type is not None else state.context.shot_type
        carpet_orientation = orientation if orientation is not None else state.context.carpet_orientation
        target_board = self._boards[shooter.opponent]

        if not target_board.in_bounds(coord):
            return FireOutcome(FireStatus.OUT_OF_BOUNDS, shooter)
        if not state.ammo.available(selected):
            logger.debug("shot_rejected player=%s reason=ammo shot_type=%s", shooter.value, selected.value)
            return FireOutcome(FireStatus.INSUFFICIENT_AMMO, shooter)
        if selected is ShotType.NORMAL and target_board.was_shot(coord):
            return FireOutcome(FireStatus.ALREADY_SHOT, shooter)

        self._pointer_released = False
        volley = resolve_shot(target_board, coord, selected, carpet_orientation)
        if selected in SPECIAL_SHOT_TYPES:
            state.ammo.consume(selected)
            state.context.shot_type = ShotType.NORMAL
        self._apply_hits(shooter.opponent, volley.hits)
        logger.debug(
            "shot_resolved player=%s target=%s shot_type=%s cells=%d hits=%d",
            shooter.value,
            coord,
            selected.value,
            len(volley.resolved),
            volley.hits,
        )
        for ship in volley.sunk:
            self._listener.on_ship_sunk(ship, shooter)

        if self.remaining_hits(shooter.opponent) == 0:
            self._finish(shooter)
        else:
            self._set_active(shooter.opponent)
            self._flow.trigger("shot_fired", payload=volley)
        return FireOutcome(FireStatus.ACCEPTED, shooter, volley)

    def _apply_hits(self, target: PlayerId, hits: int) -> None:
        state = self._players[target]
        state.remaining_hits = max(0, state.remaining_hits - hits)

    def _finish(self, winner: PlayerId) -> None:
        self._winner = winner
        self._flow.trigger("fleet_destroyed")
        logger.info("game_over winner=%s", winner.value)
        self._listener.on_game_over(winner)

    def _set_active(self, player: PlayerId, *, force_notify: bool = False) -> None:
        changed = player is not self._active
        self._active = player
        if changed or force_notify:
            self._listener.on_turn_changed(player)

    def _swap_guard(self, _context: FlowContext[TurnPhase]) -> bool:
        return self._swap_delay

    def _pointer_guard(self, _context: FlowContext[TurnPhase]) -> bool:
        return self._pointer_released

    def _winner_guard(self, _context: FlowContext[TurnPhase]) -> bool:
        return self._winner is not None

    def _announce_swap(self, _context: FlowContext[TurnPhase]) -> None:
        self._listener.on_swap_pending(self._active)

    def _announce_swap_resolved(self, _context: FlowContext[TurnPhase]) -> None:
        self._listener.on_swap_resolved(self._active)
