"""Match mediator: the command/query surface presentation code talks to."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from time import monotonic

from engine.api.events import EventBus, create_event_bus
from battleship.game.ai.strategy import AIStrategy
from battleship.game.app.events import (
    GameOver,
    PlacementCompleted,
    ShipPlaced,
    ShipSunk,
    SwapPendingEntered,
    SwapPendingExited,
    TurnChanged,
)
from battleship.game.app.services.battle import AIAttack, build_ai_strategy, run_ai_turn
from battleship.game.core.board import BoardState
from battleship.game.core.fleet import random_ship_placement, validate_fleet
from battleship.game.core.models import (
    Cell,
    Coord,
    Orientation,
    PlacementError,
    PlayerId,
    Ship,
    ShotType,
)
from battleship.game.core.placement import PlacementPhase, PlacementSequencer
from battleship.game.core.shot_resolution import Ammo, Volley
from battleship.game.core.turns import FireStatus, TurnController, TurnPhase
from battleship.game.infra.config import GameSettings

logger = logging.getLogger(__name__)


class PlacementStatus(StrEnum):
    """Outcome of a placement command."""

    ACCEPTED = "ACCEPTED"
    DEBOUNCED = "DEBOUNCED"
    INVALID_PLACEMENT = "INVALID_PLACEMENT"
    WRONG_PHASE = "WRONG_PHASE"


@dataclass(frozen=True, slots=True)
class PlacementOutcome:
    status: PlacementStatus
    player: PlayerId | None
    ship: Ship | None = None
    error: PlacementError | None = None

    @property
    def accepted(self) -> bool:
        return self.status is PlacementStatus.ACCEPTED


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Outcome of a shot command, including the computer's reply if one followed."""

    status: FireStatus
    shooter: PlayerId | None
    volley: Volley | None = None
    reply: AIAttack | None = None

    @property
    def accepted(self) -> bool:
        return self.status is FireStatus.ACCEPTED


@dataclass(frozen=True, slots=True)
class GameOverStatus:
    over: bool
    winner: PlayerId | None = None


class BattleshipMatch:
    """Owns both boards and routes input commands through placement and turns.

    In single-player mode (any difficulty other than DISABLED) the computer
    sits in PLAYER_2: its fleet is placed at random as soon as player 1
    finishes, and it fires immediately after each accepted human shot.
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        *,
        event_bus: EventBus | None = None,
        ai_strategy: AIStrategy | None = None,
        rng: random.Random | None = None,
        time_source: Callable[[], float] = monotonic,
    ) -> None:
        self._settings = settings or GameSettings()
        self._events = event_bus or create_event_bus()
        self._rng = rng or random.Random(self._settings.seed)
        self._time_source = time_source
        self._boards = {
            player: BoardState(owner=player, size=self._settings.board_size) for player in PlayerId
        }
        self._ai = ai_strategy
        if self._ai is None and self._settings.single_player:
            self._ai = build_ai_strategy(
                self._settings.difficulty, self._rng, size=self._settings.board_size
            )
        self._placement = PlacementSequencer(
            self._boards,
            self._settings.ship_count,
            self,
            debounce_seconds=self._settings.placement_debounce_seconds,
        )
        self._turns = TurnController(
            self._boards,
            self._settings.ship_count,
            self,
            swap_delay=self._ai is None,
        )
        logger.info(
            "match_created board_size=%d ship_count=%d difficulty=%s",
            self._settings.board_size,
            self._settings.ship_count,
            self._settings.difficulty.value,
        )

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def single_player(self) -> bool:
        return self._ai is not None

    @property
    def phase(self) -> TurnPhase:
        return self._turns.phase

    @property
    def active_player(self) -> PlayerId:
        return self._turns.active_player

    @property
    def placement_phase(self) -> PlacementPhase:
        return self._placement.phase

    def board(self, player: PlayerId) -> BoardState:
        """Unmasked board access for collaborators that may see everything."""
        return self._boards[player]

    def current_ship_length(self) -> int | None:
        return self._placement.current_ship_length()

    def placement_orientation(self, player: PlayerId) -> Orientation:
        return self._placement.session(player).orientation

    def remaining_hits(self, player: PlayerId) -> int:
        return self._turns.remaining_hits(player)

    def ammo(self, player: PlayerId) -> Ammo:
        return self._turns.player_state(player).ammo

    def selected_shot_type(self, player: PlayerId) -> ShotType:
        return self._turns.player_state(player).context.shot_type

    def carpet_orientation(self, player: PlayerId) -> Orientation:
        return self._turns.player_state(player).context.carpet_orientation

    def is_game_over(self) -> GameOverStatus:
        return GameOverStatus(over=self._turns.is_game_over(), winner=self._turns.winner)

    def ships_hidden(self, player: PlayerId) -> bool:
        """Whether ``player``'s afloat ships must be concealed from the viewer."""
        if self._turns.is_game_over():
            return False
        if self.single_player and player is PlayerId.PLAYER_2:
            return True
        return self._turns.ships_hidden(player)

    def visible_ships(self, player: PlayerId) -> list[Ship]:
        """Ships a renderer may draw: all of them unless hidden, sunk ones always."""
        board = self._boards[player]
        hidden = self.ships_hidden(player)
        return [ship for ship in board.fleet.values() if not hidden or board.is_sunk(ship)]

    def cell_at(self, player: PlayerId, coord: Coord) -> Cell:
        """Cell view with afloat ships masked while the fleet is hidden."""
        board = self._boards[player]
        cell = board.cell_at(coord)
        if cell.ship is None or not self.ships_hidden(player) or board.is_sunk(cell.ship):
            return cell
        return Cell(coord=coord, ship=None, shot_state=cell.shot_state)

    def toggle_placement_orientation(self) -> Orientation | None:
        return self._placement.toggle_orientation()

    def submit_placement(
        self, anchor: Coord, orientation: Orientation | None = None
    ) -> PlacementOutcome:
        """Place the active player's next ship at ``anchor`` (slid on-board if needed)."""
        player = self._placement.active_player
        if player is None:
            return PlacementOutcome(PlacementStatus.WRONG_PHASE, None)
        if orientation is None:
            orientation = self._placement.session(player).orientation
        attempt = self._placement.submit(anchor, orientation, self._time_source())
        if attempt.debounced:
            return PlacementOutcome(PlacementStatus.DEBOUNCED, player)
        if not attempt.accepted:
            return PlacementOutcome(PlacementStatus.INVALID_PLACEMENT, player, error=attempt.error)
        return PlacementOutcome(PlacementStatus.ACCEPTED, player, ship=attempt.ship)

    def place_random_fleet(self) -> list[Ship]:
        """Place every remaining ship of the active placer at random legal spots."""
        player = self._placement.active_player
        if player is None:
            return []
        board = self._boards[player]
        placed: list[Ship] = []
        while self._placement.active_player is player:
            length = self._placement.session(player).ship_index
            attempt = self._placement.place_generated(random_ship_placement(board, length, self._rng))
            if attempt.ship is not None:
                placed.append(attempt.ship)
        return placed

    def select_shot_type(self, shot_type: ShotType) -> bool:
        """Choose the active player's next shot; False when that ammo is spent."""
        if self._turns.phase is not TurnPhase.AWAITING_SHOT:
            return False
        return self._turns.select_shot_type(shot_type)

    def toggle_carpet_orientation(self) -> Orientation | None:
        return self._turns.toggle_carpet_orientation()

    def release_pointer(self) -> None:
        self._turns.release_pointer()

    def acknowledge_swap(self) -> bool:
        return self._turns.acknowledge_swap()

    def submit_shot(
        self,
        coord: Coord,
        shot_type: ShotType | None = None,
        orientation: Orientation | None = None,
    ) -> ShotOutcome:
        """Fire the active player's shot; in single-player the computer answers at once."""
        if self.single_player and self._turns.active_player is PlayerId.PLAYER_2:
            return ShotOutcome(FireStatus.WRONG_PHASE, PlayerId.PLAYER_2)
        outcome = self._turns.fire(coord, shot_type, orientation)
        if not outcome.accepted or outcome.volley is None:
            logger.debug("shot_rejected status=%s target=%s", outcome.status.value, coord)
            return ShotOutcome(outcome.status, outcome.shooter)

        reply: AIAttack | None = None
        if self._ai is not None and not self._turns.is_game_over():
            reply = run_ai_turn(self._turns, self._ai, self._boards[PlayerId.PLAYER_1])
        return ShotOutcome(outcome.status, outcome.shooter, outcome.volley, reply)

    # Placement/turn listener hooks.

    def on_ship_placed(self, player: PlayerId, ship: Ship) -> None:
        self._events.publish(ShipPlaced(player=player, ship=ship))

    def on_placement_finished(self, player: PlayerId) -> None:
        complete, reason = validate_fleet(self._boards[player], self._settings.ship_count)
        if not complete:
            raise RuntimeError(f"{player.value} finished placement with an incomplete fleet: {reason}")
        self._events.publish(PlacementCompleted(player=player))
        if player is PlayerId.PLAYER_2:
            self._turns.begin_battle()
            return
        self._turns.hand_placement_to(PlayerId.PLAYER_2)
        if self.single_player:
            self.place_random_fleet()

    def on_turn_changed(self, player: PlayerId) -> None:
        self._events.publish(TurnChanged(player=player))

    def on_ship_sunk(self, ship: Ship, sunk_by: PlayerId) -> None:
        logger.info("ship_sunk owner=%s length=%d", ship.owner.value, ship.length)
        self._events.publish(ShipSunk(owner=ship.owner, ship=ship, sunk_by=sunk_by))

    def on_swap_pending(self, next_player: PlayerId) -> None:
        self._events.publish(SwapPendingEntered(next_player=next_player))

    def on_swap_resolved(self, player: PlayerId) -> None:
        self._events.publish(SwapPendingExited(player=player))

    def on_game_over(self, winner: PlayerId) -> None:
        self._events.publish(GameOver(winner=winner))
