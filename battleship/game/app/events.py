"""Notifications published by a match for presentation code to consume."""

from __future__ import annotations

from dataclasses import dataclass

from battleship.game.core.models import PlayerId, Ship


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """Base type; subscribe to it to receive every match notification."""


@dataclass(frozen=True, slots=True)
class ShipPlaced(MatchEvent):
    player: PlayerId
    ship: Ship


@dataclass(frozen=True, slots=True)
class PlacementCompleted(MatchEvent):
    player: PlayerId


@dataclass(frozen=True, slots=True)
class TurnChanged(MatchEvent):
    player: PlayerId


@dataclass(frozen=True, slots=True)
class SwapPendingEntered(MatchEvent):
    """Both fleets are hidden until ``next_player`` acknowledges the swap."""

    next_player: PlayerId


@dataclass(frozen=True, slots=True)
class SwapPendingExited(MatchEvent):
    player: PlayerId


@dataclass(frozen=True, slots=True)
class ShipSunk(MatchEvent):
    owner: PlayerId
    ship: Ship
    sunk_by: PlayerId


@dataclass(frozen=True, slots=True)
class GameOver(MatchEvent):
    winner: PlayerId
