"""Headless computer-driven matches, used by the CLI demo and smoke tests."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from engine.api.ai import DecisionContext
from battleship.game.ai.priority_target import PriorityTargetAI
from battleship.game.ai.strategy import AIStrategy
from battleship.game.app.match import BattleshipMatch
from battleship.game.core.models import PlayerId, ShotResult
from battleship.game.core.placement import PlacementPhase
from battleship.game.core.turns import FireStatus, TurnPhase
from battleship.game.infra.config import GameSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchSummary:
    winner: PlayerId | None
    shots_fired: dict[PlayerId, int]
    remaining_hits: dict[PlayerId, int]


def play_computer_match(
    settings: GameSettings,
    *,
    rng: random.Random | None = None,
    max_turns: int = 10_000,
) -> MatchSummary:
    """Play a full match where every human seat is driven by a priority AI pilot."""
    rng = rng or random.Random(settings.seed)
    match = BattleshipMatch(settings, rng=rng)
    while match.placement_phase is not PlacementPhase.DONE:
        match.place_random_fleet()

    pilots: dict[PlayerId, AIStrategy] = {PlayerId.PLAYER_1: PriorityTargetAI(rng, settings.board_size)}
    if not match.single_player:
        pilots[PlayerId.PLAYER_2] = PriorityTargetAI(rng, settings.board_size)
    shots = {player: 0 for player in PlayerId}

    for _ in range(max_turns):
        if match.phase is TurnPhase.GAME_OVER:
            break
        if match.phase is TurnPhase.SWAP_PENDING:
            match.release_pointer()
            match.acknowledge_swap()
            continue
        shooter = match.active_player
        pilot = pilots[shooter]
        pilot.decide(
            DecisionContext(
                blackboard=pilot.blackboard,
                observations={AIStrategy.OBSERVATION_BOARD: match.board(shooter.opponent)},
            )
        )
        target = AIStrategy.take_decided_shot(pilot.blackboard)
        outcome = match.submit_shot(target)
        if outcome.status is FireStatus.ALREADY_SHOT:
            pilot.notify_result(target, ShotResult.ALREADY_SHOT)
            continue
        if outcome.volley is None:
            raise RuntimeError(f"pilot shot rejected: {outcome.status.value}")
        pilot.notify_result(target, outcome.volley.result)
        shots[shooter] += 1
        if outcome.reply is not None:
            shots[PlayerId.PLAYER_2] += 1

    status = match.is_game_over()
    logger.info(
        "computer_match_finished winner=%s shots_p1=%d shots_p2=%d",
        status.winner.value if status.winner else None,
        shots[PlayerId.PLAYER_1],
        shots[PlayerId.PLAYER_2],
    )
    return MatchSummary(
        winner=status.winner,
        shots_fired=shots,
        remaining_hits={player: match.remaining_hits(player) for player in PlayerId},
    )
