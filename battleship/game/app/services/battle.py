"""Computer-opponent orchestration separated from the match mediator."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from engine.api.ai import DecisionContext
from battleship.game.ai.guaranteed_hit import GuaranteedHitAI
from battleship.game.ai.priority_target import PriorityTargetAI
from battleship.game.ai.random_shot import RandomShotAI
from battleship.game.ai.strategy import AIStrategy
from battleship.game.core.board import BoardState
from battleship.game.core.models import BOARD_SIZE, Coord, Difficulty, ShotResult, ShotType
from battleship.game.core.shot_resolution import Volley
from battleship.game.core.turns import FireStatus, TurnController

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AIAttack:
    """One resolved computer attack. ``result`` is only ever HIT or MISS."""

    coord: Coord
    result: ShotResult
    volley: Volley
    skipped: int = 0


def build_ai_strategy(
    difficulty: Difficulty, rng: random.Random, size: int = BOARD_SIZE
) -> AIStrategy | None:
    """Construct the AI strategy for a difficulty; None when AI is disabled."""
    if difficulty is Difficulty.EASY:
        return RandomShotAI(rng)
    if difficulty is Difficulty.MEDIUM:
        return PriorityTargetAI(rng, size=size)
    if difficulty is Difficulty.HARD:
        return GuaranteedHitAI(rng)
    return None


def run_ai_turn(turns: TurnController, strategy: AIStrategy, target: BoardState) -> AIAttack:
    """Let the strategy fire until one normal shot is accepted.

    Candidates that come back ALREADY_SHOT are reported to the strategy and
    skipped without spending the turn.
    """
    shooter = turns.active_player
    skipped = 0
    for _ in range(target.size * target.size + 1):
        strategy.decide(
            DecisionContext(
                blackboard=strategy.blackboard,
                observations={AIStrategy.OBSERVATION_BOARD: target},
            )
        )
        shot = AIStrategy.take_decided_shot(strategy.blackboard)
        outcome = turns.fire(shot, ShotType.NORMAL)
        if outcome.status is FireStatus.ALREADY_SHOT:
            strategy.notify_result(shot, ShotResult.ALREADY_SHOT)
            skipped += 1
            continue
        if not outcome.accepted or outcome.volley is None:
            raise RuntimeError(f"AI shot at {shot} rejected: {outcome.status.value}")
        result = outcome.volley.result
        strategy.notify_result(shot, result)
        logger.debug(
            "ai_attack player=%s target=%s result=%s skipped=%d",
            shooter.value,
            shot,
            result.value,
            skipped,
        )
        return AIAttack(coord=shot, result=result, volley=outcome.volley, skipped=skipped)
    raise RuntimeError("AI failed to find a target it had not already shot")
