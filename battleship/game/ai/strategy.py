"""AI strategy interface backed by engine AI primitives."""

from __future__ import annotations

from abc import ABC, abstractmethod

from engine.api.ai import Agent, Blackboard, DecisionContext, create_blackboard
from battleship.game.core.board import BoardState
from battleship.game.core.models import Coord, ShotResult


class AIStrategy(Agent, ABC):
    """Computer opponent contract: pick a target, then learn from the result."""

    ACTION_FIRE = "fire"
    OBSERVATION_BOARD = "board"
    _NEXT_SHOT_KEY = "battleship.ai.next_shot"

    def __init__(self) -> None:
        self._blackboard = create_blackboard()

    @property
    def blackboard(self) -> Blackboard:
        return self._blackboard

    def decide(self, context: DecisionContext) -> str:
        """Choose a target on the observed board and park it on the blackboard."""
        board = context.observations.get(self.OBSERVATION_BOARD)
        if not isinstance(board, BoardState):
            raise TypeError("expected opponent BoardState under the 'board' observation")
        context.blackboard.set(self._NEXT_SHOT_KEY, self.choose_shot(board))
        return self.ACTION_FIRE

    @classmethod
    def take_decided_shot(cls, blackboard: Blackboard) -> Coord:
        """Pop the target a previous ``decide`` call left on ``blackboard``."""
        shot = blackboard.remove(cls._NEXT_SHOT_KEY)
        if not isinstance(shot, Coord):
            raise TypeError("no decided shot waiting on the blackboard")
        return shot

    @abstractmethod
    def choose_shot(self, board: BoardState) -> Coord:
        """Return next coordinate to fire at on the opponent's board."""

    @abstractmethod
    def notify_result(self, coord: Coord, result: ShotResult) -> None:
        """Learn from how the shot at ``coord`` resolved."""
