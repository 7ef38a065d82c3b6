"""Public AI primitive API contracts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


class BlackboardValue(Protocol):
    """Anything an agent stores or observes."""


class Blackboard(Protocol):
    """Per-agent scratch space shared between decisions and their consumers.

    Keys are trimmed; an empty key is a ``ValueError``.
    """

    def set(self, key: str, value: BlackboardValue) -> None:
        ...

    def get(self, key: str) -> BlackboardValue | None:
        ...

    def require(self, key: str) -> BlackboardValue:
        """Return the stored value; ``KeyError`` when nothing is stored."""

    def has(self, key: str) -> bool:
        ...

    def remove(self, key: str) -> BlackboardValue | None:
        """Pop the stored value, or None when absent."""


@dataclass(frozen=True, slots=True)
class DecisionContext:
    """Inputs for one agent decision: its blackboard plus named observations."""

    blackboard: Blackboard
    observations: Mapping[str, BlackboardValue]


class Agent(Protocol):
    def decide(self, context: DecisionContext) -> str:
        """Pick an action name, leaving any action arguments on the blackboard."""


def create_blackboard() -> Blackboard:
    from engine.ai.blackboard import RuntimeBlackboard

    return RuntimeBlackboard()
