"""Public flow/state-machine API contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeAlias, TypeVar

TState = TypeVar("TState")


class FlowPayload(Protocol):
    """Whatever the caller passes along with a trigger."""


@dataclass(frozen=True, slots=True)
class FlowContext(Generic[TState]):
    """What guards and hooks see about the transition being evaluated."""

    trigger: str
    source: TState
    target: TState
    payload: FlowPayload | None = None


TransitionGuard: TypeAlias = "Callable[[FlowContext[TState]], bool]"
TransitionHook: TypeAlias = "Callable[[FlowContext[TState]], None]"


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """``trigger`` moves ``source`` to ``target`` when ``guard`` allows.

    A ``None`` source matches every state. ``after`` runs once the new state
    is in place.
    """

    trigger: str
    source: TState | None
    target: TState
    guard: TransitionGuard[TState] | None = None
    after: TransitionHook[TState] | None = None


class FlowMachine(Protocol[TState]):
    @property
    def state(self) -> TState:
        ...

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        ...

    def can_trigger(self, event: str, *, payload: FlowPayload | None = None) -> bool:
        """Dry run of ``trigger``: no state change, no hooks."""

    def trigger(self, event: str, *, payload: FlowPayload | None = None) -> bool:
        """Fire ``event``; returns whether a transition was taken."""


def create_flow_machine(
    initial_state: TState,
    transitions: Iterable[FlowTransition[TState]] = (),
) -> FlowMachine[TState]:
    """Build the default machine preloaded with ``transitions``."""
    from engine.runtime.flow import RuntimeFlowMachine

    machine = RuntimeFlowMachine(initial_state)
    for transition in transitions:
        machine.add_transition(transition)
    return machine
