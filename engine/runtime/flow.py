"""Transition-table executor behind the flow API."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Generic, TypeVar

from engine.api.flow import FlowContext, FlowPayload, FlowTransition

logger = logging.getLogger(__name__)

TState = TypeVar("TState")


class RuntimeFlowMachine(Generic[TState]):
    """Deterministic state machine over a table of guarded transitions.

    For each trigger, transitions are tried in registration order and the
    first whose source and guard both match is taken. The state is updated
    before the ``after`` hook runs.
    """

    def __init__(self, initial_state: TState) -> None:
        self._state = initial_state
        self._by_trigger: defaultdict[str, list[FlowTransition[TState]]] = defaultdict(list)

    @property
    def state(self) -> TState:
        return self._state

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        self._by_trigger[transition.trigger].append(transition)

    def can_trigger(self, event: str, *, payload: FlowPayload | None = None) -> bool:
        return self._select(event, payload) is not None

    def trigger(self, event: str, *, payload: FlowPayload | None = None) -> bool:
        """Take the first matching transition; False leaves the state untouched."""
        selected = self._select(event, payload)
        if selected is None:
            return False
        transition, context = selected
        self._state = transition.target
        logger.debug("flow_transition trigger=%s source=%s target=%s", event, context.source, context.target)
        if transition.after is not None:
            transition.after(context)
        return True

    def _select(
        self, event: str, payload: FlowPayload | None
    ) -> tuple[FlowTransition[TState], FlowContext[TState]] | None:
        for transition in self._by_trigger.get(event, ()):
            if transition.source is not None and transition.source != self._state:
                continue
            context = FlowContext(event, self._state, transition.target, payload)
            if transition.guard is None or transition.guard(context):
                return transition, context
        return None
