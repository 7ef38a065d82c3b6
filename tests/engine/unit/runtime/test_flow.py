from __future__ import annotations

from dataclasses import dataclass

from engine.api.flow import FlowTransition, create_flow_machine
from engine.runtime.flow import RuntimeFlowMachine


@dataclass(frozen=True, slots=True)
class _Payload:
    value: int


def test_flow_machine_transitions_on_matching_trigger() -> None:
    machine = RuntimeFlowMachine("main")
    machine.add_transition(FlowTransition(trigger="start", source="main", target="battle"))
    changed = machine.trigger("start")
    assert changed
    assert machine.state == "battle"


def test_flow_machine_ignores_unknown_trigger_and_wrong_source() -> None:
    machine = RuntimeFlowMachine("main")
    machine.add_transition(FlowTransition(trigger="finish", source="battle", target="over"))
    assert not machine.trigger("start")
    assert not machine.trigger("finish")
    assert machine.state == "main"


def test_flow_machine_respects_guard_and_after_hook() -> None:
    machine = RuntimeFlowMachine("main")
    after: list[str] = []

    def guard(context) -> bool:
        payload = context.payload
        return isinstance(payload, _Payload) and payload.value > 0

    def after_hook(context) -> None:
        after.append(f"{context.trigger}:{context.source}->{context.target}")

    machine.add_transition(
        FlowTransition(trigger="start", source="main", target="battle", guard=guard, after=after_hook)
    )

    assert not machine.can_trigger("start", payload=_Payload(0))
    assert not machine.trigger("start", payload=_Payload(0))
    assert machine.state == "main"
    assert machine.can_trigger("start", payload=_Payload(1))
    assert machine.trigger("start", payload=_Payload(1))
    assert machine.state == "battle"
    assert after == ["start:main->battle"]


def test_flow_machine_after_hook_sees_new_state() -> None:
    machine = RuntimeFlowMachine("a")
    observed: list[str] = []
    machine.add_transition(
        FlowTransition(trigger="go", source="a", target="b", after=lambda _ctx: observed.append(machine.state))
    )
    machine.trigger("go")
    assert observed == ["b"]


def test_flow_machine_first_matching_transition_wins() -> None:
    machine = create_flow_machine(
        "idle",
        (
            FlowTransition(trigger="tick", source="idle", target="blocked", guard=lambda _ctx: False),
            FlowTransition(trigger="tick", source="idle", target="busy"),
            FlowTransition(trigger="tick", source="idle", target="never"),
        ),
    )
    assert machine.trigger("tick")
    assert machine.state == "busy"


def test_flow_machine_supports_wildcard_source() -> None:
    machine = RuntimeFlowMachine("a")
    machine.add_transition(FlowTransition(trigger="reset", source=None, target="main"))
    assert machine.trigger("reset")
    assert machine.state == "main"
