from __future__ import annotations

from dataclasses import dataclass

from listwindow.api.flow import FlowTransition, create_flow_machine
from listwindow.runtime.flow import FlowMachine


@dataclass(frozen=True, slots=True)
class _Payload:
    value: int


def test_fires_only_from_listed_sources() -> None:
    machine = FlowMachine("idle")
    machine.add_transition(
        FlowTransition(trigger="request", target="buffering", sources=frozenset({"idle", "settling"}))
    )
    assert machine.fire("request")
    assert machine.state == "buffering"
    assert not machine.fire("request")
    assert not machine.fire("unknown")


def test_guard_blocks_and_hooks_wrap_state_change() -> None:
    machine = FlowMachine("idle")
    seen: list[str] = []

    def guard(context) -> bool:
        payload = context.payload
        return isinstance(payload, _Payload) and payload.value > 0

    machine.add_transition(
        FlowTransition(
            trigger="request",
            target="buffering",
            sources=frozenset({"idle"}),
            guard=guard,
            on_exit=lambda context: seen.append(f"exit {machine.state}"),
            on_enter=lambda context: seen.append(f"enter {machine.state}"),
        )
    )

    assert not machine.fire("request", payload=_Payload(0))
    assert machine.state == "idle"
    assert machine.fire("request", payload=_Payload(1))
    assert seen == ["exit idle", "enter buffering"]


def test_open_source_transition_matches_any_state() -> None:
    machine = create_flow_machine("settling")
    machine.add_transition(FlowTransition(trigger="reset", target="idle"))
    assert machine.fire("reset")
    assert machine.state == "idle"
    assert machine.fire("reset")
