"""Transition-table state machine."""

from __future__ import annotations

from typing import Generic, TypeVar

from listwindow.api.flow import FlowContext, FlowTransition

TState = TypeVar("TState")


class RuntimeFlowMachine(Generic[TState]):
    """Transitions indexed by trigger, tried in registration order."""

    def __init__(self, initial_state: TState) -> None:
        self._state = initial_state
        self._by_trigger: dict[str, list[FlowTransition[TState]]] = {}

    @property
    def state(self) -> TState:
        return self._state

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        self._by_trigger.setdefault(transition.trigger, []).append(transition)

    def fire(self, trigger: str, *, payload: object | None = None) -> bool:
        source = self._state
        for transition in self._by_trigger.get(trigger, ()):
            if not transition.matches(source):
                continue
            context = FlowContext(trigger=trigger, source=source, target=transition.target, payload=payload)
            if transition.guard is not None and not transition.guard(context):
                continue
            if transition.on_exit is not None:
                transition.on_exit(context)
            self._state = transition.target
            if transition.on_enter is not None:
                transition.on_enter(context)
            return True
        return False


FlowMachine = RuntimeFlowMachine
