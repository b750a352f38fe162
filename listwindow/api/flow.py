"""Transition-table contracts used for phase tracking."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeAlias, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class FlowContext(Generic[TState]):
    """What a guard or hook sees while a transition fires."""

    trigger: str
    source: TState
    target: TState
    payload: object | None = None


TransitionGuard: TypeAlias = Callable[[FlowContext[TState]], bool]
TransitionHook: TypeAlias = Callable[[FlowContext[TState]], None]


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """Move to `target` on `trigger` from any state in `sources`.

    `sources=None` matches every state. `on_exit` runs before the state
    changes and `on_enter` after.
    """

    trigger: str
    target: TState
    sources: frozenset[TState] | None = None
    guard: TransitionGuard[TState] | None = None
    on_exit: TransitionHook[TState] | None = None
    on_enter: TransitionHook[TState] | None = None

    def matches(self, state: TState) -> bool:
        return self.sources is None or state in self.sources


class FlowMachine(Protocol[TState]):
    @property
    def state(self) -> TState:
        """Current state."""

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        """Register a transition; earlier registrations win on ties."""

    def fire(self, trigger: str, *, payload: object | None = None) -> bool:
        """Run the first matching transition; False when none applies."""


def create_flow_machine(initial_state: TState) -> FlowMachine[TState]:
    from listwindow.runtime.flow import RuntimeFlowMachine

    return RuntimeFlowMachine(initial_state)
