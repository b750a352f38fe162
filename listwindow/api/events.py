"""Public event bus API contracts and windowing events."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from listwindow.api.window import RowWindow, ScrollSignal

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


@dataclass(frozen=True, slots=True)
class WindowCommitted:
    """Main and buffer windows after a commit; the host re-renders from these."""

    window: RowWindow
    buffer: RowWindow | None = None


@dataclass(frozen=True, slots=True)
class EndReached:
    """Bottom of the scrollable content entered the viewport."""

    signal: ScrollSignal


@dataclass(frozen=True, slots=True)
class ScrollObserved:
    """Raw scroll signal passed through to host listeners."""

    signal: ScrollSignal


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from listwindow.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
