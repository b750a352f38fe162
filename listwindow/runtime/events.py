"""Type-dispatched event bus between a controller and its host."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any, TypeVar

from listwindow.api.events import Subscription

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


class RuntimeEventBus:
    """In-process pub/sub keyed by event type.

    A handler subscribed to a base class (``object`` included) receives every
    subclass instance, and handlers for one event run in subscription order.
    Events published from inside a handler are queued and delivered after the
    current dispatch, so every handler observes events in publish order.
    """

    def __init__(self) -> None:
        self._next_id = 1
        self._by_type: dict[type[object], dict[int, EventHandler]] = {}
        self._resolved: dict[type[object], tuple[EventHandler, ...]] = {}
        self._pending: deque[object] = deque()
        self._dispatching = False

    @property
    def subscription_count(self) -> int:
        return sum(len(handlers) for handlers in self._by_type.values())

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        self._by_type.setdefault(event_type, {})[sub_id] = handler
        self._resolved.clear()
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        for event_type, handlers in self._by_type.items():
            if handlers.pop(subscription.id, None) is None:
                continue
            if not handlers:
                del self._by_type[event_type]
            self._resolved.clear()
            return

    def clear(self) -> None:
        """Drop every subscription and any event still queued for delivery."""
        self._by_type.clear()
        self._resolved.clear()
        self._pending.clear()

    def publish(self, event: object) -> int:
        """Deliver `event`; returns handlers run, or 0 when queued behind a running dispatch."""
        if self._dispatching:
            self._pending.append(event)
            return 0
        self._dispatching = True
        try:
            invoked = self._deliver(event)
            while self._pending:
                self._deliver(self._pending.popleft())
        finally:
            # A failing handler propagates; events it queued go with it.
            self._dispatching = False
            self._pending.clear()
        return invoked

    def _deliver(self, event: object) -> int:
        handlers = self._handlers_for(type(event))
        for handler in handlers:
            handler(event)
        return len(handlers)

    def _handlers_for(self, event_type: type[object]) -> tuple[EventHandler, ...]:
        cached = self._resolved.get(event_type)
        if cached is None:
            matched: list[tuple[int, EventHandler]] = []
            for base in event_type.__mro__:
                matched.extend(self._by_type.get(base, {}).items())
            matched.sort(key=lambda item: item[0])
            cached = tuple(handler for _, handler in matched)
            self._resolved[event_type] = cached
        return cached


EventBus = RuntimeEventBus
