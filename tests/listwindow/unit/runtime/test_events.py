from __future__ import annotations

import pytest

from listwindow.api.events import EndReached, ScrollObserved, WindowCommitted, create_event_bus
from listwindow.api.window import RowWindow, ScrollSignal
from listwindow.runtime.events import EventBus


def test_event_bus_dispatches_by_event_type() -> None:
    bus = EventBus()
    commits: list[WindowCommitted] = []
    scrolls: list[ScrollObserved] = []
    bus.subscribe(WindowCommitted, commits.append)
    bus.subscribe(ScrollObserved, scrolls.append)

    invoked = bus.publish(WindowCommitted(window=RowWindow(0, 3)))

    assert invoked == 1
    assert commits == [WindowCommitted(window=RowWindow(0, 3))]
    assert scrolls == []


def test_event_bus_object_subscription_sees_everything() -> None:
    bus = create_event_bus()
    seen: list[object] = []
    bus.subscribe(object, seen.append)
    signal = ScrollSignal(offset_y=10.0, viewport_height=100.0)

    bus.publish(ScrollObserved(signal))
    bus.publish(EndReached(signal))

    assert [type(event) for event in seen] == [ScrollObserved, EndReached]


def test_event_bus_unsubscribe_and_clear_stop_dispatch() -> None:
    bus = EventBus()
    seen: list[object] = []
    subscription = bus.subscribe(WindowCommitted, seen.append)
    bus.unsubscribe(subscription)
    assert bus.publish(WindowCommitted(window=RowWindow.empty())) == 0

    bus.subscribe(WindowCommitted, seen.append)
    assert bus.subscription_count == 1
    bus.clear()
    assert bus.subscription_count == 0
    assert seen == []


def test_event_bus_runs_base_and_exact_handlers_in_subscription_order() -> None:
    bus = EventBus()
    order: list[str] = []
    bus.subscribe(object, lambda event: order.append("any"))
    bus.subscribe(WindowCommitted, lambda event: order.append("commit"))

    assert bus.publish(WindowCommitted(window=RowWindow(0, 1))) == 2
    bus.subscribe(object, lambda event: order.append("late"))
    assert bus.publish(WindowCommitted(window=RowWindow(0, 2))) == 3

    assert order == ["any", "commit", "any", "commit", "late"]


def test_event_bus_delivers_nested_publishes_after_current_event() -> None:
    bus = EventBus()
    seen: list[tuple[str, object]] = []
    signal = ScrollSignal(offset_y=600.0, viewport_height=400.0)

    def on_commit(event: WindowCommitted) -> None:
        seen.append(("first", event))
        assert bus.publish(EndReached(signal)) == 0

    bus.subscribe(WindowCommitted, on_commit)
    bus.subscribe(object, lambda event: seen.append(("all", event)))
    commit = WindowCommitted(window=RowWindow(0, 3))

    assert bus.publish(commit) == 2
    assert seen == [("first", commit), ("all", commit), ("all", EndReached(signal))]


def test_event_bus_recovers_after_failing_handler() -> None:
    bus = EventBus()
    seen: list[object] = []

    def explode(event: object) -> None:
        bus.publish(EndReached(ScrollSignal(offset_y=0.0, viewport_height=1.0)))
        raise RuntimeError("host failed")

    subscription = bus.subscribe(WindowCommitted, explode)
    bus.subscribe(EndReached, seen.append)
    with pytest.raises(RuntimeError, match="host failed"):
        bus.publish(WindowCommitted(window=RowWindow.empty()))
    assert seen == []

    bus.unsubscribe(subscription)
    assert bus.publish(WindowCommitted(window=RowWindow.empty())) == 0
    assert bus.subscription_count == 1
