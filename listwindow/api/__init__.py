"""Public windowing API contracts."""

from listwindow.api.events import (
    EndReached,
    EventBus,
    ScrollObserved,
    Subscription,
    WindowCommitted,
    create_event_bus,
)
from listwindow.api.flow import FlowContext, FlowMachine, FlowTransition, create_flow_machine
from listwindow.api.host import NullViewportHost, ViewportHost
from listwindow.api.logging import LoggingConfig
from listwindow.api.window import RowWindow, ScrollDirection, ScrollSignal, WindowRequest, WindowStep

__all__ = [
    "EndReached",
    "EventBus",
    "FlowContext",
    "FlowMachine",
    "FlowTransition",
    "LoggingConfig",
    "NullViewportHost",
    "RowWindow",
    "ScrollDirection",
    "ScrollObserved",
    "ScrollSignal",
    "Subscription",
    "ViewportHost",
    "WindowCommitted",
    "WindowRequest",
    "WindowStep",
    "create_event_bus",
    "create_flow_machine",
]
