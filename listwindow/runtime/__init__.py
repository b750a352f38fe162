"""Windowing runtime modules."""

from listwindow.runtime.config import (
    WindowingOptions,
    atoz_options,
    load_windowing_options,
    validate_options,
)
from listwindow.runtime.errors import (
    InvalidRangeError,
    RowIndexError,
    UnknownSectionError,
    WindowingConfigError,
    WindowingError,
)
from listwindow.runtime.events import EventBus
from listwindow.runtime.flow import FlowMachine
from listwindow.runtime.logging import configure_logging, get_logger, setup_logging
from listwindow.runtime.scheduler import Scheduler
from listwindow.runtime.slot import SingleSlot

__all__ = [
    "EventBus",
    "FlowMachine",
    "InvalidRangeError",
    "RowIndexError",
    "Scheduler",
    "SingleSlot",
    "UnknownSectionError",
    "WindowingConfigError",
    "WindowingError",
    "WindowingOptions",
    "atoz_options",
    "configure_logging",
    "get_logger",
    "load_windowing_options",
    "setup_logging",
    "validate_options",
]
