"""Windowing engine for large sectioned lists with fixed row heights."""

from listwindow.api.events import EndReached, ScrollObserved, WindowCommitted
from listwindow.api.window import RowWindow, ScrollDirection, ScrollSignal
from listwindow.atoz import AtoZList, group_by_initial
from listwindow.geometry.index import GeometryIndex, Row, SectionEntry, SectionStart
from listwindow.runtime.config import WindowingOptions, load_windowing_options
from listwindow.runtime.errors import (
    InvalidRangeError,
    RowIndexError,
    UnknownSectionError,
    WindowingConfigError,
    WindowingError,
)
from listwindow.runtime.scheduler import Scheduler
from listwindow.windowing.controller import WindowController
from listwindow.windowing.jump import JumpPhase
from listwindow.windowing.render_plan import RenderPlan, RowSlot, Spacer

__all__ = [
    "AtoZList",
    "EndReached",
    "GeometryIndex",
    "InvalidRangeError",
    "JumpPhase",
    "RenderPlan",
    "Row",
    "RowIndexError",
    "RowSlot",
    "RowWindow",
    "Scheduler",
    "ScrollDirection",
    "ScrollObserved",
    "ScrollSignal",
    "SectionEntry",
    "SectionStart",
    "Spacer",
    "UnknownSectionError",
    "WindowCommitted",
    "WindowController",
    "WindowingConfigError",
    "WindowingError",
    "WindowingOptions",
    "group_by_initial",
    "load_windowing_options",
]
