"""Windowing options, environment loading and budget validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping

from listwindow.runtime.errors import WindowingConfigError

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WindowingOptions:
    """Rendering budgets and scheduling delays for one controller."""

    initial_num_to_render: int = 1
    max_num_to_render: int = 20
    num_to_render_ahead: int = 4
    num_to_render_behind: int = 2
    page_size: int = 5
    increment_delay_ms: float = 17.0
    settle_delay_ms: float = 100.0
    frame_interval_ms: float = 16.0
    frame_wait_required: bool = False

    @property
    def windowing_enabled(self) -> bool:
        return self.num_to_render_ahead != 0

    @property
    def increment_delay_seconds(self) -> float:
        return self.increment_delay_ms / 1000.0

    @property
    def settle_delay_seconds(self) -> float:
        return self.settle_delay_ms / 1000.0

    @property
    def frame_interval_seconds(self) -> float:
        return self.frame_interval_ms / 1000.0


def validate_options(options: WindowingOptions) -> WindowingOptions:
    """Check budget invariants once; violations are fatal."""
    problems: list[str] = []
    if options.max_num_to_render < 1:
        problems.append("max_num_to_render must be >= 1")
    if options.page_size < 1:
        problems.append("page_size must be >= 1")
    for name in ("initial_num_to_render", "num_to_render_ahead", "num_to_render_behind"):
        if getattr(options, name) < 0:
            problems.append(f"{name} must be >= 0")
    for name in ("increment_delay_ms", "settle_delay_ms", "frame_interval_ms"):
        if getattr(options, name) < 0.0:
            problems.append(f"{name} must be >= 0")
    if options.initial_num_to_render >= options.max_num_to_render:
        # Initial and jump windows span initial_num_to_render + 1 rows.
        problems.append("initial_num_to_render must be less than max_num_to_render")
    if options.num_to_render_ahead >= options.max_num_to_render:
        problems.append("num_to_render_ahead must be less than max_num_to_render")
    if options.num_to_render_behind >= options.max_num_to_render:
        problems.append("num_to_render_behind must be less than max_num_to_render")
    if problems:
        message = "; ".join(problems)
        _LOG.error("windowing options rejected: %s", message)
        raise WindowingConfigError(message)
    return options


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def load_windowing_options(
    *,
    env: Mapping[str, str] | None = None,
    base: WindowingOptions | None = None,
) -> WindowingOptions:
    """Overlay `LISTWINDOW_*` variables on `base` and validate the result."""
    defaults = base if base is not None else WindowingOptions()
    options = WindowingOptions(
        initial_num_to_render=_int(
            "LISTWINDOW_INITIAL_NUM_TO_RENDER", defaults.initial_num_to_render, minimum=0, env=env
        ),
        max_num_to_render=_int(
            "LISTWINDOW_MAX_NUM_TO_RENDER", defaults.max_num_to_render, minimum=1, env=env
        ),
        num_to_render_ahead=_int(
            "LISTWINDOW_NUM_TO_RENDER_AHEAD", defaults.num_to_render_ahead, minimum=0, env=env
        ),
        num_to_render_behind=_int(
            "LISTWINDOW_NUM_TO_RENDER_BEHIND", defaults.num_to_render_behind, minimum=0, env=env
        ),
        page_size=_int("LISTWINDOW_PAGE_SIZE", defaults.page_size, minimum=1, env=env),
        increment_delay_ms=_float(
            "LISTWINDOW_INCREMENT_DELAY_MS", defaults.increment_delay_ms, minimum=0.0, env=env
        ),
        settle_delay_ms=_float(
            "LISTWINDOW_SETTLE_DELAY_MS", defaults.settle_delay_ms, minimum=0.0, env=env
        ),
        frame_interval_ms=_float(
            "LISTWINDOW_FRAME_INTERVAL_MS", defaults.frame_interval_ms, minimum=0.0, env=env
        ),
        frame_wait_required=_flag("LISTWINDOW_FRAME_WAIT", defaults.frame_wait_required, env=env),
    )
    return validate_options(options)


def atoz_options(platform: str = "ios") -> WindowingOptions:
    """Option preset used by the A-to-Z list; Android needs a paint cycle per jump."""
    normalized = platform.strip().lower()
    options = WindowingOptions(
        initial_num_to_render=8,
        max_num_to_render=70,
        num_to_render_ahead=40,
        num_to_render_behind=4,
        page_size=15 if normalized == "ios" else 8,
        increment_delay_ms=16.0,
    )
    return validate_options(replace(options, frame_wait_required=normalized == "android"))


__all__ = [
    "WindowingOptions",
    "atoz_options",
    "load_windowing_options",
    "validate_options",
]
