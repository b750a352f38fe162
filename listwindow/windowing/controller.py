"""Window controller: scroll tracking, convergence loop and section jumps."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from listwindow.api.events import EndReached, EventBus, ScrollObserved, WindowCommitted, create_event_bus
from listwindow.api.host import NullViewportHost, ViewportHost
from listwindow.api.window import RowWindow, ScrollDirection, ScrollSignal, WindowRequest, WindowStep
from listwindow.diagnostics.json_codec import dumps_text
from listwindow.geometry.index import GeometryIndex
from listwindow.runtime.config import WindowingOptions, validate_options
from listwindow.runtime.events import RuntimeEventBus
from listwindow.runtime.scheduler import Scheduler
from listwindow.runtime.slot import SingleSlot
from listwindow.windowing.convergence import compute_rows_to_render
from listwindow.windowing.jump import JumpPhase, SectionJumpMachine, compute_jump_window
from listwindow.windowing.render_plan import KeyFunction, RenderPlan, RowCache, build_render_plan

_LOG = logging.getLogger(__name__)


def _clamp_window(window: RowWindow, total_rows: int) -> RowWindow:
    if total_rows <= 0:
        return RowWindow.empty()
    first_row = min(max(0, window.first_row), total_rows - 1)
    last_row = min(window.last_row, total_rows - 1)
    if last_row < first_row:
        return RowWindow(first_row=first_row, last_row=first_row - 1)
    return RowWindow(first_row=first_row, last_row=last_row)


class WindowController:
    """Owns the rendered row window of one list and keeps it tracking the viewport.

    Scroll signals only record viewport state and schedule a recompute on the
    shared scheduler; window state changes happen in scheduled ticks and in
    the section-jump sequence. Hosts listen for `WindowCommitted` and render
    from `render_plan()`.
    """

    def __init__(
        self,
        geometry: GeometryIndex,
        *,
        options: WindowingOptions | None = None,
        scheduler: Scheduler | None = None,
        host: ViewportHost | None = None,
        events: EventBus | None = None,
        key_fn: KeyFunction | None = None,
    ) -> None:
        self._options = validate_options(options if options is not None else WindowingOptions())
        self._geometry = geometry
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._host: ViewportHost = host if host is not None else NullViewportHost()
        self._owns_events = events is None
        self._events: EventBus = events if events is not None else create_event_bus()
        self._key_fn = key_fn
        self._row_cache = RowCache()
        self._jump = SectionJumpMachine()
        self._pending_compute: SingleSlot[int] = SingleSlot()
        self._jump_task: int | None = None
        self._force_after_jump = False
        self._scroll_offset_y = 0.0
        self._previous_offset_y = 0.0
        self._viewport_height = 0.0
        self._content_height: float | None = None
        self._direction = ScrollDirection.DOWN
        self._section_picker_active = False
        self._closed = False
        total_rows = geometry.row_count()
        self._window = RowWindow(
            first_row=0,
            last_row=min(total_rows - 1, self._options.initial_num_to_render),
        )
        self._buffer: RowWindow | None = None

    @property
    def options(self) -> WindowingOptions:
        return self._options

    @property
    def geometry(self) -> GeometryIndex:
        return self._geometry

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def window(self) -> RowWindow:
        return self._window

    @property
    def buffer(self) -> RowWindow | None:
        return self._buffer

    @property
    def jump_phase(self) -> JumpPhase:
        return self._jump.phase

    @property
    def queued_section(self) -> str | None:
        return self._jump.queued_section

    @property
    def scroll_direction(self) -> ScrollDirection:
        return self._direction

    @property
    def scroll_offset_y(self) -> float:
        return self._scroll_offset_y

    @property
    def viewport_height(self) -> float:
        return self._viewport_height

    @property
    def recompute_pending(self) -> bool:
        return self._pending_compute.occupied

    @property
    def closed(self) -> bool:
        return self._closed

    def set_data(
        self,
        sectioned_data: Mapping[str, Sequence[object]],
        section_order: Iterable[str] | None = None,
    ) -> None:
        """Rebuild geometry from new data and force a recompute."""
        self._geometry.build(sectioned_data, section_order)
        total_rows = self._geometry.row_count()
        self._window = _clamp_window(self._window, total_rows)
        if self._buffer is not None:
            self._buffer = _clamp_window(self._buffer, total_rows)
        self.recompute_now(force=True)

    def on_scroll(self, signal: ScrollSignal) -> None:
        """Record viewport state and schedule a coalesced recompute."""
        if self._closed:
            return
        self._previous_offset_y = self._scroll_offset_y
        self._scroll_offset_y = signal.offset_y
        self._viewport_height = signal.viewport_height
        self._direction = ScrollDirection.from_offsets(self._previous_offset_y, self._scroll_offset_y)
        if signal.content_height is not None:
            self._content_height = signal.content_height
        self._events.publish(ScrollObserved(signal))
        if not self._jump.busy:
            self._enqueue_compute()
        self._maybe_signal_end(signal)

    def on_content_size(self, content_height: float) -> None:
        self._content_height = content_height

    def set_section_picker_active(self, active: bool) -> None:
        """While the section picker is touched, windows are computed as if scrolling down."""
        self._section_picker_active = bool(active)

    def scroll_to_section(self, section_id: str) -> None:
        """Jump the viewport to a section, or queue the request while a jump runs."""
        if self._closed:
            return
        if self._jump.busy:
            self._jump.queue(section_id)
            return
        self._start_jump(section_id)

    def scroll_without_animation_to(self, offset_y: float) -> None:
        self._host.scroll_to(offset_y, animated=False)

    def render_plan(self) -> RenderPlan:
        return build_render_plan(
            self._geometry,
            self._window,
            self._buffer,
            cache=self._row_cache,
            key_fn=self._key_fn,
        )

    def recompute_now(self, *, force: bool = False) -> WindowStep | None:
        """Run one convergence tick against the latest viewport state."""
        if self._closed:
            return None
        if self._jump.busy:
            self._force_after_jump = self._force_after_jump or force
            return None
        total_rows = self._geometry.row_count()
        if total_rows == 0:
            self._commit(RowWindow.empty())
            return None
        if not self._options.windowing_enabled:
            return None
        first_visible, last_visible = self._geometry.visible_row_range(
            self._scroll_offset_y, self._viewport_height
        )
        at_end = last_visible >= total_rows - 1 and self._window.last_row >= total_rows - 1
        if at_end and not force:
            return None
        direction = ScrollDirection.DOWN if self._section_picker_active else self._direction
        step = compute_rows_to_render(
            WindowRequest(
                scroll_direction=direction,
                first_visible=first_visible,
                last_visible=last_visible,
                first_rendered=self._window.first_row,
                last_rendered=self._window.last_row,
                max_num_to_render=self._options.max_num_to_render,
                page_size=self._options.page_size,
                num_to_render_ahead=self._options.num_to_render_ahead,
                num_to_render_behind=self._options.num_to_render_behind,
                total_rows=total_rows,
            )
        )
        self._commit(step.window)
        if not step.converged:
            self._enqueue_compute()
        return step

    def teardown(self) -> None:
        """Cancel pending work and stop reacting to host signals."""
        if self._closed:
            return
        self._clear_pending_compute()
        if self._jump_task is not None:
            self._scheduler.cancel(self._jump_task)
            self._jump_task = None
        self._jump.reset()
        self._buffer = None
        self._force_after_jump = False
        self._row_cache.clear()
        if self._owns_events and isinstance(self._events, RuntimeEventBus):
            self._events.clear()
        self._closed = True

    def debug_snapshot(self) -> dict[str, object]:
        buffer = self._buffer
        return {
            "phase": str(self._jump.phase),
            "window": [self._window.first_row, self._window.last_row],
            "buffer": None if buffer is None else [buffer.first_row, buffer.last_row],
            "queued_section": self._jump.queued_section,
            "recompute_pending": self._pending_compute.occupied,
            "scroll_offset_y": self._scroll_offset_y,
            "viewport_height": self._viewport_height,
            "direction": str(self._direction),
            "section_picker_active": self._section_picker_active,
            "total_rows": self._geometry.row_count(),
            "timers": self._scheduler.pending_labels(),
            "closed": self._closed,
        }

    def debug_snapshot_json(self) -> str:
        return dumps_text(self.debug_snapshot(), sort_keys=True)

    def _commit(self, window: RowWindow, buffer: RowWindow | None = None) -> None:
        if window == self._window and buffer == self._buffer:
            return
        self._window = window
        self._buffer = buffer
        self._events.publish(WindowCommitted(window=window, buffer=buffer))

    def _enqueue_compute(self) -> None:
        if self._closed or self._pending_compute.occupied:
            return
        task_id = self._scheduler.call_later(
            self._options.increment_delay_seconds, self._run_pending_compute, label="recompute"
        )
        self._pending_compute.put(task_id)

    def _run_pending_compute(self) -> None:
        self._pending_compute.clear()
        self.recompute_now()

    def _clear_pending_compute(self) -> None:
        task_id = self._pending_compute.take()
        if task_id is not None:
            self._scheduler.cancel(task_id)

    def _start_jump(self, section_id: str) -> None:
        start = self._geometry.section_range(section_id)
        self._clear_pending_compute()
        self._jump.begin(section_id)
        buffer = compute_jump_window(
            start.first_row,
            self._options.initial_num_to_render,
            self._geometry.row_count(),
        )
        self._commit(self._window, buffer)
        self._previous_offset_y = self._scroll_offset_y
        self._scroll_offset_y = start.start_y
        self._host.scroll_to(start.start_y, animated=False)
        if self._options.frame_wait_required:
            self._jump_task = self._scheduler.call_later(
                self._options.frame_interval_seconds, self._promote_buffer, label="jump:promote"
            )
        else:
            self._promote_buffer()

    def _promote_buffer(self) -> None:
        self._jump_task = None
        self._jump.buffer_ready()
        buffer = self._buffer if self._buffer is not None else self._window
        self._commit(buffer, None)
        self._jump.promoted()
        next_section = self._take_queued_section()
        if next_section is not None:
            self._start_jump(next_section)
            return
        self._jump_task = self._scheduler.call_later(
            self._options.settle_delay_seconds, self._finish_jump, label="jump:settle"
        )

    def _finish_jump(self) -> None:
        self._jump_task = None
        next_section = self._take_queued_section()
        if next_section is not None:
            self._start_jump(next_section)
            return
        self._jump.settled()
        self._clear_pending_compute()
        if self._force_after_jump:
            self._force_after_jump = False
            self.recompute_now(force=True)
            return
        self._enqueue_compute()

    def _take_queued_section(self) -> str | None:
        section_id = self._jump.take_queued()
        if section_id is None or self._geometry.has_section(section_id):
            return section_id
        _LOG.warning("dropping queued jump to missing section %r", section_id)
        return None

    def _maybe_signal_end(self, signal: ScrollSignal) -> None:
        content_height = self._content_height
        if content_height is None:
            content_height = self._geometry.total_height()
        if signal.offset_y + signal.viewport_height >= content_height:
            self._events.publish(EndReached(signal))
