"""Virtual-clock timer queue for deferred windowing work.

The host drives the clock, either with frame deltas through `advance` or
with readings of its own monotonic clock through `run_due`. Callbacks only
ever run inside those calls, so window commits stay on the host's thread.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from heapq import heappop, heappush

TimerCallback = Callable[[], None]


@dataclass(order=True, slots=True)
class _Timer:
    due_seconds: float
    timer_id: int
    label: str = field(compare=False)
    callback: TimerCallback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class Scheduler:
    """One-shot timers ordered by due time, then by scheduling order."""

    def __init__(self, *, start_seconds: float = 0.0) -> None:
        self._now_seconds = start_seconds
        self._next_timer_id = 1
        self._heap: list[_Timer] = []
        self._live: dict[int, _Timer] = {}

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        return len(self._live)

    @property
    def next_due_seconds(self) -> float | None:
        """Due time of the earliest live timer, for hosts that sleep between frames."""
        if not self._live:
            return None
        return min(timer.due_seconds for timer in self._live.values())

    def is_pending(self, task_id: int) -> bool:
        return task_id in self._live

    def pending_labels(self) -> list[str]:
        return [timer.label for timer in sorted(self._live.values())]

    def call_later(
        self, delay_seconds: float, callback: TimerCallback, *, label: str = "task"
    ) -> int:
        """Run `callback` once the clock has moved `delay_seconds` past now."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        timer = _Timer(
            due_seconds=self._now_seconds + delay_seconds,
            timer_id=self._next_timer_id,
            label=label,
            callback=callback,
        )
        self._next_timer_id += 1
        self._live[timer.timer_id] = timer
        heappush(self._heap, timer)
        return timer.timer_id

    def cancel(self, task_id: int) -> bool:
        """Cancel a live timer; returns False when it already ran or was cancelled."""
        timer = self._live.pop(task_id, None)
        if timer is None:
            return False
        timer.cancelled = True
        return True

    def advance(self, delta_seconds: float) -> int:
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Move the clock to `now_seconds` and run every timer due by then.

        Timers scheduled with a zero delay while draining run in the same
        pass. Returns the number of callbacks executed.
        """
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        executed = 0
        while self._heap and self._heap[0].due_seconds <= now_seconds:
            timer = heappop(self._heap)
            if timer.cancelled:
                continue
            del self._live[timer.timer_id]
            timer.callback()
            executed += 1
        return executed


__all__ = ["Scheduler", "TimerCallback"]
