"""Buffered section-jump state machine."""

from __future__ import annotations

import logging
from enum import StrEnum

from listwindow.api.flow import FlowContext, FlowMachine, FlowTransition, create_flow_machine
from listwindow.api.window import RowWindow
from listwindow.runtime.slot import SingleSlot

_LOG = logging.getLogger(__name__)


class JumpPhase(StrEnum):
    IDLE = "idle"
    BUFFERING = "buffering"
    JUMPING = "jumping"
    SETTLING = "settling"


class JumpTrigger(StrEnum):
    REQUEST = "request"
    BUFFER_READY = "buffer_ready"
    PROMOTED = "promoted"
    SETTLED = "settled"
    RESET = "reset"


def compute_jump_window(first_row: int, initial_num_to_render: int, total_rows: int) -> RowWindow:
    """Buffer window starting at `first_row`; pulled back when it hits the list end."""
    last_index = total_rows - 1
    window_first = first_row
    window_last = min(last_index, first_row + initial_num_to_render)
    if window_last == last_index:
        window_first = max(0, window_last - initial_num_to_render)
    return RowWindow(first_row=window_first, last_row=window_last)


class SectionJumpMachine:
    """Phase tracking for one controller's section jumps, plus the queued next request."""

    def __init__(self) -> None:
        self._flow: FlowMachine[JumpPhase] = create_flow_machine(JumpPhase.IDLE)
        self._queued: SingleSlot[str] = SingleSlot()
        self._target: str | None = None
        for trigger, sources, target in (
            (JumpTrigger.REQUEST, {JumpPhase.IDLE, JumpPhase.SETTLING}, JumpPhase.BUFFERING),
            (JumpTrigger.BUFFER_READY, {JumpPhase.BUFFERING}, JumpPhase.JUMPING),
            (JumpTrigger.PROMOTED, {JumpPhase.JUMPING}, JumpPhase.SETTLING),
            (JumpTrigger.SETTLED, {JumpPhase.SETTLING}, JumpPhase.IDLE),
            (JumpTrigger.RESET, None, JumpPhase.IDLE),
        ):
            self._flow.add_transition(
                FlowTransition(
                    trigger=trigger,
                    target=target,
                    sources=None if sources is None else frozenset(sources),
                    on_enter=self._log_transition,
                )
            )

    @property
    def phase(self) -> JumpPhase:
        return self._flow.state

    @property
    def busy(self) -> bool:
        return self._flow.state is not JumpPhase.IDLE

    @property
    def target_section(self) -> str | None:
        return self._target

    @property
    def queued_section(self) -> str | None:
        return self._queued.peek()

    def queue(self, section_id: str) -> None:
        """Remember the newest request made while busy."""
        displaced = self._queued.put(section_id)
        _LOG.debug(
            "section jump queued",
            extra={"section_id": section_id, "displaced": displaced, "phase": str(self.phase)},
        )

    def take_queued(self) -> str | None:
        return self._queued.take()

    def begin(self, section_id: str) -> None:
        self._advance(JumpTrigger.REQUEST, section_id)
        self._target = section_id

    def buffer_ready(self) -> None:
        self._advance(JumpTrigger.BUFFER_READY, self._target)

    def promoted(self) -> None:
        self._advance(JumpTrigger.PROMOTED, self._target)

    def settled(self) -> None:
        self._advance(JumpTrigger.SETTLED, self._target)
        self._target = None

    def reset(self) -> None:
        self._queued.clear()
        self._flow.fire(JumpTrigger.RESET)
        self._target = None

    def _advance(self, trigger: JumpTrigger, section_id: str | None) -> None:
        if not self._flow.fire(trigger, payload=section_id):
            raise RuntimeError(f"invalid section jump transition {trigger} from {self.phase}")

    @staticmethod
    def _log_transition(context: FlowContext[JumpPhase]) -> None:
        _LOG.debug(
            "section jump %s -> %s",
            context.source,
            context.target,
            extra={"trigger": context.trigger, "section_id": context.payload},
        )
