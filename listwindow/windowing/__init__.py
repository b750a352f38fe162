"""Row window convergence, section jumps and render planning."""

from listwindow.windowing.controller import WindowController
from listwindow.windowing.convergence import compute_rows_to_render
from listwindow.windowing.jump import JumpPhase, SectionJumpMachine, compute_jump_window
from listwindow.windowing.render_plan import (
    RenderPlan,
    RowCache,
    RowSlot,
    Spacer,
    build_render_plan,
    row_key,
)

__all__ = [
    "JumpPhase",
    "RenderPlan",
    "RowCache",
    "RowSlot",
    "SectionJumpMachine",
    "Spacer",
    "WindowController",
    "build_render_plan",
    "compute_jump_window",
    "compute_rows_to_render",
    "row_key",
]
