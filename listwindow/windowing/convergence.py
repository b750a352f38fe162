"""One convergence tick of the rendered row window.

Each tick moves the rendered window toward an ideal target. The edge that
leads in the scroll direction grows by at most ``page_size`` rows past the
visible rows per tick, so large jumps are spread over several ticks. The
visible rows themselves are never held back by ``page_size``.

Scrolling down, the first row is derived directly from the new last row and
is not step-bounded. Scrolling up is not a perfect mirror of that: the first
row is step-bounded and the last row only shrinks to honour the budget.
"""

from __future__ import annotations

from listwindow.api.window import ScrollDirection, WindowRequest, WindowStep
from listwindow.runtime.errors import WindowingConfigError


def compute_rows_to_render(request: WindowRequest) -> WindowStep:
    """Return the next window and the target it is converging toward."""
    if request.num_to_render_ahead >= request.max_num_to_render:
        raise WindowingConfigError("num_to_render_ahead must be less than max_num_to_render")
    if request.total_rows <= 0:
        return WindowStep(first_row=0, last_row=-1, target_first_row=0, target_last_row=-1)

    if request.scroll_direction is ScrollDirection.DOWN:
        last_row, target_last_row = _last_row_scrolling_down(request)
        first_row = target_first_row = _first_row_scrolling_down(request, last_row)
    else:
        first_row, target_first_row = _first_row_scrolling_up(request)
        last_row = target_last_row = _last_row_scrolling_up(request, first_row)

    return WindowStep(
        first_row=first_row,
        last_row=last_row,
        target_first_row=target_first_row,
        target_last_row=target_last_row,
    )


def _last_row_scrolling_down(request: WindowRequest) -> tuple[int, int]:
    lead = request.num_to_render_ahead - request.num_to_render_behind
    last_visible = min(request.last_visible, request.total_rows - 1)
    ideal = min(
        request.last_visible + lead,
        # Grow from the current size rather than jumping straight to the ahead budget.
        request.first_visible + request.num_rendered + lead,
    )
    target_last_row = min(request.total_rows - 1, max(last_visible, ideal))
    last_row = min(target_last_row, max(last_visible, request.last_rendered + request.page_size))
    return last_row, target_last_row


def _first_row_scrolling_down(request: WindowRequest, last_row: int) -> int:
    return max(
        0,
        request.first_visible - request.num_to_render_behind,
        last_row - request.max_num_to_render + 1,
    )


def _first_row_scrolling_up(request: WindowRequest) -> tuple[int, int]:
    lead = request.num_to_render_ahead - request.num_to_render_behind
    first_visible = max(0, min(request.first_visible, request.total_rows - 1))
    target_first_row = max(0, min(first_visible, request.first_visible - lead))
    first_row = max(target_first_row, min(first_visible, request.first_rendered - request.page_size))
    return first_row, target_first_row


def _last_row_scrolling_up(request: WindowRequest, first_row: int) -> int:
    last_visible = min(request.last_visible, request.total_rows - 1)
    last_row = min(request.total_rows - 1, max(request.last_rendered, last_visible))
    if last_row - first_row + 1 > request.max_num_to_render:
        last_row = first_row + request.max_num_to_render - 1
    return last_row
