"""Window value types shared by the controller and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ScrollDirection(StrEnum):
    DOWN = "down"
    UP = "up"

    @classmethod
    def from_offsets(cls, previous_y: float, current_y: float) -> ScrollDirection:
        """Derive direction from successive offsets; no movement counts as down."""
        return cls.DOWN if current_y - previous_y >= 0 else cls.UP


@dataclass(frozen=True, slots=True)
class RowWindow:
    """Inclusive row range; empty when `last_row == first_row - 1`."""

    first_row: int
    last_row: int

    @classmethod
    def empty(cls) -> RowWindow:
        return cls(first_row=0, last_row=-1)

    @property
    def count(self) -> int:
        return max(0, self.last_row - self.first_row + 1)

    @property
    def is_empty(self) -> bool:
        return self.last_row < self.first_row

    def contains(self, row: int) -> bool:
        return self.first_row <= row <= self.last_row

    def overlaps(self, other: RowWindow) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return self.first_row <= other.last_row and other.first_row <= self.last_row

    def rows(self) -> range:
        return range(self.first_row, self.last_row + 1)


@dataclass(frozen=True, slots=True)
class ScrollSignal:
    """Viewport geometry reported by the host on scroll."""

    offset_y: float
    viewport_height: float
    content_height: float | None = None


@dataclass(frozen=True, slots=True)
class WindowRequest:
    """Inputs of one convergence tick."""

    scroll_direction: ScrollDirection
    first_visible: int
    last_visible: int
    first_rendered: int
    last_rendered: int
    max_num_to_render: int
    page_size: int
    num_to_render_ahead: int
    num_to_render_behind: int
    total_rows: int

    @property
    def num_rendered(self) -> int:
        return self.last_rendered - self.first_rendered + 1


@dataclass(frozen=True, slots=True)
class WindowStep:
    """Result of one convergence tick: the next window and its ideal target."""

    first_row: int
    last_row: int
    target_first_row: int
    target_last_row: int

    @property
    def converged(self) -> bool:
        return self.first_row == self.target_first_row and self.last_row == self.target_last_row

    @property
    def window(self) -> RowWindow:
        return RowWindow(first_row=self.first_row, last_row=self.last_row)

    @property
    def target(self) -> RowWindow:
        return RowWindow(first_row=self.target_first_row, last_row=self.target_last_row)
