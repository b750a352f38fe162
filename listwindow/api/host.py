"""Host-facing contracts consumed by the window controller."""

from __future__ import annotations

from typing import Protocol


class ViewportHost(Protocol):
    """Capability to move the host viewport."""

    def scroll_to(self, offset_y: float, *, animated: bool = False) -> None:
        """Move the viewport to a vertical pixel offset."""


class NullViewportHost:
    """Viewport stand-in for controllers that are not mounted yet."""

    def scroll_to(self, offset_y: float, *, animated: bool = False) -> None:
        return None
