"""Spacer and row layout for the materialized part of the list."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from listwindow.api.window import RowWindow
from listwindow.geometry.index import GeometryIndex, Row

KeyFunction = Callable[[object], str | None]

SPACER_TOP_KEY = "sp-top"
SPACER_MID_KEY = "sp-mid"
SPACER_BOTTOM_KEY = "sp-bot"


@dataclass(frozen=True, slots=True)
class Spacer:
    key: str
    height: float


@dataclass(frozen=True, slots=True)
class RowSlot:
    """One row the host must materialize."""

    index: int
    key: str
    section_id: str
    payload: object | None
    is_header: bool
    changed: bool


RenderItem: TypeAlias = Spacer | RowSlot


@dataclass(frozen=True, slots=True)
class RenderPlan:
    items: tuple[RenderItem, ...]
    spacer_top: float
    spacer_bottom: float
    spacer_mid: float | None = None

    def row_slots(self) -> tuple[RowSlot, ...]:
        return tuple(item for item in self.items if isinstance(item, RowSlot))

    def row_indices(self) -> tuple[int, ...]:
        return tuple(item.index for item in self.items if isinstance(item, RowSlot))

    @property
    def content_height(self) -> float:
        """Height of spacers only; rows add their own height on the host."""
        return sum(item.height for item in self.items if isinstance(item, Spacer))


class RowCache:
    """Remembers the payload last planned for each row key."""

    def __init__(self) -> None:
        self._payloads: dict[str, object | None] = {}

    def __len__(self) -> int:
        return len(self._payloads)

    def swap(self, key: str, payload: object | None) -> bool:
        """Record payload for key and return whether it differs from the cached one."""
        missing = key not in self._payloads
        changed = missing or self._payloads[key] is not payload
        self._payloads[key] = payload
        return changed

    def clear(self) -> None:
        self._payloads.clear()


def row_key(row: Row, key_fn: KeyFunction | None = None) -> str:
    """Stable key for a row; payload-derived when `key_fn` yields one.

    Headers are `h:<len>:<section>`, cells `c:<len>:<section>:k:<key>` or
    `c:<len>:<section>:i:<index>`. The length prefix keeps section ids
    containing `:` from forging another row's key.
    """
    section = f"{len(row.section_id)}:{row.section_id}"
    if row.is_header:
        return f"h:{section}"
    if key_fn is not None:
        custom = key_fn(row.payload)
        if custom:
            return f"c:{section}:k:{custom}"
    return f"c:{section}:i:{row.index}"


def build_render_plan(
    geometry: GeometryIndex,
    window: RowWindow,
    buffer: RowWindow | None = None,
    *,
    cache: RowCache | None = None,
    key_fn: KeyFunction | None = None,
) -> RenderPlan:
    """Lay out rows and spacers for the main window and an optional jump buffer.

    A buffer lying wholly before the main window is drawn without the spacer
    between the two; the main window replaces it on the next commit.
    """
    row_cache = cache if cache is not None else RowCache()
    total_height = geometry.total_height()

    def slots(span: RowWindow) -> list[RenderItem]:
        items: list[RenderItem] = []
        for index in span.rows():
            row = geometry.row_at(index)
            key = row_key(row, key_fn)
            items.append(
                RowSlot(
                    index=index,
                    key=key,
                    section_id=row.section_id,
                    payload=row.payload,
                    is_header=row.is_header,
                    changed=row_cache.swap(key, row.payload),
                )
            )
        return items

    if window.is_empty and (buffer is None or buffer.is_empty):
        top = geometry.offset_before_row(window.first_row)
        return _plan([], top, total_height - top)

    if buffer is None or buffer.is_empty:
        top = geometry.offset_before_row(window.first_row)
        bottom = geometry.offset_after_row(window.last_row)
        return _plan(slots(window), top, bottom)

    if window.is_empty or window.overlaps(buffer):
        span = _union(window, buffer)
        top = geometry.offset_before_row(span.first_row)
        bottom = geometry.offset_after_row(span.last_row)
        return _plan(slots(span), top, bottom)

    if buffer.last_row < window.first_row:
        clamped = RowWindow(buffer.first_row, min(buffer.last_row, window.first_row - 1))
        top = geometry.offset_before_row(clamped.first_row)
        bottom = geometry.offset_after_row(window.last_row)
        return _plan(slots(clamped) + slots(window), top, bottom)

    mid = geometry.height_between(window.last_row, buffer.first_row)
    top = geometry.offset_before_row(window.first_row)
    bottom = geometry.offset_after_row(buffer.last_row)
    return _plan(slots(window), top, bottom, mid=mid, tail=slots(buffer))


def _union(window: RowWindow, buffer: RowWindow) -> RowWindow:
    if window.is_empty:
        return buffer
    return RowWindow(
        first_row=min(window.first_row, buffer.first_row),
        last_row=max(window.last_row, buffer.last_row),
    )


def _plan(
    rows: list[RenderItem],
    top: float,
    bottom: float,
    *,
    mid: float | None = None,
    tail: list[RenderItem] | None = None,
) -> RenderPlan:
    items: list[RenderItem] = [Spacer(SPACER_TOP_KEY, top), *rows]
    if mid is not None:
        items.append(Spacer(SPACER_MID_KEY, mid))
    if tail:
        items.extend(tail)
    items.append(Spacer(SPACER_BOTTOM_KEY, bottom))
    return RenderPlan(items=tuple(items), spacer_top=top, spacer_bottom=bottom, spacer_mid=mid)
