"""Row index <-> pixel offset mapping for sectioned, fixed-row-height lists.

Section headers and cells are flattened into one row sequence:

    {"A": [a0, a1], "B": [b0]}  ->  [A-header, a0, a1, B-header, b0]

Every row of a section shares the section's cell height; the header row has
its own height. Offsets are derived from a per-section table of cumulative
``start_y``/``end_y`` values, so lookups cost one section search instead of a
walk over rows.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from listwindow.runtime.errors import InvalidRangeError, RowIndexError, UnknownSectionError

_LOG = logging.getLogger(__name__)

HeightProvider = float | Callable[[str], float]


@dataclass(frozen=True, slots=True)
class Row:
    """One header or cell row of the flattened sequence."""

    index: int
    section_id: str
    payload: object | None = None
    is_header: bool = False


@dataclass(frozen=True, slots=True)
class SectionEntry:
    """Row range and pixel span of one section, header first."""

    section_id: str
    first_row: int
    last_row: int
    header_height: float
    cell_height: float
    total_height: float
    start_y: float
    end_y: float

    @property
    def row_count(self) -> int:
        return self.last_row - self.first_row + 1

    @property
    def cell_count(self) -> int:
        return self.last_row - self.first_row

    def contains_row(self, row: int) -> bool:
        return self.first_row <= row <= self.last_row


@dataclass(frozen=True, slots=True)
class SectionStart:
    """Where a section begins, by row and by pixel."""

    first_row: int
    start_y: float


@dataclass(frozen=True, slots=True)
class _Layout:
    rows: tuple[Row, ...]
    sections: tuple[SectionEntry, ...]
    by_id: Mapping[str, SectionEntry]
    first_rows: tuple[int, ...]
    start_ys: tuple[float, ...]

    @property
    def total_height(self) -> float:
        if not self.sections:
            return 0.0
        return self.sections[-1].end_y


_EMPTY_LAYOUT = _Layout(rows=(), sections=(), by_id={}, first_rows=(), start_ys=())


def _resolve_height(provider: HeightProvider, section_id: str) -> float:
    if callable(provider):
        return float(provider(section_id))
    return float(provider)


class GeometryIndex:
    """Flattened row sequence plus per-section offset table."""

    def __init__(self, *, header_height: HeightProvider, cell_height: HeightProvider) -> None:
        self._header_height = header_height
        self._cell_height = cell_height
        self._layout = _EMPTY_LAYOUT

    def build(
        self,
        sectioned_data: Mapping[str, Sequence[object]],
        section_order: Iterable[str] | None = None,
    ) -> GeometryIndex:
        """Replace rows and section table from `{section_id: [payload, ...]}`.

        Ids named in `section_order` but missing from the data are skipped.
        """
        order = list(sectioned_data.keys()) if section_order is None else list(section_order)
        rows: list[Row] = []
        sections: list[SectionEntry] = []
        seen: set[str] = set()
        cumulative = 0.0
        for section_id in order:
            if section_id in seen or section_id not in sectioned_data:
                continue
            seen.add(section_id)
            cells = sectioned_data[section_id]
            header_height = _resolve_height(self._header_height, section_id)
            cell_height = _resolve_height(self._cell_height, section_id)
            first_row = len(rows)
            rows.append(Row(index=first_row, section_id=section_id, is_header=True))
            for payload in cells:
                rows.append(Row(index=len(rows), section_id=section_id, payload=payload))
            section_height = header_height + cell_height * len(cells)
            sections.append(
                SectionEntry(
                    section_id=section_id,
                    first_row=first_row,
                    last_row=len(rows) - 1,
                    header_height=header_height,
                    cell_height=cell_height,
                    total_height=section_height,
                    start_y=cumulative,
                    end_y=cumulative + section_height,
                )
            )
            cumulative += section_height
        self._layout = _Layout(
            rows=tuple(rows),
            sections=tuple(sections),
            by_id={entry.section_id: entry for entry in sections},
            first_rows=tuple(entry.first_row for entry in sections),
            start_ys=tuple(entry.start_y for entry in sections),
        )
        _LOG.debug(
            "geometry rebuilt",
            extra={"rows": len(rows), "sections": len(sections), "total_height": cumulative},
        )
        return self

    def row_count(self) -> int:
        return len(self._layout.rows)

    def total_height(self) -> float:
        return self._layout.total_height

    def sections(self) -> tuple[SectionEntry, ...]:
        return self._layout.sections

    @property
    def section_ids(self) -> tuple[str, ...]:
        """Section ids in the order they were built."""
        return tuple(entry.section_id for entry in self._layout.sections)

    def row_at(self, i: int) -> Row:
        rows = self._layout.rows
        if i < 0 or i >= len(rows):
            raise RowIndexError(i, len(rows))
        return rows[i]

    def section_for_row(self, i: int) -> SectionEntry:
        """Return the section owning row `i`."""
        layout = self._layout
        if i < 0 or i >= len(layout.rows):
            raise RowIndexError(i, len(layout.rows))
        return layout.sections[bisect_right(layout.first_rows, i) - 1]

    def section_id_of(self, i: int) -> str:
        return self.section_for_row(i).section_id

    def row_height(self, i: int) -> float:
        section = self.section_for_row(i)
        if i == section.first_row:
            return section.header_height
        return section.cell_height

    def offset_before_row(self, i: int) -> float:
        """Cumulative height of rows strictly before `i`, clamped to `[0, row_count]`."""
        if i <= 0:
            return 0.0
        if i >= self.row_count():
            return self.total_height()
        section = self.section_for_row(i)
        if i == section.first_row:
            return section.start_y
        return section.start_y + section.header_height + (i - section.first_row - 1) * section.cell_height

    def offset_after_row(self, i: int) -> float:
        return self.total_height() - self.offset_before_row(i) - self.row_height(i)

    def height_between(self, i: int, ii: int) -> float:
        """Height of the rows strictly between `i` and `ii`."""
        if ii <= i:
            _LOG.warning("height_between called with non-increasing bounds (%d, %d)", i, ii)
            raise InvalidRangeError(i, ii)
        return self.offset_before_row(ii) - self.offset_before_row(i + 1)

    def row_at_offset(self, y: float) -> int:
        """Row whose pixel span holds `y`; out-of-range offsets clamp to the ends."""
        layout = self._layout
        if y < 0 or not layout.rows:
            return 0
        if y > layout.total_height:
            return len(layout.rows) - 1
        # Zero-height sections share a start with their successor; bisect_right skips them.
        owner = layout.sections[bisect_right(layout.start_ys, y) - 1]
        relative_y = y - owner.start_y
        if relative_y < owner.header_height or owner.cell_count == 0:
            return owner.first_row
        if owner.cell_height <= 0:
            return owner.last_row
        cell = int((relative_y - owner.header_height) // owner.cell_height)
        return min(owner.first_row + 1 + cell, owner.last_row)

    def visible_row_range(self, scroll_y: float, viewport_height: float) -> tuple[int, int]:
        """Rows intersecting the viewport; the trailing row is over-included by one."""
        row_count = self.row_count()
        if row_count == 0:
            return 0, -1
        first_visible = self.row_at_offset(scroll_y)
        last_visible = min(self.row_at_offset(scroll_y + viewport_height) + 1, row_count - 1)
        return first_visible, last_visible

    def has_section(self, section_id: str) -> bool:
        return section_id in self._layout.by_id

    def section_entry(self, section_id: str) -> SectionEntry:
        entry = self._layout.by_id.get(section_id)
        if entry is None:
            raise UnknownSectionError(section_id)
        return entry

    def section_range(self, section_id: str) -> SectionStart:
        entry = self.section_entry(section_id)
        return SectionStart(first_row=entry.first_row, start_y=entry.start_y)

    def section_height(self, section_id: str) -> float:
        return self.section_entry(section_id).total_height

    def section_lengths(self) -> list[int]:
        """Row count per section, header included."""
        return [entry.row_count for entry in self._layout.sections]
