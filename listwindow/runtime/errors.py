"""Windowing exception types."""

from __future__ import annotations


class WindowingError(Exception):
    """Base class for windowing failures."""


class WindowingConfigError(WindowingError, ValueError):
    """Options violate a rendering budget invariant; the controller refuses to run."""


class RowIndexError(WindowingError, IndexError):
    """Row index outside the flattened row sequence."""

    def __init__(self, index: int, row_count: int) -> None:
        super().__init__(f"row index {index} outside [0, {row_count})")
        self.index = index
        self.row_count = row_count


class UnknownSectionError(WindowingError, KeyError):
    """Section identifier not present in the geometry index."""

    def __init__(self, section_id: str) -> None:
        super().__init__(section_id)
        self.section_id = section_id

    def __str__(self) -> str:
        return f"unknown section: {self.section_id!r}"


class InvalidRangeError(WindowingError, ValueError):
    """Row range whose upper bound does not exceed its lower bound."""

    def __init__(self, lower: int, upper: int) -> None:
        super().__init__(f"provide a lower index below the upper index: got ({lower}, {upper})")
        self.lower = lower
        self.upper = upper
