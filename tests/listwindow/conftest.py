from __future__ import annotations

from dataclasses import dataclass, field
from string import ascii_uppercase
from typing import TypeVar

from listwindow.geometry.index import GeometryIndex

T = TypeVar("T")


@dataclass(slots=True)
class FakeViewportHost:
    calls: list[tuple[float, bool]] = field(default_factory=list)

    def scroll_to(self, offset_y: float, *, animated: bool = False) -> None:
        self.calls.append((offset_y, animated))

    @property
    def last_offset(self) -> float | None:
        return self.calls[-1][0] if self.calls else None


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[object] = []

    def __call__(self, event: object) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[T]) -> list[T]:
        return [event for event in self.events if isinstance(event, event_type)]


def small_data() -> dict[str, list[str]]:
    return {"A": ["a0", "a1", "a2"], "B": ["b0", "b1"]}


def small_geometry() -> GeometryIndex:
    return GeometryIndex(header_height=20, cell_height=50).build(small_data())


def letter_data(cells_per_section: int = 40, letters: str = ascii_uppercase) -> dict[str, list[str]]:
    return {
        letter: [f"{letter.lower()}{index}" for index in range(cells_per_section)]
        for letter in letters
    }


def letter_geometry(cells_per_section: int = 40, letters: str = ascii_uppercase) -> GeometryIndex:
    return GeometryIndex(header_height=35, cell_height=95).build(
        letter_data(cells_per_section, letters)
    )
