"""A-to-Z contact-style list: letter sections over a windowed list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from listwindow.api.events import EventBus
from listwindow.api.host import ViewportHost
from listwindow.geometry.index import GeometryIndex
from listwindow.runtime.config import WindowingOptions, atoz_options
from listwindow.runtime.scheduler import Scheduler
from listwindow.windowing.controller import WindowController
from listwindow.windowing.render_plan import KeyFunction

DEFAULT_SECTION_HEADER_HEIGHT = 35.0
DEFAULT_CELL_HEIGHT = 95.0


def group_by_initial(names: Iterable[str]) -> dict[str, list[str]]:
    """Group names by their upper-cased first character, keeping first-seen order."""
    groups: dict[str, list[str]] = {}
    for name in names:
        if not name:
            continue
        groups.setdefault(name[0].upper(), []).append(name)
    return groups


class AtoZList:
    """Window controller preset for letter-sectioned lists with a letter picker."""

    def __init__(
        self,
        data: Mapping[str, Sequence[object]],
        *,
        section_header_height: float = DEFAULT_SECTION_HEADER_HEIGHT,
        cell_height: float = DEFAULT_CELL_HEIGHT,
        platform: str = "ios",
        options: WindowingOptions | None = None,
        scheduler: Scheduler | None = None,
        host: ViewportHost | None = None,
        events: EventBus | None = None,
        key_fn: KeyFunction | None = None,
    ) -> None:
        self._data = data
        geometry = GeometryIndex(
            header_height=section_header_height or DEFAULT_SECTION_HEADER_HEIGHT,
            cell_height=cell_height or DEFAULT_CELL_HEIGHT,
        ).build(data)
        self._controller = WindowController(
            geometry,
            options=options if options is not None else atoz_options(platform),
            scheduler=scheduler,
            host=host,
            events=events,
            key_fn=key_fn,
        )

    @property
    def controller(self) -> WindowController:
        return self._controller

    @property
    def alphabet(self) -> tuple[str, ...]:
        """Letters shown by the section picker, in list order."""
        return tuple(self._data.keys())

    def set_data(self, data: Mapping[str, Sequence[object]]) -> bool:
        """Swap in new data; returns False when the same object is passed again."""
        if data is self._data:
            return False
        self._data = data
        self._controller.set_data(data)
        return True

    def on_touch_letter(self, letter: str) -> None:
        self._controller.scroll_to_section(letter)

    def set_picker_touched(self, touched: bool) -> None:
        self._controller.set_section_picker_active(touched)

    def teardown(self) -> None:
        self._controller.teardown()
