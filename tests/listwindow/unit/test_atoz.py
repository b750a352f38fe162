from __future__ import annotations

from listwindow.api.window import RowWindow
from listwindow.atoz import AtoZList, group_by_initial
from listwindow.windowing.jump import JumpPhase
from tests.listwindow.conftest import FakeViewportHost, letter_data


def test_group_by_initial_keeps_first_seen_order() -> None:
    groups = group_by_initial(["bob", "Alice", "", "ann", "Bea"])
    assert list(groups) == ["B", "A"]
    assert groups["A"] == ["Alice", "ann"]
    assert groups["B"] == ["bob", "Bea"]


def test_preset_depends_on_platform() -> None:
    ios = AtoZList(letter_data(5, "AB"))
    android = AtoZList(letter_data(5, "AB"), platform="android")

    assert ios.controller.options.page_size == 15
    assert not ios.controller.options.frame_wait_required
    assert android.controller.options.page_size == 8
    assert android.controller.options.frame_wait_required
    assert ios.controller.window == RowWindow(0, 8)


def test_alphabet_follows_data_order() -> None:
    atoz = AtoZList({"C": ["c0"], "A": ["a0"]})
    assert atoz.alphabet == ("C", "A")
    assert atoz.controller.geometry.section_ids == ("C", "A")


def test_set_data_ignores_identical_object() -> None:
    data = letter_data(5, "AB")
    atoz = AtoZList(data)
    assert atoz.set_data(data) is False

    replacement = letter_data(5, "ABC")
    assert atoz.set_data(replacement) is True
    assert atoz.alphabet == ("A", "B", "C")
    assert atoz.controller.geometry.row_count() == 18


def test_touching_a_letter_jumps_to_its_section() -> None:
    host = FakeViewportHost()
    atoz = AtoZList(letter_data(40, "ABCD"), host=host)

    atoz.on_touch_letter("C")

    geometry = atoz.controller.geometry
    start = geometry.section_range("C")
    assert host.calls == [(start.start_y, False)]
    assert atoz.controller.window.first_row == start.first_row
    assert atoz.controller.jump_phase is JumpPhase.SETTLING


def test_picker_touch_flag_reaches_controller() -> None:
    atoz = AtoZList(letter_data(5, "AB"))
    atoz.set_picker_touched(True)
    assert atoz.controller.debug_snapshot()["section_picker_active"] is True
    atoz.teardown()
    assert atoz.controller.closed
