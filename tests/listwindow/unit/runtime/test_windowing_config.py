from __future__ import annotations

import pytest

from listwindow.runtime.config import (
    WindowingOptions,
    atoz_options,
    load_windowing_options,
    validate_options,
)
from listwindow.runtime.errors import WindowingConfigError


def test_default_options_match_list_defaults() -> None:
    options = load_windowing_options(env={})
    assert options == WindowingOptions()
    assert options.initial_num_to_render == 1
    assert options.max_num_to_render == 20
    assert options.num_to_render_ahead == 4
    assert options.num_to_render_behind == 2
    assert options.page_size == 5
    assert options.increment_delay_ms == 17.0
    assert options.increment_delay_seconds == pytest.approx(0.017)
    assert options.windowing_enabled


def test_load_options_reads_env_overrides_and_clamps() -> None:
    options = load_windowing_options(
        env={
            "LISTWINDOW_MAX_NUM_TO_RENDER": "70",
            "LISTWINDOW_NUM_TO_RENDER_AHEAD": "40",
            "LISTWINDOW_NUM_TO_RENDER_BEHIND": " 4 ",
            "LISTWINDOW_PAGE_SIZE": "0",
            "LISTWINDOW_INCREMENT_DELAY_MS": "not-a-number",
            "LISTWINDOW_FRAME_WAIT": "yes",
        }
    )
    assert options.max_num_to_render == 70
    assert options.num_to_render_ahead == 40
    assert options.num_to_render_behind == 4
    assert options.page_size == 1
    assert options.increment_delay_ms == 17.0
    assert options.frame_wait_required is True


def test_load_options_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("LISTWINDOW_INITIAL_NUM_TO_RENDER", "8")
    monkeypatch.setenv("LISTWINDOW_SETTLE_DELAY_MS", "250")
    options = load_windowing_options()
    assert options.initial_num_to_render == 8
    assert options.settle_delay_seconds == pytest.approx(0.25)


def test_load_options_overlays_on_base() -> None:
    base = atoz_options("android")
    options = load_windowing_options(env={"LISTWINDOW_PAGE_SIZE": "12"}, base=base)
    assert options.page_size == 12
    assert options.max_num_to_render == 70
    assert options.frame_wait_required is True


def test_ahead_budget_violation_is_fatal() -> None:
    with pytest.raises(WindowingConfigError, match="num_to_render_ahead"):
        validate_options(WindowingOptions(max_num_to_render=4, num_to_render_ahead=4))
    with pytest.raises(WindowingConfigError):
        load_windowing_options(env={"LISTWINDOW_NUM_TO_RENDER_AHEAD": "25"})


def test_behind_budget_violation_is_fatal() -> None:
    with pytest.raises(WindowingConfigError, match="num_to_render_behind"):
        validate_options(WindowingOptions(max_num_to_render=5, num_to_render_behind=7))


def test_negative_sizes_are_rejected() -> None:
    with pytest.raises(WindowingConfigError):
        validate_options(WindowingOptions(initial_num_to_render=-1))
    with pytest.raises(WindowingConfigError):
        validate_options(WindowingOptions(page_size=0))


def test_atoz_preset_depends_on_platform() -> None:
    ios = atoz_options("ios")
    android = atoz_options("Android")
    assert ios.page_size == 15
    assert ios.frame_wait_required is False
    assert android.page_size == 8
    assert android.frame_wait_required is True
    assert ios.initial_num_to_render == 8
    assert ios.num_to_render_ahead == 40
    assert ios.num_to_render_behind == 4


def test_initial_window_must_fit_render_budget() -> None:
    with pytest.raises(WindowingConfigError, match="initial_num_to_render"):
        validate_options(WindowingOptions(initial_num_to_render=30, max_num_to_render=20))
    with pytest.raises(WindowingConfigError, match="initial_num_to_render"):
        validate_options(WindowingOptions(initial_num_to_render=20, max_num_to_render=20))
    assert validate_options(WindowingOptions(initial_num_to_render=19, max_num_to_render=20))
