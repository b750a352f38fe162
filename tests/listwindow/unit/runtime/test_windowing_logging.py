from __future__ import annotations

import json
import logging

from listwindow.api.logging import LoggingConfig
from listwindow.runtime.logging import (
    JsonFormatter,
    configure_logging,
    resolve_log_level_name,
    setup_logging,
    shutdown_logging,
)


def _preserve_root():
    root = logging.getLogger()
    return root, list(root.handlers), root.level


def _restore_root(root, handlers, level) -> None:
    root.handlers.clear()
    root.handlers.extend(handlers)
    root.setLevel(level)


def test_setup_logging_adds_handler_when_missing(monkeypatch) -> None:
    root, handlers, level = _preserve_root()
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("LISTWINDOW_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        _restore_root(root, handlers, level)


def test_setup_logging_does_not_override_existing_handlers() -> None:
    root, handlers, level = _preserve_root()
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        _restore_root(root, handlers, level)


def test_resolve_log_level_prefers_package_prefix(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LISTWINDOW_LOG_LEVEL", "error")
    assert resolve_log_level_name() == "ERROR"
    monkeypatch.delenv("LISTWINDOW_LOG_LEVEL")
    assert resolve_log_level_name() == "WARNING"


def test_json_formatter_keeps_extra_fields() -> None:
    record = logging.LogRecord(
        name="listwindow.windowing.jump",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="section jump %s -> %s",
        args=("idle", "buffering"),
        exc_info=None,
    )
    record.section_id = "B"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "listwindow.windowing.jump"
    assert payload["msg"] == "section jump idle -> buffering"
    assert payload["fields"] == {"section_id": "B"}


def test_configure_logging_with_file_sink_writes_json(tmp_path) -> None:
    root, handlers, level = _preserve_root()
    log_path = tmp_path / "logs" / "windowing.jsonl"
    try:
        configure_logging(LoggingConfig(level_name="INFO", file_path=str(log_path)))
        logging.getLogger("listwindow.test").info("window committed", extra={"first_row": 4})
        shutdown_logging()
        line = log_path.read_text(encoding="utf-8").strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["msg"] == "window committed"
        assert payload["fields"]["first_row"] == 4
    finally:
        shutdown_logging()
        _restore_root(root, handlers, level)
