from __future__ import annotations

import logging

import orjson

from termview.api.logging import LoggingConfig
from termview.runtime.config import load_runtime_config
from termview.runtime.errors import log_recoverable
from termview.runtime.logging import (
    RUNTIME_LOGGER_NAMES,
    JsonFormatter,
    apply_runtime_logger_levels,
    configure_logging,
    get_logger,
    runtime_logger_levels,
    setup_logging,
    shutdown_logging,
)


def test_setup_logging_adds_handler_when_missing(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("TERMVIEW_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_preserves_extra_fields() -> None:
    record = logging.LogRecord(
        name="termview.modal",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="modal_exit depth=%d",
        args=(2,),
        exc_info=None,
    )
    record.view = "Dialog"
    payload = orjson.loads(JsonFormatter().format(record))
    assert payload["logger"] == "termview.modal"
    assert payload["msg"] == "modal_exit depth=2"
    assert payload["fields"] == {"view": "Dialog"}


def test_log_recoverable_attaches_exception(caplog) -> None:
    logger = get_logger("termview.app")
    with caplog.at_level(logging.WARNING, logger="termview.app"):
        try:
            raise OSError("tty gone")
        except OSError:
            log_recoverable(logger, "terminal_poll_failed", level=logging.WARNING)
    assert caplog.records[-1].exc_info is not None
    assert caplog.records[-1].getMessage() == "terminal_poll_failed"


def test_file_sink_streams_json_lines_through_listener(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_path = tmp_path / "logs" / "session.jsonl"
    try:
        configure_logging(
            LoggingConfig(level_name="INFO", file_path=str(log_path), file_format="json"),
            runtime=load_runtime_config(env={}),
        )
        assert len(root.handlers) == 1
        get_logger("termview.app").info("app_run_start size=%dx%d", 80, 25, extra={"session": "a"})
        get_logger("termview.app").debug("below threshold")
        shutdown_logging()
    finally:
        shutdown_logging()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)
        apply_runtime_logger_levels(load_runtime_config(env={}))

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = orjson.loads(lines[0])
    assert payload["msg"] == "app_run_start size=80x25"
    assert payload["logger"] == "termview.app"
    assert payload["fields"] == {"session": "a"}


def test_runtime_logger_levels_follow_input_trace() -> None:
    quiet = runtime_logger_levels(load_runtime_config(env={}))
    traced = runtime_logger_levels(load_runtime_config(env={"TERMVIEW_INPUT_TRACE": "1"}))

    assert set(quiet) == set(RUNTIME_LOGGER_NAMES)
    assert quiet["termview.inputtrace"] == logging.WARNING
    assert quiet["termview.dispatch"] == logging.NOTSET
    assert traced["termview.inputtrace"] == logging.INFO
    assert traced["termview.dispatch"] == logging.DEBUG
    assert traced["termview.app"] == logging.NOTSET

    try:
        apply_runtime_logger_levels(load_runtime_config(env={"TERMVIEW_INPUT_TRACE": "1"}))
        assert logging.getLogger("termview.inputtrace").level == logging.INFO
    finally:
        apply_runtime_logger_levels(load_runtime_config(env={}))
    assert logging.getLogger("termview.inputtrace").level == logging.WARNING
