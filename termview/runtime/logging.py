"""Logging pipeline for the view runtime: root sinks plus per-logger runtime levels."""

from __future__ import annotations

import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

import orjson

from termview.api.logging import LoggingConfig
from termview.runtime.config import RuntimeConfig, get_runtime_config
from termview.runtime.debug_config import resolve_log_level_name

_QUEUE_LISTENER: QueueListener | None = None
RUNTIME_LOGGER_NAMES: tuple[str, ...] = (
    "termview.dispatch",
    "termview.modal",
    "termview.app",
    "termview.inputtrace",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; attributes passed via ``extra`` land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def runtime_logger_levels(config: RuntimeConfig) -> dict[str, int]:
    """Levels for the runtime loggers; NOTSET defers to the root level."""
    levels = dict.fromkeys(RUNTIME_LOGGER_NAMES, logging.NOTSET)
    if config.input.trace_enabled:
        levels["termview.inputtrace"] = logging.INFO
        levels["termview.dispatch"] = logging.DEBUG
    else:
        levels["termview.inputtrace"] = logging.WARNING
    return levels


def apply_runtime_logger_levels(config: RuntimeConfig | None = None) -> None:
    resolved = config if config is not None else get_runtime_config()
    for name, level in runtime_logger_levels(resolved).items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: LoggingConfig, *, runtime: RuntimeConfig | None = None) -> None:
    """Replace root handlers with the configured sinks.

    A file sink switches the root to a queue handler drained by a listener
    thread. Runtime logger levels are reapplied from ``runtime``.
    """
    global _QUEUE_LISTENER

    shutdown_logging()
    sinks = _build_sinks(config)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    if len(sinks) == 1:
        root.addHandler(sinks[0])
    else:
        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        root.addHandler(QueueHandler(log_queue))
        _QUEUE_LISTENER = QueueListener(log_queue, *sinks, respect_handler_level=True)
        _QUEUE_LISTENER.start()
    apply_runtime_logger_levels(runtime)


def shutdown_logging() -> None:
    """Drain and stop the file listener, closing its sinks."""
    global _QUEUE_LISTENER

    listener = _QUEUE_LISTENER
    _QUEUE_LISTENER = None
    if listener is None:
        return
    listener.stop()
    for handler in listener.handlers:
        handler.close()


def setup_logging(*, runtime: RuntimeConfig | None = None) -> None:
    """Configure console logging unless the host already installed handlers."""
    if logging.getLogger().handlers:
        return
    configure_logging(LoggingConfig(level_name=resolve_log_level_name(default="INFO")), runtime=runtime)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _build_sinks(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    sinks: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_sink = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_sink.setFormatter(_formatter(config.file_format))
        sinks.append(file_sink)
    return sinks


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
