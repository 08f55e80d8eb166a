"""Public logging API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging pipeline."""
    from termview.runtime.logging import configure_logging as _configure

    _configure(config)


def setup_logging() -> None:
    """Configure default logging when nothing else has."""
    from termview.runtime.logging import setup_logging as _setup

    _setup()


def shutdown_logging() -> None:
    """Flush and stop background log sinks."""
    from termview.runtime.logging import shutdown_logging as _shutdown

    _shutdown()
