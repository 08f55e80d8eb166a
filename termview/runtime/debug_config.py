"""Debug configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class DebugConfig:
    """Immutable debug configuration."""

    metrics_enabled: bool
    metrics_window: int
    log_level: str


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("TERMVIEW_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_debug_config() -> DebugConfig:
    """Load immutable debug configuration from env vars."""
    return DebugConfig(
        metrics_enabled=_flag("TERMVIEW_DEBUG_METRICS", False),
        metrics_window=max(1, _int("TERMVIEW_DEBUG_METRICS_WINDOW", 60)),
        log_level=resolve_log_level_name(),
    )
