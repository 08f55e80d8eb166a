"""Centralized runtime configuration ownership for the view runtime."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class RuntimeLoopConfig:
    poll_timeout_ms: float
    max_redispatch_depth: int


@dataclass(frozen=True, slots=True)
class RuntimeScreenConfig:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class RuntimeInputConfig:
    trace_enabled: bool


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    loop: RuntimeLoopConfig
    screen: RuntimeScreenConfig
    input: RuntimeInputConfig

    @property
    def poll_timeout_s(self) -> float:
        return self.loop.poll_timeout_ms / 1000.0


_RUNTIME_CONFIG: ContextVar[RuntimeConfig | None] = ContextVar("termview_runtime_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _screen_size(raw: str) -> tuple[int, int] | None:
    normalized = str(raw).strip().lower().replace(" ", "")
    if not normalized:
        return None
    for sep in ("x", ",", ":"):
        if sep in normalized:
            left, right = normalized.split(sep, 1)
            try:
                width = max(1, int(left))
                height = max(1, int(right))
            except ValueError:
                return None
            return (width, height)
    return None


def load_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    screen = _screen_size(_text("TERMVIEW_SCREEN_SIZE", "", env=env)) or (80, 25)
    return RuntimeConfig(
        loop=RuntimeLoopConfig(
            poll_timeout_ms=_float("TERMVIEW_POLL_TIMEOUT_MS", 20.0, minimum=0.0, env=env),
            max_redispatch_depth=_int("TERMVIEW_MAX_REDISPATCH_DEPTH", 8, minimum=1, env=env),
        ),
        screen=RuntimeScreenConfig(width=screen[0], height=screen[1]),
        input=RuntimeInputConfig(
            trace_enabled=_flag("TERMVIEW_INPUT_TRACE", False, env=env),
        ),
    )


def initialize_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    config = load_runtime_config(env=env)
    _RUNTIME_CONFIG.set(config)
    return config


def set_runtime_config(config: RuntimeConfig) -> RuntimeConfig:
    _RUNTIME_CONFIG.set(config)
    return config


def get_runtime_config() -> RuntimeConfig:
    config = _RUNTIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_runtime_config()


__all__ = [
    "RuntimeConfig",
    "RuntimeInputConfig",
    "RuntimeLoopConfig",
    "RuntimeScreenConfig",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_runtime_config",
    "set_runtime_config",
]
