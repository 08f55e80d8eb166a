"""Process-wide command enablement bitmap with change tracking."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from termview.api.commands import (
    CM_CLOSE,
    MAX_COMMANDS,
    RESERVED_COMMANDS,
    CommandId,
)

_RESERVED_INDEXES = np.fromiter(sorted(RESERVED_COMMANDS), dtype=np.intp)


def _check_id(command_id: CommandId) -> int:
    value = int(command_id)
    if not 0 <= value < MAX_COMMANDS:
        raise ValueError(f"command id out of range: {command_id}")
    return value


class RuntimeCommandRegistry:
    """Bitmap of enabled commands plus a dirty flag consumed by the idle tick.

    Instances double as plain command sets: ``of`` builds one from ids, and
    ``enable_set``, ``disable_set``, ``union`` and ``intersect`` combine them.
    """

    def __init__(self, *, enable_all: bool = False) -> None:
        self._bits = np.zeros(MAX_COMMANDS, dtype=np.bool_)
        self._dirty = False
        self.reset(enable_all=enable_all)

    @classmethod
    def of(cls, command_ids: Iterable[CommandId]) -> RuntimeCommandRegistry:
        """Build a clean set holding exactly ``command_ids`` (reserved ids are dropped)."""
        command_set = cls()
        for command_id in command_ids:
            command_set.enable(command_id)
        command_set.take_dirty()
        return command_set

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def reset(self, *, enable_all: bool = False) -> None:
        """Rewrite every bit and clear the dirty flag."""
        self._bits[:] = bool(enable_all)
        self._bits[_RESERVED_INDEXES] = False
        self._dirty = False

    def enable(self, command_id: CommandId) -> None:
        index = _check_id(command_id)
        if index in RESERVED_COMMANDS or self._bits[index]:
            return
        self._bits[index] = True
        self._dirty = True

    def disable(self, command_id: CommandId) -> None:
        index = _check_id(command_id)
        if not self._bits[index]:
            return
        self._bits[index] = False
        self._dirty = True

    def is_enabled(self, command_id: CommandId) -> bool:
        return bool(self._bits[_check_id(command_id)])

    def take_dirty(self) -> bool:
        dirty = self._dirty
        self._dirty = False
        return dirty

    def enable_range(self, first: CommandId, last: CommandId) -> None:
        self._write_range(first, last, True)

    def disable_range(self, first: CommandId, last: CommandId) -> None:
        self._write_range(first, last, False)

    def enabled_count(self) -> int:
        return int(np.count_nonzero(self._bits))

    def enabled_ids(self) -> tuple[CommandId, ...]:
        return tuple(int(index) for index in np.flatnonzero(self._bits))

    def is_empty(self) -> bool:
        return not bool(self._bits.any())

    def enable_set(self, other: RuntimeCommandRegistry) -> None:
        """Enable every command enabled in ``other``."""
        self._replace_bits(self._bits | other._bits)

    def disable_set(self, other: RuntimeCommandRegistry) -> None:
        """Disable every command enabled in ``other``."""
        self._replace_bits(self._bits & ~other._bits)

    def union(self, other: RuntimeCommandRegistry) -> RuntimeCommandRegistry:
        """Return a new clean set enabled wherever either operand is."""
        return self._derived(self._bits | other._bits)

    def intersect(self, other: RuntimeCommandRegistry) -> RuntimeCommandRegistry:
        """Return a new clean set enabled only where both operands are."""
        return self._derived(self._bits & other._bits)

    def _derived(self, bits: np.ndarray) -> RuntimeCommandRegistry:
        result = type(self)()
        result._bits[:] = bits
        return result

    def _replace_bits(self, bits: np.ndarray) -> None:
        if np.array_equal(bits, self._bits):
            return
        self._bits[:] = bits
        self._dirty = True

    def _write_range(self, first: CommandId, last: CommandId, value: bool) -> None:
        start = _check_id(first)
        stop = _check_id(last) + 1
        if stop <= start:
            raise ValueError("command range must satisfy first <= last")
        before = self._bits[start:stop].copy()
        self._bits[start:stop] = value
        self._bits[_RESERVED_INDEXES] = False
        if not np.array_equal(before, self._bits[start:stop]):
            self._dirty = True


def apply_default_commands(registry: RuntimeCommandRegistry) -> None:
    """Enable every command except CLOSE and leave the registry clean."""
    registry.reset(enable_all=True)
    registry.disable(CM_CLOSE)
    registry.take_dirty()


_REGISTRY: RuntimeCommandRegistry | None = None


def get_command_registry() -> RuntimeCommandRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = RuntimeCommandRegistry()
    return _REGISTRY


def set_command_registry(registry: RuntimeCommandRegistry) -> RuntimeCommandRegistry:
    global _REGISTRY
    _REGISTRY = registry
    return registry


def reset_command_registry(*, enable_all: bool = False) -> RuntimeCommandRegistry:
    """Replace the process-wide registry with a fresh instance."""
    return set_command_registry(RuntimeCommandRegistry(enable_all=enable_all))


CommandRegistry = RuntimeCommandRegistry
