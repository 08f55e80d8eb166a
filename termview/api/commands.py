"""Public command identifiers and command-registry contracts."""

from __future__ import annotations

from typing import Protocol, TypeAlias

CommandId: TypeAlias = int

MAX_COMMANDS = 65536

NO_COMMAND: CommandId = 0
CM_OK: CommandId = 10
CM_CANCEL: CommandId = 11
CM_YES: CommandId = 12
CM_NO: CommandId = 13
CM_DEFAULT: CommandId = 14
CM_QUIT: CommandId = 24
CM_CLOSE: CommandId = 25
CM_ZOOM: CommandId = 26
CM_NEXT: CommandId = 27
CM_PREV: CommandId = 28
CM_TILE: CommandId = 29
CM_CASCADE: CommandId = 30
CM_RECEIVED_FOCUS: CommandId = 50
CM_RELEASED_FOCUS: CommandId = 51
CM_COMMAND_SET_CHANGED: CommandId = 52

# Identifiers that can never be enabled.
RESERVED_COMMANDS: frozenset[CommandId] = frozenset({NO_COMMAND, CM_COMMAND_SET_CHANGED})

CLOSING_COMMANDS: frozenset[CommandId] = frozenset({CM_OK, CM_CANCEL, CM_YES, CM_NO})


class CommandRegistry(Protocol):
    """Process-wide command enablement set with a change flag."""

    def enable(self, command_id: CommandId) -> None:
        """Enable command; mark dirty when the bit changes."""

    def disable(self, command_id: CommandId) -> None:
        """Disable command; mark dirty when the bit changes."""

    def is_enabled(self, command_id: CommandId) -> bool:
        """Return whether command is enabled."""

    def take_dirty(self) -> bool:
        """Return and clear the changed flag."""

    def enable_range(self, first: CommandId, last: CommandId) -> None:
        """Enable an inclusive identifier range."""

    def disable_range(self, first: CommandId, last: CommandId) -> None:
        """Disable an inclusive identifier range."""

    def enable_set(self, other: CommandRegistry) -> None:
        """Enable every command enabled in ``other``."""

    def disable_set(self, other: CommandRegistry) -> None:
        """Disable every command enabled in ``other``."""

    def is_empty(self) -> bool:
        """Return whether no command is enabled."""


def create_command_registry(*, enable_all: bool = False) -> CommandRegistry:
    """Create a standalone registry instance."""
    from termview.runtime.command_set import RuntimeCommandRegistry

    return RuntimeCommandRegistry(enable_all=enable_all)


def get_command_registry() -> CommandRegistry:
    """Return the process-wide registry."""
    from termview.runtime.command_set import get_command_registry as _get

    return _get()
