"""Public application command-dispatch contracts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from termview.api.commands import CommandId

DirectCommandHandler = Callable[[], bool | None]
RangedCommandHandler = Callable[[CommandId], bool | None]


class CommandDispatcher(Protocol):
    """Resolve and dispatch application-level command ids."""

    def handles(self, command_id: CommandId) -> bool:
        """Return whether any handler covers command id."""

    def dispatch(self, command_id: CommandId) -> bool | None:
        """Dispatch command id. Return None when no handler exists."""


def create_command_dispatcher(
    *,
    direct_handlers: dict[CommandId, DirectCommandHandler],
    ranged_handlers: tuple[tuple[range, RangedCommandHandler], ...] = (),
) -> CommandDispatcher:
    """Create default dispatcher implementation."""
    from termview.runtime.command_dispatch import RuntimeCommandDispatcher

    return RuntimeCommandDispatcher(
        direct_handlers=direct_handlers,
        ranged_handlers=ranged_handlers,
    )
