"""Application-level command dispatch by direct id or id range."""

from __future__ import annotations

from dataclasses import dataclass

from termview.api.command_dispatch import DirectCommandHandler, RangedCommandHandler
from termview.api.commands import CommandId


@dataclass(frozen=True, slots=True)
class RuntimeCommandDispatcher:
    """Resolve and dispatch command ids by direct match or range handlers."""

    direct_handlers: dict[CommandId, DirectCommandHandler]
    ranged_handlers: tuple[tuple[range, RangedCommandHandler], ...] = ()

    def handles(self, command_id: CommandId) -> bool:
        """Return whether a direct or ranged handler covers ``command_id``."""
        if command_id in self.direct_handlers:
            return True
        return any(command_id in span for span, _ in self.ranged_handlers)

    def dispatch(self, command_id: CommandId) -> bool | None:
        """Dispatch command id. Return None when no handler exists."""
        handler = self.direct_handlers.get(command_id)
        if handler is not None:
            return handler()
        for span, ranged_handler in self.ranged_handlers:
            if command_id in span:
                # Range handlers receive the offset from the start of their range.
                return ranged_handler(command_id - span.start)
        return None


CommandDispatcher = RuntimeCommandDispatcher
