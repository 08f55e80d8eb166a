"""Public terminal-port contract consumed by the application loop."""

from __future__ import annotations

from typing import Protocol

from termview.api.events import Event
from termview.api.surface import Surface


class Terminal(Surface, Protocol):
    """Surface plus bounded input polling and frame presentation."""

    def poll(self, timeout: float) -> Event | None:
        """Wait up to ``timeout`` seconds for one decoded event."""

    def flush(self) -> None:
        """Present everything written since the previous flush."""


def create_scripted_terminal(
    width: int | None = None,
    height: int | None = None,
    events: tuple[Event, ...] = (),
) -> Terminal:
    """Create an in-memory terminal that replays a fixed event script."""
    from termview.runtime.terminal import ScriptedTerminal

    return ScriptedTerminal(width, height, events=events)
