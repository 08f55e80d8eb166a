"""In-memory terminal collaborators backed by a cell surface."""

from __future__ import annotations

import queue
from collections import deque
from collections.abc import Iterable, Sequence

from termview.api.events import Event
from termview.api.surface import Cell
from termview.runtime.config import get_runtime_config
from termview.runtime.surface import CellSurface


def _resolve_size(width: int | None, height: int | None) -> tuple[int, int]:
    screen = get_runtime_config().screen
    return (screen.width if width is None else width, screen.height if height is None else height)


class HeadlessTerminal:
    """Terminal port that renders into an in-memory surface and never produces input.

    Omitted dimensions come from the configured screen size.
    """

    def __init__(self, width: int | None = None, height: int | None = None) -> None:
        self.surface = CellSurface(*_resolve_size(width, height))
        self.flush_count = 0
        self.poll_count = 0

    def size(self) -> tuple[int, int]:
        return self.surface.size()

    def write(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        self.surface.write(x, y, cells)

    def flush(self) -> None:
        self.flush_count += 1

    def poll(self, timeout: float) -> Event | None:
        _ = timeout
        self.poll_count += 1
        return None


class ScriptedTerminal(HeadlessTerminal):
    """Replays a fixed event script, one event per poll, then reports no input."""

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        *,
        events: Iterable[Event] = (),
    ) -> None:
        super().__init__(width, height)
        self._script: deque[Event] = deque(events)

    @property
    def pending(self) -> int:
        return len(self._script)

    def feed(self, *events: Event) -> None:
        self._script.extend(events)

    def poll(self, timeout: float) -> Event | None:
        _ = timeout
        self.poll_count += 1
        if not self._script:
            return None
        return self._script.popleft()


class QueueTerminal(HeadlessTerminal):
    """Hand-off terminal fed from producer threads through a thread-safe queue."""

    def __init__(self, width: int | None = None, height: int | None = None) -> None:
        super().__init__(width, height)
        self._queue: queue.SimpleQueue[Event] = queue.SimpleQueue()

    def post(self, event: Event) -> None:
        """Enqueue an event; safe to call from any thread."""
        self._queue.put(event)

    def poll(self, timeout: float) -> Event | None:
        self.poll_count += 1
        try:
            if timeout <= 0:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
