from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from termview.api.events import NOTHING, CommandEvent, Event, KeyEvent
from termview.api.geometry import Rect
from termview.api.view import OptionFlag, StateFlag
from termview.runtime.command_set import RuntimeCommandRegistry, reset_command_registry
from termview.runtime.config import load_runtime_config, set_runtime_config
from termview.runtime.view import View

Reaction = Callable[[Event], Event]


@pytest.fixture(autouse=True)
def isolated_runtime_state() -> Iterator[RuntimeCommandRegistry]:
    set_runtime_config(load_runtime_config(env={}))
    registry = reset_command_registry()
    yield registry
    reset_command_registry()


class RecordingView(View):
    """Leaf view that logs every event it receives and answers via ``reaction``."""

    def __init__(
        self,
        bounds: Rect = Rect.sized(0, 0, 10, 1),
        *,
        name: str = "view",
        options: OptionFlag = OptionFlag.SELECTABLE,
        reaction: Reaction | None = None,
        journal: list[tuple[str, Event]] | None = None,
    ) -> None:
        super().__init__(bounds, options=options)
        self.name = name
        self.received: list[Event] = []
        self.draw_count = 0
        self._reaction = reaction
        self._journal = journal

    def handle_event(self, event: Event) -> Event:
        self.received.append(event)
        if self._journal is not None:
            self._journal.append((self.name, event))
        if self._reaction is None:
            return event
        return self._reaction(event)

    def draw(self, surface) -> None:
        self.draw_count += 1
        super().draw(surface)


def consume_all(event: Event) -> Event:
    return NOTHING


def consume_keys(event: Event) -> Event:
    return NOTHING if isinstance(event, KeyEvent) else event


def key_to_command(code: int, command_id: int) -> Reaction:
    def _react(event: Event) -> Event:
        if isinstance(event, KeyEvent) and event.code == code:
            return CommandEvent(command_id)
        return event

    return _react


def consume_command(command_id: int) -> Reaction:
    def _react(event: Event) -> Event:
        if isinstance(event, CommandEvent) and event.command == command_id:
            return NOTHING
        return event

    return _react


class CharSink(View):
    """Focusable field collecting printable characters."""

    def __init__(self, bounds: Rect = Rect.sized(1, 1, 10, 1)) -> None:
        super().__init__(bounds, options=OptionFlag.SELECTABLE)
        self.text = ""

    def handle_event(self, event: Event) -> Event:
        if isinstance(event, KeyEvent) and event.char:
            self.text += event.char
            return NOTHING
        return event


def hidden(view: View) -> View:
    view.set_state(StateFlag.VISIBLE, False)
    return view
