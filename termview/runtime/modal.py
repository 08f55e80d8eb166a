"""Blocking modal loops nested on the call stack."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from termview.api.commands import CLOSING_COMMANDS, CM_CANCEL, CommandId
from termview.api.events import CommandEvent, Event, NothingEvent, PointerEvent, is_transformation
from termview.api.view import StateFlag, ViewNode

if TYPE_CHECKING:
    from termview.runtime.application import ApplicationRoot

_LOG = logging.getLogger("termview.modal")


class ModalRunner:
    """Runs a modal view's own render/poll/dispatch/idle loop until it closes."""

    def __init__(self, app: ApplicationRoot) -> None:
        self._app = app
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of modal loops currently on the call stack."""
        return self._depth

    def exec(self, view: ViewNode) -> CommandId | None:
        """Insert ``view`` into the desktop and, if it is modal, block until it ends.

        Non-modal views stay inserted and ``None`` is returned without polling.
        A modal view ends when its dispatch yields a Command in the standard
        closing set or in the view's own ``closing_commands``; it is then
        detached from the desktop and that command id is returned. Any other
        command the view leaves unconsumed goes to the application fallback;
        if that stops a running application the loop ends with CANCEL.
        """
        desktop = self._app.desktop
        desktop.add(view, immediate=True)
        if not view.get_state(StateFlag.MODAL):
            return None

        self._depth += 1
        _LOG.debug("modal_enter view=%s depth=%d", type(view).__name__, self._depth)
        result: CommandId | None = None
        was_running = self._app.running
        try:
            while result is None:
                started = time.perf_counter()
                self._app.metrics.begin_iteration(self._depth)
                self._app.draw_frame()
                event = self._app.poll_event()
                if event is not None:
                    self._app.metrics.increment_events_dispatched()
                    routed = self._route(view, event)
                    result = self._closing_command(view, routed)
                    if result is None and isinstance(routed, CommandEvent):
                        self._app.handle_command(routed)
                self._app.idle()
                if result is None and was_running and not self._app.running:
                    _LOG.debug("modal_abandoned view=%s depth=%d", type(view).__name__, self._depth)
                    result = CM_CANCEL
                self._app.metrics.end_iteration((time.perf_counter() - started) * 1000.0)
        finally:
            view.set_state(StateFlag.MODAL, False)
            desktop.remove_view(view)
            if desktop.focused_child is None:
                desktop.focus_top_window()
            _LOG.debug("modal_exit view=%s depth=%d result=%s", type(view).__name__, self._depth, result)
            self._depth -= 1
        return result

    def _route(self, view: ViewNode, event: Event) -> Event:
        status_line = self._app.status_line
        if status_line is not None and self._reaches(status_line, event):
            handled = status_line.handle_event(event)
            if isinstance(handled, NothingEvent):
                return handled
            if is_transformation(event, handled):
                event = handled
        if isinstance(event, PointerEvent) and not view.bounds().contains(event.position):
            if not view.get_state(StateFlag.DRAGGING):
                return event
        return view.handle_event(event)

    @staticmethod
    def _reaches(status_line: ViewNode, event: Event) -> bool:
        if isinstance(event, PointerEvent):
            return status_line.bounds().contains(event.position)
        return True

    @staticmethod
    def _closing_command(view: ViewNode, result: Event) -> CommandId | None:
        if not isinstance(result, CommandEvent):
            return None
        extra: frozenset[CommandId] = getattr(view, "closing_commands", frozenset())
        if result.command in CLOSING_COMMANDS or result.command in extra:
            return result.command
        return None
