"""Application root composing menu strip, desktop and status line around the main loop."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from termview.api.command_dispatch import DirectCommandHandler, RangedCommandHandler
from termview.api.commands import CM_CASCADE, CM_COMMAND_SET_CHANGED, CM_QUIT, CM_TILE, CommandId
from termview.api.events import (
    KB_ALT_X,
    NOTHING,
    BroadcastEvent,
    CommandEvent,
    Event,
    KeyEvent,
)
from termview.api.geometry import Rect
from termview.api.terminal import Terminal
from termview.api.view import OptionFlag, ViewNode
from termview.runtime.command_dispatch import RuntimeCommandDispatcher
from termview.runtime.command_set import (
    RuntimeCommandRegistry,
    apply_default_commands,
    get_command_registry,
)
from termview.runtime.config import RuntimeConfig, get_runtime_config
from termview.runtime.debug_config import load_debug_config
from termview.runtime.desktop import Desktop
from termview.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from termview.runtime.group import Group
from termview.runtime.metrics import MetricsCollector, NoopMetricsCollector, create_metrics_collector
from termview.runtime.modal import ModalRunner
from termview.runtime.strips import MenuStrip, StatusLine, StripItem

_LOG = logging.getLogger("termview.app")
_INPUT_TRACE = logging.getLogger("termview.inputtrace")

DEFAULT_STATUS_ITEMS: tuple[StripItem, ...] = (
    StripItem("~Alt-X~ Exit", CM_QUIT, key_code=KB_ALT_X),
)


class ApplicationRoot(Group):
    """Root container: menu strip on the top row, status line on the bottom, desktop between.

    Children are inserted desktop, status line, menu strip. Both strips are
    pre-process views so their hotkeys win over the focused desktop.
    """

    def __init__(
        self,
        terminal: Terminal,
        *,
        menu_items: Iterable[StripItem] = (),
        status_items: Iterable[StripItem] = DEFAULT_STATUS_ITEMS,
        registry: RuntimeCommandRegistry | None = None,
        config: RuntimeConfig | None = None,
        metrics: MetricsCollector | NoopMetricsCollector | None = None,
    ) -> None:
        width, height = terminal.size()
        self.config = config if config is not None else get_runtime_config()
        super().__init__(
            Rect.sized(0, 0, width, height),
            options=OptionFlag.SELECTABLE,
            max_redispatch_depth=self.config.loop.max_redispatch_depth,
        )
        self.terminal = terminal
        self.registry = registry if registry is not None else get_command_registry()
        apply_default_commands(self.registry)
        if metrics is None:
            debug = load_debug_config()
            metrics = create_metrics_collector(enabled=debug.metrics_enabled, window_size=debug.metrics_window)
        self.metrics = metrics

        self.menu_bar = MenuStrip(Rect.sized(0, 0, width, 1), menu_items, registry=self.registry)
        self.status_line = StatusLine(
            Rect.sized(0, height - 1, width, 1),
            status_items,
            registry=self.registry,
        )
        self.desktop = Desktop(Rect.of(0, 1, width, max(1, height - 1)))
        self.add(self.desktop)
        self.add(self.status_line)
        self.add(self.menu_bar)
        self.set_focus(0)
        self.sync_window_commands()
        self.registry.take_dirty()

        self.modal_runner = ModalRunner(self)
        self._direct_handlers: dict[CommandId, DirectCommandHandler] = {}
        self._ranged_handlers: list[tuple[range, RangedCommandHandler]] = []
        self._running = False
        self._needs_redraw = True

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def on_command(self, command_id: CommandId, handler: DirectCommandHandler) -> None:
        """Register an application handler for a command nothing in the tree consumed."""
        self._direct_handlers[int(command_id)] = handler

    def on_command_range(self, first: CommandId, last: CommandId, handler: RangedCommandHandler) -> None:
        if last < first:
            raise ValueError("command range must satisfy first <= last")
        self._ranged_handlers.append((range(int(first), int(last) + 1), handler))

    def enable_command(self, command_id: CommandId) -> None:
        self.registry.enable(command_id)

    def disable_command(self, command_id: CommandId) -> None:
        self.registry.disable(command_id)

    def insert_window(self, view: ViewNode) -> None:
        self.desktop.add(view)
        self._needs_redraw = True

    def exec_view(self, view: ViewNode) -> CommandId | None:
        """Run ``view`` through the modal runner; see ``ModalRunner.exec``."""
        result = self.modal_runner.exec(view)
        self._needs_redraw = True
        return result

    def handle_event(self, event: Event) -> Event:
        result = self.dispatch(event)
        if isinstance(result, KeyEvent) and result.code == KB_ALT_X:
            result = CommandEvent(CM_QUIT)
        if isinstance(result, CommandEvent):
            return self.handle_command(result)
        return result

    def tile_rect(self) -> Rect:
        """Area used by tile and cascade; the whole desktop by default."""
        return self.desktop.bounds()

    def tile(self) -> int:
        return self.desktop.tile(self.tile_rect())

    def cascade(self) -> int:
        return self.desktop.cascade(self.tile_rect())

    def sync_window_commands(self) -> None:
        """Enable TILE and CASCADE only while the desktop holds a tileable window."""
        if self.desktop.has_tileable_windows():
            self.registry.enable(CM_TILE)
            self.registry.enable(CM_CASCADE)
        else:
            self.registry.disable(CM_TILE)
            self.registry.disable(CM_CASCADE)

    def idle(self) -> bool:
        """Sync window commands, then broadcast COMMAND_SET_CHANGED if the registry changed."""
        self.sync_window_commands()
        if not self.registry.take_dirty():
            return False
        _LOG.debug("command_set_changed broadcast")
        self.metrics.increment_idle_broadcasts()
        self.dispatch(BroadcastEvent(CM_COMMAND_SET_CHANGED))
        self._needs_redraw = True
        return True

    def draw_frame(self) -> None:
        self.draw(self.terminal)
        self.terminal.flush()
        self._needs_redraw = False

    def poll_event(self) -> Event | None:
        """Poll the terminal once; a failing poll counts as no event."""
        try:
            event = self.terminal.poll(self.config.poll_timeout_s)
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "terminal_poll_failed", level=logging.WARNING)
            self.metrics.increment_poll_failures()
            return None
        if event is not None and self.config.input.trace_enabled:
            _INPUT_TRACE.info("input event=%s modal_depth=%d", event, self.modal_runner.depth)
        return event

    def step(self) -> None:
        """Run one outer-loop iteration: draw, poll, dispatch, collect closed windows, idle."""
        started = time.perf_counter()
        self.metrics.begin_iteration(self.modal_runner.depth)
        if self._needs_redraw or self.status_line.needs_redraw or self.menu_bar.needs_redraw:
            self.draw_frame()
        event = self.poll_event()
        if event is not None:
            self.metrics.increment_events_dispatched()
            self.handle_event(event)
            self._needs_redraw = True
        if self.desktop.remove_closed_windows():
            self._needs_redraw = True
        self.idle()
        self.metrics.end_iteration((time.perf_counter() - started) * 1000.0)

    def run(self) -> None:
        self._running = True
        _LOG.info("app_run_start size=%dx%d", self._bounds.width, self._bounds.height)
        while self._running:
            self.step()
        self.draw_frame()
        _LOG.info("app_run_stop")

    def handle_command(self, event: CommandEvent) -> Event:
        """Application fallback for a command nothing in the tree consumed.

        A registered handler consumes the command unless it returns ``False``,
        which lets the built-in QUIT, TILE and CASCADE handling run instead.
        """
        dispatcher = RuntimeCommandDispatcher(
            direct_handlers=self._direct_handlers,
            ranged_handlers=tuple(self._ranged_handlers),
        )
        if dispatcher.handles(event.command) and dispatcher.dispatch(event.command) is not False:
            return NOTHING
        if event.command == CM_QUIT:
            self.stop()
            return NOTHING
        if event.command == CM_TILE:
            self.tile()
        elif event.command == CM_CASCADE:
            self.cascade()
        else:
            return event
        self._needs_redraw = True
        return NOTHING
