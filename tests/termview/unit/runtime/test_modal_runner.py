from __future__ import annotations

from termview.api import events as ev
from termview.api.commands import CM_CANCEL, CM_COMMAND_SET_CHANGED, CM_OK, CM_QUIT, CM_YES
from termview.api.events import NOTHING, Event, KeyEvent
from termview.api.geometry import Rect
from termview.api.view import OptionFlag, StateFlag
from termview.runtime.application import ApplicationRoot
from termview.runtime.strips import StripItem
from termview.runtime.terminal import ScriptedTerminal
from termview.runtime.view import View
from termview.runtime.window import Dialog, Window
from tests.termview.conftest import CharSink, RecordingView, consume_all


def _number_dialog() -> tuple[Dialog, CharSink]:
    dialog = Dialog(Rect.sized(20, 5, 30, 8), "Number", default_command=CM_OK)
    sink = CharSink()
    dialog.add(sink)
    dialog.interior.set_focus(0)
    return dialog, sink


def test_modal_dialog_returns_ok_after_typing_and_enter() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.char("2"), ev.key(ev.KB_ENTER)])
    app = ApplicationRoot(terminal)
    dialog, sink = _number_dialog()

    assert app.exec_view(dialog) == CM_OK
    assert sink.text == "2"
    assert terminal.poll_count == 2
    assert terminal.flush_count == 2
    assert dialog not in app.desktop.children
    assert not dialog.get_state(StateFlag.MODAL)


def test_non_modal_exec_returns_immediately_and_keeps_view() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.char("x")])
    app = ApplicationRoot(terminal)
    window = Window(Rect.sized(0, 0, 20, 6), "Plain")

    assert app.exec_view(window) is None
    assert terminal.poll_count == 0
    assert app.desktop.windows() == (window,)
    assert app.desktop.focused_child is window


def test_escape_cancels_modal_dialog() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.key(ev.KB_ESC)])
    app = ApplicationRoot(terminal)
    dialog, _ = _number_dialog()
    assert app.exec_view(dialog) == CM_CANCEL


def test_dialog_specific_closing_command_ends_the_loop() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.command(901), ev.command(900)])
    app = ApplicationRoot(terminal)
    dialog = Dialog(Rect.sized(0, 0, 30, 8), closing_commands=(900,))
    assert app.exec_view(dialog) == 900
    assert terminal.poll_count == 2


def test_loop_keeps_polling_through_idle_timeouts() -> None:
    class _DelayedTerminal(ScriptedTerminal):
        def poll(self, timeout: float) -> Event | None:
            self.poll_count += 1
            if self.poll_count < 4:
                return None
            return ev.key(ev.KB_ESC)

    terminal = _DelayedTerminal(80, 25)
    app = ApplicationRoot(terminal)
    dialog, _ = _number_dialog()
    assert app.exec_view(dialog) == CM_CANCEL
    assert terminal.poll_count == 4


def test_status_line_pre_processes_keys_during_modal_loop() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.key(ev.KB_F2)])
    app = ApplicationRoot(terminal, status_items=(StripItem("~F2~ Yes", CM_YES, key_code=ev.KB_F2),))
    dialog, _ = _number_dialog()
    assert app.exec_view(dialog) == CM_YES


def test_pointer_outside_modal_view_is_ignored() -> None:
    terminal = ScriptedTerminal(
        80,
        25,
        events=[ev.mouse("mouse_down", 1, 2), ev.key(ev.KB_ESC)],
    )
    app = ApplicationRoot(terminal)
    bystander = RecordingView(Rect.sized(0, 0, 10, 5), reaction=consume_all)
    app.insert_window(bystander)
    dialog, _ = _number_dialog()

    assert app.exec_view(dialog) == CM_CANCEL
    assert bystander.received == []
    assert app.desktop.focused_child is bystander


def test_idle_tick_runs_inside_modal_loop() -> None:
    registry_changes: list[int] = []

    class _Toggler(View):
        def __init__(self, app: ApplicationRoot) -> None:
            super().__init__(Rect.sized(0, 0, 5, 1), options=OptionFlag.SELECTABLE)
            self._app = app

        def handle_event(self, event: Event) -> Event:
            if isinstance(event, KeyEvent) and event.char == "d":
                self._app.disable_command(700)
                return NOTHING
            if isinstance(event, ev.BroadcastEvent) and event.command == CM_COMMAND_SET_CHANGED:
                registry_changes.append(event.command)
            return event

    terminal = ScriptedTerminal(80, 25, events=[ev.char("d"), ev.key(ev.KB_ESC)])
    app = ApplicationRoot(terminal)
    dialog = Dialog(Rect.sized(0, 0, 30, 8))
    dialog.add(_Toggler(app))
    dialog.interior.set_focus(0)

    assert app.exec_view(dialog) == CM_CANCEL
    assert registry_changes == [CM_COMMAND_SET_CHANGED]
    assert not app.registry.is_dirty


def test_nested_modal_loops_unwind_on_the_call_stack() -> None:
    seen: list[tuple[int, int | None]] = []

    class _Launcher(View):
        def __init__(self, app: ApplicationRoot) -> None:
            super().__init__(Rect.sized(0, 0, 5, 1), options=OptionFlag.SELECTABLE)
            self._app = app

        def handle_event(self, event: Event) -> Event:
            if isinstance(event, KeyEvent) and event.char == "n":
                inner = Dialog(Rect.sized(30, 8, 20, 6), "Inner", default_command=CM_OK)
                depth_before = self._app.modal_runner.depth
                seen.append((depth_before, self._app.exec_view(inner)))
                return NOTHING
            return event

    terminal = ScriptedTerminal(
        80,
        25,
        events=[ev.char("n"), ev.key(ev.KB_ENTER), ev.key(ev.KB_ESC)],
    )
    app = ApplicationRoot(terminal)
    outer = Dialog(Rect.sized(0, 0, 40, 10), "Outer")
    outer.add(_Launcher(app))
    outer.interior.set_focus(0)

    assert app.exec_view(outer) == CM_CANCEL
    assert seen == [(1, CM_OK)]
    assert app.modal_runner.depth == 0
    assert app.desktop.windows() == ()


def test_closed_dialog_runs_again_at_the_same_place() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.key(ev.KB_ENTER), ev.key(ev.KB_ENTER)])
    app = ApplicationRoot(terminal)
    dialog = Dialog(Rect.sized(10, 5, 30, 8), "Again", default_command=CM_OK)

    assert app.exec_view(dialog) == CM_OK
    assert dialog.bounds() == Rect.sized(10, 5, 30, 8)

    dialog.set_state(StateFlag.MODAL, True)
    assert app.exec_view(dialog) == CM_OK
    assert dialog.bounds() == Rect.sized(10, 5, 30, 8)
    assert terminal.surface.char_at(10, 6) == "╔"
    assert terminal.surface.char_at(10, 7) == "║"


def test_commands_left_by_the_modal_view_reach_application_handlers() -> None:
    terminal = ScriptedTerminal(80, 25, events=[ev.command(730), ev.key(ev.KB_ESC)])
    app = ApplicationRoot(terminal)
    handled: list[int] = []
    app.on_command(730, lambda: handled.append(730))
    dialog, _ = _number_dialog()

    assert app.exec_view(dialog) == CM_CANCEL
    assert handled == [730]
    assert terminal.poll_count == 2


def test_quit_from_status_line_abandons_modal_loop_of_running_app() -> None:
    outcomes: list[int | None] = []
    terminal = ScriptedTerminal(80, 25, events=[ev.key(ev.KB_F5), ev.key(ev.KB_ALT_X)])
    app = ApplicationRoot(
        terminal,
        status_items=(
            StripItem("~Alt-X~ Exit", CM_QUIT, key_code=ev.KB_ALT_X),
            StripItem("~F5~ Ask", 740, key_code=ev.KB_F5),
        ),
    )

    def ask() -> None:
        dialog, _ = _number_dialog()
        outcomes.append(app.exec_view(dialog))

    app.on_command(740, ask)
    app.run()

    assert outcomes == [CM_CANCEL]
    assert not app.running
    assert terminal.poll_count == 2
    assert app.desktop.windows() == ()
