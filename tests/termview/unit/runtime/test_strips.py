from __future__ import annotations

from termview.api import events as ev
from termview.api.commands import CM_COMMAND_SET_CHANGED, CM_QUIT
from termview.api.events import NOTHING
from termview.api.geometry import Rect
from termview.api.surface import ATTR_DISABLED
from termview.api.view import OptionFlag
from termview.runtime.command_set import RuntimeCommandRegistry
from termview.runtime.strips import MenuStrip, StatusLine, StripItem
from termview.runtime.surface import CellSurface

_SAVE = 1001
_OPEN = 1002


def _status(registry: RuntimeCommandRegistry) -> StatusLine:
    items = (
        StripItem("~Alt-X~ Exit", CM_QUIT, key_code=ev.KB_ALT_X),
        StripItem("~F2~ Save", _SAVE, key_code=ev.KB_F2),
    )
    return StatusLine(Rect.sized(0, 24, 40, 1), items, registry=registry)


def test_status_line_is_pre_process() -> None:
    status = _status(RuntimeCommandRegistry(enable_all=True))
    assert status.get_option(OptionFlag.PRE_PROCESS)
    assert not status.can_focus()


def test_bound_key_becomes_command_when_enabled() -> None:
    registry = RuntimeCommandRegistry(enable_all=True)
    status = _status(registry)
    assert status.handle_event(ev.key(ev.KB_F2)) == ev.command(_SAVE)

    registry.disable(_SAVE)
    event = ev.key(ev.KB_F2)
    assert status.handle_event(event) is event


def test_click_on_item_produces_its_command() -> None:
    registry = RuntimeCommandRegistry(enable_all=True)
    status = _status(registry)
    # "Alt-X Exit" spans columns 1..10, "F2 Save" starts at 13.
    assert status.handle_event(ev.mouse("mouse_down", 2, 24)) == ev.command(CM_QUIT)
    assert status.handle_event(ev.mouse("mouse_down", 14, 24)) == ev.command(_SAVE)
    assert status.handle_event(ev.mouse("mouse_down", 30, 24)) == NOTHING


def test_command_set_change_refreshes_cached_enablement() -> None:
    registry = RuntimeCommandRegistry(enable_all=True)
    status = _status(registry)
    status.needs_redraw = False
    save_item = status.items[1]
    assert status.is_item_enabled(save_item)

    registry.disable(_SAVE)
    broadcast = ev.broadcast(CM_COMMAND_SET_CHANGED)
    assert status.handle_event(broadcast) is broadcast
    assert not status.is_item_enabled(save_item)
    assert status.needs_redraw


def test_status_line_draws_disabled_items_dimmed() -> None:
    registry = RuntimeCommandRegistry(enable_all=True)
    registry.disable(_SAVE)
    status = _status(registry)
    surface = CellSurface(40, 25)
    status.draw(surface)
    assert surface.text_at(1, 24, 10) == "Alt-X Exit"
    assert surface.attr_at(1, 24) == status.highlight_attr
    assert surface.attr_at(7, 24) == status.fill_attr
    assert surface.attr_at(13, 24) == ATTR_DISABLED


def test_menu_strip_hotkeys_and_layout() -> None:
    registry = RuntimeCommandRegistry(enable_all=True)
    menu = MenuStrip(
        Rect.sized(0, 0, 40, 1),
        (
            StripItem("~F~ile", _OPEN, key_code=ev.KB_ALT_F),
            StripItem("~W~indow", _SAVE),
        ),
        registry=registry,
    )
    assert menu.handle_event(ev.key(ev.KB_ALT_F)) == ev.command(_OPEN)
    assert [(start, stop) for _, start, stop in menu.layout()] == [(1, 7), (8, 16)]
    assert menu.handle_event(ev.mouse("mouse_down", 9, 0)) == ev.command(_SAVE)

    surface = CellSurface(40, 1)
    menu.draw(surface)
    assert surface.row_text(0).startswith("  File   Window ")
