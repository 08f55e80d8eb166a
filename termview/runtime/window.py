"""Framed windows and dialogs composed of a frame and an interior group."""

from __future__ import annotations

from collections.abc import Iterable

from termview.api.commands import (
    CLOSING_COMMANDS,
    CM_CANCEL,
    CM_CLOSE,
    CommandId,
    CommandRegistry,
)
from termview.api.events import (
    KB_ENTER,
    KB_ESC,
    KB_ESC_ESC,
    KB_SHIFT_TAB,
    KB_TAB,
    NOTHING,
    CommandEvent,
    Event,
    KeyEvent,
    PointerEvent,
)
from termview.api.geometry import Point, Rect
from termview.api.surface import ATTR_SHADOW, Surface
from termview.api.view import OptionFlag, StateFlag, ViewNode
from termview.runtime.command_set import get_command_registry
from termview.runtime.group import Group
from termview.runtime.view import View

_SINGLE = ("┌", "┐", "└", "┘", "─", "│")
_DOUBLE = ("╔", "╗", "╚", "╝", "═", "║")
CLOSE_ICON = "[■]"
CLOSE_ICON_X = 2


class Frame(View):
    """Border with a centered title and a close icon on the top row."""

    fill_attr = 0x1F

    def __init__(self, bounds: Rect, title: str = "") -> None:
        super().__init__(bounds)
        self.title = title

    def close_icon_hit(self, local_x: int) -> bool:
        return CLOSE_ICON_X <= local_x < CLOSE_ICON_X + len(CLOSE_ICON)

    def draw(self, surface: Surface) -> None:
        rect = self._bounds
        if rect.width < 2 or rect.height < 2:
            return
        active = self.get_state(StateFlag.FOCUSED)
        tl, tr, bl, br, horizontal, vertical = _DOUBLE if active else _SINGLE
        inner = rect.width - 2
        top = list(tl + horizontal * inner + tr)
        title = f" {self.title} " if self.title else ""
        if title and len(title) <= inner:
            start = 1 + (inner - len(title)) // 2
            top[start : start + len(title)] = list(title)
        if active and inner >= CLOSE_ICON_X + len(CLOSE_ICON):
            top[CLOSE_ICON_X : CLOSE_ICON_X + len(CLOSE_ICON)] = list(CLOSE_ICON)
        attr = self.fill_attr
        surface.write(rect.origin.x, rect.origin.y, [(ch, attr) for ch in top])
        for y in range(rect.origin.y + 1, rect.end.y - 1):
            surface.write(rect.origin.x, y, [(vertical, attr)])
            surface.write(rect.end.x - 1, y, [(vertical, attr)])
        bottom = bl + horizontal * inner + br
        surface.write(rect.origin.x, rect.end.y - 1, [(ch, attr) for ch in bottom])


class Window(View):
    """Selectable, top-select view composed of a frame and an interior group."""

    interior_attr = 0x1F

    def __init__(self, bounds: Rect, title: str = "") -> None:
        super().__init__(
            bounds,
            options=OptionFlag.SELECTABLE | OptionFlag.TOP_SELECT | OptionFlag.TILEABLE,
            state=StateFlag.VISIBLE | StateFlag.SHADOW,
        )
        self.frame = Frame(bounds, title)
        self.interior = Group(bounds.grown(-1, -1), background=(" ", self.interior_attr))
        self._drag_anchor: Point | None = None

    @property
    def title(self) -> str:
        return self.frame.title

    def add(self, view: ViewNode) -> None:
        """Insert a child positioned relative to the interior origin."""
        self.interior.add(view)

    def set_bounds(self, rect: Rect) -> None:
        super().set_bounds(rect)
        self.frame.set_bounds(rect)
        self.interior.set_bounds(rect.grown(-1, -1))

    def set_state(self, flag: StateFlag, enabled: bool) -> None:
        super().set_state(flag, enabled)
        if flag & StateFlag.FOCUSED:
            self.frame.set_state(StateFlag.FOCUSED, enabled)

    def draw(self, surface: Surface) -> None:
        self.interior.draw(surface)
        self.frame.draw(surface)
        if self.get_state(StateFlag.SHADOW):
            self._draw_shadow(surface)

    def close(self) -> None:
        self.set_state(StateFlag.CLOSED, True)

    def close_requested(self) -> Event:
        """React to CLOSE; windows mark themselves closed for the desktop to collect."""
        self.close()
        return NOTHING

    def handle_event(self, event: Event) -> Event:
        if isinstance(event, PointerEvent):
            handled = self._handle_frame_pointer(event)
            if handled is not None:
                return handled
        result = self.interior.dispatch(event)
        if isinstance(result, KeyEvent):
            if result.code == KB_TAB:
                self.interior.focus_next()
                return NOTHING
            if result.code == KB_SHIFT_TAB:
                self.interior.focus_prev()
                return NOTHING
        if isinstance(result, CommandEvent) and result.command == CM_CLOSE:
            return self.close_requested()
        return result

    def _handle_frame_pointer(self, event: PointerEvent) -> Event | None:
        if self.get_state(StateFlag.DRAGGING):
            anchor = self._drag_anchor or Point(0, 0)
            if event.action == "mouse_up":
                self.set_state(StateFlag.DRAGGING, False)
                self._drag_anchor = None
                return NOTHING
            if event.action in ("mouse_move", "mouse_drag"):
                dx = event.position.x - anchor.x - self._bounds.origin.x
                dy = event.position.y - anchor.y - self._bounds.origin.y
                self.set_bounds(self._bounds.moved(dx, dy))
                return NOTHING
        local = self.make_local(event.position)
        if event.action == "mouse_down" and local.y == 0:
            if self.frame.close_icon_hit(local.x):
                return self.close_requested()
            self.set_state(StateFlag.DRAGGING, True)
            self._drag_anchor = local
            return NOTHING
        return None

    def _draw_shadow(self, surface: Surface) -> None:
        rect = self._bounds
        for y in range(rect.origin.y + 1, rect.end.y):
            surface.write(rect.end.x, y, [(" ", ATTR_SHADOW)] * 2)
        surface.write(rect.origin.x + 2, rect.end.y, [(" ", ATTR_SHADOW)] * rect.width)


class Dialog(Window):
    """Window that maps ESC to CANCEL and ENTER to its default command."""

    interior_attr = 0x70

    def __init__(
        self,
        bounds: Rect,
        title: str = "",
        *,
        modal: bool = True,
        closing_commands: Iterable[CommandId] = (),
        default_command: CommandId | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        super().__init__(bounds, title)
        self.frame.fill_attr = 0x7F
        self.set_option(OptionFlag.TILEABLE, False)
        self.closing_commands: frozenset[CommandId] = frozenset(closing_commands)
        self.default_command = default_command
        self._registry = registry
        self.set_state(StateFlag.MODAL, modal)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry if self._registry is not None else get_command_registry()

    def is_closing_command(self, command_id: CommandId) -> bool:
        return command_id in CLOSING_COMMANDS or command_id in self.closing_commands

    def close_requested(self) -> Event:
        if self.get_state(StateFlag.MODAL):
            return CommandEvent(CM_CANCEL)
        return super().close_requested()

    def handle_event(self, event: Event) -> Event:
        result = super().handle_event(event)
        if isinstance(result, KeyEvent):
            if result.code in (KB_ESC, KB_ESC_ESC):
                return CommandEvent(CM_CANCEL)
            if result.code == KB_ENTER:
                command_id = self.default_command
                if command_id is not None and self.registry.is_enabled(command_id):
                    return CommandEvent(command_id)
                return NOTHING
        if isinstance(result, CommandEvent) and self.is_closing_command(result.command):
            if not self.get_state(StateFlag.MODAL):
                self.close()
                return NOTHING
        return result
