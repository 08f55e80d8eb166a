"""Status line and menu strip: pre-process views turning keys and clicks into commands."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from termview.api.commands import CM_COMMAND_SET_CHANGED, CommandId, CommandRegistry
from termview.api.events import (
    NOTHING,
    BroadcastEvent,
    CommandEvent,
    Event,
    KeyEvent,
    PointerEvent,
)
from termview.api.geometry import Rect
from termview.api.surface import ATTR_DISABLED, Cell, Surface
from termview.api.view import OptionFlag
from termview.runtime.command_set import get_command_registry
from termview.runtime.keymap import KeyBindings
from termview.runtime.view import View


@dataclass(frozen=True, slots=True)
class StripItem:
    """Labelled command slot; ``~`` pairs in ``text`` mark the highlighted hotkey."""

    text: str
    command: CommandId
    key_code: int | None = None
    modifiers: int = 0

    @property
    def label(self) -> str:
        return self.text.replace("~", "")


def _label_cells(text: str, attr: int, highlight_attr: int) -> list[Cell]:
    cells: list[Cell] = []
    highlighted = False
    for ch in text:
        if ch == "~":
            highlighted = not highlighted
            continue
        cells.append((ch, highlight_attr if highlighted else attr))
    return cells


class CommandStrip(View):
    """One-row strip of command items with registry-driven enablement."""

    fill_attr = 0x70
    highlight_attr = 0x74
    disabled_attr = ATTR_DISABLED
    leading = 1
    gap = 2

    def __init__(
        self,
        bounds: Rect,
        items: Iterable[StripItem],
        *,
        registry: CommandRegistry | None = None,
    ) -> None:
        super().__init__(bounds, options=OptionFlag.PRE_PROCESS)
        self._items = tuple(items)
        self._registry = registry
        self._bindings = KeyBindings()
        for item in self._items:
            if item.key_code is not None:
                self._bindings.bind_key(item.key_code, item.command, modifiers=item.modifiers)
        self._enabled = {item.command: self.registry.is_enabled(item.command) for item in self._items}
        self.needs_redraw = True

    @property
    def items(self) -> tuple[StripItem, ...]:
        return self._items

    @property
    def registry(self) -> CommandRegistry:
        return self._registry if self._registry is not None else get_command_registry()

    def is_item_enabled(self, item: StripItem) -> bool:
        return self._enabled.get(item.command, False)

    def layout(self) -> tuple[tuple[StripItem, int, int], ...]:
        """Return ``(item, start, stop)`` local column spans."""
        spans: list[tuple[StripItem, int, int]] = []
        x = self.leading
        for item in self._items:
            width = len(item.label)
            spans.append((item, x, x + width))
            x += width + self.gap
        return tuple(spans)

    def item_at(self, local_x: int) -> StripItem | None:
        for item, start, stop in self.layout():
            if start <= local_x < stop:
                return item
        return None

    def refresh_enablement(self) -> bool:
        """Re-query the registry; return whether any cached state changed."""
        changed = False
        for item in self._items:
            enabled = self.registry.is_enabled(item.command)
            if self._enabled.get(item.command) != enabled:
                self._enabled[item.command] = enabled
                changed = True
        if changed:
            self.needs_redraw = True
        return changed

    def draw(self, surface: Surface) -> None:
        self.fill(surface, " ", self.fill_attr)
        origin = self._bounds.origin
        for item, start, stop in self.layout():
            if start >= self._bounds.width:
                break
            if self.is_item_enabled(item):
                cells = _label_cells(item.text, self.fill_attr, self.highlight_attr)
            else:
                cells = _label_cells(item.text, self.disabled_attr, self.disabled_attr)
            surface.write(origin.x + start, origin.y, cells[: self._bounds.width - start])
        self.needs_redraw = False

    def handle_event(self, event: Event) -> Event:
        if isinstance(event, BroadcastEvent):
            if event.command == CM_COMMAND_SET_CHANGED:
                self.refresh_enablement()
            return event
        if isinstance(event, KeyEvent):
            resolved = self._bindings.resolve(event)
            if resolved is not None and self.registry.is_enabled(resolved.command):
                return resolved
            return event
        if isinstance(event, PointerEvent) and event.action == "mouse_down":
            if not self._bounds.contains(event.position):
                return event
            item = self.item_at(self.make_local(event.position).x)
            if item is not None and self.registry.is_enabled(item.command):
                return CommandEvent(item.command)
            return NOTHING
        return event


class StatusLine(CommandStrip):
    """Bottom status strip: hotkeys such as ``F10`` or ``Alt+X`` mapped to commands."""


class MenuStrip(CommandStrip):
    """Top menu strip of top-level entries selected by hotkey or click."""

    leading = 1
    gap = 1

    def layout(self) -> tuple[tuple[StripItem, int, int], ...]:
        spans: list[tuple[StripItem, int, int]] = []
        x = self.leading
        for item in self._items:
            # Entries are padded with one column on each side.
            width = len(item.label) + 2
            spans.append((item, x, x + width))
            x += width + self.gap
        return tuple(spans)

    def draw(self, surface: Surface) -> None:
        self.fill(surface, " ", self.fill_attr)
        origin = self._bounds.origin
        for item, start, _ in self.layout():
            if start >= self._bounds.width:
                break
            attr = self.fill_attr if self.is_item_enabled(item) else self.disabled_attr
            highlight = self.highlight_attr if self.is_item_enabled(item) else self.disabled_attr
            cells = [(" ", attr), *_label_cells(item.text, attr, highlight), (" ", attr)]
            surface.write(origin.x + start, origin.y, cells[: self._bounds.width - start])
        self.needs_redraw = False
