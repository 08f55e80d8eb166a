"""Desktop container hosting windows above a background pattern."""

from __future__ import annotations

import math

from termview.api.commands import CM_NEXT, CM_PREV
from termview.api.events import NOTHING, BroadcastEvent, CommandEvent, Event
from termview.api.geometry import Rect
from termview.api.view import OptionFlag, StateFlag, ViewNode
from termview.runtime.group import Group
from termview.runtime.view import View

BACKGROUND_CHAR = "░"
BACKGROUND_ATTR = 0x17

# Smallest window left by a cascade before offsets stop growing.
CASCADE_MIN_WIDTH = 16
CASCADE_MIN_HEIGHT = 4


class Background(View):
    """Pattern fill behind every window."""

    def __init__(self, bounds: Rect, pattern: str = BACKGROUND_CHAR, attr: int = BACKGROUND_ATTR) -> None:
        super().__init__(bounds)
        self.fill_char = pattern[:1] or " "
        self.fill_attr = attr


class Desktop(Group):
    """Group of windows; child 0 is always the background."""

    def __init__(self, bounds: Rect, *, pattern: str = BACKGROUND_CHAR) -> None:
        super().__init__(bounds, options=OptionFlag.SELECTABLE)
        self.background = Background(Rect.sized(0, 0, bounds.width, bounds.height), pattern)
        self.add(self.background)

    def add(self, view: ViewNode, *, immediate: bool = False) -> None:
        """Insert a window and focus it when it accepts focus."""
        deferred = self.is_traversing and not immediate
        super().add(view, immediate=immediate)
        if not deferred and view.can_focus():
            index = self.index_of(view)
            if index is not None:
                self.set_focus(index)

    def apply_pending(self) -> None:
        pending = [view for operation, view in self._pending if operation == "add"]
        super().apply_pending()
        for view in pending:
            index = self.index_of(view)
            if index is not None and view.can_focus():
                self.set_focus(index)
        if self.focused_child is None:
            self.focus_top_window()

    def windows(self) -> tuple[ViewNode, ...]:
        return tuple(child for child in self.children if child is not self.background)

    def top_window(self) -> ViewNode | None:
        for child in reversed(self.z_order):
            if child is not self.background:
                return child
        return None

    def remove_closed_windows(self) -> int:
        closed = [view for view in self.windows() if view.get_state(StateFlag.CLOSED)]
        for view in closed:
            self.remove_view(view)
        if closed and self.focused_child is None:
            self.focus_top_window()
        return len(closed)

    def select_window(self, view: ViewNode) -> bool:
        index = self.index_of(view)
        if index is None or not self.set_focus(index):
            return False
        self.bring_to_front(view)
        return True

    def next_window(self) -> bool:
        """Focus the next window in tab order and raise it."""
        if not self.focus_next():
            return False
        focused = self.focused_child
        if focused is not None:
            self.bring_to_front(focused)
        return True

    def prev_window(self) -> bool:
        if not self.focus_prev():
            return False
        focused = self.focused_child
        if focused is not None:
            self.bring_to_front(focused)
        return True

    def dispatch(self, event: Event) -> Event:
        top = self.top_window()
        if (
            top is not None
            and top.get_state(StateFlag.MODAL)
            and not isinstance(event, BroadcastEvent)
        ):
            return top.handle_event(event)
        result = super().dispatch(event)
        if isinstance(result, CommandEvent):
            if result.command == CM_NEXT and self.next_window():
                return NOTHING
            if result.command == CM_PREV and self.prev_window():
                return NOTHING
        return result

    def focus_top_window(self) -> None:
        top = self.top_window()
        if top is not None:
            self.select_window(top)

    def tileable_windows(self) -> tuple[ViewNode, ...]:
        """Visible TILEABLE windows in tab order."""
        return tuple(
            view
            for view in self.windows()
            if view.get_option(OptionFlag.TILEABLE) and view.get_state(StateFlag.VISIBLE)
        )

    def has_tileable_windows(self) -> bool:
        return bool(self.tileable_windows())

    def tile(self, area: Rect | None = None) -> int:
        """Arrange tileable windows in a near-square grid covering ``area``.

        Rows are filled left to right in tab order; a short last row stretches
        its windows across the full width. Returns the number of windows moved.
        """
        windows = self.tileable_windows()
        if not windows:
            return 0
        area = self._bounds if area is None else area
        columns = math.ceil(math.sqrt(len(windows)))
        rows = math.ceil(len(windows) / columns)
        last_row = len(windows) - columns * (rows - 1)
        for index, view in enumerate(windows):
            row, column = divmod(index, columns)
            in_row = columns if row < rows - 1 else last_row
            view.set_bounds(
                Rect.of(
                    area.origin.x + area.width * column // in_row,
                    area.origin.y + area.height * row // rows,
                    area.origin.x + area.width * (column + 1) // in_row,
                    area.origin.y + area.height * (row + 1) // rows,
                )
            )
        return len(windows)

    def cascade(self, area: Rect | None = None) -> int:
        """Stack tileable windows back to front, each shifted one cell down and right."""
        tileable = self.tileable_windows()
        windows = [view for view in self.z_order if any(view is other for other in tileable)]
        if not windows:
            return 0
        area = self._bounds if area is None else area
        max_shift = max(0, min(area.width - CASCADE_MIN_WIDTH, area.height - CASCADE_MIN_HEIGHT))
        for index, view in enumerate(windows):
            shift = min(index, max_shift)
            view.set_bounds(Rect.of(area.origin.x + shift, area.origin.y + shift, area.end.x, area.end.y))
        return len(windows)
