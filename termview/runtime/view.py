"""Base view implementation embedding bounds, state and option flags."""

from __future__ import annotations

from termview.api.events import Event
from termview.api.geometry import Point, Rect
from termview.api.surface import ATTR_NORMAL, Surface, text_cells
from termview.api.view import OptionFlag, StateFlag


class View:
    """Leaf view: owns a rectangle, paints it with a fill, ignores events."""

    fill_char: str = " "
    fill_attr: int = ATTR_NORMAL

    def __init__(
        self,
        bounds: Rect,
        *,
        options: OptionFlag = OptionFlag.NONE,
        state: StateFlag = StateFlag.VISIBLE,
    ) -> None:
        self._bounds = bounds
        self._options = OptionFlag(options)
        self._state = StateFlag(state)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._bounds})"

    @property
    def options(self) -> OptionFlag:
        return self._options

    @property
    def state(self) -> StateFlag:
        return self._state

    def bounds(self) -> Rect:
        return self._bounds

    def set_bounds(self, rect: Rect) -> None:
        self._bounds = rect

    def draw(self, surface: Surface) -> None:
        self.fill(surface, self.fill_char, self.fill_attr)

    def handle_event(self, event: Event) -> Event:
        return event

    def get_state(self, flag: StateFlag) -> bool:
        return bool(self._state & flag)

    def set_state(self, flag: StateFlag, enabled: bool) -> None:
        if enabled:
            self._state |= flag
        else:
            self._state &= ~flag

    def toggle_state(self, flag: StateFlag) -> None:
        self._state ^= flag

    def get_option(self, flag: OptionFlag) -> bool:
        return bool(self._options & flag)

    def set_option(self, flag: OptionFlag, enabled: bool) -> None:
        if enabled:
            self._options |= flag
        else:
            self._options &= ~flag

    def toggle_option(self, flag: OptionFlag) -> None:
        self._options ^= flag

    def can_focus(self) -> bool:
        """Selectable, enabled views accept focus."""
        return self.get_option(OptionFlag.SELECTABLE) and not self.get_state(StateFlag.DISABLED)

    def is_focused(self) -> bool:
        return self.get_state(StateFlag.FOCUSED)

    def make_global(self, local: Point) -> Point:
        """Convert view-local coordinates to absolute screen coordinates."""
        return local.moved(self._bounds.origin.x, self._bounds.origin.y)

    def make_local(self, screen: Point) -> Point:
        """Convert absolute screen coordinates to view-local coordinates."""
        return screen.moved(-self._bounds.origin.x, -self._bounds.origin.y)

    def fill(self, surface: Surface, char: str, attr: int) -> None:
        rect = self._bounds
        if rect.is_empty:
            return
        row = [(char, attr)] * rect.width
        for y in range(rect.origin.y, rect.end.y):
            surface.write(rect.origin.x, y, row)

    def write_text(self, surface: Surface, x: int, y: int, text: str, attr: int | None = None) -> None:
        """Write text at view-local ``(x, y)``, clipped to the view width."""
        if not 0 <= y < self._bounds.height or x >= self._bounds.width:
            return
        visible = text[: max(0, self._bounds.width - x)]
        surface.write(
            self._bounds.origin.x + x,
            self._bounds.origin.y + y,
            text_cells(visible, self.fill_attr if attr is None else attr),
        )
