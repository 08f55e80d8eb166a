"""Public view-node contracts and flag vocabularies."""

from __future__ import annotations

from enum import IntFlag
from typing import Protocol, runtime_checkable

from termview.api.events import Event
from termview.api.geometry import Rect
from termview.api.surface import Surface


class StateFlag(IntFlag):
    """Runtime state bits carried by every view."""

    NONE = 0
    VISIBLE = 0x0001
    FOCUSED = 0x0002
    MODAL = 0x0004
    DISABLED = 0x0008
    SELECTED = 0x0010
    DRAGGING = 0x0020
    SHADOW = 0x0040
    EXPOSED = 0x0080
    CLOSED = 0x0100
    RESIZING = 0x0200


class OptionFlag(IntFlag):
    """Construction-time behavior bits."""

    NONE = 0
    SELECTABLE = 0x0001
    PRE_PROCESS = 0x0002
    POST_PROCESS = 0x0004
    TOP_SELECT = 0x0008
    CENTERED = 0x0010
    TILEABLE = 0x0020


@runtime_checkable
class ViewNode(Protocol):
    """Drawable, event-handling node of the view tree."""

    def bounds(self) -> Rect:
        """Return absolute screen bounds."""

    def set_bounds(self, rect: Rect) -> None:
        """Replace absolute screen bounds."""

    def draw(self, surface: Surface) -> None:
        """Paint the entire owned rectangle."""

    def handle_event(self, event: Event) -> Event:
        """Return the event unchanged, NOTHING when consumed, or a new variant."""

    def get_state(self, flag: StateFlag) -> bool:
        """Return whether state flag is set."""

    def set_state(self, flag: StateFlag, enabled: bool) -> None:
        """Set or clear state flag."""

    def get_option(self, flag: OptionFlag) -> bool:
        """Return whether option flag is set."""

    def set_option(self, flag: OptionFlag, enabled: bool) -> None:
        """Set or clear option flag."""

    def can_focus(self) -> bool:
        """Return whether the view accepts focus."""
