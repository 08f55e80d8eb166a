"""Public event variants flowing through the view tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, TypeAlias

from termview.api.geometry import Point

PointerAction: TypeAlias = Literal["mouse_down", "mouse_up", "mouse_move", "mouse_drag"]
POINTER_ACTIONS: frozenset[str] = frozenset({"mouse_down", "mouse_up", "mouse_move", "mouse_drag"})

# Key codes: high byte is the scan code, low byte the character.
KB_ESC = 0x011B
KB_ESC_ESC = 0x011C
KB_ENTER = 0x1C0D
KB_BACKSPACE = 0x0E08
KB_TAB = 0x0F09
KB_SHIFT_TAB = 0x0F00
KB_UP = 0x4800
KB_DOWN = 0x5000
KB_LEFT = 0x4B00
KB_RIGHT = 0x4D00
KB_HOME = 0x4700
KB_END = 0x4F00
KB_PGUP = 0x4900
KB_PGDN = 0x5100
KB_INS = 0x5200
KB_DEL = 0x5300
KB_F1 = 0x3B00
KB_F2 = 0x3C00
KB_F3 = 0x3D00
KB_F4 = 0x3E00
KB_F5 = 0x3F00
KB_F6 = 0x4000
KB_F7 = 0x4100
KB_F8 = 0x4200
KB_F9 = 0x4300
KB_F10 = 0x4400
KB_F11 = 0x8500
KB_F12 = 0x8600
KB_ALT_X = 0x2D00
KB_ALT_F = 0x2100

MOD_SHIFT = 0x01
MOD_CTRL = 0x02
MOD_ALT = 0x04

MB_LEFT = 0x01
MB_MIDDLE = 0x02
MB_RIGHT = 0x04


@dataclass(frozen=True, slots=True)
class NothingEvent:
    """Consumed or null event."""

    category: ClassVar[str] = "nothing"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Keyboard input with scan-code layout key code."""

    code: int
    modifiers: int = 0
    category: ClassVar[str] = "keyboard"

    @property
    def char(self) -> str:
        """Return the printable character carried in the low byte, if any."""
        low = self.code & 0xFF
        if low < 0x20 or low == 0x7F or self.code > 0xFF:
            return ""
        return chr(low)


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Mouse input in absolute screen coordinates."""

    action: PointerAction
    position: Point
    button: int = MB_LEFT
    category: ClassVar[str] = "pointer"

    def __post_init__(self) -> None:
        if self.action not in POINTER_ACTIONS:
            raise ValueError(f"unknown pointer action: {self.action!r}")


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """Targeted command delivered through the focus chain."""

    command: int
    category: ClassVar[str] = "command"


@dataclass(frozen=True, slots=True)
class BroadcastEvent:
    """Command fanned out to every view in a subtree."""

    command: int
    category: ClassVar[str] = "broadcast"


Event: TypeAlias = NothingEvent | KeyEvent | PointerEvent | CommandEvent | BroadcastEvent

NOTHING = NothingEvent()


def is_consumed(event: Event) -> bool:
    return isinstance(event, NothingEvent)


def is_pointer(event: Event) -> bool:
    return isinstance(event, PointerEvent)


def is_transformation(before: Event, after: Event) -> bool:
    """Return whether ``after`` is a different, non-null variant than ``before``."""
    if isinstance(after, NothingEvent):
        return False
    return after.category != before.category


def key(code: int, modifiers: int = 0) -> KeyEvent:
    return KeyEvent(code=int(code), modifiers=int(modifiers))


def char(value: str) -> KeyEvent:
    """Build a keyboard event for one printable character."""
    if len(value) != 1:
        raise ValueError("char value must be exactly one character")
    return KeyEvent(code=ord(value))


def mouse(action: PointerAction, x: int, y: int, button: int = MB_LEFT) -> PointerEvent:
    return PointerEvent(action=action, position=Point(x, y), button=button)


def command(command_id: int) -> CommandEvent:
    return CommandEvent(command=int(command_id))


def broadcast(command_id: int) -> BroadcastEvent:
    return BroadcastEvent(command=int(command_id))


__all__ = [
    "NOTHING",
    "BroadcastEvent",
    "CommandEvent",
    "Event",
    "KeyEvent",
    "NothingEvent",
    "PointerAction",
    "PointerEvent",
    "broadcast",
    "char",
    "command",
    "is_consumed",
    "is_pointer",
    "is_transformation",
    "key",
    "mouse",
]
