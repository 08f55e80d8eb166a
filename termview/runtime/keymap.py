"""Key-name normalization and key-to-command bindings."""

from __future__ import annotations

from termview.api import events as ev
from termview.api.commands import CommandId
from termview.api.events import CommandEvent, Event, KeyEvent

_NAMED_KEYS: dict[str, int] = {
    "backspace": ev.KB_BACKSPACE,
    "enter": ev.KB_ENTER,
    "return": ev.KB_ENTER,
    "escape": ev.KB_ESC,
    "esc": ev.KB_ESC,
    "tab": ev.KB_TAB,
    "shift+tab": ev.KB_SHIFT_TAB,
    "up": ev.KB_UP,
    "down": ev.KB_DOWN,
    "left": ev.KB_LEFT,
    "right": ev.KB_RIGHT,
    "home": ev.KB_HOME,
    "end": ev.KB_END,
    "pageup": ev.KB_PGUP,
    "pagedown": ev.KB_PGDN,
    "insert": ev.KB_INS,
    "delete": ev.KB_DEL,
    "alt+x": ev.KB_ALT_X,
    "alt+f": ev.KB_ALT_F,
    "f11": ev.KB_F11,
    "f12": ev.KB_F12,
}


def map_key_name(key_name: str) -> int | None:
    """Normalize a key name such as ``"enter"`` or ``"f10"`` to its key code."""
    if len(key_name) == 1 and key_name.isprintable():
        return ord(key_name)
    normalized = key_name.strip().lower()
    if normalized in _NAMED_KEYS:
        return _NAMED_KEYS[normalized]
    if normalized.startswith("f") and normalized[1:].isdigit():
        index = int(normalized[1:])
        if 1 <= index <= 10:
            return ev.KB_F1 + ((index - 1) << 8)
    return None


class KeyBindings:
    """Maps keyboard triggers to command identifiers."""

    def __init__(self) -> None:
        self._key_bindings: dict[tuple[int, int], CommandId] = {}

    def bind_key(self, code: int, command_id: CommandId, *, modifiers: int = 0) -> None:
        """Bind key code plus modifier mask to a command."""
        if code <= 0:
            raise ValueError("key code must be > 0")
        self._key_bindings[(int(code), int(modifiers))] = int(command_id)

    def bind_name(self, key_name: str, command_id: CommandId, *, modifiers: int = 0) -> None:
        """Bind a normalized key name to a command."""
        code = map_key_name(key_name)
        if code is None:
            raise ValueError(f"unknown key name: {key_name!r}")
        self.bind_key(code, command_id, modifiers=modifiers)

    def unbind(self, code: int, *, modifiers: int = 0) -> None:
        self._key_bindings.pop((int(code), int(modifiers)), None)

    def resolve(self, event: Event) -> CommandEvent | None:
        """Resolve a keyboard event into a command event."""
        if not isinstance(event, KeyEvent):
            return None
        command_id = self._key_bindings.get((event.code, event.modifiers))
        return CommandEvent(command_id) if command_id is not None else None

    def __len__(self) -> int:
        return len(self._key_bindings)
