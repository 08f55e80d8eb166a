"""Public draw-target contract."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeAlias

Cell: TypeAlias = tuple[str, int]

ATTR_NORMAL = 0x07
ATTR_HIGHLIGHT = 0x0F
ATTR_INVERSE = 0x70
ATTR_SHADOW = 0x08
ATTR_DISABLED = 0x78


class Surface(Protocol):
    """Character-cell draw target."""

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in cells."""

    def write(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        """Overwrite a horizontal run of cells starting at ``(x, y)``."""


def text_cells(text: str, attr: int = ATTR_NORMAL) -> list[Cell]:
    """Expand text into cells sharing one attribute."""
    return [(ch, attr) for ch in text]
