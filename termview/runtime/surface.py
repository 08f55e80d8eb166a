"""numpy-backed character-cell surface."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from termview.api.surface import ATTR_NORMAL, Cell


class CellSurface:
    """Fixed-size grid of characters and attributes with clipped writes."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width and height must be > 0")
        self._chars = np.full((height, width), " ", dtype="<U1")
        self._attrs = np.full((height, width), ATTR_NORMAL, dtype=np.uint8)
        self._write_count = 0

    @property
    def width(self) -> int:
        return int(self._chars.shape[1])

    @property
    def height(self) -> int:
        return int(self._chars.shape[0])

    @property
    def write_count(self) -> int:
        return self._write_count

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def write(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        """Overwrite a run of cells, truncating anything outside the grid."""
        self._write_count += 1
        if not 0 <= y < self.height or not cells:
            return
        start = max(0, x)
        stop = min(self.width, x + len(cells))
        if stop <= start:
            return
        visible = cells[start - x : stop - x]
        self._chars[y, start:stop] = [ch[:1] or " " for ch, _ in visible]
        self._attrs[y, start:stop] = [attr & 0xFF for _, attr in visible]

    def clear(self, attr: int = ATTR_NORMAL) -> None:
        self._chars[:, :] = " "
        self._attrs[:, :] = attr

    def resize(self, width: int, height: int) -> None:
        """Reallocate the grid; previous content is discarded."""
        if width <= 0 or height <= 0:
            raise ValueError("surface width and height must be > 0")
        self._chars = np.full((height, width), " ", dtype="<U1")
        self._attrs = np.full((height, width), ATTR_NORMAL, dtype=np.uint8)

    def char_at(self, x: int, y: int) -> str:
        return str(self._chars[y, x])

    def attr_at(self, x: int, y: int) -> int:
        return int(self._attrs[y, x])

    def row_text(self, y: int) -> str:
        return "".join(self._chars[y].tolist())

    def text_at(self, x: int, y: int, length: int) -> str:
        return "".join(self._chars[y, x : x + length].tolist())

    def lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self.height)]
