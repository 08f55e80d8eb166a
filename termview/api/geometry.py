"""Cell-grid geometry primitives shared by views and containers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """Integer cell coordinate."""

    x: int
    y: int

    def moved(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned cell rectangle with inclusive origin and exclusive end."""

    origin: Point
    end: Point

    def __post_init__(self) -> None:
        if self.end.x < self.origin.x or self.end.y < self.origin.y:
            raise ValueError(f"rect end {self.end} must not precede origin {self.origin}")

    @classmethod
    def of(cls, x1: int, y1: int, x2: int, y2: int) -> Rect:
        return cls(Point(x1, y1), Point(x2, y2))

    @classmethod
    def sized(cls, x: int, y: int, width: int, height: int) -> Rect:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        return cls(Point(x, y), Point(x + width, y + height))

    @property
    def width(self) -> int:
        return self.end.x - self.origin.x

    @property
    def height(self) -> int:
        return self.end.y - self.origin.y

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """Return whether the rectangle covers no cell at all."""
        return self.width == 0 or self.height == 0

    def contains(self, point: Point) -> bool:
        """Half-open containment test; degenerate rectangles contain nothing."""
        return self.origin.x <= point.x < self.end.x and self.origin.y <= point.y < self.end.y

    def intersects(self, other: Rect) -> bool:
        return not self.intersect(other).is_empty

    def intersect(self, other: Rect) -> Rect:
        """Return the overlap, collapsing to a degenerate rect when disjoint."""
        x1 = max(self.origin.x, other.origin.x)
        y1 = max(self.origin.y, other.origin.y)
        x2 = max(x1, min(self.end.x, other.end.x))
        y2 = max(y1, min(self.end.y, other.end.y))
        return Rect.of(x1, y1, x2, y2)

    def union(self, other: Rect) -> Rect:
        return Rect.of(
            min(self.origin.x, other.origin.x),
            min(self.origin.y, other.origin.y),
            max(self.end.x, other.end.x),
            max(self.end.y, other.end.y),
        )

    def moved(self, dx: int, dy: int) -> Rect:
        return Rect(self.origin.moved(dx, dy), self.end.moved(dx, dy))

    def grown(self, dx: int, dy: int) -> Rect:
        """Grow every edge outward by the given deltas; shrinking clamps at the center."""
        x1 = self.origin.x - dx
        y1 = self.origin.y - dy
        x2 = self.end.x + dx
        y2 = self.end.y + dy
        if x2 < x1:
            x1 = x2 = (x1 + x2) // 2
        if y2 < y1:
            y1 = y2 = (y1 + y2) // 2
        return Rect.of(x1, y1, x2, y2)

    def offset_by(self, origin: Point) -> Rect:
        """Convert a rect relative to ``origin`` into absolute coordinates."""
        return self.moved(origin.x, origin.y)

    def relative_to(self, origin: Point) -> Rect:
        """Convert an absolute rect into coordinates relative to ``origin``."""
        return self.moved(-origin.x, -origin.y)

    def __str__(self) -> str:
        return f"[{self.origin.x}, {self.origin.y}, {self.end.x}, {self.end.y}]"


__all__ = ["Point", "Rect"]
