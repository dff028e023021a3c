"""
Rectangle geometry for bed placements

All coordinates are integer inches measured from the bed's top-left
corner. Rectangles are half-open: a rectangle at x=0 with w=12 covers
[0, 12), so two rectangles that share an edge do not overlap.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Point:
    """A position inside a bed"""
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle: origin (x, y) and footprint (w, h)"""
    x: int
    y: int
    w: int
    h: int

    def at(self, x: int, y: int) -> "Rect":
        """Same footprint moved to (x, y)"""
        return Rect(x, y, self.w, self.h)

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)


def overlaps(a: Rect, b: Rect) -> bool:
    """True if the interiors of *a* and *b* intersect. Touching edges do not count."""
    return (
        a.x < b.x + b.w
        and a.x + a.w > b.x
        and a.y < b.y + b.h
        and a.y + a.h > b.y
    )


def within_bounds(rect: Rect, width: int, height: int) -> bool:
    """True if *rect* lies entirely inside a width x height area anchored at (0, 0)."""
    return (
        rect.x >= 0
        and rect.y >= 0
        and rect.x + rect.w <= width
        and rect.y + rect.h <= height
    )


def is_free(rect: Rect, occupied: Iterable[Rect], width: int, height: int) -> bool:
    """True if *rect* is inside the bounds and overlaps nothing in *occupied*."""
    if not within_bounds(rect, width, height):
        return False
    return not any(overlaps(rect, other) for other in occupied)
