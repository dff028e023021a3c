"""
Free-space search for a new placement inside a bed

Given the rectangle of an existing placement (the origin), the rectangles
already occupying the bed and the bed's dimensions, find a spot for a
same-sized rectangle:

1. Adjacent offsets, tried in a fixed order: right, down, left, up,
   down-right, down-left, up-right, up-left.
2. Raster scan of the bed, row-major from (0, 0), stepping by the smaller
   side of the footprint.

The first free candidate wins. The order is part of the observable
behaviour (users see where a succession lands) and is a preference
heuristic, not a nearest-fit packer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from gardenplan.engine.geometry import Point, Rect, is_free
from gardenplan.utils.logger import get_logger

logger = get_logger(__name__)


class SearchStrategy(str, Enum):
    """Which phase of the search produced the result"""
    ADJACENT = "adjacent"
    RASTER = "raster"
    NONE = "none"


@dataclass(frozen=True)
class PositionResult:
    """
    Outcome of a position search

    Attributes:
        position: Top-left corner of the free spot, or None if the bed is full
        strategy: Search phase that found the spot (NONE when nothing was found)
    """
    position: Optional[Point]
    strategy: SearchStrategy

    @property
    def found(self) -> bool:
        return self.position is not None


# (dx, dy) multipliers of the origin's width and height
ADJACENT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, 0),    # right
    (0, 1),    # down
    (-1, 0),   # left
    (0, -1),   # up
    (1, 1),    # down-right
    (-1, 1),   # down-left
    (1, -1),   # up-right
    (-1, -1),  # up-left
)


def adjacent_candidates(origin: Rect) -> Iterator[Rect]:
    """Yield the eight neighbours of *origin* in preference order."""
    for dx, dy in ADJACENT_OFFSETS:
        yield origin.at(origin.x + dx * origin.w, origin.y + dy * origin.h)


def raster_candidates(footprint: Rect, bounds_w: int, bounds_h: int) -> Iterator[Rect]:
    """Yield grid-aligned candidates row by row (y outer, x inner)."""
    step = min(footprint.w, footprint.h)
    if step <= 0:
        return
    for scan_y in range(0, bounds_h, step):
        for scan_x in range(0, bounds_w, step):
            yield footprint.at(scan_x, scan_y)


def find_position(
    origin: Rect,
    occupied: Sequence[Rect],
    bounds_w: int,
    bounds_h: int,
) -> PositionResult:
    """
    Find a free position for a rectangle the size of *origin*

    Args:
        origin: Existing placement whose footprint is being repeated
        occupied: Rectangles already in the bed (may include *origin*)
        bounds_w: Bed width in inches
        bounds_h: Bed height in inches

    Returns:
        PositionResult; ``found`` is False when neither phase finds space
    """
    taken: List[Rect] = list(occupied)

    for candidate in adjacent_candidates(origin):
        if is_free(candidate, taken, bounds_w, bounds_h):
            return PositionResult(candidate.origin, SearchStrategy.ADJACENT)

    logger.debug(
        f"No adjacent space around ({origin.x}, {origin.y}); "
        f"scanning {bounds_w}x{bounds_h} bed"
    )

    for candidate in raster_candidates(origin, bounds_w, bounds_h):
        if is_free(candidate, taken, bounds_w, bounds_h):
            return PositionResult(candidate.origin, SearchStrategy.RASTER)

    return PositionResult(None, SearchStrategy.NONE)
