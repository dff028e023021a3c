"""
Unit tests for rectangle geometry

Tests:
- Overlap detection, including edge contact
- Bounds checks against the bed area
- Combined free-space test
"""

import pytest
from gardenplan.engine.geometry import Point, Rect, overlaps, within_bounds, is_free


class TestOverlaps:
    """Test rectangle overlap detection"""

    def test_identical_rectangles_overlap(self):
        """Identical rectangles overlap"""
        assert overlaps(Rect(0, 0, 12, 12), Rect(0, 0, 12, 12))

    def test_partial_overlap(self):
        """Partially covering rectangles overlap"""
        assert overlaps(Rect(0, 0, 12, 12), Rect(6, 6, 12, 12))

    def test_contained_rectangle_overlaps(self):
        """Containment counts as overlap both ways"""
        assert overlaps(Rect(0, 0, 24, 24), Rect(6, 6, 4, 4))
        assert overlaps(Rect(6, 6, 4, 4), Rect(0, 0, 24, 24))

    @pytest.mark.parametrize("other", [
        Rect(12, 0, 12, 12),   # shares right edge
        Rect(0, 12, 12, 12),   # shares bottom edge
        Rect(12, 12, 12, 12),  # shares a corner
        Rect(-12, 0, 12, 12),  # shares left edge
    ])
    def test_touching_edges_do_not_overlap(self, other):
        """Shared edges and corners are not overlap"""
        assert not overlaps(Rect(0, 0, 12, 12), other)

    def test_disjoint_rectangles(self):
        """Separate rectangles do not overlap"""
        assert not overlaps(Rect(0, 0, 6, 6), Rect(20, 20, 6, 6))

    def test_overlap_is_symmetric(self):
        """Overlap does not depend on argument order"""
        a = Rect(3, 5, 10, 4)
        b = Rect(10, 7, 6, 6)
        assert overlaps(a, b) == overlaps(b, a)


class TestWithinBounds:
    """Test bounds checks"""

    def test_rectangle_filling_bed(self):
        """Rectangle the size of the bed fits"""
        assert within_bounds(Rect(0, 0, 48, 48), 48, 48)

    def test_rectangle_touching_far_edges(self):
        """Rectangle flush with the far edges fits"""
        assert within_bounds(Rect(36, 36, 12, 12), 48, 48)

    def test_negative_origin_is_out(self):
        """Negative origins are out of bounds"""
        assert not within_bounds(Rect(-1, 0, 12, 12), 48, 48)
        assert not within_bounds(Rect(0, -12, 12, 12), 48, 48)

    def test_overhanging_rectangle_is_out(self):
        """Rectangles past the far edge are out of bounds"""
        assert not within_bounds(Rect(40, 0, 12, 12), 48, 48)
        assert not within_bounds(Rect(0, 37, 12, 12), 48, 48)


class TestIsFree:
    """Test the combined bounds and collision check"""

    def test_free_in_empty_bed(self):
        """Empty bed is free"""
        assert is_free(Rect(0, 0, 12, 12), [], 48, 48)

    def test_blocked_by_occupant(self):
        """Occupied space is not free"""
        assert not is_free(Rect(6, 0, 12, 12), [Rect(0, 0, 12, 12)], 48, 48)

    def test_adjacent_to_occupant_is_free(self):
        """Space next to an occupant is free"""
        assert is_free(Rect(12, 0, 12, 12), [Rect(0, 0, 12, 12)], 48, 48)

    def test_out_of_bounds_is_not_free(self):
        """Space outside the bed is not free"""
        assert not is_free(Rect(48, 0, 12, 12), [], 48, 48)


def test_rect_at_keeps_footprint():
    """Moving a rectangle keeps its size"""
    moved = Rect(0, 0, 12, 6).at(24, 18)
    assert moved == Rect(24, 18, 12, 6)
    assert moved.origin == Point(24, 18)
