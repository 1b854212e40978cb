"""Tests for connector crossing detection."""

import pytest

from orgchart_layout.routing import (
    PathSegment,
    RoutedPath,
    RouteStrategy,
    count_crossings,
    find_crossings,
    route,
    segment_intersection,
)
from orgchart_layout.types import Side


def polyline(*points):
    return RoutedPath(
        points=tuple(points),
        from_side=Side.RIGHT,
        to_side=Side.LEFT,
        strategy=RouteStrategy.ELBOW,
    )


# =============================================================================
# Segment Intersection
# =============================================================================


class TestSegmentIntersection:
    """Tests for the scalar segment test."""

    def test_perpendicular_cross(self):
        hit = segment_intersection(PathSegment(0, 100, 200, 100), PathSegment(100, 0, 100, 200))
        assert hit == pytest.approx((100, 100))

    def test_parallel_segments(self):
        assert segment_intersection(PathSegment(0, 0, 100, 0), PathSegment(0, 10, 100, 10)) is None

    def test_collinear_segments(self):
        assert segment_intersection(PathSegment(0, 0, 100, 0), PathSegment(50, 0, 150, 0)) is None

    def test_touching_at_endpoint(self):
        """A T-junction at a segment end is not a crossing."""
        assert (
            segment_intersection(PathSegment(0, 100, 200, 100), PathSegment(100, 100, 100, 200))
            is None
        )

    def test_near_endpoint_excluded(self):
        # u = 0.005, inside the excluded margin
        assert (
            segment_intersection(PathSegment(0, 100, 200, 100), PathSegment(100, 99, 100, 299))
            is None
        )

    def test_disjoint(self):
        assert segment_intersection(PathSegment(0, 0, 10, 0), PathSegment(50, -5, 50, 5)) is None


# =============================================================================
# Connector Crossings
# =============================================================================


class TestFindCrossings:
    """Tests for all-pairs crossing detection."""

    def test_single_crossing_recorded_on_first(self):
        a = polyline((0, 100), (200, 100))
        b = polyline((100, 0), (100, 200))
        crossings = find_crossings({"a": a, "b": b})
        assert list(crossings) == ["a"]
        assert crossings["a"] == [pytest.approx((100, 100))]

    def test_order_decides_owner(self):
        a = polyline((0, 100), (200, 100))
        b = polyline((100, 0), (100, 200))
        crossings = find_crossings({"b": b, "a": a})
        assert list(crossings) == ["b"]

    def test_no_crossings(self):
        a = polyline((0, 0), (100, 0))
        b = polyline((0, 50), (100, 50))
        assert find_crossings({"a": a, "b": b}) == {}

    def test_multiple_hits_in_segment_order(self):
        # A U-shaped connector crossed twice by a horizontal one
        u = polyline((0, 0), (0, 200), (100, 200), (100, 0))
        h = polyline((-50, 100), (150, 100))
        crossings = find_crossings({"u": u, "h": h})
        assert crossings["u"] == [pytest.approx((0, 100)), pytest.approx((100, 100))]

    def test_each_pair_counted_once(self):
        a = polyline((0, 100), (200, 100))
        b = polyline((100, 0), (100, 200))
        c = polyline((150, 0), (150, 200))
        crossings = find_crossings({"a": a, "b": b, "c": c})
        assert len(crossings["a"]) == 2
        assert "b" not in crossings
        assert count_crossings({"a": a, "b": b, "c": c}) == 2

    def test_degenerate_paths_are_ignored(self):
        a = polyline((0, 100), (200, 100))
        d = route((100, 100), (100, 100), Side.TOP, Side.BOTTOM)
        assert find_crossings({"a": a, "d": d}) == {}

    def test_routed_connectors(self):
        down = route((140, 100), (140, 600), Side.BOTTOM, Side.TOP)
        across = route((-120, 350), (400, 350), Side.RIGHT, Side.LEFT)
        crossings = find_crossings({"down": down, "across": across})
        assert crossings == {"down": [pytest.approx((140, 350))]}

    def test_empty(self):
        assert find_crossings({}) == {}
        assert count_crossings({}) == 0
