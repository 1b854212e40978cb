"""Tests for shape geometry."""

import pytest

from orgchart_layout.geometry import (
    DEFAULT_METRICS,
    Rect,
    ShapeMetrics,
    attachment_point,
    bounding_box,
    frame_bounds,
    group_content_height,
    group_height,
    group_owner_map,
    resolve_attachment,
    shape_bounds,
    shape_size,
)
from orgchart_layout.types import Shape, ShapeKind, Side
from orgchart_layout.validation import InvalidConfigError, ShapeNotFoundError


def person(shape_id, x=0.0, y=0.0):
    return Shape(id=shape_id, kind=ShapeKind.PERSON, x=x, y=y)


def group(shape_id, members=(), x=0.0, y=0.0):
    return Shape(id=shape_id, kind=ShapeKind.GROUP, x=x, y=y, member_ids=tuple(members))


# =============================================================================
# Shape Sizes
# =============================================================================


class TestShapeSize:
    """Tests for shape size resolution."""

    def test_person_size(self):
        assert shape_size(person("p")) == (280, 100)

    def test_empty_group_uses_min_content(self):
        """An empty group shows only the drop zone, below the minimum content height."""
        assert group_content_height(0) == 44
        assert group_height(0) == 70 + 16 + 100 + 16

    def test_group_heights_by_member_count(self):
        assert group_height(1) == 222
        assert group_height(2) == 298
        assert group_height(3) == 322

    def test_full_group_has_no_drop_zone(self):
        """Three members fill the group; the drop zone is not drawn."""
        assert group_content_height(3) == 3 * 68 + 2 * 8

    def test_group_size(self):
        g = group("g", members=["a", "b"])
        assert shape_size(g) == (360, 298)

    def test_custom_metrics(self):
        metrics = ShapeMetrics(person_width=200, person_height=80)
        assert shape_size(person("p"), metrics) == (200, 80)

    def test_invalid_metrics_raise(self):
        with pytest.raises(InvalidConfigError, match="person_width must be positive"):
            ShapeMetrics(person_width=0)
        with pytest.raises(InvalidConfigError, match="member_card_gap must be >= 0"):
            ShapeMetrics(member_card_gap=-1)


# =============================================================================
# Attachment Points
# =============================================================================


class TestAttachmentPoint:
    """Tests for side midpoints."""

    def test_person_sides(self):
        p = person("p", 100, 100)
        assert attachment_point(p, Side.TOP) == (240, 100)
        assert attachment_point(p, Side.RIGHT) == (380, 150)
        assert attachment_point(p, Side.BOTTOM) == (240, 200)
        assert attachment_point(p, Side.LEFT) == (100, 150)

    def test_group_bottom_follows_height(self):
        g = group("g", members=["a"], x=0, y=0)
        assert attachment_point(g, Side.BOTTOM) == (180, 222)

    def test_resolve_attachment(self):
        shapes = {"p": person("p", 0, 0)}
        assert resolve_attachment(shapes, "p", Side.LEFT) == (0, 50)

    def test_resolve_missing_shape(self):
        with pytest.raises(ShapeNotFoundError, match="'ghost' not found"):
            resolve_attachment({}, "ghost", Side.TOP)

    def test_missing_shape_is_key_error(self):
        """Callers may catch missing shapes as a plain KeyError."""
        with pytest.raises(KeyError):
            resolve_attachment({}, "ghost", Side.TOP)


# =============================================================================
# Bounds
# =============================================================================


class TestBounds:
    """Tests for rectangles, bounding boxes and frames."""

    def test_shape_bounds(self):
        r = shape_bounds(person("p", 10, 20))
        assert (r.left, r.top, r.right, r.bottom) == (10, 20, 290, 120)
        assert r.center == (150, 70)

    def test_bounding_box(self):
        box = bounding_box([person("a", 0, 0), person("b", 400, 200)])
        assert box == Rect(0, 0, 680, 300)

    def test_bounding_box_empty(self):
        assert bounding_box([]) is None

    def test_frame_bounds_padding(self):
        frame = frame_bounds([person("a", 0, 0), person("b", 400, 200)])
        assert frame == Rect(-20, -80, 720, 400)

    def test_frame_bounds_empty(self):
        assert frame_bounds([]) is None

    def test_touching_rects_do_not_intersect(self):
        a = Rect(0, 0, 100, 100)
        b = Rect(100, 0, 100, 100)
        assert not a.intersects(b)
        assert a.intersects(Rect(99, 99, 10, 10))

    def test_group_owner_map(self):
        shapes = [group("g", members=["a", "b"]), person("a"), person("b"), person("c")]
        assert group_owner_map(shapes) == {"a": "g", "b": "g"}

    def test_default_metrics(self):
        assert DEFAULT_METRICS.max_members == 3
