"""Tests for viewport fitting."""

import pytest

from orgchart_layout.types import Shape, ShapeKind
from orgchart_layout.validation import InvalidConfigError
from orgchart_layout.viewport import IDENTITY_VIEWPORT, Viewport, fit_view


def person(shape_id, x, y):
    return Shape(id=shape_id, kind=ShapeKind.PERSON, x=x, y=y)


class TestFitView:
    """Tests for fitting the chart into the container."""

    def test_exact_fit(self):
        # Content box is 1000 x 500
        shapes = [person("a", 0, 0), person("b", 720, 400)]
        view = fit_view(shapes, (1200, 700))
        assert view.scale == pytest.approx(1.0)
        assert (view.pan_x, view.pan_y) == pytest.approx((100, 100))

    def test_content_centred(self):
        shapes = [person("a", 0, 0), person("b", 720, 400)]
        view = fit_view(shapes, (1600, 900))
        centre = view.to_screen((500, 250))
        assert centre == pytest.approx((800, 450))

    def test_scale_clamped_low(self):
        shapes = [person("a", 0, 0), person("b", 720, 400)]
        assert fit_view(shapes, (300, 300)).scale == pytest.approx(0.3)

    def test_scale_clamped_high(self):
        assert fit_view([person("a", 0, 0)], (5000, 5000)).scale == pytest.approx(2.0)

    def test_grouped_persons_ignored(self):
        shapes = [
            Shape("g", ShapeKind.GROUP, 0, 0, ("p",)),
            person("p", 5000, 5000),
        ]
        view = fit_view(shapes, (760, 422))
        # Only the 360 x 222 group counts
        assert view.scale == pytest.approx(1.0)

    def test_accepts_dicts(self):
        view = fit_view([{"id": "a", "kind": "person", "x": 0, "y": 0}], (480, 300))
        assert view.scale == pytest.approx(min(280 / 280, 100 / 100))

    def test_no_shapes(self):
        assert fit_view([], (800, 600)) == IDENTITY_VIEWPORT

    def test_invalid_container(self):
        with pytest.raises(InvalidConfigError, match="width must be positive"):
            fit_view([person("a", 0, 0)], (0, 600))

    def test_invalid_scale_bounds(self):
        with pytest.raises(InvalidConfigError, match="max_scale"):
            fit_view([person("a", 0, 0)], (800, 600), min_scale=2, max_scale=1)


class TestViewport:
    """Tests for viewport transforms and zoom steps."""

    def test_to_canvas(self):
        view = Viewport(scale=2, pan_x=100, pan_y=50)
        assert view.to_canvas((300, 250)) == (100, 100)

    def test_round_trip(self):
        view = Viewport(scale=0.5, pan_x=-30, pan_y=12)
        assert view.to_canvas(view.to_screen((123, 456))) == pytest.approx((123, 456))

    def test_drag_delta(self):
        assert Viewport(scale=2).drag_delta(40, -20) == (20, -10)

    def test_zoom_steps_clamp(self):
        assert Viewport(scale=1.95).zoom_in().scale == pytest.approx(2.0)
        assert Viewport(scale=0.35).zoom_out().scale == pytest.approx(0.3)
        assert Viewport(scale=1.0).zoom_in().scale == pytest.approx(1.1)

    def test_panned(self):
        view = Viewport().panned(10, -5)
        assert (view.pan_x, view.pan_y) == (10, -5)

    def test_invalid_scale(self):
        with pytest.raises(InvalidConfigError):
            Viewport(scale=0)
