"""
Viewport fitting and coordinate conversion.

The canvas is drawn with ``screen = canvas * scale + pan``. These helpers
compute the transform that fits the chart into its container, step the
zoom level, and map pointer coordinates back onto the canvas.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .geometry import DEFAULT_METRICS, ShapeMetrics, bounding_box, group_owner_map
from .types import Point, ShapeLike, SizeType
from .validation import (
    InvalidConfigError,
    coerce_shapes,
    validate_container_size,
    validate_non_negative,
    validate_positive,
)

MIN_SCALE = 0.3
MAX_SCALE = 2.0
ZOOM_STEP = 0.1
FIT_PADDING = 100.0


@dataclass(frozen=True)
class Viewport:
    """Scale and pan of the canvas inside its container."""

    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def __post_init__(self) -> None:
        validate_positive("scale", self.scale)

    def to_canvas(self, screen_point: Point) -> Point:
        """Convert a point in container coordinates to canvas coordinates."""
        return (
            (screen_point[0] - self.pan_x) / self.scale,
            (screen_point[1] - self.pan_y) / self.scale,
        )

    def to_screen(self, canvas_point: Point) -> Point:
        """Convert a canvas point to container coordinates."""
        return (
            canvas_point[0] * self.scale + self.pan_x,
            canvas_point[1] * self.scale + self.pan_y,
        )

    def drag_delta(self, dx: float, dy: float) -> Point:
        """Convert a pointer movement on screen into a canvas movement."""
        return (dx / self.scale, dy / self.scale)

    def zoom_in(self, step: float = ZOOM_STEP, max_scale: float = MAX_SCALE) -> Viewport:
        return replace(self, scale=min(self.scale + step, max_scale))

    def zoom_out(self, step: float = ZOOM_STEP, min_scale: float = MIN_SCALE) -> Viewport:
        return replace(self, scale=max(self.scale - step, min_scale))

    def panned(self, dx: float, dy: float) -> Viewport:
        """Move the view by a screen-space offset."""
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)


IDENTITY_VIEWPORT = Viewport()


def fit_view(
    shapes: Iterable[ShapeLike],
    container_size: SizeType,
    padding: float = FIT_PADDING,
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
    metrics: ShapeMetrics = DEFAULT_METRICS,
) -> Viewport:
    """
    Compute the viewport that shows every top-level shape.

    The scale fits the content's bounding box into the container minus
    ``padding`` on every side, clamped to [min_scale, max_scale]. The pan
    puts the centre of the content at the centre of the container.
    Persons inside a group are covered by their group and are ignored.

    Args:
        shapes: Shapes on the canvas
        container_size: (width, height) of the visible area
        padding: Screen-space margin around the content
        min_scale: Smallest allowed scale
        max_scale: Largest allowed scale
        metrics: Shape dimensions

    Returns:
        Fitted viewport; the identity viewport if there are no shapes

    Raises:
        InvalidConfigError: If the container size or scale bounds are invalid
    """
    width, height = validate_container_size(container_size)
    validate_non_negative("padding", padding)
    validate_positive("min_scale", min_scale)
    if max_scale < min_scale:
        raise InvalidConfigError(
            f"max_scale must be >= min_scale, got {max_scale} < {min_scale}"
        )

    shape_list = coerce_shapes(shapes)
    owners = group_owner_map(shape_list)
    box = bounding_box([s for s in shape_list if s.id not in owners], metrics)
    if box is None:
        return IDENTITY_VIEWPORT

    candidates = []
    if box.width > 0:
        candidates.append((width - padding * 2) / box.width)
    if box.height > 0:
        candidates.append((height - padding * 2) / box.height)
    scale = min(candidates) if candidates else max_scale
    scale = min(max(scale, min_scale), max_scale)

    cx, cy = box.center
    return Viewport(scale=scale, pan_x=width / 2 - cx * scale, pan_y=height / 2 - cy * scale)


__all__ = [
    "MIN_SCALE",
    "MAX_SCALE",
    "ZOOM_STEP",
    "FIT_PADDING",
    "Viewport",
    "IDENTITY_VIEWPORT",
    "fit_view",
]
