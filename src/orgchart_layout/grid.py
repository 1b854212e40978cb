"""
Grid snapping.

Quantizes canvas coordinates to a fixed grid pitch. Applied to shape
positions when a drag ends and to every auto-layout result.
"""

from __future__ import annotations

import dataclasses
import math

from .types import Point, Shape
from .validation import validate_positive

DEFAULT_GRID_SIZE = 20


def snap(value: float, grid_size: float = DEFAULT_GRID_SIZE) -> float:
    """
    Snap a value to the nearest grid line.

    Halves round up (towards positive infinity), so ``snap(10) == 20``
    and ``snap(-10) == 0``.

    Raises:
        InvalidConfigError: If grid_size is not positive
    """
    validate_positive("grid_size", grid_size)
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_point(point: Point, grid_size: float = DEFAULT_GRID_SIZE) -> Point:
    """Snap both coordinates of a point."""
    return (snap(point[0], grid_size), snap(point[1], grid_size))


def snap_shape(shape: Shape, grid_size: float = DEFAULT_GRID_SIZE) -> Shape:
    """Return a copy of the shape with its top-left corner snapped to the grid."""
    x, y = snap_point((shape.x, shape.y), grid_size)
    return dataclasses.replace(shape, x=x, y=y)


__all__ = ["DEFAULT_GRID_SIZE", "snap", "snap_point", "snap_shape"]
