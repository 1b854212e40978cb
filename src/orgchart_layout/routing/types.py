"""
Type definitions for connector routing.

Provides data structures for routed orthogonal connector paths and
the router's tuning parameters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from ..types import Point, Side
from ..validation import validate_non_negative


class RouteStrategy(Enum):
    """Which routing case produced a path."""

    DIRECT = "direct"  # extended points aligned, one middle leg
    CLOSE = "close"  # shapes very close, two middle legs
    ELBOW = "elbow"  # bus routing through a midline, three middle legs
    DEGENERATE = "degenerate"  # coincident endpoints, a single point


@dataclass(frozen=True)
class RouterConfig:
    """Tuning parameters for the orthogonal router."""

    standoff: float = 30.0  # Straight run out of a shape before turning
    align_tolerance: float = 5.0  # Extended points closer than this are aligned
    close_distance: float = 100.0  # Endpoints closer than this are "very close"
    close_offset: float = 40.0  # Max x offset for the simplified close route

    def __post_init__(self) -> None:
        validate_non_negative("standoff", self.standoff)
        validate_non_negative("align_tolerance", self.align_tolerance)
        validate_non_negative("close_distance", self.close_distance)
        validate_non_negative("close_offset", self.close_offset)


DEFAULT_ROUTER_CONFIG = RouterConfig()


@dataclass(frozen=True)
class PathSegment:
    """
    One leg of a routed connector.

    Routed connectors consist of horizontal and vertical segments.
    """

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_horizontal(self) -> bool:
        return abs(self.y1 - self.y2) < 1e-9

    @property
    def is_vertical(self) -> bool:
        return abs(self.x1 - self.x2) < 1e-9

    @property
    def length(self) -> float:
        """Get segment length."""
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class RoutedPath:
    """
    An orthogonal connector path.

    Contains the ordered points from the source attachment point to the
    target attachment point; segments are consecutive point pairs.
    """

    points: tuple[Point, ...]
    from_side: Side
    to_side: Side
    strategy: RouteStrategy
    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segs = tuple(
            PathSegment(x1, y1, x2, y2)
            for (x1, y1), (x2, y2) in zip(self.points, self.points[1:])
        )
        object.__setattr__(self, "segments", segs)

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def is_degenerate(self) -> bool:
        """True when the path collapsed to a single point."""
        return len(self.points) < 2

    @property
    def length(self) -> float:
        """Total length of all segments."""
        return sum(seg.length for seg in self.segments)

    def point_at(self, t: float) -> Point:
        """
        Get the point at fraction ``t`` of the path's length.

        Args:
            t: Position along the path, clamped to [0, 1]

        Returns:
            (x, y) on the path
        """
        if self.is_degenerate:
            return self.points[0]

        t = max(0.0, min(1.0, t))
        target = self.length * t
        travelled = 0.0
        for seg in self.segments:
            seg_len = seg.length
            if seg_len > 0 and travelled + seg_len >= target:
                f = (target - travelled) / seg_len
                return (seg.x1 + (seg.x2 - seg.x1) * f, seg.y1 + (seg.y2 - seg.y1) * f)
            travelled += seg_len
        return self.points[-1]

    def midpoint(self) -> Point:
        """Point halfway along the path (where connector controls are drawn)."""
        return self.point_at(0.5)

    def svg_path(self) -> str:
        """SVG path data (``M x y L x y ...``) for stroking this connector."""
        if not self.points:
            return ""
        head, *rest = self.points
        parts = [f"M {_fmt(head[0])} {_fmt(head[1])}"]
        parts.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in rest)
        return " ".join(parts)


def _fmt(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


__all__ = [
    "RouteStrategy",
    "RouterConfig",
    "DEFAULT_ROUTER_CONFIG",
    "PathSegment",
    "RoutedPath",
]
