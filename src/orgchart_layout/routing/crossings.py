"""
Connector crossing detection.

Finds the points where routed connectors cross so a renderer can draw a
short "bridge" gap on the connector that is drawn underneath.

Every unordered pair of connectors is tested segment against segment.
A crossing is recorded against the connector that comes first in
iteration order. Diagrams hold tens of connectors, so the all-pairs test
runs per connector pair with numpy broadcasting instead of a spatial index.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

import numpy as np

from ..types import Point
from .types import PathSegment, RoutedPath

PARALLEL_EPS = 1e-4  # |determinant| below this means parallel
PARAM_MIN = 0.01  # Intersections must lie strictly inside both segments
PARAM_MAX = 0.99


def segment_intersection(
    seg1: PathSegment,
    seg2: PathSegment,
) -> Optional[Point]:
    """
    Find the point where two segments cross.

    Uses the parametric form of both segments. Parallel segments and
    intersections at (or very near) either segment's endpoints do not
    count.

    Returns:
        Intersection point (x, y) if the segments cross, None otherwise
    """
    x1, y1, x2, y2 = seg1.as_tuple()
    x3, y3, x4, y4 = seg2.as_tuple()

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < PARALLEL_EPS:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if PARAM_MIN < t < PARAM_MAX and PARAM_MIN < u < PARAM_MAX:
        return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))
    return None


def _segment_array(path: RoutedPath) -> np.ndarray:
    """Stack a path's segments into an (S, 4) float array."""
    if not path.segments:
        return np.empty((0, 4), dtype=np.float64)
    return np.array([seg.as_tuple() for seg in path.segments], dtype=np.float64)


def _pair_crossings(a: np.ndarray, b: np.ndarray) -> list[Point]:
    """
    Crossings between every segment of ``a`` and every segment of ``b``.

    Results come back in row-major order, i.e. the same order as a nested
    loop over ``a``'s segments then ``b``'s segments.
    """
    if a.shape[0] == 0 or b.shape[0] == 0:
        return []

    x1, y1, x2, y2 = (a[:, k][:, None] for k in range(4))
    x3, y3, x4, y4 = (b[:, k][None, :] for k in range(4))

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    valid = np.abs(denom) >= PARALLEL_EPS
    safe = np.where(valid, denom, 1.0)

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / safe
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / safe

    hit = valid & (t > PARAM_MIN) & (t < PARAM_MAX) & (u > PARAM_MIN) & (u < PARAM_MAX)
    rows, cols = np.nonzero(hit)
    if rows.size == 0:
        return []

    tt = t[rows, cols]
    ix = a[rows, 0] + tt * (a[rows, 2] - a[rows, 0])
    iy = a[rows, 1] + tt * (a[rows, 3] - a[rows, 1])
    return [(float(px), float(py)) for px, py in zip(ix, iy)]


def find_crossings(paths: Mapping[str, RoutedPath]) -> dict[str, list[Point]]:
    """
    Find all crossings between routed connectors.

    Args:
        paths: Routed paths keyed by connection id, in drawing order

    Returns:
        Mapping of connection id to the crossing points where a bridge
        should be drawn on it. Only connections with at least one
        crossing appear.

    Time Complexity: O(E^2 * S^2) for E connectors of S segments each
    """
    ids = list(paths.keys())
    arrays = [_segment_array(paths[cid]) for cid in ids]
    crossings: dict[str, list[Point]] = {}

    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            hits = _pair_crossings(arrays[i], arrays[j])
            if hits:
                crossings.setdefault(ids[i], []).extend(hits)

    return crossings


def count_crossings(paths: Mapping[str, RoutedPath]) -> int:
    """Total number of connector crossings."""
    return sum(len(points) for points in find_crossings(paths).values())


__all__ = [
    "PARALLEL_EPS",
    "segment_intersection",
    "find_crossings",
    "count_crossings",
]
