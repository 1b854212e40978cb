"""
Diagram quality metrics.

Provides quantitative measures of a rendered org chart:
- Overlapping shapes: Pairs of top-level shapes whose rectangles overlap
- Connector crossings: Number of bridges the renderer has to draw
- Path length: Total ink spent on connectors
- Bends: Number of turns per connector

All metrics work with shape positions and routed paths from any source.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Iterable, List

from .geometry import DEFAULT_METRICS, ShapeMetrics, group_owner_map, shape_bounds
from .routing.crossings import count_crossings
from .routing.types import RoutedPath
from .types import ShapeLike
from .validation import coerce_shapes


def overlapping_shapes(
    shapes: Iterable[ShapeLike],
    metrics: ShapeMetrics = DEFAULT_METRICS,
) -> list[tuple[str, str]]:
    """
    Find pairs of top-level shapes whose rectangles overlap.

    Shapes that only touch along an edge do not overlap. Persons inside a
    group are drawn within the group and are not checked.

    Returns:
        (id_a, id_b) pairs, in input order

    Time Complexity: O(n^2) where n = number of shapes
    """
    shape_list = coerce_shapes(shapes)
    owners = group_owner_map(shape_list)
    boxes = [(s.id, shape_bounds(s, metrics)) for s in shape_list if s.id not in owners]

    pairs = []
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            if boxes[i][1].intersects(boxes[j][1]):
                pairs.append((boxes[i][0], boxes[j][0]))
    return pairs


def bend_count(path: RoutedPath) -> int:
    """
    Count the turns along a connector.

    A point where the direction of travel changes is a bend; collinear
    points are not.
    """
    bends = 0
    segments = [seg for seg in path.segments if seg.length > 0]
    for prev, cur in zip(segments, segments[1:]):
        dx1, dy1 = prev.x2 - prev.x1, prev.y2 - prev.y1
        dx2, dy2 = cur.x2 - cur.x1, cur.y2 - cur.y1
        if abs(dx1 * dy2 - dy1 * dx2) > 1e-9 or dx1 * dx2 + dy1 * dy2 < 0:
            bends += 1
    return bends


def total_path_length(paths: Mapping[str, RoutedPath]) -> float:
    """Sum of the lengths of all connectors."""
    return sum(path.length for path in paths.values())


def _path_lengths(paths: Mapping[str, RoutedPath]) -> List[float]:
    return [path.length for path in paths.values() if not path.is_degenerate]


def path_length_uniformity(paths: Mapping[str, RoutedPath]) -> float:
    """
    Compute connector length uniformity (0-1, higher is better).

    Returns:
        1 - (std_dev / mean), clamped to [0, 1]
    """
    lengths = _path_lengths(paths)
    if not lengths:
        return 1.0

    mean = sum(lengths) / len(lengths)
    if mean == 0:
        return 0.0

    variance = sum((length - mean) ** 2 for length in lengths) / len(lengths)
    std_dev = math.sqrt(variance)

    return max(0.0, min(1.0, 1.0 - std_dev / mean))


def diagram_quality_summary(
    shapes: Iterable[ShapeLike],
    paths: Mapping[str, RoutedPath],
    metrics: ShapeMetrics = DEFAULT_METRICS,
) -> dict[str, Any]:
    """
    Compute a summary of diagram quality metrics.

    Args:
        shapes: Positioned shapes
        paths: Routed connectors keyed by connection id
        metrics: Shape dimensions

    Returns:
        Dictionary with all metrics:
        - overlapping_shapes: Number of overlapping top-level shape pairs
        - connector_crossings: Number of connector crossings
        - total_path_length: Sum of connector lengths
        - total_bends: Sum of bends over all connectors
        - max_bends: Largest bend count of a single connector
        - path_length_uniformity: Uniformity score (0-1)
    """
    bends = [bend_count(path) for path in paths.values()]
    return {
        "overlapping_shapes": len(overlapping_shapes(shapes, metrics)),
        "connector_crossings": count_crossings(paths),
        "total_path_length": total_path_length(paths),
        "total_bends": sum(bends),
        "max_bends": max(bends, default=0),
        "path_length_uniformity": path_length_uniformity(paths),
    }


__all__ = [
    "overlapping_shapes",
    "bend_count",
    "total_path_length",
    "path_length_uniformity",
    "diagram_quality_summary",
]
