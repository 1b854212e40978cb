"""Orthogonal connector routing.

Routes connectors between shape attachment points using only horizontal
and vertical legs:
- Every path leaves its source and enters its target perpendicular to the
  attachment side, after a straight stand-off run
- Facing shapes that sit close together share the gap between them
- Middle legs follow one of three cases (direct, close, elbow/bus)

Used both for persisted connections and for the live drag preview, where
the target side is picked from the pointer position.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Iterable, Optional

from ..geometry import DEFAULT_METRICS, ShapeMetrics, attachment_point, resolve_attachment
from ..types import Connection, Point, Shape, Side
from ..validation import ShapeNotFoundError
from .types import DEFAULT_ROUTER_CONFIG, RoutedPath, RouterConfig, RouteStrategy

_EPS = 1e-9


def pick_target_side(from_pt: Point, to_pt: Point) -> Side:
    """Pick the side a free-floating target should be entered from.

    Horizontal dominance enters from the left/right, vertical dominance
    from the top/bottom, always on the side facing the source.
    """
    dx = to_pt[0] - from_pt[0]
    dy = to_pt[1] - from_pt[1]

    if abs(dx) > abs(dy):
        return Side.LEFT if dx > 0 else Side.RIGHT
    return Side.TOP if dy > 0 else Side.BOTTOM


def _facing_gap(from_pt: Point, to_pt: Point, from_side: Side, to_side: Side) -> Optional[float]:
    """Gap between two attachment points whose sides face each other, else None."""
    if from_side is Side.BOTTOM and to_side is Side.TOP:
        return to_pt[1] - from_pt[1]
    if from_side is Side.TOP and to_side is Side.BOTTOM:
        return from_pt[1] - to_pt[1]
    if from_side is Side.RIGHT and to_side is Side.LEFT:
        return to_pt[0] - from_pt[0]
    if from_side is Side.LEFT and to_side is Side.RIGHT:
        return from_pt[0] - to_pt[0]
    return None


def standoff_offsets(
    from_pt: Point,
    to_pt: Point,
    from_side: Side,
    to_side: Side,
    standoff: float = DEFAULT_ROUTER_CONFIG.standoff,
) -> tuple[float, float]:
    """Compute the stand-off run at the source and target ends.

    When the two sides face each other and the gap between them is less
    than two full stand-offs, each end gets half the gap (never less than
    zero) so the legs meet instead of overshooting.

    Returns:
        (source_offset, target_offset)
    """
    gap = _facing_gap(from_pt, to_pt, from_side, to_side)
    if gap is None or gap >= standoff * 2:
        return (standoff, standoff)

    half = max(0.0, gap / 2)
    return (half, half)


def _extend(point: Point, side: Side, distance: float) -> Point:
    dx, dy = side.direction()
    return (point[0] + dx * distance, point[1] + dy * distance)


def _dedupe(points: list[Point]) -> list[Point]:
    """Drop consecutive duplicate points (zero-length legs)."""
    result: list[Point] = []
    for pt in points:
        if result and abs(pt[0] - result[-1][0]) < _EPS and abs(pt[1] - result[-1][1]) < _EPS:
            continue
        result.append(pt)
    return result


def route(
    from_pt: Point,
    to_pt: Point,
    from_side: Side,
    to_side: Optional[Side] = None,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> RoutedPath:
    """Route a single orthogonal connector between two attachment points.

    Cases for the middle legs, between the extended source point and the
    extended target point (``pre_target``):

    1. Direct: the extended points line up on the source side's axis.
       A small offset within the tolerance becomes a short jog just
       before ``pre_target``, so no leg is ever diagonal.
    2. Close: the endpoints are very close and nearly aligned in x;
       go across to the target x, then straight to ``pre_target``.
    3. Elbow: vertical-first through a horizontal bus at the mean y for
       top/bottom sources, horizontal-first through a vertical bus at the
       mean x for left/right sources.

    Args:
        from_pt: Source attachment point.
        to_pt: Target attachment point (or the pointer, for previews).
        from_side: Side the connector leaves the source from.
        to_side: Side the connector enters the target from. None picks
            one from the relative position (drag preview).
        config: Router tuning parameters.

    Returns:
        The routed path, from ``from_pt`` to ``to_pt`` inclusive.
    """
    target_side = to_side if to_side is not None else pick_target_side(from_pt, to_pt)

    fx, fy = from_pt
    tx, ty = to_pt
    if abs(fx - tx) < _EPS and abs(fy - ty) < _EPS:
        return RoutedPath(
            points=(from_pt,),
            from_side=from_side,
            to_side=target_side,
            strategy=RouteStrategy.DEGENERATE,
        )

    from_off, to_off = standoff_offsets(from_pt, to_pt, from_side, target_side, config.standoff)
    cx, cy = _extend(from_pt, from_side, from_off)
    bx, by = pre_target = _extend(to_pt, target_side, to_off)

    aligned_x = abs(cx - bx) < config.align_tolerance
    aligned_y = abs(cy - by) < config.align_tolerance
    very_close = math.hypot(tx - fx, ty - fy) < config.close_distance

    middle: list[Point]
    if (from_side.is_vertical() and aligned_x) or (from_side.is_horizontal() and aligned_y):
        strategy = RouteStrategy.DIRECT
        # Jog onto the target axis; collapses away when exactly aligned
        jog = (cx, by) if from_side.is_vertical() else (bx, cy)
        middle = [jog, pre_target]
    elif very_close and abs(cx - bx) < config.close_offset:
        strategy = RouteStrategy.CLOSE
        middle = [(bx, cy), pre_target]
    elif from_side.is_vertical():
        strategy = RouteStrategy.ELBOW
        mid_y = (cy + by) / 2
        middle = [(cx, mid_y), (bx, mid_y), pre_target]
    else:
        strategy = RouteStrategy.ELBOW
        mid_x = (cx + bx) / 2
        middle = [(mid_x, cy), (mid_x, by), pre_target]

    points = _dedupe([from_pt, (cx, cy), *middle, to_pt])
    return RoutedPath(
        points=tuple(points),
        from_side=from_side,
        to_side=target_side,
        strategy=strategy,
    )


def route_connection(
    connection: Connection,
    shapes: Mapping[str, Shape],
    metrics: ShapeMetrics = DEFAULT_METRICS,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> RoutedPath:
    """Route a persisted connection between two shapes.

    Raises:
        ShapeNotFoundError: If either endpoint is not in ``shapes``
    """
    from_pt = resolve_attachment(shapes, connection.from_id, connection.from_side, metrics)
    to_pt = resolve_attachment(shapes, connection.to_id, connection.to_side, metrics)
    return route(from_pt, to_pt, connection.from_side, connection.to_side, config)


def route_preview(
    shape: Shape,
    side: Side,
    pointer: Point,
    metrics: ShapeMetrics = DEFAULT_METRICS,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> RoutedPath:
    """Route the live connector that follows the pointer while dragging.

    The target side is chosen automatically from the pointer position.
    """
    from_pt = attachment_point(shape, side, metrics)
    return route(from_pt, pointer, side, None, config)


def route_all_connections(
    connections: Iterable[Connection],
    shapes: Mapping[str, Shape],
    metrics: ShapeMetrics = DEFAULT_METRICS,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    strict: bool = False,
) -> tuple[dict[str, RoutedPath], list[str]]:
    """Route every connection, in input order.

    Args:
        connections: Connections to route.
        shapes: Shapes indexed by id.
        metrics: Shape dimensions.
        config: Router tuning parameters.
        strict: If True, a dangling endpoint raises. If False, the
            connection is skipped and reported.

    Returns:
        (paths by connection id, ids of skipped connections)

    Raises:
        ShapeNotFoundError: If strict=True and an endpoint is unknown
    """
    paths: dict[str, RoutedPath] = {}
    skipped: list[str] = []

    for conn in connections:
        try:
            paths[conn.id] = route_connection(conn, shapes, metrics, config)
        except ShapeNotFoundError:
            if strict:
                raise
            skipped.append(conn.id)

    return paths, skipped


__all__ = [
    "pick_target_side",
    "standoff_offsets",
    "route",
    "route_connection",
    "route_preview",
    "route_all_connections",
]
