"""
Connector routing.

Routes connectors between shapes using only horizontal and vertical
segments, and finds where connectors cross so a renderer can draw
bridges over them.

Available functions:
- route: Route between two attachment points
- route_connection / route_preview: Route a connection or a drag preview
- find_crossings: Crossing points per connector
"""

from .crossings import (
    count_crossings,
    find_crossings,
    segment_intersection,
)
from .router import (
    pick_target_side,
    route,
    route_all_connections,
    route_connection,
    route_preview,
    standoff_offsets,
)
from .types import (
    DEFAULT_ROUTER_CONFIG,
    PathSegment,
    RoutedPath,
    RouterConfig,
    RouteStrategy,
)

__all__ = [
    # Routing
    "pick_target_side",
    "standoff_offsets",
    "route",
    "route_connection",
    "route_preview",
    "route_all_connections",
    # Crossings
    "segment_intersection",
    "find_crossings",
    "count_crossings",
    # Types
    "RouteStrategy",
    "RouterConfig",
    "DEFAULT_ROUTER_CONFIG",
    "PathSegment",
    "RoutedPath",
]
