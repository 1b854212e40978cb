"""
orgchart-layout: Layout and connector routing for org chart diagrams.

This package positions people and client groups on a canvas and routes
the connectors between them.

Available components:
- geometry: Shape sizes and attachment points
- routing: Orthogonal connector routing and crossing detection
- hierarchical: Hierarchy inference and tidy tree layout
- engine: DiagramEngine facade for editor front ends
- viewport: Fit-to-view and screen/canvas conversion
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    StaticLayout,
)

# Diagram facade
from .engine import (
    Connector,
    DiagramEngine,
    LayoutResult,
    Preview,
    RenderResult,
)

# Shape geometry
from .geometry import (
    DEFAULT_METRICS,
    Rect,
    ShapeMetrics,
    attachment_point,
    bounding_box,
    frame_bounds,
    group_height,
    shape_bounds,
    shape_size,
)

# Grid snapping
from .grid import DEFAULT_GRID_SIZE, snap, snap_point, snap_shape

# Hierarchical layout
from .hierarchical import (
    Forest,
    HierarchyConfig,
    HierarchyCycleWarning,
    TidyTreeLayout,
    TreeLayoutConfig,
    TreeStructureWarning,
    build_forest,
    layout_tree,
)

# Metrics for diagram quality evaluation
from .metrics import (
    bend_count,
    diagram_quality_summary,
    overlapping_shapes,
    total_path_length,
)

# Preprocessing utilities
from .preprocessing import detect_cycle, has_cycle, reachable_from

# Connector routing
from .routing import (
    PathSegment,
    RoutedPath,
    RouterConfig,
    RouteStrategy,
    count_crossings,
    find_crossings,
    route,
    route_connection,
    route_preview,
)
from .types import (
    Connection,
    ConnectionLike,
    ConnectionStyle,
    Event,
    EventType,
    Point,
    Shape,
    ShapeKind,
    ShapeLike,
    Side,
    SizeType,
)

# Validation utilities
from .validation import (
    GroupCapacityError,
    InvalidConfigError,
    InvalidConnectionError,
    InvalidShapeError,
    ShapeNotFoundError,
    ValidationError,
    validate_connections,
    validate_shapes,
)
from .viewport import Viewport, fit_view

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Point",
    "Side",
    "ShapeKind",
    "ConnectionStyle",
    "Shape",
    "Connection",
    "EventType",
    "Event",
    # Type aliases for API
    "ShapeLike",
    "ConnectionLike",
    "SizeType",
    # Base classes
    "BaseLayout",
    "StaticLayout",
    # Geometry
    "ShapeMetrics",
    "DEFAULT_METRICS",
    "Rect",
    "shape_size",
    "shape_bounds",
    "group_height",
    "attachment_point",
    "bounding_box",
    "frame_bounds",
    # Grid
    "DEFAULT_GRID_SIZE",
    "snap",
    "snap_point",
    "snap_shape",
    # Routing
    "RouterConfig",
    "RouteStrategy",
    "PathSegment",
    "RoutedPath",
    "route",
    "route_connection",
    "route_preview",
    "find_crossings",
    "count_crossings",
    # Hierarchical layout
    "Forest",
    "HierarchyConfig",
    "HierarchyCycleWarning",
    "build_forest",
    "TidyTreeLayout",
    "TreeLayoutConfig",
    "TreeStructureWarning",
    "layout_tree",
    # Engine
    "DiagramEngine",
    "Preview",
    "Connector",
    "RenderResult",
    "LayoutResult",
    # Viewport
    "Viewport",
    "fit_view",
    # Metrics
    "overlapping_shapes",
    "bend_count",
    "total_path_length",
    "diagram_quality_summary",
    # Validation
    "ValidationError",
    "ShapeNotFoundError",
    "InvalidShapeError",
    "GroupCapacityError",
    "InvalidConnectionError",
    "InvalidConfigError",
    "validate_shapes",
    "validate_connections",
    # Preprocessing
    "detect_cycle",
    "has_cycle",
    "reachable_from",
]
