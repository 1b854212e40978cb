"""
Diagram engine.

Ties the pieces together for an editor front end:

- render(): route every connection, find crossings, route the drag preview
- auto_layout(): infer the hierarchy and compute tidy tree positions
- apply_positions() / drop_shape(): produce updated shape lists

The engine holds only configuration. Every call works on the shapes and
connections passed in and never mutates them.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from .geometry import DEFAULT_METRICS, ShapeMetrics, shape_size
from .grid import snap_shape
from .hierarchical import (
    DEFAULT_HIERARCHY_CONFIG,
    DEFAULT_TREE_CONFIG,
    Forest,
    HierarchyConfig,
    TidyTreeLayout,
    TreeLayoutConfig,
    build_forest,
)
from .routing import (
    DEFAULT_ROUTER_CONFIG,
    RoutedPath,
    RouterConfig,
    find_crossings,
    route_all_connections,
    route_preview,
)
from .types import (
    Connection,
    ConnectionLike,
    ConnectionStyle,
    Point,
    Shape,
    ShapeLike,
    Side,
)
from .validation import coerce_connections, coerce_shapes, coerce_side, validate_shapes


@dataclass(frozen=True)
class Preview:
    """A connector being dragged out of a shape's attachment point."""

    shape_id: str
    side: Side
    pointer: Point


PreviewLike = Union[Preview, tuple[str, Union[Side, str], Point]]


@dataclass(frozen=True)
class Connector:
    """A routed connection, ready to draw."""

    connection: Connection
    path: RoutedPath
    crossings: tuple[Point, ...] = ()

    @property
    def id(self) -> str:
        return self.connection.id

    @property
    def style(self) -> ConnectionStyle:
        return self.connection.style

    @property
    def dashed(self) -> bool:
        return self.connection.style is ConnectionStyle.DASHED

    def midpoint(self) -> Point:
        """Where the connector's controls are drawn."""
        return self.path.midpoint()


@dataclass
class RenderResult:
    """Output of DiagramEngine.render()."""

    connectors: list[Connector] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    preview: Optional[RoutedPath] = None

    @property
    def paths(self) -> dict[str, RoutedPath]:
        return {c.id: c.path for c in self.connectors}

    def get(self, connection_id: str) -> Optional[Connector]:
        for connector in self.connectors:
            if connector.id == connection_id:
                return connector
        return None


@dataclass
class LayoutResult:
    """Output of DiagramEngine.auto_layout()."""

    positions: dict[str, Point]
    forest: Forest

    @property
    def unplaced(self) -> list[str]:
        """Top-level shapes the layout left where they were."""
        return [nid for nid in self.forest.nodes if nid not in self.positions]


class DiagramEngine:
    """
    Layout and routing engine for an org chart canvas.

    Example:
        engine = DiagramEngine()
        result = engine.render(shapes, connections)
        for connector in result.connectors:
            draw(connector.path.svg_path(), bridges=connector.crossings)

        layout = engine.auto_layout(shapes, connections)
        shapes = engine.apply_positions(shapes, layout.positions)
    """

    def __init__(
        self,
        *,
        metrics: ShapeMetrics = DEFAULT_METRICS,
        router_config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        hierarchy_config: HierarchyConfig = DEFAULT_HIERARCHY_CONFIG,
        tree_config: TreeLayoutConfig = DEFAULT_TREE_CONFIG,
        validate: bool = True,
    ) -> None:
        """
        Initialize the engine.

        Args:
            metrics: Shape dimensions
            router_config: Connector routing parameters
            hierarchy_config: Hierarchy inference thresholds
            tree_config: Tree layout spacing and grid
            validate: Check group membership rules on every call
        """
        self._metrics = metrics
        self._router_config = router_config
        self._hierarchy_config = hierarchy_config
        self._tree_config = tree_config
        self._validate = validate

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def metrics(self) -> ShapeMetrics:
        return self._metrics

    @property
    def router_config(self) -> RouterConfig:
        return self._router_config

    @property
    def hierarchy_config(self) -> HierarchyConfig:
        return self._hierarchy_config

    @property
    def tree_config(self) -> TreeLayoutConfig:
        return self._tree_config

    @property
    def grid_size(self) -> Optional[float]:
        """Grid pitch used for snapping dropped shapes (None: no snapping)."""
        return self._tree_config.grid_size

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _shapes(self, shapes: Iterable[ShapeLike]) -> list[Shape]:
        shape_list = coerce_shapes(shapes)
        if self._validate:
            validate_shapes(shape_list)
        return shape_list

    def render(
        self,
        shapes: Iterable[ShapeLike],
        connections: Iterable[ConnectionLike],
        preview: Optional[PreviewLike] = None,
    ) -> RenderResult:
        """
        Route all connections and find their crossings.

        Connections that reference a shape that no longer exists are
        skipped and listed in ``skipped``. The preview is dropped if its
        source shape does not exist.

        Args:
            shapes: Shapes on the canvas
            connections: Connections, in drawing order
            preview: Connector currently being dragged, as a Preview or a
                (shape_id, side, pointer) tuple

        Returns:
            Connectors in input order, skipped ids and the preview path
        """
        shape_list = self._shapes(shapes)
        conns = coerce_connections(connections)
        by_id = {s.id: s for s in shape_list}

        paths, skipped = route_all_connections(
            conns, by_id, self._metrics, self._router_config
        )
        crossings = find_crossings(paths)

        result = RenderResult(skipped=skipped)
        for conn in conns:
            if conn.id in paths and conn.id not in skipped:
                result.connectors.append(
                    Connector(conn, paths[conn.id], tuple(crossings.get(conn.id, ())))
                )

        if preview is not None:
            if not isinstance(preview, Preview):
                shape_id, side, pointer = preview
                preview = Preview(str(shape_id), coerce_side(side), pointer)
            source = by_id.get(preview.shape_id)
            if source is not None:
                result.preview = route_preview(
                    source, preview.side, preview.pointer, self._metrics, self._router_config
                )

        return result

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def auto_layout(
        self,
        shapes: Iterable[ShapeLike],
        connections: Iterable[ConnectionLike],
    ) -> LayoutResult:
        """
        Arrange the chart as a tidy tree.

        Returns:
            New top-left positions of the top-level shapes, and the
            inferred forest

        Raises:
            ShapeNotFoundError: If a connection references an unknown shape
        """
        shape_list = self._shapes(shapes)
        forest = build_forest(shape_list, connections, self._hierarchy_config)
        sizes = {s.id: shape_size(s, self._metrics) for s in shape_list}

        layout = TidyTreeLayout(forest=forest, sizes=sizes, config=self._tree_config)
        layout.run()
        return LayoutResult(positions=layout.positions, forest=forest)

    def apply_positions(
        self,
        shapes: Iterable[ShapeLike],
        positions: Mapping[str, Point],
    ) -> list[Shape]:
        """Return a new shape list with the given top-left positions applied."""
        return [
            dataclasses.replace(s, x=positions[s.id][0], y=positions[s.id][1])
            if s.id in positions
            else s
            for s in coerce_shapes(shapes)
        ]

    def drop_shape(self, shape: ShapeLike, x: float, y: float) -> Shape:
        """Move a shape to (x, y) and snap it to the grid, as at the end of a drag."""
        moved = dataclasses.replace(coerce_shapes([shape])[0], x=x, y=y)
        if self.grid_size is None:
            return moved
        return snap_shape(moved, self.grid_size)

    def toggle_style(
        self,
        connections: Sequence[ConnectionLike],
        connection_id: str,
    ) -> list[Connection]:
        """Return the connections with one connector switched between solid and dashed."""
        return [
            dataclasses.replace(c, style=c.style.toggled()) if c.id == connection_id else c
            for c in coerce_connections(connections)
        ]


__all__ = [
    "Preview",
    "Connector",
    "RenderResult",
    "LayoutResult",
    "DiagramEngine",
]
