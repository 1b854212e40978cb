"""
Hierarchy inference for auto-layout.

Turns the connections of an org chart into a forest of top-level shapes.
Connections carry no parent/child meaning of their own, so the direction
is read from the canvas: the shape sitting clearly higher up is the
parent. Persons inside a group are represented by their group.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..geometry import group_owner_map
from ..preprocessing import detect_cycle, reachable_from
from ..types import ConnectionLike, Shape, ShapeLike
from ..validation import (
    ShapeNotFoundError,
    coerce_connections,
    coerce_shapes,
    validate_non_negative,
)


class HierarchyCycleWarning(UserWarning):
    """Warning issued when the inferred hierarchy contains a cycle."""

    pass


@dataclass(frozen=True)
class HierarchyConfig:
    """Tuning parameters for hierarchy inference."""

    vertical_gap_threshold: float = 40.0  # Larger y difference decides the parent
    root_tolerance: float = 10.0  # Fallback roots sit this close to the topmost shape

    def __post_init__(self) -> None:
        validate_non_negative("vertical_gap_threshold", self.vertical_gap_threshold)
        validate_non_negative("root_tolerance", self.root_tolerance)


DEFAULT_HIERARCHY_CONFIG = HierarchyConfig()


@dataclass(frozen=True)
class DroppedEdge:
    """A connection that did not become a tree edge."""

    connection_id: str
    parent_id: str
    child_id: str
    reason: str  # "self-loop", "duplicate", "conflict" or "superseded"


@dataclass
class Forest:
    """
    Parent/child structure of the top-level shapes.

    Attributes:
        nodes: Top-level shape ids, in input order
        roots: Ids the layout starts from, in input order
        parent_of: Parent id of each node (None for parentless nodes)
        children_of: Child ids of each node, in connection order
        dropped: Connections that were discarded while building the tree
        unreachable: Nodes no root leads to (only possible with cycles)
        cycle: First cycle found among the tree edges, if any
    """

    nodes: list[str] = field(default_factory=list)
    roots: list[str] = field(default_factory=list)
    parent_of: dict[str, Optional[str]] = field(default_factory=dict)
    children_of: dict[str, list[str]] = field(default_factory=dict)
    dropped: list[DroppedEdge] = field(default_factory=list)
    unreachable: list[str] = field(default_factory=list)
    cycle: Optional[list[str]] = None

    @property
    def edges(self) -> list[tuple[str, str]]:
        """Tree edges as (parent, child) pairs."""
        return [(p, c) for p in self.nodes for c in self.children_of.get(p, [])]

    def depth_of(self, node_id: str) -> int:
        """Number of ancestors above a node (cycle-safe)."""
        depth = 0
        seen = {node_id}
        parent = self.parent_of.get(node_id)
        while parent is not None and parent not in seen:
            seen.add(parent)
            depth += 1
            parent = self.parent_of.get(parent)
        return depth


def _orient(a: Shape, b: Shape, threshold: float) -> tuple[Shape, Shape]:
    """Decide (parent, child) for a connection from ``a`` to ``b``."""
    if abs(a.y - b.y) > threshold:
        return (a, b) if a.y < b.y else (b, a)
    return a, b


def build_forest(
    shapes: Iterable[ShapeLike],
    connections: Iterable[ConnectionLike],
    config: HierarchyConfig = DEFAULT_HIERARCHY_CONFIG,
) -> Forest:
    """
    Infer a parent/child forest from shapes and connections.

    Rules:
    - Layout nodes are groups plus persons that belong to no group;
      connection endpoints inside a group are replaced by the group
    - Connections that collapse onto a single node are ignored
    - If the endpoints differ in y by more than the threshold, the higher
      shape is the parent; otherwise the connection direction decides
    - A node keeps one parent: a later candidate wins only if it sits
      strictly higher than the current parent
    - Nodes without a parent are roots. If there are none, every node
      within ``root_tolerance`` of the topmost node becomes a root

    Args:
        shapes: Shapes on the canvas (Shape objects or dicts)
        connections: Connections (Connection objects or dicts)
        config: Inference thresholds

    Returns:
        The inferred forest

    Raises:
        ShapeNotFoundError: If a connection references an unknown shape
    """
    shape_list = coerce_shapes(shapes)
    by_id = {s.id: s for s in shape_list}
    owners = group_owner_map(shape_list)

    top_level = [s for s in shape_list if s.id not in owners]
    node_map = {s.id: s for s in top_level}
    forest = Forest(
        nodes=[s.id for s in top_level],
        parent_of={s.id: None for s in top_level},
        children_of={s.id: [] for s in top_level},
    )
    parent_edge: dict[str, str] = {}  # child id -> connection id

    for conn in coerce_connections(connections):
        for endpoint in (conn.from_id, conn.to_id):
            if endpoint not in by_id:
                raise ShapeNotFoundError(endpoint, f"connection {conn.id!r}")

        a = node_map.get(owners.get(conn.from_id, conn.from_id))
        b = node_map.get(owners.get(conn.to_id, conn.to_id))
        if a is None or b is None:
            continue
        if a.id == b.id:
            forest.dropped.append(DroppedEdge(conn.id, a.id, b.id, "self-loop"))
            continue

        parent, child = _orient(a, b, config.vertical_gap_threshold)
        existing = forest.parent_of[child.id]

        if existing is None:
            forest.parent_of[child.id] = parent.id
            forest.children_of[parent.id].append(child.id)
            parent_edge[child.id] = conn.id
        elif existing == parent.id:
            forest.dropped.append(DroppedEdge(conn.id, parent.id, child.id, "duplicate"))
        elif parent.y < node_map[existing].y:
            forest.dropped.append(
                DroppedEdge(parent_edge[child.id], existing, child.id, "superseded")
            )
            forest.children_of[existing].remove(child.id)
            forest.parent_of[child.id] = parent.id
            forest.children_of[parent.id].append(child.id)
            parent_edge[child.id] = conn.id
        else:
            forest.dropped.append(DroppedEdge(conn.id, parent.id, child.id, "conflict"))

    forest.roots = [nid for nid in forest.nodes if forest.parent_of[nid] is None]
    if not forest.roots and top_level:
        min_y = min(s.y for s in top_level)
        forest.roots = [s.id for s in top_level if abs(s.y - min_y) < config.root_tolerance]

    forest.cycle = detect_cycle(forest.nodes, forest.children_of)
    reached = reachable_from(forest.roots, forest.children_of)
    forest.unreachable = [nid for nid in forest.nodes if nid not in reached]

    if forest.cycle is not None:
        warnings.warn(
            f"Connections form a cycle ({' -> '.join(forest.cycle)}). "
            f"{len(forest.unreachable)} shape(s) are not reachable from any root "
            "and keep their current positions.",
            HierarchyCycleWarning,
            stacklevel=2,
        )

    return forest


__all__ = [
    "HierarchyCycleWarning",
    "HierarchyConfig",
    "DEFAULT_HIERARCHY_CONFIG",
    "DroppedEdge",
    "Forest",
    "build_forest",
]
