"""
Tidy tree layout for org charts.

A top-down layered tree layout in three passes:

1. Bottom-up: the width of every subtree is the larger of the node's own
   width and the width of its children placed side by side.
2. Level heights: every depth gets the height of its tallest node, and
   levels are stacked with a fixed vertical gap.
3. Top-down: each node is centred in the horizontal range allocated to
   it, and its children block is centred inside that range.

Unlike the Reingold-Tilford contour walk, subtrees never interleave: a
subtree owns its full width on every level below it. This keeps teams
visually separated on the chart.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..base import StaticLayout
from ..grid import DEFAULT_GRID_SIZE, snap
from ..types import Event, Point
from ..validation import InvalidConfigError, ShapeNotFoundError, validate_non_negative
from .forest import Forest

SizeLookup = Union[Mapping[str, tuple[float, float]], Callable[[str], tuple[float, float]]]
"""Node sizes: a mapping of id -> (width, height), or a function of the id."""


class TreeStructureWarning(UserWarning):
    """Warning issued when the forest is not a proper tree."""

    pass


@dataclass(frozen=True)
class TreeLayoutConfig:
    """Spacing and origin of the tidy tree layout."""

    horizontal_gap: float = 60.0  # Between siblings (roots get twice this)
    vertical_gap: float = 120.0  # Between the tallest node of a level and the next
    start_x: float = 100.0
    start_y: float = 100.0
    default_level_height: float = 100.0
    grid_size: Optional[float] = DEFAULT_GRID_SIZE  # None disables snapping

    def __post_init__(self) -> None:
        validate_non_negative("horizontal_gap", self.horizontal_gap)
        validate_non_negative("vertical_gap", self.vertical_gap)
        validate_non_negative("default_level_height", self.default_level_height)
        if self.grid_size is not None and self.grid_size <= 0:
            raise InvalidConfigError(f"grid_size must be positive, got {self.grid_size}")


DEFAULT_TREE_CONFIG = TreeLayoutConfig()

# Visit states
_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


class TreeNode:
    """Internal per-node layout state, addressed by a stable index."""

    def __init__(self, index: int, node_id: str, width: float, height: float) -> None:
        self.index = index
        self.id = node_id
        self.width = width
        self.height = height
        self.state = _UNVISITED
        self.depth = 0
        self.children: list[TreeNode] = []  # Children owned by this node
        self.subtree_width: float = 0.0


class TidyTreeLayout(StaticLayout):
    """
    Tidy tree layout of an inferred org chart forest.

    Positions are top-left corners snapped to the grid. Only nodes reached
    from a root are positioned; everything else keeps its place.

    Example:
        forest = build_forest(shapes, connections)
        sizes = {s.id: shape_size(s) for s in shapes}
        layout = TidyTreeLayout(forest=forest, sizes=sizes).run()
        layout.positions  # {"ceo": (100, 100), ...}
    """

    def __init__(
        self,
        *,
        forest: Optional[Forest] = None,
        sizes: Optional[SizeLookup] = None,
        config: TreeLayoutConfig = DEFAULT_TREE_CONFIG,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize tidy tree layout.

        Args:
            forest: Parent/child structure to lay out
            sizes: (width, height) of every node
            config: Spacing and origin
            on_start: Callback for start event
            on_end: Callback for end event
        """
        super().__init__(on_start=on_start, on_end=on_end)

        self._forest: Forest = forest if forest is not None else Forest()
        self._sizes: Optional[SizeLookup] = sizes
        self._config: TreeLayoutConfig = config

        # Per-run state
        self._tree_nodes: list[TreeNode] = []
        self._level_y: list[float] = []
        self._allocations: dict[str, tuple[float, float]] = {}
        self._revisits: list[tuple[str, str]] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def forest(self) -> Forest:
        """Get the forest being laid out."""
        return self._forest

    @forest.setter
    def forest(self, value: Forest) -> None:
        self._forest = value

    @property
    def sizes(self) -> Optional[SizeLookup]:
        """Get the node size lookup."""
        return self._sizes

    @sizes.setter
    def sizes(self, value: Optional[SizeLookup]) -> None:
        self._sizes = value

    @property
    def config(self) -> TreeLayoutConfig:
        """Get spacing configuration."""
        return self._config

    @config.setter
    def config(self, value: TreeLayoutConfig) -> None:
        if not isinstance(value, TreeLayoutConfig):
            raise InvalidConfigError(f"config must be a TreeLayoutConfig, got {type(value)!r}")
        self._config = value

    # Results of the last run

    @property
    def levels(self) -> dict[str, int]:
        """Depth of every laid-out node."""
        return {n.id: n.depth for n in self._tree_nodes if n.state == _DONE}

    @property
    def level_y(self) -> list[float]:
        """Top y of each depth (snapped to the grid when snapping is on)."""
        return list(self._level_y)

    @property
    def subtree_widths(self) -> dict[str, float]:
        """Width allocated to the subtree under every laid-out node."""
        return {n.id: n.subtree_width for n in self._tree_nodes if n.state == _DONE}

    @property
    def allocations(self) -> dict[str, tuple[float, float]]:
        """Horizontal range (x0, x1) allocated to every laid-out node."""
        return dict(self._allocations)

    @property
    def revisits(self) -> list[tuple[str, str]]:
        """(parent, child) edges skipped because the child was already laid out."""
        return list(self._revisits)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def _size_of(self, node_id: str) -> tuple[float, float]:
        sizes = self._sizes
        if sizes is None:
            raise ShapeNotFoundError(node_id, "no node sizes given")
        if callable(sizes):
            w, h = sizes(node_id)
        else:
            if node_id not in sizes:
                raise ShapeNotFoundError(node_id, "no size given")
            w, h = sizes[node_id]
        return float(w), float(h)

    def _compute(self, **kwargs: Any) -> None:
        self._tree_nodes = []
        self._level_y = []
        self._allocations = {}
        self._revisits = []

        forest = self._forest
        if not forest.roots:
            return

        node_ids = list(dict.fromkeys(forest.nodes))
        for node_id in forest.roots:
            if node_id not in node_ids:
                node_ids.append(node_id)
        for children in forest.children_of.values():
            for node_id in children:
                if node_id not in node_ids:
                    node_ids.append(node_id)

        index: dict[str, int] = {}
        for i, node_id in enumerate(node_ids):
            w, h = self._size_of(node_id)
            index[node_id] = i
            self._tree_nodes.append(TreeNode(i, node_id, w, h))

        # Pass 1: subtree widths (each node is owned by its first visitor)
        laid_roots: list[TreeNode] = []
        for root_id in forest.roots:
            root = self._tree_nodes[index[root_id]]
            if root.state != _UNVISITED:
                continue
            self._measure(root, 0, index)
            laid_roots.append(root)

        if self._revisits:
            warnings.warn(
                f"Found {len(self._revisits)} connection(s) leading back into an "
                "already laid-out subtree. They were ignored for layout; the "
                "connections still form a cycle.",
                TreeStructureWarning,
                stacklevel=3,
            )

        # Pass 2: level heights
        level_heights: dict[int, float] = {}
        for node in self._tree_nodes:
            if node.state == _DONE:
                level_heights[node.depth] = max(level_heights.get(node.depth, 0.0), node.height)

        cfg = self._config
        y = cfg.start_y
        for depth in range(max(level_heights) + 1):
            self._level_y.append(snap(y, cfg.grid_size) if cfg.grid_size is not None else y)
            y += level_heights.get(depth, cfg.default_level_height) + cfg.vertical_gap

        # Pass 3: positions
        x = cfg.start_x
        for root in laid_roots:
            self._place(root, x)
            x += root.subtree_width + cfg.horizontal_gap * 2

    def _measure(self, node: TreeNode, depth: int, index: dict[str, int]) -> float:
        """First pass: compute subtree widths (bottom-up)."""
        node.state = _IN_PROGRESS
        node.depth = depth

        children_width = 0.0
        for child_id in self._forest.children_of.get(node.id, ()):
            child = self._tree_nodes[index[child_id]]
            if child.state != _UNVISITED:
                self._revisits.append((node.id, child_id))
                continue
            children_width += self._measure(child, depth + 1, index)
            node.children.append(child)

        if node.children:
            children_width += (len(node.children) - 1) * self._config.horizontal_gap

        node.subtree_width = max(node.width, children_width)
        node.state = _DONE
        return node.subtree_width

    def _place(self, node: TreeNode, x: float) -> None:
        """Third pass: centre the node and its children block in [x, x + width]."""
        cfg = self._config
        width = node.subtree_width
        node_x = x + width / 2 - node.width / 2
        node_y = self._level_y[node.depth]
        if cfg.grid_size is not None:
            node_x = snap(node_x, cfg.grid_size)

        self._positions[node.id] = (node_x, node_y)
        self._allocations[node.id] = (x, x + width)

        if not node.children:
            return

        block = sum(c.subtree_width for c in node.children)
        block += (len(node.children) - 1) * cfg.horizontal_gap
        child_x = x + (width - block) / 2
        for child in node.children:
            self._place(child, child_x)
            child_x += child.subtree_width + cfg.horizontal_gap


def layout_tree(
    forest: Forest,
    sizes: SizeLookup,
    config: TreeLayoutConfig = DEFAULT_TREE_CONFIG,
) -> dict[str, Point]:
    """Lay out a forest and return snapped top-left positions by node id."""
    return TidyTreeLayout(forest=forest, sizes=sizes, config=config).run().positions


__all__ = [
    "TreeStructureWarning",
    "TreeLayoutConfig",
    "DEFAULT_TREE_CONFIG",
    "TidyTreeLayout",
    "layout_tree",
]
