"""
Hierarchical org chart layout.

This module infers the reporting hierarchy from connections and lays it
out as a tidy tree:
- build_forest: Parent/child forest of the top-level shapes
- TidyTreeLayout: Layered tree layout with non-interleaving subtrees
"""

from .forest import (
    DEFAULT_HIERARCHY_CONFIG,
    DroppedEdge,
    Forest,
    HierarchyConfig,
    HierarchyCycleWarning,
    build_forest,
)
from .tidy_tree import (
    DEFAULT_TREE_CONFIG,
    TidyTreeLayout,
    TreeLayoutConfig,
    TreeStructureWarning,
    layout_tree,
)

__all__ = [
    "build_forest",
    "Forest",
    "DroppedEdge",
    "HierarchyConfig",
    "DEFAULT_HIERARCHY_CONFIG",
    "HierarchyCycleWarning",
    "TidyTreeLayout",
    "layout_tree",
    "TreeLayoutConfig",
    "DEFAULT_TREE_CONFIG",
    "TreeStructureWarning",
]
