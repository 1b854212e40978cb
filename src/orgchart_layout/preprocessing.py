"""
Graph preprocessing utilities.

This module provides reusable functions for analysing the inferred
shape hierarchy before layout:
- Cycle detection
- Reachability from a set of roots

The graph is given as a child adjacency mapping (node id -> child ids).
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Iterable, Optional, Sequence

# =============================================================================
# Cycle Detection
# =============================================================================


def detect_cycle(
    nodes: Sequence[str],
    children_of: Mapping[str, Sequence[str]],
) -> Optional[list[str]]:
    """
    Detect if a directed graph contains a cycle.

    Uses DFS-based cycle detection. Returns the first cycle found,
    or None if the graph is acyclic.

    Args:
        nodes: Node ids, in the order DFS should start from them
        children_of: Mapping of node id to child ids

    Returns:
        List of node ids forming a cycle (first id repeated at the end),
        or None if acyclic.

    Example:
        >>> detect_cycle(["a", "b"], {"a": ["b"], "b": ["a"]})
        ['a', 'b', 'a']
    """
    # DFS states: 0=unvisited, 1=visiting, 2=visited
    state = {node: 0 for node in nodes}

    def dfs(node: str, path: list[str]) -> Optional[list[str]]:
        state[node] = 1
        path.append(node)

        for neighbor in children_of.get(node, ()):
            neighbor_state = state.get(neighbor, 0)
            if neighbor_state == 1:
                # Found cycle - extract it
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            elif neighbor_state == 0:
                result = dfs(neighbor, path)
                if result is not None:
                    return result

        path.pop()
        state[node] = 2
        return None

    for start in nodes:
        if state.get(start, 0) == 0:
            result = dfs(start, [])
            if result is not None:
                return result

    return None


def has_cycle(
    nodes: Sequence[str],
    children_of: Mapping[str, Sequence[str]],
) -> bool:
    """Check if a directed graph contains any cycle."""
    return detect_cycle(nodes, children_of) is not None


# =============================================================================
# Reachability
# =============================================================================


def reachable_from(
    roots: Iterable[str],
    children_of: Mapping[str, Sequence[str]],
) -> set[str]:
    """
    Find every node reachable from the given roots (roots included).

    Uses BFS, so cycles are visited once.
    """
    seen: set[str] = set()
    queue: deque[str] = deque()
    for root in roots:
        if root not in seen:
            seen.add(root)
            queue.append(root)

    while queue:
        node = queue.popleft()
        for child in children_of.get(node, ()):
            if child not in seen:
                seen.add(child)
                queue.append(child)

    return seen


__all__ = [
    "detect_cycle",
    "has_cycle",
    "reachable_from",
]
