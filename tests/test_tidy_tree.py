"""Tests for the tidy tree layout."""

import pytest

from orgchart_layout.grid import snap
from orgchart_layout.hierarchical import (
    Forest,
    TidyTreeLayout,
    TreeLayoutConfig,
    TreeStructureWarning,
    build_forest,
    layout_tree,
)
from orgchart_layout.types import Connection, EventType, Shape, ShapeKind, Side
from orgchart_layout.validation import InvalidConfigError, ShapeNotFoundError

PERSON = (280, 100)

# =============================================================================
# Test Fixtures
# =============================================================================


def make_forest(edges, roots, nodes=None):
    """Build a Forest directly from (parent, child) pairs."""
    if nodes is None:
        nodes = list(roots)
        for p, c in edges:
            for n in (p, c):
                if n not in nodes:
                    nodes.append(n)
    children_of = {n: [] for n in nodes}
    parent_of = {n: None for n in nodes}
    for p, c in edges:
        children_of[p].append(c)
        parent_of[c] = p
    return Forest(nodes=nodes, roots=list(roots), parent_of=parent_of, children_of=children_of)


def uniform_sizes(forest, size=PERSON):
    return {n: size for n in forest.nodes}


def create_company():
    """A CEO, three managers and a few reports."""
    #          ceo
    #     /     |     \
    #    m1     m2     m3
    #   /  \           |
    #  a    b          c
    edges = [
        ("ceo", "m1"),
        ("ceo", "m2"),
        ("ceo", "m3"),
        ("m1", "a"),
        ("m1", "b"),
        ("m3", "c"),
    ]
    return make_forest(edges, ["ceo"])


# =============================================================================
# Positions
# =============================================================================


class TestTidyTreePositions:
    """Tests for node placement."""

    def test_parent_with_two_children(self):
        forest = make_forest([("r", "a"), ("r", "b")], ["r"])
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest)).run()
        assert layout.positions == {"r": (280, 100), "a": (100, 320), "b": (440, 320)}
        assert layout.subtree_widths["r"] == 620
        assert layout.allocations["a"] == (100, 380)
        assert layout.allocations["b"] == (440, 720)

    def test_roots_advance_by_double_gap(self):
        forest = make_forest([], ["r1", "r2"])
        positions = layout_tree(forest, uniform_sizes(forest))
        assert positions == {"r1": (100, 100), "r2": (500, 100)}

    def test_wide_parent_centres_child(self):
        forest = make_forest([("g", "p")], ["g"])
        sizes = {"g": (360, 202), "p": PERSON}
        layout = TidyTreeLayout(forest=forest, sizes=sizes).run()
        assert layout.positions["g"] == (100, 100)
        assert layout.positions["p"] == (140, snap(100 + 202 + 120))

    def test_level_y_uses_tallest_node(self):
        forest = make_forest([("r", "g"), ("r", "p"), ("p", "q")], ["r"])
        sizes = {"r": PERSON, "g": (360, 322), "p": PERSON, "q": PERSON}
        layout = TidyTreeLayout(forest=forest, sizes=sizes).run()
        assert layout.level_y == [100, 320, snap(320 + 322 + 120)]
        assert layout.positions["q"][1] == 760

    def test_group_levels_share_exact_baseline(self):
        """Nodes sit exactly on their level baseline, even below a 202-high group."""
        forest = make_forest([("g", "c"), ("g", "d"), ("c", "e")], ["g"])
        sizes = {"g": (360, 202), "c": PERSON, "d": (360, 298), "e": PERSON}
        layout = TidyTreeLayout(forest=forest, sizes=sizes).run()
        assert layout.level_y == [100, 420, 840]
        for node, depth in layout.levels.items():
            assert layout.positions[node][1] == layout.level_y[depth]

    def test_unsnapped_level_y(self):
        forest = make_forest([("g", "c")], ["g"])
        sizes = {"g": (360, 202), "c": PERSON}
        config = TreeLayoutConfig(grid_size=None)
        layout = TidyTreeLayout(forest=forest, sizes=sizes, config=config).run()
        assert layout.level_y == [100, 422]
        assert layout.positions["c"][1] == 422

    def test_same_depth_same_y(self):
        forest = create_company()
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest)).run()
        levels = layout.levels
        for node, (_, y) in layout.positions.items():
            assert y == layout.level_y[levels[node]]
        assert levels == {"ceo": 0, "m1": 1, "m2": 1, "m3": 1, "a": 2, "b": 2, "c": 2}

    def test_sibling_allocations_do_not_overlap(self):
        forest = create_company()
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest)).run()
        alloc = layout.allocations
        for parent, children in forest.children_of.items():
            ranges = sorted(alloc[c] for c in children)
            for (_, right), (left, _) in zip(ranges, ranges[1:]):
                assert right <= left
            for c in children:
                assert alloc[parent][0] <= alloc[c][0]
                assert alloc[c][1] <= alloc[parent][1]

    def test_nodes_do_not_overlap(self):
        forest = create_company()
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest)).run()
        by_y = {}
        for node, (x, y) in layout.positions.items():
            by_y.setdefault(y, []).append(x)
        for xs in by_y.values():
            xs.sort()
            for left, right in zip(xs, xs[1:]):
                assert right - left >= PERSON[0]

    def test_positions_are_snapped(self):
        forest = create_company()
        positions = layout_tree(forest, uniform_sizes(forest))
        for x, y in positions.values():
            assert x % 20 == 0
            assert y % 20 == 0

    def test_snapping_disabled(self):
        forest = make_forest([("r", "a"), ("r", "b")], ["r"])
        config = TreeLayoutConfig(grid_size=None)
        positions = layout_tree(forest, uniform_sizes(forest), config)
        assert positions["r"] == (270, 100)

    def test_idempotent(self):
        forest = create_company()
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest))
        first = layout.run().positions
        second = layout.run().positions
        assert first == second

    def test_callable_sizes(self):
        forest = make_forest([("r", "a")], ["r"])
        positions = layout_tree(forest, lambda node_id: PERSON)
        assert positions["r"] == (100, 100)
        assert positions["a"] == (100, 320)

    def test_from_inferred_forest(self):
        shapes = [
            Shape("boss", ShapeKind.PERSON, 500, 0),
            Shape("team", ShapeKind.GROUP, 0, 400, ("x",)),
            Shape("x", ShapeKind.PERSON, 10, 490),
        ]
        conns = [Connection("c", "boss", Side.BOTTOM, "x", Side.TOP)]
        forest = build_forest(shapes, conns)
        sizes = {"boss": PERSON, "team": (360, 222)}
        positions = layout_tree(forest, sizes)
        assert set(positions) == {"boss", "team"}
        assert positions["team"] == (100, 320)


# =============================================================================
# Structure Problems
# =============================================================================


class TestTreeStructure:
    """Tests for forests that are not proper trees."""

    def test_cycle_terminates(self):
        forest = make_forest([("a", "b"), ("b", "a")], ["a"])
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest))
        with pytest.warns(TreeStructureWarning):
            layout.run()
        assert set(layout.positions) == {"a", "b"}
        assert layout.revisits == [("b", "a")]

    def test_shared_child_laid_out_once(self):
        forest = make_forest([("r", "b"), ("r", "c"), ("b", "d"), ("c", "d")], ["r"])
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest))
        with pytest.warns(TreeStructureWarning, match="1 connection"):
            layout.run()
        assert layout.levels["d"] == 2
        assert layout.subtree_widths["c"] == PERSON[0]
        assert layout.allocations["d"] == layout.allocations["b"]

    def test_root_reached_from_other_root(self):
        forest = make_forest([("a", "b"), ("b", "a")], ["a", "b"])
        layout = TidyTreeLayout(forest=forest, sizes=uniform_sizes(forest))
        with pytest.warns(TreeStructureWarning):
            layout.run()
        assert layout.levels == {"a": 0, "b": 1}

    def test_unreachable_nodes_not_positioned(self):
        forest = make_forest([("c", "d"), ("d", "c")], ["a"], nodes=["a", "c", "d"])
        positions = layout_tree(forest, uniform_sizes(forest))
        assert positions == {"a": (100, 100)}

    def test_empty_forest(self):
        layout = TidyTreeLayout(forest=Forest(), sizes={}).run()
        assert layout.positions == {}
        assert layout.level_y == []

    def test_missing_size_raises(self):
        forest = make_forest([("r", "a")], ["r"])
        with pytest.raises(ShapeNotFoundError, match="'a' not found"):
            layout_tree(forest, {"r": PERSON})


# =============================================================================
# Configuration and Events
# =============================================================================


class TestTidyTreeConfiguration:
    """Tests for configuration and lifecycle events."""

    def test_custom_gaps(self):
        forest = make_forest([("r", "a"), ("r", "b")], ["r"])
        config = TreeLayoutConfig(horizontal_gap=20, vertical_gap=100, grid_size=None)
        positions = layout_tree(forest, uniform_sizes(forest), config)
        assert positions["a"] == (100, 300)
        assert positions["b"] == (400, 300)

    def test_invalid_config(self):
        with pytest.raises(InvalidConfigError, match="vertical_gap must be >= 0"):
            TreeLayoutConfig(vertical_gap=-1)
        with pytest.raises(InvalidConfigError, match="grid_size must be positive"):
            TreeLayoutConfig(grid_size=0)

    def test_config_setter_type_check(self):
        layout = TidyTreeLayout()
        with pytest.raises(InvalidConfigError):
            layout.config = {"horizontal_gap": 10}

    def test_events(self):
        events = []
        forest = create_company()
        layout = TidyTreeLayout(
            forest=forest,
            sizes=uniform_sizes(forest),
            on_start=lambda e: events.append(e["type"]),
        )
        layout.on("end", lambda e: events.append((e["type"], e["nodes"])))
        layout.run()
        assert events == [EventType.start, (EventType.end, 7)]

    def test_on_returns_self(self):
        layout = TidyTreeLayout()
        assert layout.on(EventType.start, lambda e: None) is layout
