#!/usr/bin/env python3
"""
Visualization script for the org chart engine.

Draws a sample chart before and after auto layout into ./build/

Usage:
    uv run python scripts/visualize.py
"""

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from orgchart_layout import (
    Connection,
    DiagramEngine,
    Shape,
    ShapeKind,
    Side,
    frame_bounds,
    shape_bounds,
)

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def sample_chart():
    """A small company with one client group, placed by hand."""
    shapes = [
        Shape("ceo", ShapeKind.PERSON, 600, 0),
        Shape("cto", ShapeKind.PERSON, 100, 260),
        Shape("cfo", ShapeKind.PERSON, 1100, 300),
        Shape("dev", ShapeKind.PERSON, 0, 620),
        Shape("ops", ShapeKind.PERSON, 420, 560),
        Shape("acme", ShapeKind.GROUP, 1000, 640, ("alice", "bob")),
        Shape("alice", ShapeKind.PERSON, 1010, 730),
        Shape("bob", ShapeKind.PERSON, 1010, 806),
    ]
    connections = [
        Connection("c1", "ceo", Side.BOTTOM, "cto", Side.TOP),
        Connection("c2", "ceo", Side.BOTTOM, "cfo", Side.TOP),
        Connection("c3", "cto", Side.BOTTOM, "dev", Side.TOP),
        Connection("c4", "cto", Side.RIGHT, "ops", Side.LEFT),
        Connection("c5", "cfo", Side.BOTTOM, "alice", Side.TOP),
        Connection("c6", "dev", Side.RIGHT, "cfo", Side.LEFT),
    ]
    return shapes, connections


def draw_chart(engine, shapes, connections, title, ax):
    """Draw shapes, connectors and bridges on an axis."""
    owners = {m for s in shapes if s.is_group for m in s.member_ids}
    for shape in shapes:
        r = shape_bounds(shape, engine.metrics)
        color = "#fde68a" if shape.is_group else ("#e0f2fe" if shape.id in owners else "#bfdbfe")
        ax.add_patch(Rectangle((r.x, r.y), r.width, r.height, facecolor=color, edgecolor="#334155"))
        if shape.id not in owners:
            ax.annotate(shape.id, (r.x + 10, r.y + 25), fontsize=8, color="#0f172a")

    result = engine.render(shapes, connections)
    for connector in result.connectors:
        xs = [p[0] for p in connector.path.points]
        ys = [p[1] for p in connector.path.points]
        ax.plot(xs, ys, color="#475569", linewidth=1.5, linestyle="--" if connector.dashed else "-")
        for x, y in connector.crossings:
            ax.add_patch(Circle((x, y), 6, facecolor="white", edgecolor="#475569", zorder=5))

    frame = frame_bounds([s for s in shapes if s.id not in owners], metrics=engine.metrics)
    if frame is not None:
        ax.set_xlim(frame.left, frame.right)
        ax.set_ylim(frame.bottom, frame.top)

    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_aspect("equal")
    ax.axis("off")


def main():
    ensure_build_dir()
    engine = DiagramEngine()
    shapes, connections = sample_chart()

    layout = engine.auto_layout(shapes, connections)
    member_offsets = {}
    for shape in shapes:
        if shape.is_group and shape.id in layout.positions:
            nx, ny = layout.positions[shape.id]
            for member_id in shape.member_ids:
                member_offsets[member_id] = (nx - shape.x, ny - shape.y)

    placed = engine.apply_positions(shapes, layout.positions)
    placed = [
        Shape(s.id, s.kind, s.x + member_offsets[s.id][0], s.y + member_offsets[s.id][1], s.member_ids)
        if s.id in member_offsets
        else s
        for s in placed
    ]

    fig, axes = plt.subplots(1, 2, figsize=(16, 8))
    draw_chart(engine, shapes, connections, "Hand placed", axes[0])
    draw_chart(engine, placed, connections, "Auto layout", axes[1])
    plt.tight_layout()

    filepath = BUILD_DIR / "orgchart_layout.png"
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


if __name__ == "__main__":
    main()
