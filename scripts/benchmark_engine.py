#!/usr/bin/env python3
"""
Benchmark the diagram engine on generated org charts.

Usage:
    uv run python scripts/benchmark_engine.py [--sizes N,...] [--repeat N]

Examples:
    uv run python scripts/benchmark_engine.py
    uv run python scripts/benchmark_engine.py --sizes 50,200 --repeat 5
    uv run python scripts/benchmark_engine.py --output build/bench.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from typing import Any, Callable

from orgchart_layout import Connection, DiagramEngine, Shape, ShapeKind, Side


def generate_org_chart(
    num_people: int,
    max_reports: int = 4,
    group_ratio: float = 0.2,
    seed: int = 42,
) -> tuple[list[Shape], list[Connection]]:
    """
    Generate a random org chart.

    Every person after the first reports to an earlier person. Some leaf
    positions are client groups with 1-3 members instead of a person.
    """
    rng = random.Random(seed)
    shapes: list[Shape] = []
    connections: list[Connection] = []
    report_count: dict[str, int] = {}
    managers: list[str] = []

    for i in range(num_people):
        shape_id = f"p{i}"
        x = rng.uniform(-2000, 2000)
        y = rng.uniform(0, 3000)

        if i > 0 and rng.random() < group_ratio:
            members = tuple(f"{shape_id}_m{k}" for k in range(rng.randint(1, 3)))
            shapes.append(Shape(shape_id, ShapeKind.GROUP, x, y, members))
            for member_id in members:
                shapes.append(Shape(member_id, ShapeKind.PERSON, x + 10, y + 90))
        else:
            shapes.append(Shape(shape_id, ShapeKind.PERSON, x, y))
            managers.append(shape_id)

        if i > 0:
            candidates = [m for m in managers if m != shape_id and report_count.get(m, 0) < max_reports]
            boss = rng.choice(candidates or managers[:1])
            report_count[boss] = report_count.get(boss, 0) + 1
            connections.append(Connection(f"c{i}", boss, Side.BOTTOM, shape_id, Side.TOP))

    return shapes, connections


def time_call(fn: Callable[[], Any], repeat: int) -> float:
    """Best wall time over ``repeat`` runs."""
    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        fn()
        best = min(best, time.perf_counter() - start)
    return best


def run_benchmarks(sizes: list[int], repeat: int = 3) -> list[dict]:
    """Time render and auto layout for each chart size."""
    engine = DiagramEngine()
    results = []

    print(f"\nBenchmarking {len(sizes)} chart sizes, best of {repeat}")
    print("=" * 60)
    print(f"{'People':>8s}{'Conns':>8s}{'render':>12s}{'layout':>12s}{'crossings':>12s}")
    print("-" * 60)

    for n in sizes:
        shapes, connections = generate_org_chart(n)

        layout = engine.auto_layout(shapes, connections)
        placed = engine.apply_positions(shapes, layout.positions)
        rendered = engine.render(placed, connections)
        crossings = sum(len(c.crossings) for c in rendered.connectors)

        render_time = time_call(lambda: engine.render(placed, connections), repeat)
        layout_time = time_call(lambda: engine.auto_layout(shapes, connections), repeat)

        print(f"{n:>8d}{len(connections):>8d}{render_time:>12.4f}{layout_time:>12.4f}{crossings:>12d}")
        results.append(
            {
                "num_people": n,
                "num_connections": len(connections),
                "render_seconds": render_time,
                "layout_seconds": layout_time,
                "crossings_after_layout": crossings,
            }
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark the org chart engine")
    parser.add_argument("--sizes", default="10,50,100,250", help="Comma-separated chart sizes")
    parser.add_argument("--repeat", type=int, default=3, help="Runs per measurement")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",")]
    results = run_benchmarks(sizes, repeat=args.repeat)

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
