"""
Shape geometry.

Resolves the size of every shape and the absolute coordinate of its
attachment points. Person cards have a fixed size; a group's height is
derived from how many members it shows:

    height = header + top_pad + max(min_content, member_block) + bottom_pad
    member_block = n * card + (n - 1) * gap + free_slot_block

where ``free_slot_block`` is ``drop_zone + (gap if n > 0 else 0)`` while the
group has room for another member, and 0 once it is full.

Everything is derived from ``(x, y, kind, member_count)``; there is no
hidden state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Optional

from .types import Point, Shape, ShapeKind, Side
from .validation import (
    MAX_GROUP_MEMBERS,
    ShapeNotFoundError,
    validate_non_negative,
    validate_positive,
)


@dataclass(frozen=True)
class ShapeMetrics:
    """Pixel dimensions of the rendered shapes."""

    person_width: float = 280
    person_height: float = 100

    group_width: float = 360
    group_header_height: float = 70
    group_padding_top: float = 16
    group_padding_bottom: float = 16
    group_min_content_height: float = 100
    member_card_height: float = 68
    member_card_gap: float = 8
    drop_zone_height: float = 44
    max_members: int = MAX_GROUP_MEMBERS

    def __post_init__(self) -> None:
        validate_positive("person_width", self.person_width)
        validate_positive("person_height", self.person_height)
        validate_positive("group_width", self.group_width)
        for name in (
            "group_header_height",
            "group_padding_top",
            "group_padding_bottom",
            "group_min_content_height",
            "member_card_height",
            "member_card_gap",
            "drop_zone_height",
        ):
            validate_non_negative(name, getattr(self, name))
        validate_positive("max_members", self.max_members)


DEFAULT_METRICS = ShapeMetrics()


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def intersects(self, other: Rect, margin: float = 0.0) -> bool:
        """Check if the interiors of two rectangles overlap (touching is not overlap)."""
        return (
            self.left < other.right + margin
            and other.left < self.right + margin
            and self.top < other.bottom + margin
            and other.top < self.bottom + margin
        )


def group_content_height(member_count: int, metrics: ShapeMetrics = DEFAULT_METRICS) -> float:
    """
    Height of a group's member block, before the minimum content height applies.

    Args:
        member_count: Number of persons shown in the group
        metrics: Shape dimensions

    Returns:
        Cards, gaps and (while the group is not full) the drop zone
    """
    n = member_count
    cards = n * metrics.member_card_height + (n - 1) * metrics.member_card_gap if n > 0 else 0.0
    has_free_slot = n < metrics.max_members
    free_slot = 0.0
    if has_free_slot:
        free_slot = metrics.drop_zone_height + (metrics.member_card_gap if n > 0 else 0)
    return cards + free_slot


def group_height(member_count: int, metrics: ShapeMetrics = DEFAULT_METRICS) -> float:
    """Total rendered height of a group with ``member_count`` members."""
    content = max(metrics.group_min_content_height, group_content_height(member_count, metrics))
    return (
        metrics.group_header_height
        + metrics.group_padding_top
        + content
        + metrics.group_padding_bottom
    )


def shape_size(shape: Shape, metrics: ShapeMetrics = DEFAULT_METRICS) -> tuple[float, float]:
    """Get (width, height) of a shape."""
    if shape.kind is ShapeKind.GROUP:
        return (metrics.group_width, group_height(shape.member_count, metrics))
    return (metrics.person_width, metrics.person_height)


def shape_bounds(shape: Shape, metrics: ShapeMetrics = DEFAULT_METRICS) -> Rect:
    """Get the bounding rectangle of a shape."""
    w, h = shape_size(shape, metrics)
    return Rect(shape.x, shape.y, w, h)


def attachment_point(
    shape: Shape, side: Side, metrics: ShapeMetrics = DEFAULT_METRICS
) -> Point:
    """
    Get the absolute position of a shape's attachment point.

    Args:
        shape: The shape
        side: Which side to attach to
        metrics: Shape dimensions

    Returns:
        (x, y) of the side midpoint
    """
    w, h = shape_size(shape, metrics)
    if side is Side.TOP:
        return (shape.x + w / 2, shape.y)
    elif side is Side.RIGHT:
        return (shape.x + w, shape.y + h / 2)
    elif side is Side.BOTTOM:
        return (shape.x + w / 2, shape.y + h)
    else:  # LEFT
        return (shape.x, shape.y + h / 2)


def resolve_attachment(
    shapes: Mapping[str, Shape],
    shape_id: str,
    side: Side,
    metrics: ShapeMetrics = DEFAULT_METRICS,
) -> Point:
    """
    Look up a shape by id and resolve one of its attachment points.

    Raises:
        ShapeNotFoundError: If no shape has this id
    """
    shape = shapes.get(shape_id)
    if shape is None:
        raise ShapeNotFoundError(shape_id)
    return attachment_point(shape, side, metrics)


def bounding_box(
    shapes: Iterable[Shape], metrics: ShapeMetrics = DEFAULT_METRICS
) -> Optional[Rect]:
    """Smallest rectangle enclosing all shapes, or None for no shapes."""
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    found = False
    for shape in shapes:
        r = shape_bounds(shape, metrics)
        min_x = min(min_x, r.left)
        min_y = min(min_y, r.top)
        max_x = max(max_x, r.right)
        max_y = max(max_y, r.bottom)
        found = True

    if not found:
        return None
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def frame_bounds(
    shapes: Iterable[Shape],
    padding: float = 20,
    padding_top: float = 80,
    metrics: ShapeMetrics = DEFAULT_METRICS,
) -> Optional[Rect]:
    """
    Background frame drawn behind a set of selected shapes.

    The top edge gets extra room for the frame's title.

    Returns:
        Padded bounding rectangle, or None if there are no shapes
    """
    box = bounding_box(shapes, metrics)
    if box is None:
        return None
    return Rect(
        box.x - padding,
        box.y - padding_top,
        box.width + padding * 2,
        box.height + padding_top + padding,
    )


def group_owner_map(shapes: Iterable[Shape]) -> dict[str, str]:
    """Map each grouped person id to the id of the group containing it."""
    owners: dict[str, str] = {}
    for shape in shapes:
        if shape.is_group:
            for member_id in shape.member_ids:
                owners.setdefault(member_id, shape.id)
    return owners


__all__ = [
    "ShapeMetrics",
    "DEFAULT_METRICS",
    "Rect",
    "group_content_height",
    "group_height",
    "shape_size",
    "shape_bounds",
    "attachment_point",
    "resolve_attachment",
    "bounding_box",
    "frame_bounds",
    "group_owner_map",
]
