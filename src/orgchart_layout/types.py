"""
Common types for the org chart layout engine.

This module provides the fundamental types used across the engine:
- Side: Attachment side of a shape
- ShapeKind: Person card or client group
- ConnectionStyle: Stroke style of a connector
- Shape: A placed shape on the canvas
- Connection: A directed connector between two shapes
- EventType / Event: Layout lifecycle events
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Mapping, Optional, Sequence, TypedDict, Union

Point = tuple[float, float]
"""Absolute canvas coordinate (x, y)."""


class Side(Enum):
    """Side of a shape where connectors can attach."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    def opposite(self) -> Side:
        """Get the opposite side."""
        opposites = {
            Side.TOP: Side.BOTTOM,
            Side.BOTTOM: Side.TOP,
            Side.LEFT: Side.RIGHT,
            Side.RIGHT: Side.LEFT,
        }
        return opposites[self]

    def is_vertical(self) -> bool:
        """Check if a path leaves this side vertically (top or bottom)."""
        return self in (Side.TOP, Side.BOTTOM)

    def is_horizontal(self) -> bool:
        """Check if a path leaves this side horizontally (left or right)."""
        return self in (Side.LEFT, Side.RIGHT)

    def direction(self) -> tuple[int, int]:
        """Unit vector pointing away from the shape through this side."""
        directions = {
            Side.TOP: (0, -1),
            Side.BOTTOM: (0, 1),
            Side.LEFT: (-1, 0),
            Side.RIGHT: (1, 0),
        }
        return directions[self]


class ShapeKind(Enum):
    """Kind of shape placed on the canvas."""

    PERSON = "person"
    GROUP = "group"


class ConnectionStyle(Enum):
    """Stroke style of a connector."""

    SOLID = "solid"
    DASHED = "dashed"

    def toggled(self) -> ConnectionStyle:
        """Get the other style."""
        if self is ConnectionStyle.SOLID:
            return ConnectionStyle.DASHED
        return ConnectionStyle.SOLID


@dataclass(frozen=True)
class Shape:
    """
    A shape placed on the canvas.

    Attributes:
        id: Unique shape id
        kind: Person card or client group
        x: Left edge x coordinate
        y: Top edge y coordinate
        member_ids: Ids of persons nested in a group (empty for persons)
    """

    id: str
    kind: ShapeKind
    x: float = 0.0
    y: float = 0.0
    member_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_group(self) -> bool:
        return self.kind is ShapeKind.GROUP

    @property
    def member_count(self) -> int:
        return len(self.member_ids)


@dataclass(frozen=True)
class Connection:
    """
    A directed connector between attachment points of two shapes.

    Rendering treats connections as undirected; the ``from -> to``
    direction is only used when inferring the hierarchy.
    """

    id: str
    from_id: str
    from_side: Side
    to_id: str
    to_side: Side
    style: ConnectionStyle = ConnectionStyle.SOLID


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - end: Layout computation has finished
    """

    start = 0
    end = 1


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    nodes: int
    listener: Optional[Callable[[], None]]


# Type aliases for Pythonic API
# These allow flexible input types while maintaining type safety
ShapeLike = Union[Shape, Mapping[str, Any]]
"""Input type for shapes: Shape objects or dicts with shape fields."""

ConnectionLike = Union[Connection, Mapping[str, Any]]
"""Input type for connections: Connection objects or dicts."""

SizeType = Union[tuple[float, float], list[float], Sequence[float]]
"""Container size: (width, height) tuple, list, or sequence."""


__all__ = [
    "Point",
    "Side",
    "ShapeKind",
    "ConnectionStyle",
    "Shape",
    "Connection",
    "EventType",
    "Event",
    "ShapeLike",
    "ConnectionLike",
    "SizeType",
]
