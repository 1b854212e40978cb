"""
Input validation utilities for the layout engine.

Provides centralized validation and coercion for shapes, connections,
grid sizes, container sizes, and other layout parameters. Raises
descriptive exceptions on invalid input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from .types import (
    Connection,
    ConnectionLike,
    ConnectionStyle,
    Shape,
    ShapeKind,
    ShapeLike,
    Side,
)

MAX_GROUP_MEMBERS = 3


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class ShapeNotFoundError(ValidationError, KeyError):
    """Raised when a connection or lookup references an unknown shape id."""

    def __init__(self, shape_id: str, context: str = "") -> None:
        self.shape_id = shape_id
        message = f"Shape {shape_id!r} not found"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidShapeError(ValidationError):
    """Raised when a shape is malformed or violates membership rules."""

    pass


class GroupCapacityError(InvalidShapeError):
    """Raised when a group holds more members than it can display."""

    pass


class InvalidConnectionError(ValidationError):
    """Raised when a connection is malformed."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a layout or routing parameter is out of range."""

    pass


# =============================================================================
# Coercion
# =============================================================================


def coerce_side(value: Any) -> Side:
    """Convert a Side or its string value ("top", "right", ...) to a Side."""
    if isinstance(value, Side):
        return value
    try:
        return Side(str(value).lower())
    except ValueError:
        raise InvalidConnectionError(
            f"Invalid side {value!r}, expected one of {[s.value for s in Side]}"
        ) from None


def coerce_shape(data: ShapeLike) -> Shape:
    """
    Build a Shape from a Shape object or a dict.

    Args:
        data: Shape, or mapping with id, kind, x, y and optional member_ids

    Returns:
        Shape instance

    Raises:
        InvalidShapeError: If required fields are missing or malformed
    """
    if isinstance(data, Shape):
        return data
    if not isinstance(data, Mapping):
        raise InvalidShapeError(f"Cannot build a shape from {type(data).__name__}")

    if data.get("id") is None:
        raise InvalidShapeError("Shape id cannot be None")
    shape_id = str(data["id"])

    kind = data.get("kind")
    if isinstance(kind, ShapeKind):
        shape_kind = kind
    else:
        try:
            shape_kind = ShapeKind(str(kind).lower())
        except ValueError:
            raise InvalidShapeError(
                f"Shape {shape_id!r}: invalid kind {kind!r}, "
                f"expected one of {[k.value for k in ShapeKind]}"
            ) from None

    try:
        x = float(data.get("x", 0.0))
        y = float(data.get("y", 0.0))
    except (TypeError, ValueError):
        raise InvalidShapeError(f"Shape {shape_id!r}: x and y must be numbers") from None

    members = tuple(str(m) for m in (data.get("member_ids") or ()))
    return Shape(id=shape_id, kind=shape_kind, x=x, y=y, member_ids=members)


def coerce_connection(data: ConnectionLike) -> Connection:
    """
    Build a Connection from a Connection object or a dict.

    Raises:
        InvalidConnectionError: If required fields are missing or malformed
    """
    if isinstance(data, Connection):
        return data
    if not isinstance(data, Mapping):
        raise InvalidConnectionError(f"Cannot build a connection from {type(data).__name__}")

    for key in ("id", "from_id", "from_side", "to_id", "to_side"):
        if data.get(key) is None:
            raise InvalidConnectionError(f"Connection field {key!r} cannot be None")

    style = data.get("style") or ConnectionStyle.SOLID
    if not isinstance(style, ConnectionStyle):
        try:
            style = ConnectionStyle(str(style).lower())
        except ValueError:
            raise InvalidConnectionError(
                f"Connection {data['id']!r}: invalid style {style!r}"
            ) from None

    return Connection(
        id=str(data["id"]),
        from_id=str(data["from_id"]),
        from_side=coerce_side(data["from_side"]),
        to_id=str(data["to_id"]),
        to_side=coerce_side(data["to_side"]),
        style=style,
    )


def coerce_shapes(shapes: Iterable[ShapeLike]) -> list[Shape]:
    """Coerce a sequence of shape-like values."""
    return [coerce_shape(s) for s in shapes]


def coerce_connections(connections: Iterable[ConnectionLike]) -> list[Connection]:
    """Coerce a sequence of connection-like values."""
    return [coerce_connection(c) for c in connections]


# =============================================================================
# Validation
# =============================================================================


def validate_shapes(
    shapes: Sequence[Shape],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate shape ids and group membership.

    Checks:
    - shape ids are unique
    - groups hold at most ``MAX_GROUP_MEMBERS`` members
    - group members exist and are persons
    - a person belongs to at most one group
    - persons have no members of their own

    Args:
        shapes: Sequence of Shape objects
        strict: If True, raises on the first kind of issue found.
            If False, returns the list of issues.

    Returns:
        List of (shape_index, issue_description) tuples

    Raises:
        GroupCapacityError: If strict=True and a group is over capacity
        InvalidShapeError: If strict=True and any other issue is found
    """
    issues: list[tuple[int, str]] = []
    over_capacity = False

    by_id: dict[str, Shape] = {}
    for i, shape in enumerate(shapes):
        if shape.id in by_id:
            issues.append((i, f"Shape {i}: duplicate id {shape.id!r}"))
        by_id[shape.id] = shape

    owner: dict[str, str] = {}
    for i, shape in enumerate(shapes):
        if not shape.is_group:
            if shape.member_ids:
                issues.append((i, f"Shape {i}: person {shape.id!r} cannot have members"))
            continue

        if shape.member_count > MAX_GROUP_MEMBERS:
            over_capacity = True
            issues.append(
                (
                    i,
                    f"Shape {i}: group {shape.id!r} has {shape.member_count} members, "
                    f"at most {MAX_GROUP_MEMBERS} allowed",
                )
            )

        for member_id in shape.member_ids:
            member = by_id.get(member_id)
            if member is None:
                issues.append((i, f"Shape {i}: member {member_id!r} does not exist"))
            elif member.is_group:
                issues.append((i, f"Shape {i}: member {member_id!r} is not a person"))

            if member_id in owner and owner[member_id] != shape.id:
                issues.append(
                    (
                        i,
                        f"Shape {i}: person {member_id!r} already belongs to "
                        f"group {owner[member_id]!r}",
                    )
                )
            else:
                owner[member_id] = shape.id

    if strict and issues:
        msg = "Invalid shapes:\n" + "\n".join(issue[1] for issue in issues)
        if over_capacity:
            raise GroupCapacityError(msg)
        raise InvalidShapeError(msg)

    return issues


def validate_connections(
    connections: Sequence[Connection],
    shape_ids: Iterable[str],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all connection endpoints reference existing shapes.

    Args:
        connections: Sequence of Connection objects
        shape_ids: Ids of the shapes currently on the canvas
        strict: If True, raises on the first dangling endpoint.
            If False, returns the list of issues.

    Returns:
        List of (connection_index, issue_description) tuples

    Raises:
        ShapeNotFoundError: If strict=True and an endpoint is unknown
    """
    known = set(shape_ids)
    issues: list[tuple[int, str]] = []

    for i, conn in enumerate(connections):
        for endpoint in (conn.from_id, conn.to_id):
            if endpoint not in known:
                if strict:
                    raise ShapeNotFoundError(endpoint, f"connection {conn.id!r}")
                issues.append((i, f"Connection {i}: shape {endpoint!r} not found"))

    return issues


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a parameter is strictly positive.

    Raises:
        InvalidConfigError: If value <= 0
    """
    if value <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return float(value)


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a parameter is not negative.

    Raises:
        InvalidConfigError: If value < 0
    """
    if value < 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return float(value)


def validate_container_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate viewport container dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidConfigError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidConfigError(
            f"Container size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if width <= 0:
        raise InvalidConfigError(f"Container width must be positive, got {width}")
    if height <= 0:
        raise InvalidConfigError(f"Container height must be positive, got {height}")

    return width, height


__all__ = [
    "MAX_GROUP_MEMBERS",
    "ValidationError",
    "ShapeNotFoundError",
    "InvalidShapeError",
    "GroupCapacityError",
    "InvalidConnectionError",
    "InvalidConfigError",
    "coerce_side",
    "coerce_shape",
    "coerce_connection",
    "coerce_shapes",
    "coerce_connections",
    "validate_shapes",
    "validate_connections",
    "validate_positive",
    "validate_non_negative",
    "validate_container_size",
]
