"""
Base classes for layout algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for layout computations:

- BaseLayout: Abstract base with event system and result access
- StaticLayout: For single-pass layouts (tree layout, etc.)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import Event, EventType, Point


class BaseLayout(ABC):
    """
    Abstract base class for layout algorithms.

    Provides shared infrastructure:
    - Event system (start/end events)
    - Result positions keyed by shape id

    Example:
        layout = SomeLayout(...)
        layout.run()

        for shape_id, (x, y) in layout.positions.items():
            print(f"{shape_id}: ({x}, {y})")
    """

    def __init__(
        self,
        *,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            on_start: Callback for start event
            on_end: Callback for end event
        """
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        self._positions: dict[str, Point] = {}

        if on_start:
            self._events[EventType.start] = on_start
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def positions(self) -> dict[str, Point]:
        """Get computed top-left positions keyed by shape id (a copy)."""
        return dict(self._positions)

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    Every run starts from scratch, so running twice on the same input
    gives the same positions.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes layout, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self._positions = {}
        self.trigger({"type": EventType.start})

        # Subclasses implement _compute()
        self._compute(**kwargs)

        self.trigger({"type": EventType.end, "nodes": len(self._positions)})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute node positions.

        Subclasses must implement this to perform the actual layout computation.
        """
        pass


__all__ = [
    "BaseLayout",
    "StaticLayout",
]
