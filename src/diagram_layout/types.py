"""
Common types for diagram layout and routing.

This module provides the fundamental types used across all algorithms:
- Node: Diagram box with top-left position, size, rotation and shape kind
- Edge: Connection between two nodes with optional waypoints
- ConnectionPoint: Side + offset index where an edge attaches to a node
- Waypoint: Routed path point on the obstacle plane (0) or via plane (1)
- Side / NodeShape: Closed enums replacing string-keyed dispatch
- EventType / Event: Layout lifecycle events
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Optional, TypedDict, Union

from .validation import InvalidNodeError, ValidationError

# Routing planes
OBSTACLE_LAYER = 0
VIA_LAYER = 1


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - tick: Fired once per iteration (iterative layouts only)
    - end: Layout has finished or was stopped
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    alpha: float
    iteration: int


class Side(Enum):
    """Side of a node where an edge can attach."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> Side:
        """Get the opposite side."""
        opposites = {
            Side.TOP: Side.BOTTOM,
            Side.BOTTOM: Side.TOP,
            Side.LEFT: Side.RIGHT,
            Side.RIGHT: Side.LEFT,
        }
        return opposites[self]

    def is_horizontal(self) -> bool:
        """Check if this side lies on a horizontal edge of the node."""
        return self in (Side.TOP, Side.BOTTOM)

    @classmethod
    def coerce(cls, value: Union[Side, str]) -> Side:
        """Accept a Side or its string name ("top", "left", ...)."""
        if isinstance(value, Side):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Unknown side {value!r}") from None


class NodeShape(Enum):
    """Shape kind of a node. Only affects boundary-intersection math."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"
    PARALLELOGRAM = "parallelogram"
    CYLINDER = "cylinder"


@dataclass
class ConnectionPoint:
    """
    Attachment point on a node side.

    ``position`` is a signed index scaled by the connection-point spacing,
    so several edges can fan out along one side without overlapping.
    """

    side: Side
    position: int = 0

    def __post_init__(self) -> None:
        self.side = Side.coerce(self.side)
        self.position = int(self.position)


@dataclass
class Waypoint:
    """A routed path point. Layer 0 avoids obstacles, layer 1 is a via/jump."""

    x: float
    y: float
    layer: int = OBSTACLE_LAYER

    def __post_init__(self) -> None:
        if self.layer not in (OBSTACLE_LAYER, VIA_LAYER):
            raise ValidationError(f"Waypoint layer must be 0 or 1, got {self.layer}")

    @property
    def is_via(self) -> bool:
        return self.layer == VIA_LAYER


class Node:
    """
    Diagram node owned by the caller's document.

    Layout algorithms mutate ``x``/``y`` in place; nothing else is touched
    except where an algorithm documents it.

    Attributes:
        id: Unique integer identity
        x: Left edge
        y: Top edge
        width: Width (> 0)
        height: Height (> 0)
        rotation: Rotation in degrees about the node center
        shape: Shape kind
        template_shape_id: Optional shape-library id (e.g. "start-event")
    """

    def __init__(
        self,
        id: int,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 120.0,
        height: float = 60.0,
        rotation: float = 0.0,
        shape: Union[NodeShape, str] = NodeShape.RECTANGLE,
        template_shape_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidNodeError(
                f"Node {id}: width and height must be positive, got {width}x{height}"
            )

        self.id = int(id)
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.rotation = float(rotation)
        self.shape = shape if isinstance(shape, NodeShape) else NodeShape(shape)
        self.template_shape_id = template_shape_id

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> tuple[float, float]:
        """Center point (x, y)."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def move_center_to(self, cx: float, cy: float) -> None:
        """Position the node so that its center lies at (cx, cy)."""
        self.x = cx - self.width / 2
        self.y = cy - self.height / 2

    def __repr__(self) -> str:
        return (
            f"Node(id={self.id}, x={self.x:.2f}, y={self.y:.2f}, "
            f"w={self.width:.0f}, h={self.height:.0f})"
        )


class Edge:
    """
    Directed connection between two nodes, owned by the caller.

    Attributes:
        id: Unique integer identity
        source: Id of the ``from`` node
        target: Id of the ``to`` node
        waypoints: Ordered path points (empty = direct line)
        from_connection: Attachment at the source end (optional)
        to_connection: Attachment at the target end (optional)
    """

    def __init__(
        self,
        id: int,
        source: int,
        target: int,
        waypoints: Optional[list[Waypoint]] = None,
        from_connection: Optional[ConnectionPoint] = None,
        to_connection: Optional[ConnectionPoint] = None,
        **kwargs: Any,
    ) -> None:
        if source is None:
            raise ValueError("Edge source cannot be None")
        if target is None:
            raise ValueError("Edge target cannot be None")

        self.id = int(id)
        self.source = int(source)
        self.target = int(target)
        self.waypoints: list[Waypoint] = list(waypoints) if waypoints else []
        self.from_connection = from_connection
        self.to_connection = to_connection

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def shares_endpoint(self, other: Edge) -> bool:
        """True if the two edges touch a common node."""
        return bool({self.source, self.target} & {other.source, other.target})

    def __repr__(self) -> str:
        return f"Edge({self.id}: {self.source} -> {self.target}, waypoints={len(self.waypoints)})"


Point = tuple[float, float]

# Type aliases for the Pythonic API
NodeLike = Union[Node, dict[str, Any]]
"""Input type for nodes: Node objects or dicts of Node keyword arguments."""

EdgeLike = Union[Edge, dict[str, Any]]
"""Input type for edges: Edge objects or dicts of Edge keyword arguments."""

EventCallback = Callable[[Optional[Event]], None]


__all__ = [
    "OBSTACLE_LAYER",
    "VIA_LAYER",
    "EventType",
    "Event",
    "EventCallback",
    "Side",
    "NodeShape",
    "ConnectionPoint",
    "Waypoint",
    "Node",
    "Edge",
    "Point",
    "NodeLike",
    "EdgeLike",
]
