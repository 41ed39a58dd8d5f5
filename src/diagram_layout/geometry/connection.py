"""
Connection-point geometry on node boundaries.

Connection points are addressed by (side, position): the side's midpoint
shifted by ``position * CONNECTION_POINT_SPACING`` pixels along that side.
Rotated nodes have the point rotated about the node center.
"""

from __future__ import annotations

import math
from typing import Union

from ..types import ConnectionPoint, Node, NodeShape, Point, Side

CONNECTION_POINT_SPACING = 15
"""Pixels between adjacent connection-point positions on one side."""

CLOSEST_SEARCH_POSITIONS = (-2, -1, 0, 1, 2)

GRID_SIZE = 20

_CIRCULAR_TEMPLATE_SHAPES = frozenset(
    {
        "chance",
        "probability",
        "branch-point",
        "start-event",
        "end-event",
        "intermediate-event",
        "router",
        "internet",
    }
)


def side_anchor(side: Side, width: float, height: float, offset: float) -> Point:
    """
    Offset of a side's anchor from the node's top-left corner, before rotation.

    Args:
        side: Node side
        width: Node width
        height: Node height
        offset: Pixel shift along the side from its midpoint

    Returns:
        (rel_x, rel_y) relative to the node origin
    """
    anchors = {
        Side.TOP: (width / 2 + offset, 0.0),
        Side.BOTTOM: (width / 2 + offset, height),
        Side.LEFT: (0.0, height / 2 + offset),
        Side.RIGHT: (width, height / 2 + offset),
    }
    return anchors[side]


def rotate_point(x: float, y: float, cx: float, cy: float, degrees: float) -> Point:
    """Rotate (x, y) about (cx, cy) by ``degrees`` (clockwise in screen space)."""
    radians = math.radians(degrees)
    cos = math.cos(radians)
    sin = math.sin(radians)
    dx = x - cx
    dy = y - cy
    return (dx * cos - dy * sin + cx, dx * sin + dy * cos + cy)


def get_connection_point(node: Node, side: Union[Side, str], position: int = 0) -> Point:
    """
    Absolute coordinates of a connection point on a node.

    Args:
        node: Node to attach to
        side: Side of the node (Side or "top"/"bottom"/"left"/"right")
        position: Signed offset index along the side

    Returns:
        (x, y) in diagram coordinates
    """
    side = Side.coerce(side)
    rel_x, rel_y = side_anchor(
        side, node.width, node.height, position * CONNECTION_POINT_SPACING
    )

    if node.rotation != 0:
        rel_x, rel_y = rotate_point(
            rel_x, rel_y, node.width / 2, node.height / 2, node.rotation
        )

    return (node.x + rel_x, node.y + rel_y)


def find_closest_connection_point(node: Node, x: float, y: float) -> ConnectionPoint:
    """
    Exhaustively search 4 sides x 5 positions for the point nearest (x, y).

    Ties keep the first candidate in side order top, bottom, left, right.
    """
    closest = ConnectionPoint(Side.RIGHT, 0)
    min_distance = math.inf

    for side in (Side.TOP, Side.BOTTOM, Side.LEFT, Side.RIGHT):
        for pos in CLOSEST_SEARCH_POSITIONS:
            px, py = get_connection_point(node, side, pos)
            distance = math.hypot(x - px, y - py)
            if distance < min_distance:
                min_distance = distance
                closest = ConnectionPoint(side, pos)

    return closest


def optimal_connection_points(
    from_node: Node, to_node: Node
) -> tuple[ConnectionPoint, ConnectionPoint]:
    """
    Pick facing sides for an edge from the angle between node centers.

    Uses 30 degree boundaries so arrows approach a side at a steep angle:
    within +-30 degrees of horizontal the edge leaves right/left, otherwise
    it leaves bottom/top.
    """
    dx = to_node.center_x - from_node.center_x
    dy = to_node.center_y - from_node.center_y
    angle = math.degrees(math.atan2(dy, dx))

    if -30 <= angle <= 30:
        from_side, to_side = Side.RIGHT, Side.LEFT
    elif 30 < angle <= 150:
        from_side, to_side = Side.BOTTOM, Side.TOP
    elif angle > 150 or angle <= -150:
        from_side, to_side = Side.LEFT, Side.RIGHT
    else:
        from_side, to_side = Side.TOP, Side.BOTTOM

    return ConnectionPoint(from_side, 0), ConnectionPoint(to_side, 0)


def is_circular_shape(node: Node) -> bool:
    """Check if a node is drawn as a circle/ellipse."""
    return (
        node.shape == NodeShape.ELLIPSE
        or node.template_shape_id in _CIRCULAR_TEMPLATE_SHAPES
    )


def circle_edge_intersection(node: Node, from_x: float, from_y: float) -> Point:
    """
    Point where the ray from the node center towards (from_x, from_y) leaves
    the node's ellipse.

    For square nodes this is the inscribed circle. If the external point
    coincides with the center, the rightmost boundary point is returned.
    """
    cx, cy = node.center
    rx = node.width / 2
    ry = node.height / 2

    dx = from_x - cx
    dy = from_y - cy
    if math.hypot(dx, dy) < 0.001:
        return (cx + rx, cy)

    # Scale the direction vector onto the ellipse (x/rx)^2 + (y/ry)^2 = 1
    t = 1.0 / math.sqrt((dx * dx) / (rx * rx) + (dy * dy) / (ry * ry))
    return (cx + dx * t, cy + dy * t)


def snap_to_grid(value: float, grid_size: float = GRID_SIZE, enabled: bool = True) -> float:
    """Round a coordinate to the nearest grid line when snapping is enabled."""
    return round(value / grid_size) * grid_size if enabled else value


__all__ = [
    "CONNECTION_POINT_SPACING",
    "GRID_SIZE",
    "side_anchor",
    "rotate_point",
    "get_connection_point",
    "find_closest_connection_point",
    "optimal_connection_points",
    "is_circular_shape",
    "circle_edge_intersection",
    "snap_to_grid",
]
