"""
Geometry primitives.

- Connection points on (optionally rotated) node boundaries
- Closest / optimal connection-point selection
- Ellipse boundary intersection for circular shapes
- Segment intersection and rectangle overlap tests
- Edge bundling by dominant direction
"""

from .bundling import (
    bundle_all_edges,
    bundle_edges_from_node,
    bundle_edges_to_node,
    dominant_side,
    fan_positions,
)
from .connection import (
    CONNECTION_POINT_SPACING,
    GRID_SIZE,
    circle_edge_intersection,
    find_closest_connection_point,
    get_connection_point,
    is_circular_shape,
    optimal_connection_points,
    rotate_point,
    side_anchor,
    snap_to_grid,
)
from .segments import point_on_segment, rects_overlap, segment_intersection

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
    "segment_intersection",
    "point_on_segment",
    "rects_overlap",
    "dominant_side",
    "fan_positions",
    "bundle_edges_from_node",
    "bundle_edges_to_node",
    "bundle_all_edges",
]
