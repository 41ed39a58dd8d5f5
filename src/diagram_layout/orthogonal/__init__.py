"""
Orthogonal routing.

- route: Two-layer A* grid router around node obstacles
- resolve_crossings: Via insertion where routed edges cross
- CircuitLayout: BFS grid placement plus routing of every edge
"""

from .circuit import CircuitLayout, apply_circuit_layout
from .crossings import edge_polyline, insert_via, resolve_crossings
from .maze_router import build_grid, route, simplify_waypoints
from .types import RouteOptions, RoutingGrid

__all__ = [
    "RouteOptions",
    "RoutingGrid",
    "route",
    "build_grid",
    "simplify_waypoints",
    "resolve_crossings",
    "edge_polyline",
    "insert_via",
    "CircuitLayout",
    "apply_circuit_layout",
]
