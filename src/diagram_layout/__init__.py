"""
diagram-layout: Auto-layout and edge routing for box-and-arrow diagrams.

This package positions diagram nodes (rectangles with a size, rotation and
shape kind) and routes the edges between them.

Available algorithms:
- force: Fruchterman-Reingold force-directed layout on a bounded canvas
- hierarchical: Sugiyama layered layout, tree layout, radial layout
- circular: Single-circle layout
- basic: Grid, compact, symmetric and flip layouts
- orthogonal: Two-layer A* grid router, crossing vias, circuit layout
- geometry: Connection points, edge bundling, segment primitives
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Basic layouts
from .basic import (
    CompactLayout,
    FlipLayout,
    GridLayout,
    SymmetricLayout,
    apply_compact,
    apply_grid,
    apply_symmetric_horizontal,
    apply_symmetric_vertical,
    flip_horizontal,
    flip_vertical,
)

# Circular layout
from .circular import CircularLayout, apply_circular

# Force-directed layout
from .force import ForceDirectedLayout, apply_force_directed

# Geometry
from .geometry import (
    bundle_all_edges,
    bundle_edges_from_node,
    bundle_edges_to_node,
    circle_edge_intersection,
    find_closest_connection_point,
    get_connection_point,
    is_circular_shape,
    optimal_connection_points,
    snap_to_grid,
)

# Hierarchical layouts
from .hierarchical import (
    HierarchicalLayout,
    RadialLayout,
    TreeLayout,
    apply_hierarchical,
    apply_radial,
    apply_tree,
)

# Metrics for layout quality evaluation
from .metrics import crossing_pairs, edge_crossings, node_overlaps

# Routing
from .orthogonal import (
    CircuitLayout,
    RouteOptions,
    apply_circuit_layout,
    resolve_crossings,
    route,
)

# Preprocessing utilities
from .preprocessing import assign_layers_longest_path, remove_cycles
from .types import (
    OBSTACLE_LAYER,
    VIA_LAYER,
    ConnectionPoint,
    Edge,
    EdgeLike,
    Event,
    EventType,
    Node,
    NodeLike,
    NodeShape,
    Point,
    Side,
    Waypoint,
)

# Validation utilities
from .validation import (
    GraphStructureWarning,
    InvalidCanvasSizeError,
    InvalidEdgeError,
    InvalidNodeError,
    InvalidRouteOptionsError,
    ValidationError,
    validate_canvas_size,
    validate_edge_references,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "Edge",
    "Waypoint",
    "ConnectionPoint",
    "Side",
    "NodeShape",
    "EventType",
    "Event",
    "Point",
    "OBSTACLE_LAYER",
    "VIA_LAYER",
    # Type aliases for API
    "NodeLike",
    "EdgeLike",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Force-directed layout
    "ForceDirectedLayout",
    "apply_force_directed",
    # Hierarchical layouts
    "HierarchicalLayout",
    "TreeLayout",
    "RadialLayout",
    "apply_hierarchical",
    "apply_tree",
    "apply_radial",
    # Circular layout
    "CircularLayout",
    "apply_circular",
    # Basic layouts
    "GridLayout",
    "CompactLayout",
    "SymmetricLayout",
    "FlipLayout",
    "apply_grid",
    "apply_compact",
    "apply_symmetric_horizontal",
    "apply_symmetric_vertical",
    "flip_horizontal",
    "flip_vertical",
    # Routing
    "RouteOptions",
    "route",
    "resolve_crossings",
    "CircuitLayout",
    "apply_circuit_layout",
    # Geometry
    "get_connection_point",
    "find_closest_connection_point",
    "optimal_connection_points",
    "is_circular_shape",
    "circle_edge_intersection",
    "snap_to_grid",
    "bundle_edges_from_node",
    "bundle_edges_to_node",
    "bundle_all_edges",
    # Metrics
    "edge_crossings",
    "crossing_pairs",
    "node_overlaps",
    # Validation
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidRouteOptionsError",
    "GraphStructureWarning",
    "validate_canvas_size",
    "validate_edge_references",
    # Preprocessing
    "remove_cycles",
    "assign_layers_longest_path",
]
