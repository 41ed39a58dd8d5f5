"""
Crossing resolution for routed edges.

Where two routed polylines cross, a layer-1 "via" waypoint is inserted
into one of them so a renderer can draw a jump instead of an ambiguous
junction. The edge with the larger id always receives the via.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..geometry.segments import point_on_segment, segment_intersection
from ..types import VIA_LAYER, Edge, Node, Point, Waypoint

logger = logging.getLogger(__name__)

INTERSECTION_TOLERANCE = 0.5

# An existing via closer than this (per axis) counts as a duplicate
DUPLICATE_VIA_DISTANCE = 1.0


def edge_polyline(edge: Edge, node_map: dict[int, Node]) -> list[Point]:
    """
    Polyline of an edge: source center, waypoints, target center.

    Returns an empty list if either endpoint is missing.
    """
    source = node_map.get(edge.source)
    target = node_map.get(edge.target)
    if source is None or target is None:
        return []
    return [source.center, *((wp.x, wp.y) for wp in edge.waypoints), target.center]


def insert_via(edge: Edge, node_map: dict[int, Node], x: float, y: float) -> bool:
    """
    Insert a via waypoint at (x, y) into the segment of ``edge`` containing it.

    Returns:
        True if a via was inserted; False if a via already sits within
        1px of the point or the point is not on the edge.
    """
    for wp in edge.waypoints:
        if (
            wp.layer == VIA_LAYER
            and abs(wp.x - x) < DUPLICATE_VIA_DISTANCE
            and abs(wp.y - y) < DUPLICATE_VIA_DISTANCE
        ):
            return False

    poly = edge_polyline(edge, node_map)
    for k in range(len(poly) - 1):
        if poly[k] == poly[k + 1]:
            continue  # routed edges repeat the pinned endpoints
        if point_on_segment((x, y), poly[k], poly[k + 1], INTERSECTION_TOLERANCE):
            # Segment k runs from waypoint k-1 to waypoint k
            edge.waypoints.insert(k, Waypoint(x, y, VIA_LAYER))
            return True
    return False


def resolve_crossings(nodes: Sequence[Node], edges: Sequence[Edge]) -> int:
    """
    Insert vias wherever two edge polylines cross.

    Pairs sharing an endpoint node and edges with a missing endpoint are
    skipped. Running the pass again on a resolved batch inserts nothing.

    Args:
        nodes: Nodes of the batch (for polyline endpoints)
        edges: Routed edges; waypoints are modified in place

    Returns:
        Number of vias inserted
    """
    node_map = {node.id: node for node in nodes}
    inserted = 0

    for i, first in enumerate(edges):
        for second in edges[i + 1:]:
            if first.shares_endpoint(second):
                continue

            poly_a = edge_polyline(first, node_map)
            poly_b = edge_polyline(second, node_map)
            if not poly_a or not poly_b:
                continue

            target = first if first.id >= second.id else second

            for a1, a2 in zip(poly_a, poly_a[1:]):
                for b1, b2 in zip(poly_b, poly_b[1:]):
                    hit = segment_intersection(a1, a2, b1, b2, INTERSECTION_TOLERANCE)
                    if hit is None:
                        continue
                    if insert_via(target, node_map, hit[0], hit[1]):
                        inserted += 1
                        logger.debug(
                            "Via on edge %d at (%.1f, %.1f) crossing edge %d",
                            target.id, hit[0], hit[1],
                            second.id if target is first else first.id,
                        )

    return inserted


__all__ = ["edge_polyline", "insert_via", "resolve_crossings"]
