"""
Layout quality metrics.

Provides quantitative measures of a finished diagram:
- Edge crossings: Number of intersecting straight edges
- Crossing pairs: Which edges intersect, and where
- Node overlaps: Pairs of overlapping node rectangles

Edges are measured as straight center-to-center segments; waypoints are
ignored. Pairs of edges that share a node never count as crossing.
"""

from __future__ import annotations

from typing import Sequence

from .geometry.segments import rects_overlap, segment_intersection
from .types import Edge, Node, Point


def crossing_pairs(
    nodes: Sequence[Node], edges: Sequence[Edge]
) -> list[tuple[int, int, Point]]:
    """
    List the crossing edge pairs of the layout.

    Args:
        nodes: List of positioned nodes
        edges: List of edges (dangling edges are skipped)

    Returns:
        (edge id, edge id, intersection point) for every crossing pair,
        lower-index edge first.

    Time Complexity: O(m^2) where m = number of edges
    """
    node_map = {node.id: node for node in nodes}
    segments = [
        (edge, node_map[edge.source].center, node_map[edge.target].center)
        for edge in edges
        if edge.source in node_map and edge.target in node_map
    ]

    pairs: list[tuple[int, int, Point]] = []
    for i, (e1, p1, p2) in enumerate(segments):
        for e2, p3, p4 in segments[i + 1:]:
            if e1.shares_endpoint(e2):
                continue
            hit = segment_intersection(p1, p2, p3, p4, tolerance=0.0)
            if hit is not None:
                pairs.append((e1.id, e2.id, hit))
    return pairs


def edge_crossings(nodes: Sequence[Node], edges: Sequence[Edge]) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their center-to-center segments intersect (excluding
    shared endpoints).
    """
    return len(crossing_pairs(nodes, edges))


def node_overlaps(nodes: Sequence[Node], margin: float = 0.0) -> list[tuple[int, int]]:
    """
    Find overlapping node pairs.

    Args:
        nodes: List of positioned nodes
        margin: Extra clearance required between rectangles; rectangles
            that merely touch count as overlapping

    Returns:
        (node id, node id) for each overlapping pair
    """
    overlaps: list[tuple[int, int]] = []
    for i, a in enumerate(nodes):
        for b in nodes[i + 1:]:
            if rects_overlap(a.x, a.y, a.width, a.height, b.x, b.y, b.width, b.height, margin):
                overlaps.append((a.id, b.id))
    return overlaps


__all__ = [
    "edge_crossings",
    "crossing_pairs",
    "node_overlaps",
]
