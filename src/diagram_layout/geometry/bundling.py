"""
Edge bundling on node sides.

Groups a node's incident edges by the dominant compass direction to the
neighbor and assigns connection points so that a single edge is centered
and several same-side edges fan out with distinct signed offsets.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..types import ConnectionPoint, Edge, Node, Side


def dominant_side(dx: float, dy: float) -> Side:
    """Side facing the vector (dx, dy): horizontal wins only if strictly larger."""
    if abs(dx) > abs(dy):
        return Side.RIGHT if dx > 0 else Side.LEFT
    return Side.BOTTOM if dy > 0 else Side.TOP


def fan_positions(count: int) -> list[int]:
    """
    Signed offsets for ``count`` edges sharing a side.

    1 -> [0], 2 -> [0, 1], 3 -> [-1, 0, 1], 4 -> [-1, 0, 1, 2], ...
    """
    if count == 1:
        return [0]
    shift = (count - 1) // 2
    return [i - shift for i in range(count)]


def _group_by_side(
    anchor: Node, incident: list[tuple[Edge, Node]]
) -> dict[Side, list[tuple[Edge, Node]]]:
    groups: dict[Side, list[tuple[Edge, Node]]] = defaultdict(list)
    for edge, other in incident:
        dx = other.center_x - anchor.center_x
        dy = other.center_y - anchor.center_y
        groups[dominant_side(dx, dy)].append((edge, other))

    # Order each group along its side so fanned edges do not cross each other
    for side, members in groups.items():
        if side.is_horizontal():
            members.sort(key=lambda item: item[1].center_x)
        else:
            members.sort(key=lambda item: item[1].center_y)
    return groups


def bundle_edges_from_node(node_id: int, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """
    Assign ``from_connection`` for every outgoing edge of a node.

    Edges whose target is missing are left untouched.
    """
    node_map = {node.id: node for node in nodes}
    source = node_map.get(node_id)
    if source is None:
        return

    outgoing = [
        (edge, node_map[edge.target])
        for edge in edges
        if edge.source == node_id and edge.target in node_map
    ]

    for side, members in _group_by_side(source, outgoing).items():
        for (edge, _), position in zip(members, fan_positions(len(members))):
            edge.from_connection = ConnectionPoint(side, position)


def bundle_edges_to_node(node_id: int, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """
    Assign ``to_connection`` for every incoming edge of a node.

    The side is the one facing the edge's source. Edges whose source is
    missing are left untouched.
    """
    node_map = {node.id: node for node in nodes}
    target = node_map.get(node_id)
    if target is None:
        return

    incoming = [
        (edge, node_map[edge.source])
        for edge in edges
        if edge.target == node_id and edge.source in node_map
    ]

    for side, members in _group_by_side(target, incoming).items():
        for (edge, _), position in zip(members, fan_positions(len(members))):
            edge.to_connection = ConnectionPoint(side, position)


def bundle_all_edges(nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Bundle outgoing edges of every source, then incoming edges of every target."""
    for node_id in dict.fromkeys(edge.source for edge in edges):
        bundle_edges_from_node(node_id, nodes, edges)
    for node_id in dict.fromkeys(edge.target for edge in edges):
        bundle_edges_to_node(node_id, nodes, edges)


__all__ = [
    "dominant_side",
    "fan_positions",
    "bundle_edges_from_node",
    "bundle_edges_to_node",
    "bundle_all_edges",
]
