"""
Graph preprocessing utilities.

This module provides reusable functions for preparing graphs before layout:
- Cycle removal (iterative three-color DFS, back-edge reversal)
- Longest-path layer assignment
- Layer grouping
- Breadth-first level assignment

Graphs are given as node ids plus (source, target) id pairs. Pairs that
reference unknown ids are ignored.
"""

from __future__ import annotations

from collections import defaultdict, deque
from enum import IntEnum
from typing import Iterable, NamedTuple, Sequence


class Color(IntEnum):
    """DFS visit state."""

    WHITE = 0  # unvisited
    GRAY = 1  # on the current DFS path
    BLACK = 2  # finished


class WorkingEdge(NamedTuple):
    """Edge of the acyclic working graph used for layering."""

    source: int
    target: int
    reversed: bool
    index: int  # position in the original edge sequence


# =============================================================================
# Cycle Removal
# =============================================================================


def remove_cycles(
    node_ids: Sequence[int],
    edges: Sequence[tuple[int, int]],
) -> tuple[list[WorkingEdge], set[int]]:
    """
    Make a directed graph acyclic by reversing back-edges.

    Runs a depth-first search from every still-unvisited node in ``node_ids``
    order. An edge leading to a node on the current DFS path (GRAY) is a
    back-edge and is reversed in the returned working list. The DFS uses an
    explicit stack of (node, next-neighbor-index) frames so arbitrarily deep
    graphs cannot exhaust the interpreter stack.

    Self-loops and edges with unknown endpoints are left out of the working
    graph; the input sequence is never modified.

    Args:
        node_ids: Node ids, in DFS root order
        edges: Directed (source, target) pairs

    Returns:
        Tuple of (working_edges, reversed_indices) where reversed_indices are
        positions in ``edges`` that were flipped.

    Example:
        >>> working, flipped = remove_cycles([1, 2], [(1, 2), (2, 1)])
        >>> sorted(flipped)
        [1]
    """
    id_set = set(node_ids)
    adj: dict[int, list[tuple[int, int]]] = {nid: [] for nid in node_ids}
    for idx, (src, tgt) in enumerate(edges):
        if src in id_set and tgt in id_set and src != tgt:
            adj[src].append((tgt, idx))

    color = dict.fromkeys(node_ids, Color.WHITE)
    reversed_indices: set[int] = set()

    for root in node_ids:
        if color[root] != Color.WHITE:
            continue

        color[root] = Color.GRAY
        stack: list[tuple[int, int]] = [(root, 0)]

        while stack:
            node, pos = stack[-1]
            neighbors = adj[node]
            if pos < len(neighbors):
                stack[-1] = (node, pos + 1)
                neighbor, edge_idx = neighbors[pos]
                if color[neighbor] == Color.GRAY:
                    reversed_indices.add(edge_idx)
                elif color[neighbor] == Color.WHITE:
                    color[neighbor] = Color.GRAY
                    stack.append((neighbor, 0))
            else:
                color[node] = Color.BLACK
                stack.pop()

    working: list[WorkingEdge] = []
    for idx, (src, tgt) in enumerate(edges):
        if src not in id_set or tgt not in id_set or src == tgt:
            continue
        if idx in reversed_indices:
            working.append(WorkingEdge(tgt, src, True, idx))
        else:
            working.append(WorkingEdge(src, tgt, False, idx))

    return working, reversed_indices


# =============================================================================
# Layer Assignment
# =============================================================================


def assign_layers_longest_path(
    node_ids: Sequence[int],
    edges: Iterable[tuple[int, int]],
) -> dict[int, int]:
    """
    Assign each node to a layer using longest-path labeling.

    Kahn-style queue: zero in-degree nodes seed layer 0, and each processed
    edge sets ``layer[child] = max(layer[child], layer[parent] + 1)``. If no
    node has in-degree zero, the node with minimum in-degree seeds the
    queue. Nodes never reached are placed in layer 0.

    Args:
        node_ids: Node ids
        edges: Directed (source, target) pairs of an (ideally) acyclic graph

    Returns:
        Mapping node id -> layer index (>= 0)

    Example:
        >>> assign_layers_longest_path([1, 2, 3], [(1, 2), (2, 3), (1, 3)])
        {1: 0, 2: 1, 3: 2}
    """
    layer = dict.fromkeys(node_ids, 0)
    in_degree = dict.fromkeys(node_ids, 0)
    adj: dict[int, list[int]] = defaultdict(list)

    for src, tgt in edges:
        if src in layer and tgt in layer:
            adj[src].append(tgt)
            in_degree[tgt] += 1

    queue: deque[int] = deque(nid for nid in node_ids if in_degree[nid] == 0)
    if not queue and node_ids:
        queue.append(min(node_ids, key=lambda nid: in_degree[nid]))

    processed: set[int] = set()
    while queue:
        current = queue.popleft()
        if current in processed:
            continue
        processed.add(current)

        for neighbor in adj[current]:
            if layer[current] + 1 > layer[neighbor]:
                layer[neighbor] = layer[current] + 1
            in_degree[neighbor] -= 1
            if in_degree[neighbor] <= 0 and neighbor not in processed:
                queue.append(neighbor)

    # Handle unreached nodes (residual cycles)
    for nid in node_ids:
        if nid not in processed:
            layer[nid] = 0

    return layer


def group_by_layer(node_ids: Sequence[int], node_layer: dict[int, int]) -> list[list[int]]:
    """
    Group node ids into layers, preserving input order within a layer.

    Returns:
        List indexed by layer; empty intermediate layers are kept.
    """
    if not node_ids:
        return []
    max_layer = max(node_layer[nid] for nid in node_ids)
    layers: list[list[int]] = [[] for _ in range(max_layer + 1)]
    for nid in node_ids:
        layers[node_layer[nid]].append(nid)
    return layers


# =============================================================================
# Breadth-First Levels
# =============================================================================


def bfs_levels(root: int, adjacency: dict[int, list[int]]) -> dict[int, int]:
    """
    Breadth-first distance (in edges) from ``root`` along directed adjacency.

    Args:
        root: Start node id
        adjacency: Directed adjacency (node id -> successor ids)

    Returns:
        Mapping node id -> level
    """
    levels = {root: 0}
    queue: deque[int] = deque([root])

    while queue:
        current = queue.popleft()
        for child in adjacency.get(current, []):
            if child not in levels:
                levels[child] = levels[current] + 1
                queue.append(child)

    return levels


__all__ = [
    "Color",
    "WorkingEdge",
    "remove_cycles",
    "assign_layers_longest_path",
    "group_by_layer",
    "bfs_levels",
]
