"""
Sugiyama layered diagram layout algorithm.

Based on the framework from:
"Methods for Visual Understanding of Hierarchical System Structures"
by Sugiyama, Tagawa, and Toda (1981)

This algorithm produces layered layouts for directed graphs with the
following phases:
1. Cycle removal (back-edge reversal on a working copy)
2. Layer assignment (longest path)
3. Dummy-node insertion for edges spanning several layers
4. Crossing minimization (barycenter sweeps)
5. Coordinate assignment within layers, centered on the widest layer

Each phase is also available as a standalone function operating on node
ids, so callers can inspect intermediate results.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

from ..base import StaticLayout
from ..preprocessing import (
    WorkingEdge,
    assign_layers_longest_path,
    group_by_layer,
    remove_cycles,
)
from ..types import Edge, EdgeLike, EventCallback, NodeLike

# Origin of the final placement
ORIGIN_X = 100.0
ORIGIN_Y = 100.0

DEFAULT_CROSSING_SWEEPS = 24


@dataclass
class DummyNode:
    """
    Placeholder for one layer crossing of a long edge.

    Carries the endpoints of the working edge it belongs to. Dummies take
    part in ordering and coordinate assignment only; edges are still drawn
    as straight lines between real nodes.
    """

    id: int
    layer: int
    original_from: int
    original_to: int
    x: float = 0.0
    width: float = 0.0


# =============================================================================
# Pipeline Stages
# =============================================================================


def assign_layers(node_ids: Sequence[int], working_edges: Sequence[WorkingEdge]) -> dict[int, int]:
    """Longest-path layering of the acyclic working graph."""
    return assign_layers_longest_path(node_ids, ((e.source, e.target) for e in working_edges))


def insert_dummy_nodes(
    layers: Sequence[Sequence[int]],
    node_layer: dict[int, int],
    working_edges: Sequence[WorkingEdge],
    id_source: Iterator[int],
) -> tuple[list[list[int]], list[DummyNode], dict[int, list[int]]]:
    """
    Make the layered graph proper.

    Every working edge spanning more than one layer is replaced by a chain
    ``u -> d1 -> ... -> dk -> v`` with one dummy per intervening layer.
    Parallel working edges between the same pair share one chain.

    Args:
        layers: Real node ids grouped by layer
        node_layer: Layer of every real node
        working_edges: Acyclic working edges
        id_source: Supplier of fresh dummy ids, disjoint from real ids

    Returns:
        Tuple of (augmented_layers, dummy_nodes, successors) where successors
        maps every item id to the ids it connects to one layer down.
    """
    augmented = [list(layer) for layer in layers]
    dummies: list[DummyNode] = []
    successors: dict[int, list[int]] = defaultdict(list)
    chains: set[tuple[int, int]] = set()

    for edge in working_edges:
        span = node_layer[edge.target] - node_layer[edge.source]
        if span <= 1:
            successors[edge.source].append(edge.target)
            continue

        key = (edge.source, edge.target)
        if key in chains:
            continue
        chains.add(key)

        previous = edge.source
        for layer in range(node_layer[edge.source] + 1, node_layer[edge.target]):
            dummy = DummyNode(
                id=next(id_source),
                layer=layer,
                original_from=edge.source,
                original_to=edge.target,
            )
            dummies.append(dummy)
            augmented[layer].append(dummy.id)
            successors[previous].append(dummy.id)
            previous = dummy.id
        successors[previous].append(edge.target)

    return augmented, dummies, successors


def _barycenter_order(layer: list[int], neighbors: dict[int, list[int]], fixed: list[int]) -> list[int]:
    """Stable-sort ``layer`` by mean index of each item's neighbors in ``fixed``."""
    fixed_pos = {item: idx for idx, item in enumerate(fixed)}
    barycenter: dict[int, float] = {}

    for idx, item in enumerate(layer):
        positions = [fixed_pos[nb] for nb in neighbors.get(item, ()) if nb in fixed_pos]
        barycenter[item] = sum(positions) / len(positions) if positions else float(idx)

    return sorted(layer, key=lambda item: barycenter[item])


def minimize_crossings(
    layers: Sequence[Sequence[int]],
    successors: dict[int, list[int]],
    sweeps: int = DEFAULT_CROSSING_SWEEPS,
) -> list[list[int]]:
    """
    Reorder layers with the barycenter heuristic.

    Each sweep is a forward pass (layer 1 to the last, against the previous
    layer) followed by a backward pass (second-to-last to 0, against the
    next layer). Items without neighbors in the reference layer keep their
    current index as barycenter. All sweeps run; there is no early exit.

    Returns:
        New list of reordered layers
    """
    ordered = [list(layer) for layer in layers]
    predecessors: dict[int, list[int]] = defaultdict(list)
    for src, targets in successors.items():
        for tgt in targets:
            predecessors[tgt].append(src)

    for _ in range(sweeps):
        for i in range(1, len(ordered)):
            ordered[i] = _barycenter_order(ordered[i], predecessors, ordered[i - 1])
        for i in range(len(ordered) - 2, -1, -1):
            ordered[i] = _barycenter_order(ordered[i], successors, ordered[i + 1])

    return ordered


def assign_x_coordinates(
    layers: Sequence[Sequence[int]],
    extents: dict[int, float],
    node_spacing: float,
) -> dict[int, float]:
    """
    Lay out each layer left to right, then center it on the widest layer.

    Args:
        layers: Ordered item ids per layer
        extents: Size of each item along the layer (0 for dummies)
        node_spacing: Gap after every item

    Returns:
        Mapping item id -> coordinate along the layer, starting at 0
    """
    coords: dict[int, float] = {}
    widths: list[float] = []

    for layer in layers:
        current = 0.0
        for item in layer:
            coords[item] = current
            current += extents.get(item, 0.0) + node_spacing
        widths.append(current)

    max_width = max(widths, default=0.0)
    for layer, width in zip(layers, widths):
        offset = (max_width - width) / 2
        for item in layer:
            coords[item] += offset

    return coords


# =============================================================================
# Layout
# =============================================================================


class HierarchicalLayout(StaticLayout):
    """
    Sugiyama layered layout.

    Arranges nodes in layers with edges flowing downward (or rightward when
    ``top_to_bottom`` is False). Cycles are broken on an internal working
    copy; the caller's edges are never modified.

    After ``run()`` the instance exposes the last run's ``layers``,
    ``node_layer``, ``dummy_nodes`` and ``reversed_edges``.

    Example:
        layout = HierarchicalLayout(
            nodes=nodes,
            edges=edges,
            layer_spacing=150,
            node_spacing=80,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # Hierarchical-specific parameters
        layer_spacing: float = 150.0,
        node_spacing: float = 80.0,
        top_to_bottom: bool = True,
        crossing_sweeps: int = DEFAULT_CROSSING_SWEEPS,
    ) -> None:
        """
        Initialize hierarchical layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            layer_spacing: Distance between consecutive layers
            node_spacing: Gap between neighbours within a layer
            top_to_bottom: Layers stack downward if True, rightward if False
            crossing_sweeps: Number of forward+backward barycenter sweeps
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._layer_spacing: float = float(layer_spacing)
        self._node_spacing: float = float(node_spacing)
        self._top_to_bottom: bool = bool(top_to_bottom)
        self._crossing_sweeps: int = max(0, int(crossing_sweeps))

        # Per-run state
        self._layers: list[list[int]] = []
        self._node_layer: dict[int, int] = {}
        self._dummy_nodes: list[DummyNode] = []
        self._reversed_edges: list[Edge] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def layer_spacing(self) -> float:
        """Get distance between layers."""
        return self._layer_spacing

    @layer_spacing.setter
    def layer_spacing(self, value: float) -> None:
        self._layer_spacing = float(value)

    @property
    def node_spacing(self) -> float:
        """Get gap between nodes in the same layer."""
        return self._node_spacing

    @node_spacing.setter
    def node_spacing(self, value: float) -> None:
        self._node_spacing = float(value)

    @property
    def top_to_bottom(self) -> bool:
        """Get layer direction."""
        return self._top_to_bottom

    @top_to_bottom.setter
    def top_to_bottom(self, value: bool) -> None:
        self._top_to_bottom = bool(value)

    @property
    def crossing_sweeps(self) -> int:
        """Get number of barycenter sweeps."""
        return self._crossing_sweeps

    @crossing_sweeps.setter
    def crossing_sweeps(self, value: int) -> None:
        self._crossing_sweeps = max(0, int(value))

    @property
    def layers(self) -> list[list[int]]:
        """Ordered item ids per layer from the last run (dummies are negative)."""
        return self._layers

    @property
    def node_layer(self) -> dict[int, int]:
        """Layer index of each real node from the last run."""
        return self._node_layer

    @property
    def dummy_nodes(self) -> list[DummyNode]:
        """Dummy nodes created by the last run."""
        return self._dummy_nodes

    @property
    def reversed_edges(self) -> list[Edge]:
        """Edges whose working copy was reversed to break a cycle."""
        return self._reversed_edges

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Run the layering pipeline and place real nodes."""
        self._layers = []
        self._node_layer = {}
        self._dummy_nodes = []
        self._reversed_edges = []

        n = len(self._nodes)
        if n == 0:
            return
        if n == 1:
            self._nodes[0].x = ORIGIN_X
            self._nodes[0].y = ORIGIN_Y
            self._node_layer = {self._nodes[0].id: 0}
            self._layers = [[self._nodes[0].id]]
            return

        node_ids = [node.id for node in self._nodes]
        working, reversed_indices = remove_cycles(
            node_ids, [(edge.source, edge.target) for edge in self._edges]
        )
        self._reversed_edges = [self._edges[i] for i in sorted(reversed_indices)]

        node_layer = assign_layers(node_ids, working)
        layers = group_by_layer(node_ids, node_layer)

        # Dummy ids are scoped to this run and never collide with real ids
        id_source = itertools.count(min(min(node_ids), 0) - 1, -1)
        augmented, dummies, successors = insert_dummy_nodes(layers, node_layer, working, id_source)

        ordered = minimize_crossings(augmented, successors, self._crossing_sweeps)

        node_map = self._node_map()
        extents = {nid: node.width for nid, node in node_map.items()}
        coords = assign_x_coordinates(ordered, extents, self._node_spacing)

        for dummy in dummies:
            dummy.x = coords[dummy.id]

        for layer_idx, layer in enumerate(ordered):
            depth = layer_idx * self._layer_spacing
            for item in layer:
                node = node_map.get(item)
                if node is None:
                    continue
                if self._top_to_bottom:
                    node.x = ORIGIN_X + coords[item]
                    node.y = ORIGIN_Y + depth
                else:
                    node.x = ORIGIN_X + depth
                    node.y = ORIGIN_Y + coords[item]

        self._layers = ordered
        self._node_layer = node_layer
        self._dummy_nodes = dummies


def apply_hierarchical(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    layer_spacing: float = 150.0,
    node_spacing: float = 80.0,
    top_to_bottom: bool = True,
) -> None:
    """
    Layered layout. An empty batch is a no-op; one node goes to (100, 100).
    """
    HierarchicalLayout(
        nodes=nodes,
        edges=edges,
        layer_spacing=layer_spacing,
        node_spacing=node_spacing,
        top_to_bottom=top_to_bottom,
    ).run()


__all__ = [
    "DummyNode",
    "HierarchicalLayout",
    "apply_hierarchical",
    "assign_layers",
    "insert_dummy_nodes",
    "minimize_crossings",
    "assign_x_coordinates",
    "remove_cycles",
]
