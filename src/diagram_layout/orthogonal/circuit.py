"""
Circuit-style layout.

Clusters connected nodes on a grid, routes every edge with the two-layer
grid router and marks routed crossings with vias.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..types import EdgeLike, EventCallback, NodeLike
from .crossings import resolve_crossings
from .maze_router import route
from .types import RouteOptions

logger = logging.getLogger(__name__)


class CircuitLayout(StaticLayout):
    """
    Grid placement in BFS order followed by obstacle-avoiding routing.

    Placement: breadth-first traversal of the undirected graph, starting
    from the highest-degree unvisited node and visiting neighbours in
    descending degree, so connected nodes end up in neighbouring cells.
    Node centers go on a ``ceil(sqrt(n))``-column grid.

    Routing: every edge is routed center to center with all other nodes as
    obstacles. Unroutable edges and self-loops get no waypoints (a straight
    line). Crossings between routed edges are then resolved with vias.

    Example:
        layout = CircuitLayout(nodes=nodes, edges=edges, col_spacing=220)
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
        # Circuit-specific parameters
        route_options: Optional[RouteOptions] = None,
        row_spacing: float = 140.0,
        col_spacing: float = 220.0,
        start: Sequence[float] = (100.0, 100.0),
    ) -> None:
        """
        Initialize circuit layout.

        Args:
            nodes: List of nodes
            edges: List of edges (waypoints are replaced)
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            route_options: Router tuning. Defaults are derived from the
                spacing (grid spacing = min(col, row) / 2).
            row_spacing: Distance between row centers
            col_spacing: Distance between column centers
            start: Center of the first cell
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._route_options: Optional[RouteOptions] = route_options
        self._row_spacing: float = float(row_spacing)
        self._col_spacing: float = float(col_spacing)
        self._start: tuple[float, float] = (float(start[0]), float(start[1]))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def route_options(self) -> RouteOptions:
        """Router tuning in effect."""
        if self._route_options is not None:
            return self._route_options
        return RouteOptions(
            grid_spacing=min(self._col_spacing, self._row_spacing) / 2,
            obstacle_margin=12,
            bend_penalty=6,
            via_penalty=30,
            proximity_penalty=10,
            max_grid_size=300,
        )

    @route_options.setter
    def route_options(self, value: Optional[RouteOptions]) -> None:
        self._route_options = value

    @property
    def row_spacing(self) -> float:
        """Get distance between row centers."""
        return self._row_spacing

    @row_spacing.setter
    def row_spacing(self, value: float) -> None:
        self._row_spacing = float(value)

    @property
    def col_spacing(self) -> float:
        """Get distance between column centers."""
        return self._col_spacing

    @col_spacing.setter
    def col_spacing(self, value: float) -> None:
        self._col_spacing = float(value)

    @property
    def start(self) -> tuple[float, float]:
        """Get center of the first cell."""
        return self._start

    @start.setter
    def start(self, value: Sequence[float]) -> None:
        self._start = (float(value[0]), float(value[1]))

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def placement_order(self) -> list[int]:
        """Node ids in degree-first BFS order."""
        neighbors: dict[int, list[int]] = {node.id: [] for node in self._nodes}
        for edge in self._valid_edges():
            neighbors[edge.source].append(edge.target)
            neighbors[edge.target].append(edge.source)

        def by_degree(ids: list[int]) -> list[int]:
            return sorted(ids, key=lambda nid: -len(neighbors[nid]))

        visited: set[int] = set()
        order: list[int] = []
        for seed in by_degree(list(neighbors)):
            if seed in visited:
                continue
            visited.add(seed)
            queue: deque[int] = deque([seed])
            while queue:
                current = queue.popleft()
                order.append(current)
                for nb in by_degree(neighbors[current]):
                    if nb not in visited:
                        visited.add(nb)
                        queue.append(nb)
        return order

    def _compute(self, **kwargs: Any) -> None:
        n = len(self._nodes)
        if n == 0:
            return

        node_map = self._node_map()
        columns = max(1, math.ceil(math.sqrt(n)))
        start_x, start_y = self._start

        for i, nid in enumerate(self.placement_order()):
            row, col = divmod(i, columns)
            node_map[nid].move_center_to(
                start_x + col * self._col_spacing,
                start_y + row * self._row_spacing,
            )

        options = self.route_options
        routed = []
        for edge in self._edges:
            edge.waypoints = []
            source = node_map.get(edge.source)
            target = node_map.get(edge.target)
            if source is None or target is None or source is target:
                continue

            obstacles = [node for node in self._nodes if node is not source and node is not target]
            path = route(source.center, target.center, obstacles, options)
            if not path:
                logger.debug("Edge %d unroutable; drawing a straight line", edge.id)
            edge.waypoints = path
            routed.append(edge)

        resolve_crossings(self._nodes, routed)


def apply_circuit_layout(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    route_options: Optional[RouteOptions] = None,
    row_spacing: float = 140.0,
    col_spacing: float = 220.0,
    start: Sequence[float] = (100.0, 100.0),
) -> None:
    """Grid-place nodes in BFS order, route edges and resolve crossings."""
    CircuitLayout(
        nodes=nodes,
        edges=edges,
        route_options=route_options,
        row_spacing=row_spacing,
        col_spacing=col_spacing,
        start=start,
    ).run()


__all__ = ["CircuitLayout", "apply_circuit_layout"]
