"""
Radial layout.

Places the root at the center and every other node on concentric rings by
BFS distance from the root. Edges leaving the root are spread over the
root's four sides with fanned connection points.
"""

from __future__ import annotations

import math
import warnings
from collections import defaultdict
from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..geometry.bundling import fan_positions
from ..preprocessing import bfs_levels
from ..types import ConnectionPoint, Edge, EdgeLike, EventCallback, Node, NodeLike, Side
from ..validation import GraphStructureWarning
from .tree import resolve_root

# Ring assigned to nodes BFS cannot reach
UNREACHED_LEVEL = 1


def angle_side(degrees: float) -> Side:
    """
    Side for a direction given in screen degrees (-180..180, y down).

    top: [-135, -45), right: [-45, 45), bottom: [45, 135), left: otherwise.
    """
    if -135 <= degrees < -45:
        return Side.TOP
    if -45 <= degrees < 45:
        return Side.RIGHT
    if 45 <= degrees < 135:
        return Side.BOTTOM
    return Side.LEFT


class RadialLayout(StaticLayout):
    """
    Concentric-ring layout around a root node.

    Ring ``level`` has radius ``level * ring_spacing``. Nodes on a ring are
    ordered by the angle of their parent (the source of their first incoming
    edge) and spaced uniformly starting at 12 o'clock. Nodes the root cannot
    reach go on ring 1 and trigger a GraphStructureWarning.

    Example:
        layout = RadialLayout(nodes=nodes, edges=edges, center=(1000, 750))
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
        # Radial-specific parameters
        center: Sequence[float] = (1000.0, 750.0),
        ring_spacing: float = 150.0,
        root_id: Optional[int] = None,
    ) -> None:
        """
        Initialize radial layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            center: Center of the rings (x, y)
            ring_spacing: Radius increment per ring
            root_id: Explicit root. Defaults to first zero in-degree node.
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._center: tuple[float, float] = (float(center[0]), float(center[1]))
        self._ring_spacing: float = float(ring_spacing)
        self._root_id: Optional[int] = root_id

    @property
    def center(self) -> tuple[float, float]:
        """Get ring center."""
        return self._center

    @center.setter
    def center(self, value: Sequence[float]) -> None:
        self._center = (float(value[0]), float(value[1]))

    @property
    def ring_spacing(self) -> float:
        """Get radius increment per ring."""
        return self._ring_spacing

    @ring_spacing.setter
    def ring_spacing(self, value: float) -> None:
        self._ring_spacing = float(value)

    @property
    def root_id(self) -> Optional[int]:
        """Get explicit root id (None = automatic)."""
        return self._root_id

    @root_id.setter
    def root_id(self, value: Optional[int]) -> None:
        self._root_id = value

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        if not self._nodes:
            return

        root_id = resolve_root(self, self._root_id)
        if root_id is None:
            return

        node_map = self._node_map()
        node_ids = [node.id for node in self._nodes]
        levels = bfs_levels(root_id, self._build_adjacency())
        unreached = len(node_map) - len(levels)
        if unreached:
            warnings.warn(
                f"Found {unreached} node(s) not reachable from root {root_id}. "
                f"They are placed on ring {UNREACHED_LEVEL}.",
                GraphStructureWarning,
                stacklevel=3,
            )
            for nid in node_ids:
                levels.setdefault(nid, UNREACHED_LEVEL)

        cx, cy = self._center
        root = node_map[root_id]
        root.move_center_to(cx, cy)

        rings: dict[int, list[Node]] = defaultdict(list)
        for node in self._nodes:
            if node.id != root_id:
                rings[levels[node.id]].append(node)

        parent_of: dict[int, int] = {}
        for edge in self._valid_edges():
            parent_of.setdefault(edge.target, edge.source)

        for level in sorted(rings):
            ring = self._sort_by_parent_angle(rings[level], parent_of, node_map)
            radius = level * self._ring_spacing
            step = 2 * math.pi / len(ring)
            for i, node in enumerate(ring):
                angle = i * step - math.pi / 2  # start from the top
                node.move_center_to(cx + radius * math.cos(angle), cy + radius * math.sin(angle))

        self._distribute_root_edges(root, node_map)

    def _sort_by_parent_angle(
        self, ring: list[Node], parent_of: dict[int, int], node_map: dict[int, Node]
    ) -> list[Node]:
        """Stable-sort a ring by the angle of each node's parent from the center."""
        cx, cy = self._center

        def parent_angle(node: Node) -> float:
            parent_id = parent_of.get(node.id)
            if parent_id is None:
                return 0.0
            parent = node_map[parent_id]
            return math.atan2(parent.center_y - cy, parent.center_x - cx)

        return sorted(ring, key=parent_angle)

    def _distribute_root_edges(self, root: Node, node_map: dict[int, Node]) -> None:
        """Spread the root's outgoing edges over its sides by target angle."""
        cx, cy = self._center
        outgoing: list[tuple[float, Edge]] = []
        for edge in self._valid_edges():
            if edge.source != root.id:
                continue
            target = node_map[edge.target]
            angle = math.degrees(math.atan2(target.center_y - cy, target.center_x - cx))
            outgoing.append((angle, edge))

        outgoing.sort(key=lambda item: item[0])

        by_side: dict[Side, list[Edge]] = defaultdict(list)
        for angle, edge in outgoing:
            by_side[angle_side(angle)].append(edge)

            # Target side faces the center
            reverse = angle + 180
            if reverse > 180:
                reverse -= 360
            edge.to_connection = ConnectionPoint(angle_side(reverse), 0)

        for side, side_edges in by_side.items():
            for edge, position in zip(side_edges, fan_positions(len(side_edges))):
                edge.from_connection = ConnectionPoint(side, position)


def apply_radial(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    center_x: float = 1000.0,
    center_y: float = 750.0,
    ring_spacing: float = 150.0,
    root_id: Optional[int] = None,
) -> None:
    """
    Radial layout; a single node is centered on (center_x, center_y).

    Also sets ``from_connection``/``to_connection`` on the root's outgoing
    edges.
    """
    RadialLayout(
        nodes=nodes,
        edges=edges,
        center=(center_x, center_y),
        ring_spacing=ring_spacing,
        root_id=root_id,
    ).run()


__all__ = ["RadialLayout", "apply_radial", "angle_side"]
