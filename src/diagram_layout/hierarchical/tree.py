"""
Tree layout.

Each subtree gets a horizontal span equal to the larger of its root's width
and the sum of its children's spans plus sibling spacing. A node is
centered in its span; levels are stacked ``level_spacing`` apart.
"""

from __future__ import annotations

import warnings
from collections import deque
from typing import Any, Optional, Sequence

from ..base import BaseLayout, StaticLayout
from ..types import EdgeLike, EventCallback, NodeLike
from ..validation import GraphStructureWarning

# Origin of the placement
ORIGIN_X = 100.0
ORIGIN_Y = 100.0


def resolve_root(layout: BaseLayout, root_id: Optional[int], stacklevel: int = 4) -> Optional[int]:
    """
    Pick the layout root: ``root_id`` if given, else the first node with
    in-degree 0, else the first node (with a GraphStructureWarning).

    Returns None if ``root_id`` names a missing node.
    """
    if root_id is not None:
        if root_id not in layout._node_map():
            warnings.warn(
                f"Root node {root_id} not found; layout skipped.",
                GraphStructureWarning,
                stacklevel=stacklevel,
            )
            return None
        return root_id

    in_degree = layout._in_degrees()
    for node in layout.nodes:
        if in_degree[node.id] == 0:
            return node.id

    warnings.warn(
        "No root node found (all nodes have incoming edges). "
        "This suggests the graph is not a tree; using the first node as root.",
        GraphStructureWarning,
        stacklevel=stacklevel,
    )
    return layout.nodes[0].id


def spanning_children(root: int, adjacency: dict[int, list[int]]) -> dict[int, list[int]]:
    """
    Breadth-first spanning tree from ``root``.

    A node is the child of the first parent that reaches it, so shared
    successors and cycles never duplicate a subtree.
    """
    children: dict[int, list[int]] = {root: []}
    queue: deque[int] = deque([root])

    while queue:
        current = queue.popleft()
        for child in adjacency.get(current, []):
            if child not in children:
                children[child] = []
                children[current].append(child)
                queue.append(child)

    return children


class TreeLayout(StaticLayout):
    """
    Top-down tree layout with subtree-width allocation.

    Nodes not reachable from the root keep their positions and trigger a
    GraphStructureWarning.

    Example:
        layout = TreeLayout(nodes=nodes, edges=edges, level_spacing=120)
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
        # Tree-specific parameters
        level_spacing: float = 120.0,
        sibling_spacing: float = 40.0,
        root_id: Optional[int] = None,
    ) -> None:
        """
        Initialize tree layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            level_spacing: Vertical distance between levels
            sibling_spacing: Horizontal gap between sibling subtrees
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
        self._level_spacing: float = float(level_spacing)
        self._sibling_spacing: float = float(sibling_spacing)
        self._root_id: Optional[int] = root_id

    @property
    def level_spacing(self) -> float:
        """Get vertical distance between levels."""
        return self._level_spacing

    @level_spacing.setter
    def level_spacing(self, value: float) -> None:
        self._level_spacing = float(value)

    @property
    def sibling_spacing(self) -> float:
        """Get horizontal gap between sibling subtrees."""
        return self._sibling_spacing

    @sibling_spacing.setter
    def sibling_spacing(self, value: float) -> None:
        self._sibling_spacing = float(value)

    @property
    def root_id(self) -> Optional[int]:
        """Get explicit root id (None = automatic)."""
        return self._root_id

    @root_id.setter
    def root_id(self, value: Optional[int]) -> None:
        self._root_id = value

    def _compute(self, **kwargs: Any) -> None:
        if not self._nodes:
            return

        root = resolve_root(self, self._root_id)
        if root is None:
            return

        node_map = self._node_map()
        children = spanning_children(root, self._build_adjacency())

        unreached = len(node_map) - len(children)
        if unreached:
            warnings.warn(
                f"Found {unreached} node(s) not reachable from root {root}. "
                "They keep their current positions.",
                GraphStructureWarning,
                stacklevel=3,
            )

        # BFS order lists parents before children; reverse it for post-order
        order = list(children)
        spans: dict[int, float] = {}
        for nid in reversed(order):
            kids = children[nid]
            own = node_map[nid].width
            if not kids:
                spans[nid] = own
                continue
            total = sum(spans[kid] for kid in kids) + (len(kids) - 1) * self._sibling_spacing
            spans[nid] = max(own, total)

        stack: list[tuple[int, int, float]] = [(root, 0, 0.0)]
        while stack:
            nid, level, left = stack.pop()
            node = node_map[nid]
            node.x = ORIGIN_X + left + (spans[nid] - node.width) / 2
            node.y = ORIGIN_Y + level * self._level_spacing

            child_left = left
            for kid in children[nid]:
                stack.append((kid, level + 1, child_left))
                child_left += spans[kid] + self._sibling_spacing


def apply_tree(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    level_spacing: float = 120.0,
    sibling_spacing: float = 40.0,
    root_id: Optional[int] = None,
) -> None:
    """Tree layout; a single node goes to (100, 100)."""
    TreeLayout(
        nodes=nodes,
        edges=edges,
        level_spacing=level_spacing,
        sibling_spacing=sibling_spacing,
        root_id=root_id,
    ).run()


__all__ = ["TreeLayout", "apply_tree", "resolve_root", "spanning_children"]
