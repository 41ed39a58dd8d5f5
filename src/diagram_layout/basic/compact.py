"""
Compact layout.

Pulls nodes towards the centroid of the batch without creating overlaps.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..geometry.bundling import bundle_all_edges
from ..geometry.segments import rects_overlap
from ..types import EdgeLike, EventCallback, Node, NodeLike
from ..validation import validate_positive

# Nodes closer than this to the centroid are left alone
CENTERED_EPSILON = 1.0


class CompactLayout(StaticLayout):
    """
    Shrink a layout towards its center of mass.

    The centroid is computed once from the initial node centers. Nodes are
    visited farthest-first; each one moves towards the centroid in
    ``step_size`` increments (at most ``int(distance / step_size)`` steps)
    and stops before the first step whose bounding box, grown by
    ``target_spacing``, would overlap another node.

    If edges are supplied their connection points are re-bundled afterwards
    to match the new geometry.

    Example:
        layout = CompactLayout(nodes=nodes, edges=edges, target_spacing=30)
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
        # Compact-specific parameters
        target_spacing: float = 30.0,
        step_size: float = 10.0,
    ) -> None:
        """
        Initialize compact layout.

        Args:
            nodes: List of nodes
            edges: Optional edges whose connection points are refreshed
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            target_spacing: Minimum clearance kept between nodes
            step_size: Distance moved per step
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._target_spacing: float = float(target_spacing)
        self._step_size: float = validate_positive(step_size, "step_size")

    @property
    def target_spacing(self) -> float:
        """Get minimum clearance between nodes."""
        return self._target_spacing

    @target_spacing.setter
    def target_spacing(self, value: float) -> None:
        self._target_spacing = float(value)

    @property
    def step_size(self) -> float:
        """Get distance moved per step."""
        return self._step_size

    @step_size.setter
    def step_size(self, value: float) -> None:
        self._step_size = validate_positive(value, "step_size")

    def _would_overlap(self, node: Node, x: float, y: float) -> bool:
        for other in self._nodes:
            if other is node:
                continue
            if rects_overlap(
                x, y, node.width, node.height,
                other.x, other.y, other.width, other.height,
                self._target_spacing,
            ):
                return True
        return False

    def _compute(self, **kwargs: Any) -> None:
        if len(self._nodes) < 2:
            return

        n = len(self._nodes)
        cx = sum(node.center_x for node in self._nodes) / n
        cy = sum(node.center_y for node in self._nodes) / n

        by_distance = sorted(
            self._nodes,
            key=lambda node: -math.hypot(node.center_x - cx, node.center_y - cy),
        )

        for node in by_distance:
            dx = cx - node.center_x
            dy = cy - node.center_y
            dist = math.hypot(dx, dy)
            if dist < CENTERED_EPSILON:
                continue

            step_x = dx / dist * self._step_size
            step_y = dy / dist * self._step_size
            for _ in range(int(dist / self._step_size)):
                new_x = node.x + step_x
                new_y = node.y + step_y
                if self._would_overlap(node, new_x, new_y):
                    break
                node.x = new_x
                node.y = new_y

        if self._edges:
            bundle_all_edges(self._nodes, self._edges)


def apply_compact(
    nodes: Sequence[NodeLike],
    edges: Optional[Sequence[EdgeLike]] = None,
    target_spacing: float = 30.0,
    step_size: float = 10.0,
) -> None:
    """Compact the layout; batches of fewer than two nodes are untouched."""
    CompactLayout(
        nodes=nodes,
        edges=edges,
        target_spacing=target_spacing,
        step_size=step_size,
    ).run()


__all__ = ["CompactLayout", "apply_compact"]
