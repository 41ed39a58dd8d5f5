"""
Circular layout algorithm.

Places all nodes on a single circle at uniform angular intervals,
starting at 12 o'clock.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence, Union

from ..base import StaticLayout
from ..types import EdgeLike, EventCallback, Node, NodeLike
from ..validation import ValidationError

SortKey = Union[str, Callable[[Node], Any]]


class CircularLayout(StaticLayout):
    """
    Circular layout.

    Node centers are placed at distance ``radius`` from ``center``. The first
    node (in input or sort order) sits at the top of the circle and the rest
    follow clockwise in screen coordinates.

    Example:
        layout = CircularLayout(
            nodes=nodes,
            edges=edges,
            center=(1000, 750),
            radius=400,
            sort_by="degree",
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
        # Circular-specific parameters
        center: Sequence[float] = (1000.0, 750.0),
        radius: float = 400.0,
        sort_by: Optional[SortKey] = None,
    ) -> None:
        """
        Initialize circular layout.

        Args:
            nodes: List of nodes
            edges: List of edges (only used by ``sort_by="degree"``)
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            center: Circle center (x, y)
            radius: Circle radius
            sort_by: Sort key for node ordering. Options:
                - None: Use input order
                - "degree": Sort by edge degree (highest first)
                - callable: Custom key function taking a Node
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
        self._radius: float = float(radius)
        self._sort_by: Optional[SortKey] = None
        self.sort_by = sort_by

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def center(self) -> tuple[float, float]:
        """Get circle center."""
        return self._center

    @center.setter
    def center(self, value: Sequence[float]) -> None:
        self._center = (float(value[0]), float(value[1]))

    @property
    def radius(self) -> float:
        """Get circle radius."""
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = float(value)

    @property
    def sort_by(self) -> Optional[SortKey]:
        """Get sort key for node ordering."""
        return self._sort_by

    @sort_by.setter
    def sort_by(self, value: Optional[SortKey]) -> None:
        """Set sort key for node ordering."""
        if value is not None and value != "degree" and not callable(value):
            raise ValidationError(f"sort_by must be None, 'degree' or a callable, got {value!r}")
        self._sort_by = value

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _sorted_nodes(self) -> list[Node]:
        """Get nodes in placement order (stable)."""
        ordered = list(self._nodes)

        if self._sort_by == "degree":
            degree = self._connectivity()
            ordered.sort(key=lambda node: -degree[node.id])
        elif callable(self._sort_by):
            sort_fn = self._sort_by  # Store in local for proper type narrowing
            ordered.sort(key=sort_fn)

        return ordered

    def _compute(self, **kwargs: Any) -> None:
        """Compute circular layout positions."""
        n = len(self._nodes)
        if n == 0:
            return

        cx, cy = self._center
        angle_step = 2 * math.pi / n

        for i, node in enumerate(self._sorted_nodes()):
            angle = i * angle_step - math.pi / 2  # start from the top
            node.move_center_to(
                cx + self._radius * math.cos(angle),
                cy + self._radius * math.sin(angle),
            )


def apply_circular(
    nodes: Sequence[NodeLike],
    center_x: float = 1000.0,
    center_y: float = 750.0,
    radius: float = 400.0,
) -> None:
    """Place node centers on one circle; a single node goes to its top."""
    CircularLayout(nodes=nodes, center=(center_x, center_y), radius=radius).run()


__all__ = ["CircularLayout", "apply_circular"]
