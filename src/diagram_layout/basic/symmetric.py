"""
Symmetric layouts.

Ranks nodes by connectivity and mirrors them around the current centroid,
either along a row (horizontal) or a column (vertical).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..types import EdgeLike, EventCallback, NodeLike
from ..validation import ValidationError

VALID_AXES = ("horizontal", "vertical")


class SymmetricLayout(StaticLayout):
    """
    Connectivity-ranked symmetric placement.

    The most connected node goes to the centroid of the current layout.
    The rest, in descending degree (ties keep input order), alternate
    left/right (``axis="horizontal"``) or top/bottom (``axis="vertical"``)
    at ``level * spacing`` from the center, where ``level = (k + 1) // 2``
    for the k-th placed node.

    Example:
        layout = SymmetricLayout(nodes=nodes, edges=edges, axis="vertical")
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
        # Symmetric-specific parameters
        axis: str = "horizontal",
        spacing: Optional[float] = None,
    ) -> None:
        """
        Initialize symmetric layout.

        Args:
            nodes: List of nodes
            edges: List of edges (used for connectivity ranking)
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            axis: 'horizontal' (row) or 'vertical' (column)
            spacing: Offset per level. Defaults to 150 horizontally, 120 vertically.
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        if axis not in VALID_AXES:
            raise ValidationError(f"axis must be one of {VALID_AXES}")
        self._axis: str = axis
        self._spacing: Optional[float] = float(spacing) if spacing is not None else None

    @property
    def axis(self) -> str:
        """Get placement axis."""
        return self._axis

    @axis.setter
    def axis(self, value: str) -> None:
        if value not in VALID_AXES:
            raise ValidationError(f"axis must be one of {VALID_AXES}")
        self._axis = value

    @property
    def spacing(self) -> float:
        """Get offset per level."""
        if self._spacing is not None:
            return self._spacing
        return 150.0 if self._axis == "horizontal" else 120.0

    @spacing.setter
    def spacing(self, value: Optional[float]) -> None:
        self._spacing = float(value) if value is not None else None

    def _compute(self, **kwargs: Any) -> None:
        n = len(self._nodes)
        if n == 0:
            return

        degree = self._connectivity()
        ranked = sorted(self._nodes, key=lambda node: -degree[node.id])

        cx = sum(node.center_x for node in self._nodes) / n
        cy = sum(node.center_y for node in self._nodes) / n
        spacing = self.spacing
        horizontal = self._axis == "horizontal"

        for placed, node in enumerate(ranked):
            offset = ((placed + 1) // 2) * spacing
            if placed % 2 == 1:
                offset = -offset  # odd placements go left/top
            if horizontal:
                node.move_center_to(cx + offset, cy)
            else:
                node.move_center_to(cx, cy + offset)


def apply_symmetric_horizontal(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    spacing: float = 150.0,
) -> None:
    """Mirror nodes left/right of the centroid by connectivity rank."""
    SymmetricLayout(nodes=nodes, edges=edges, axis="horizontal", spacing=spacing).run()


def apply_symmetric_vertical(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    spacing: float = 120.0,
) -> None:
    """Mirror nodes above/below the centroid by connectivity rank."""
    SymmetricLayout(nodes=nodes, edges=edges, axis="vertical", spacing=spacing).run()


__all__ = [
    "SymmetricLayout",
    "apply_symmetric_horizontal",
    "apply_symmetric_vertical",
]
