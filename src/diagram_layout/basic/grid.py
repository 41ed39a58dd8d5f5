"""
Grid layout algorithm.

Places nodes row-major in uniform cells sized to the largest node.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..types import EdgeLike, EventCallback, NodeLike


class GridLayout(StaticLayout):
    """
    Grid layout - row-major placement in uniform cells.

    Node ``i`` lands in row ``i // columns`` and column ``i % columns``.
    Cell size is the maximum node width/height plus spacing, so no two nodes
    overlap regardless of their individual sizes.

    Example:
        layout = GridLayout(nodes=nodes, columns=4, spacing=(50, 50))
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
        # Grid-specific parameters
        columns: int = 0,
        spacing: Sequence[float] = (50.0, 50.0),
        start: Sequence[float] = (100.0, 100.0),
    ) -> None:
        """
        Initialize grid layout.

        Args:
            nodes: List of nodes
            edges: List of edges (unused)
            random_seed: Unused; accepted for interface symmetry
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            columns: Column count; 0 or less means ceil(sqrt(n))
            spacing: Gap between cells (x, y)
            start: Top-left corner of the first cell
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._columns: int = int(columns)
        self._spacing: tuple[float, float] = (float(spacing[0]), float(spacing[1]))
        self._start: tuple[float, float] = (float(start[0]), float(start[1]))

    @property
    def columns(self) -> int:
        """Get requested column count (0 = automatic)."""
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = int(value)

    @property
    def spacing(self) -> tuple[float, float]:
        """Get gap between cells (x, y)."""
        return self._spacing

    @spacing.setter
    def spacing(self, value: Sequence[float]) -> None:
        self._spacing = (float(value[0]), float(value[1]))

    @property
    def start(self) -> tuple[float, float]:
        """Get top-left corner of the grid."""
        return self._start

    @start.setter
    def start(self, value: Sequence[float]) -> None:
        self._start = (float(value[0]), float(value[1]))

    def effective_columns(self) -> int:
        """Column count used for the current node batch."""
        if self._columns > 0:
            return self._columns
        return max(1, math.ceil(math.sqrt(len(self._nodes))))

    def _compute(self, **kwargs: Any) -> None:
        if not self._nodes:
            return

        columns = self.effective_columns()
        cell_w = max(node.width for node in self._nodes) + self._spacing[0]
        cell_h = max(node.height for node in self._nodes) + self._spacing[1]
        start_x, start_y = self._start

        for i, node in enumerate(self._nodes):
            row, col = divmod(i, columns)
            node.x = start_x + col * cell_w
            node.y = start_y + row * cell_h


def apply_grid(
    nodes: Sequence[NodeLike],
    columns: int = 0,
    spacing_x: float = 50.0,
    spacing_y: float = 50.0,
    start_x: float = 100.0,
    start_y: float = 100.0,
) -> None:
    """Row-major grid; a single node goes to (start_x, start_y)."""
    GridLayout(
        nodes=nodes,
        columns=columns,
        spacing=(spacing_x, spacing_y),
        start=(start_x, start_y),
    ).run()


__all__ = ["GridLayout", "apply_grid"]
