"""
Type definitions for grid routing.

Provides the router's tuning options and the rasterized routing grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..types import Point
from ..validation import InvalidRouteOptionsError

# Four-neighbour moves as (d_col, d_row)
DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

NO_DIRECTION = -1


@dataclass
class RouteOptions:
    """
    Tuning for the two-layer grid router.

    Attributes:
        grid_spacing: World distance between grid points (> 0)
        obstacle_margin: Inflation applied to every obstacle rectangle
        bend_penalty: Extra cost when a move changes direction
        via_penalty: Cost of switching between layer 0 and layer 1
        proximity_penalty: Weight of the near-obstacle cost
            ``proximity_penalty / (distance + 1)``
        max_grid_size: Cap on grid points per axis (>= 3)
    """

    grid_spacing: float = 40.0
    obstacle_margin: float = 12.0
    bend_penalty: float = 5.0
    via_penalty: float = 20.0
    proximity_penalty: float = 8.0
    max_grid_size: int = 200

    def __post_init__(self) -> None:
        if self.grid_spacing <= 0:
            raise InvalidRouteOptionsError(
                f"grid_spacing must be positive, got {self.grid_spacing}"
            )
        if self.obstacle_margin < 0:
            raise InvalidRouteOptionsError(
                f"obstacle_margin must be >= 0, got {self.obstacle_margin}"
            )
        for name in ("bend_penalty", "via_penalty", "proximity_penalty"):
            if getattr(self, name) < 0:
                raise InvalidRouteOptionsError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.max_grid_size < 3:
            raise InvalidRouteOptionsError(
                f"max_grid_size must be >= 3, got {self.max_grid_size}"
            )


@dataclass
class RoutingGrid:
    """
    Rasterized routing area.

    Grid point (col, row) sits at ``(min_x + col * spacing, min_y + row * spacing)``.
    ``blocked`` and ``proximity`` are (rows, cols) arrays for layer 0.
    """

    min_x: float
    min_y: float
    spacing: float
    cols: int
    rows: int
    blocked: np.ndarray = field(repr=False)
    proximity: np.ndarray = field(repr=False)

    def to_world(self, col: int, row: int) -> Point:
        """World coordinates of a grid point."""
        return (self.min_x + col * self.spacing, self.min_y + row * self.spacing)

    def to_cell(self, x: float, y: float) -> tuple[int, int]:
        """Nearest grid point to (x, y), clamped to the grid."""
        col = round((x - self.min_x) / self.spacing)
        row = round((y - self.min_y) / self.spacing)
        return (min(max(col, 0), self.cols - 1), min(max(row, 0), self.rows - 1))

    def state(self, col: int, row: int, layer: int) -> int:
        """Flat index of a search state."""
        return (row * self.cols + col) * 2 + layer

    def unpack(self, state: int) -> tuple[int, int, int]:
        """Inverse of ``state()``: (col, row, layer)."""
        cell, layer = divmod(state, 2)
        row, col = divmod(cell, self.cols)
        return col, row, layer


__all__ = ["DIRECTIONS", "NO_DIRECTION", "RouteOptions", "RoutingGrid"]
