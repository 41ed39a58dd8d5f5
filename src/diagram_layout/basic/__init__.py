"""
Basic diagram layouts.

- GridLayout: Row-major uniform cells
- CompactLayout: Pull nodes towards the centroid without overlaps
- SymmetricLayout: Connectivity-ranked mirror placement
- FlipLayout: Mirror about the bounding box center
"""

from .compact import CompactLayout, apply_compact
from .flip import FlipLayout, flip_horizontal, flip_vertical
from .grid import GridLayout, apply_grid
from .symmetric import (
    SymmetricLayout,
    apply_symmetric_horizontal,
    apply_symmetric_vertical,
)

__all__ = [
    "GridLayout",
    "apply_grid",
    "CompactLayout",
    "apply_compact",
    "SymmetricLayout",
    "apply_symmetric_horizontal",
    "apply_symmetric_vertical",
    "FlipLayout",
    "flip_horizontal",
    "flip_vertical",
]
