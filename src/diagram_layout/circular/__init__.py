"""
Circular diagram layout.

- CircularLayout: All nodes on one circle, starting at 12 o'clock
"""

from .circular import CircularLayout, apply_circular

__all__ = [
    "CircularLayout",
    "apply_circular",
]
