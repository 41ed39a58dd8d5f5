"""
Force-directed diagram layout.

- ForceDirectedLayout: Fruchterman-Reingold with linear cooling and
  canvas clamping
"""

from .fruchterman_reingold import ForceDirectedLayout, apply_force_directed

__all__ = [
    "ForceDirectedLayout",
    "apply_force_directed",
]
