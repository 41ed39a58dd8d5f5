"""
Hierarchical diagram layouts.

- HierarchicalLayout: Sugiyama-style layered layout with cycle removal,
  dummy nodes and barycenter crossing minimization
- TreeLayout: Subtree-width tree layout
- RadialLayout: Concentric rings by BFS depth from a root
"""

from .radial import RadialLayout, apply_radial
from .sugiyama import (
    DummyNode,
    HierarchicalLayout,
    apply_hierarchical,
    assign_layers,
    assign_x_coordinates,
    insert_dummy_nodes,
    minimize_crossings,
    remove_cycles,
)
from .tree import TreeLayout, apply_tree

__all__ = [
    "HierarchicalLayout",
    "DummyNode",
    "apply_hierarchical",
    "remove_cycles",
    "assign_layers",
    "insert_dummy_nodes",
    "minimize_crossings",
    "assign_x_coordinates",
    "TreeLayout",
    "apply_tree",
    "RadialLayout",
    "apply_radial",
]
