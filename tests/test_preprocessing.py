"""
Tests for graph preprocessing utilities.
"""

from diagram_layout.preprocessing import (
    assign_layers_longest_path,
    bfs_levels,
    group_by_layer,
    remove_cycles,
)

# =============================================================================
# Cycle Removal
# =============================================================================


class TestRemoveCycles:
    """Tests for remove_cycles."""

    def test_acyclic_unchanged(self):
        """Test a DAG has no reversed edges."""
        working, flipped = remove_cycles([1, 2, 3], [(1, 2), (2, 3), (1, 3)])
        assert flipped == set()
        assert [(e.source, e.target) for e in working] == [(1, 2), (2, 3), (1, 3)]
        assert not any(e.reversed for e in working)

    def test_triangle_cycle(self):
        """Test the closing edge of a cycle is reversed."""
        edges = [(1, 2), (2, 3), (3, 1)]
        working, flipped = remove_cycles([1, 2, 3], edges)

        assert flipped == {2}
        assert working[2].source == 1
        assert working[2].target == 3
        assert working[2].reversed
        assert working[2].index == 2
        # Input is untouched
        assert edges[2] == (3, 1)

    def test_result_is_acyclic(self):
        """Test layering succeeds with strictly increasing layers afterwards."""
        node_ids = list(range(6))
        edges = [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3)]
        working, _ = remove_cycles(node_ids, edges)
        layers = assign_layers_longest_path(node_ids, [(e.source, e.target) for e in working])

        for edge in working:
            assert layers[edge.source] < layers[edge.target]

    def test_two_cycle(self):
        """Test mutual edges."""
        working, flipped = remove_cycles([1, 2], [(1, 2), (2, 1)])
        assert flipped == {1}
        assert [(e.source, e.target) for e in working] == [(1, 2), (1, 2)]

    def test_self_loops_and_dangling_dropped(self):
        """Test self-loops and unknown endpoints are left out."""
        working, flipped = remove_cycles([1, 2], [(1, 1), (1, 2), (2, 99)])
        assert flipped == set()
        assert [(e.source, e.target) for e in working] == [(1, 2)]
        assert working[0].index == 1

    def test_disconnected_components(self):
        """Test every component is visited."""
        edges = [(1, 2), (2, 1), (3, 4), (4, 3)]
        _, flipped = remove_cycles([1, 2, 3, 4], edges)
        assert flipped == {1, 3}

    def test_deep_chain(self):
        """Test long paths do not hit the recursion limit."""
        n = 20000
        edges = [(i, i + 1) for i in range(n - 1)] + [(n - 1, 0)]
        _, flipped = remove_cycles(list(range(n)), edges)
        assert flipped == {n - 1}


# =============================================================================
# Layer Assignment
# =============================================================================


class TestAssignLayers:
    """Tests for assign_layers_longest_path."""

    def test_longest_path(self):
        """Test the shortcut edge does not pull the sink up."""
        layers = assign_layers_longest_path([1, 2, 3], [(1, 2), (2, 3), (1, 3)])
        assert layers == {1: 0, 2: 1, 3: 2}

    def test_multiple_sources(self):
        """Test every zero in-degree node seeds layer 0."""
        layers = assign_layers_longest_path([1, 2, 3], [(1, 3), (2, 3)])
        assert layers == {1: 0, 2: 0, 3: 1}

    def test_unreached_default_to_zero(self):
        """Test nodes stuck in a residual cycle land on layer 0."""
        layers = assign_layers_longest_path([1, 2, 3, 4], [(1, 2), (3, 4), (4, 3)])
        assert layers == {1: 0, 2: 1, 3: 0, 4: 0}

    def test_fully_cyclic_terminates(self):
        """Test a graph without sources still gets layers."""
        layers = assign_layers_longest_path([1, 2, 3], [(1, 2), (2, 3), (3, 1)])
        assert set(layers) == {1, 2, 3}
        assert all(layer >= 0 for layer in layers.values())

    def test_empty(self):
        assert assign_layers_longest_path([], []) == {}


class TestGrouping:
    """Tests for group_by_layer and bfs_levels."""

    def test_group_by_layer(self):
        """Test grouping keeps input order and empty layers."""
        groups = group_by_layer([1, 2, 3, 4], {1: 0, 2: 2, 3: 0, 4: 2})
        assert groups == [[1, 3], [], [2, 4]]

    def test_bfs_levels(self):
        """Test BFS depth follows edge direction."""
        adjacency = {1: [2, 3], 2: [4], 3: [4], 4: []}
        assert bfs_levels(1, adjacency) == {1: 0, 2: 1, 3: 1, 4: 2}
        assert bfs_levels(4, adjacency) == {4: 0}
