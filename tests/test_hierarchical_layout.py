"""
Tests for the Sugiyama hierarchical layout and its pipeline stages.
"""

import itertools

import pytest

from diagram_layout import Edge, HierarchicalLayout, Node, apply_hierarchical
from diagram_layout.hierarchical import (
    assign_x_coordinates,
    insert_dummy_nodes,
    minimize_crossings,
    remove_cycles,
)
from diagram_layout.preprocessing import assign_layers_longest_path, group_by_layer

# =============================================================================
# Test Fixtures
# =============================================================================


def create_shortcut_graph():
    """A -> B, B -> C plus the shortcut A -> C."""
    nodes = [Node(1), Node(2), Node(3)]
    edges = [Edge(1, 1, 2), Edge(2, 2, 3), Edge(3, 1, 3)]
    return nodes, edges


def create_diamond():
    """1 -> {2, 3} -> 4."""
    nodes = [Node(i) for i in range(1, 5)]
    edges = [Edge(1, 1, 2), Edge(2, 1, 3), Edge(3, 2, 4), Edge(4, 3, 4)]
    return nodes, edges


def create_cycle():
    """1 -> 2 -> 3 -> 1."""
    nodes = [Node(1), Node(2), Node(3)]
    edges = [Edge(1, 1, 2), Edge(2, 2, 3), Edge(3, 3, 1)]
    return nodes, edges


# =============================================================================
# Layout Tests
# =============================================================================


class TestHierarchicalLayout:
    """Tests for HierarchicalLayout."""

    def test_empty(self):
        """Test an empty batch is a no-op."""
        layout = HierarchicalLayout(nodes=[], edges=[])
        layout.run()
        assert layout.layers == []

    def test_single_node(self):
        """Test a single node goes to the fixed origin."""
        node = Node(7, x=900, y=900)
        apply_hierarchical([node], [])
        assert (node.x, node.y) == (100, 100)

    def test_shortcut_layers_and_dummy(self):
        """Test longest-path layers and one dummy for the two-layer edge."""
        nodes, edges = create_shortcut_graph()
        layout = HierarchicalLayout(nodes=nodes, edges=edges)
        layout.run()

        assert layout.node_layer == {1: 0, 2: 1, 3: 2}
        assert len(layout.dummy_nodes) == 1
        dummy = layout.dummy_nodes[0]
        assert dummy.layer == 1
        assert (dummy.original_from, dummy.original_to) == (1, 3)
        assert dummy.id not in {1, 2, 3}

    def test_layer_positions(self):
        """Test layers stack downward by layer_spacing from y=100."""
        nodes, edges = create_shortcut_graph()
        apply_hierarchical(nodes, edges)
        assert [node.y for node in nodes] == [100, 250, 400]

    def test_left_to_right(self):
        """Test layers stack rightward when top_to_bottom is False."""
        nodes, edges = create_shortcut_graph()
        apply_hierarchical(nodes, edges, layer_spacing=200, top_to_bottom=False)
        assert [node.x for node in nodes] == [100, 300, 500]

    def test_left_to_right_spacing_uses_width(self):
        """Test same-layer nodes are spaced by width + node_spacing in LR mode."""
        nodes = [Node(i, width=200, height=50) for i in (1, 2, 3)]
        edges = [Edge(1, 1, 2), Edge(2, 1, 3)]
        apply_hierarchical(nodes, edges, node_spacing=80, top_to_bottom=False)

        by_id = {node.id: node for node in nodes}
        assert by_id[2].x == by_id[3].x == pytest.approx(250)
        assert abs(by_id[3].y - by_id[2].y) == pytest.approx(200 + 80)
        assert by_id[1].y == pytest.approx(240)

    def test_cycle_edges_respect_layers(self):
        """Test every working edge points to a later layer."""
        nodes, edges = create_cycle()
        layout = HierarchicalLayout(nodes=nodes, edges=edges)
        layout.run()

        layers = layout.node_layer
        reversed_ids = {edge.id for edge in layout.reversed_edges}
        assert reversed_ids == {3}
        for edge in edges:
            u, v = (edge.target, edge.source) if edge.id in reversed_ids else (edge.source, edge.target)
            assert layers[u] < layers[v]

    def test_caller_edges_untouched(self):
        """Test cycle removal works on a copy."""
        nodes, edges = create_cycle()
        apply_hierarchical(nodes, edges)
        assert [(e.source, e.target) for e in edges] == [(1, 2), (2, 3), (3, 1)]

    def test_layer_centering(self):
        """Test narrower layers are centered on the widest one."""
        nodes, edges = create_diamond()
        apply_hierarchical(nodes, edges)
        by_id = {node.id: node for node in nodes}

        # Widest layer: two 120px nodes + 80px gaps = 400; single layers = 200
        assert by_id[1].x == pytest.approx(200)
        assert by_id[4].x == pytest.approx(200)
        assert sorted([by_id[2].x, by_id[3].x]) == pytest.approx([100, 300])

    def test_no_overlap_within_layer(self):
        """Test nodes sharing a layer keep node_spacing apart."""
        nodes = [Node(0)] + [Node(i, width=50 + 10 * i) for i in range(1, 6)]
        edges = [Edge(i, 0, i) for i in range(1, 6)]
        apply_hierarchical(nodes, edges, node_spacing=30)

        layer_one = sorted(nodes[1:], key=lambda n: n.x)
        for left, right in zip(layer_one, layer_one[1:]):
            assert right.x - left.right == pytest.approx(30)

    def test_negative_ids(self):
        """Test dummy ids never collide with negative real ids."""
        nodes = [Node(-1), Node(-2), Node(-3)]
        edges = [Edge(1, -1, -2), Edge(2, -2, -3), Edge(3, -1, -3)]
        layout = HierarchicalLayout(nodes=nodes, edges=edges)
        layout.run()

        assert len(layout.dummy_nodes) == 1
        assert layout.dummy_nodes[0].id not in {-1, -2, -3}

    def test_self_loop_and_dangling(self):
        """Test self-loops and dangling edges are ignored."""
        nodes = [Node(1), Node(2)]
        edges = [Edge(1, 1, 1), Edge(2, 1, 2), Edge(3, 2, 99)]
        layout = HierarchicalLayout(nodes=nodes, edges=edges)
        layout.run()
        assert layout.node_layer == {1: 0, 2: 1}

    def test_disconnected(self):
        """Test isolated nodes share layer 0."""
        nodes = [Node(i) for i in range(3)]
        layout = HierarchicalLayout(nodes=nodes, edges=[])
        layout.run()
        assert layout.layers == [[0, 1, 2]]
        assert len({node.x for node in nodes}) == 3

    def test_runs_are_independent(self):
        """Test per-run state is reset between runs."""
        nodes, edges = create_shortcut_graph()
        layout = HierarchicalLayout(nodes=nodes, edges=edges)
        layout.run()
        first = [d.id for d in layout.dummy_nodes]
        layout.run()
        assert [d.id for d in layout.dummy_nodes] == first


# =============================================================================
# Pipeline Stage Tests
# =============================================================================


class TestPipelineStages:
    """Tests for the standalone stage functions."""

    def test_insert_dummy_chain(self):
        """Test a three-layer edge gets a chain of two dummies."""
        node_ids = [1, 2, 3, 4]
        working, _ = remove_cycles(node_ids, [(1, 2), (2, 3), (3, 4), (1, 4)])
        node_layer = assign_layers_longest_path(node_ids, [(e.source, e.target) for e in working])
        layers = group_by_layer(node_ids, node_layer)

        augmented, dummies, successors = insert_dummy_nodes(
            layers, node_layer, working, itertools.count(-1, -1)
        )

        assert [d.layer for d in dummies] == [1, 2]
        assert successors[1] == [2, -1]
        assert successors[-1] == [-2]
        assert successors[-2] == [4]
        assert augmented[1] == [2, -1]
        assert augmented[2] == [3, -2]

    def test_parallel_edges_share_chain(self):
        """Test duplicate long edges create a single chain."""
        node_ids = [1, 2, 3]
        working, _ = remove_cycles(node_ids, [(1, 2), (2, 3), (1, 3), (1, 3)])
        node_layer = {1: 0, 2: 1, 3: 2}
        _, dummies, _ = insert_dummy_nodes(
            group_by_layer(node_ids, node_layer), node_layer, working, itertools.count(-1, -1)
        )
        assert len(dummies) == 1

    def test_minimize_crossings(self):
        """Test a crossed pair of edges is untangled."""
        layers = [[1, 2], [3, 4]]
        successors = {1: [4], 2: [3]}
        ordered = minimize_crossings(layers, successors)
        assert ordered == [[1, 2], [4, 3]]

    def test_zero_sweeps_keeps_order(self):
        layers = [[1, 2], [3, 4]]
        assert minimize_crossings(layers, {1: [4], 2: [3]}, sweeps=0) == layers

    def test_assign_x_coordinates(self):
        """Test cumulative placement and centering on the widest layer."""
        coords = assign_x_coordinates([[1], [2, 3]], {1: 100, 2: 100, 3: 100}, 20)
        assert coords == {1: 60, 2: 0, 3: 120}

    def test_dummies_take_only_spacing(self):
        """Test dummies contribute spacing but no width."""
        coords = assign_x_coordinates([[1, -1, 2]], {1: 100, 2: 100}, 20)
        assert coords == {1: 0, -1: 120, 2: 140}
