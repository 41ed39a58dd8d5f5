"""
Tests for the circuit layout (grid placement plus routing).
"""

import pytest

from diagram_layout import CircuitLayout, Edge, Node, RouteOptions, Waypoint, apply_circuit_layout

# =============================================================================
# Test Fixtures
# =============================================================================


def create_chain():
    """Path 1 - 2 - 3 - 4."""
    nodes = [Node(i) for i in range(1, 5)]
    edges = [Edge(1, 1, 2), Edge(2, 2, 3), Edge(3, 3, 4)]
    return nodes, edges


def create_star():
    """Hub 5 connected to 1..4, listed last."""
    nodes = [Node(i) for i in range(1, 6)]
    edges = [Edge(i, 5, i) for i in range(1, 5)]
    return nodes, edges


# =============================================================================
# Placement
# =============================================================================


class TestCircuitPlacement:
    """Tests for the BFS grid placement."""

    def test_placement_order(self):
        """Test BFS from the highest-degree node, neighbours by degree."""
        nodes, edges = create_chain()
        layout = CircuitLayout(nodes=nodes, edges=edges)
        assert layout.placement_order() == [2, 3, 1, 4]

    def test_hub_first(self):
        """Test the hub takes the first cell."""
        nodes, edges = create_star()
        apply_circuit_layout(nodes, edges)
        assert nodes[4].center == pytest.approx((100, 100))

    def test_grid_cells(self):
        """Test centers land on a ceil(sqrt(n))-column grid."""
        nodes, edges = create_chain()
        apply_circuit_layout(nodes, edges)

        centers = {node.id: node.center for node in nodes}
        assert centers[2] == pytest.approx((100, 100))
        assert centers[3] == pytest.approx((320, 100))
        assert centers[1] == pytest.approx((100, 240))
        assert centers[4] == pytest.approx((320, 240))

    def test_isolated_nodes_placed(self):
        """Test disconnected nodes still get cells."""
        nodes = [Node(i) for i in range(3)]
        apply_circuit_layout(nodes, [], col_spacing=300, row_spacing=200, start=(0, 0))
        centers = sorted(node.center for node in nodes)
        assert centers == [(0, 0), (0, 200), (300, 0)]

    def test_empty(self):
        layout = CircuitLayout(nodes=[], edges=[])
        assert layout.run() is layout


# =============================================================================
# Routing
# =============================================================================


class TestCircuitRouting:
    """Tests for edge routing in the circuit layout."""

    def test_default_route_options(self):
        """Test router options derive from the spacing."""
        layout = CircuitLayout(row_spacing=140, col_spacing=220)
        options = layout.route_options
        assert options.grid_spacing == 70
        assert options.bend_penalty == 6
        assert options.via_penalty == 30
        assert options.proximity_penalty == 10
        assert options.max_grid_size == 300

    def test_custom_route_options(self):
        options = RouteOptions(grid_spacing=10)
        assert CircuitLayout(route_options=options).route_options is options

    def test_edges_routed_between_centers(self):
        """Test routed edges start and end at their node centers."""
        nodes, edges = create_chain()
        apply_circuit_layout(nodes, edges)
        by_id = {node.id: node for node in nodes}

        first = edges[0]
        assert first.waypoints
        assert (first.waypoints[0].x, first.waypoints[0].y) == pytest.approx(by_id[1].center)
        assert (first.waypoints[-1].x, first.waypoints[-1].y) == pytest.approx(by_id[2].center)

        for edge in edges:
            if edge.waypoints:
                start = edge.waypoints[0]
                end = edge.waypoints[-1]
                assert (start.x, start.y) == pytest.approx(by_id[edge.source].center)
                assert (end.x, end.y) == pytest.approx(by_id[edge.target].center)

    def test_old_waypoints_replaced(self):
        """Test existing waypoints are discarded."""
        nodes, edges = create_chain()
        edges.append(Edge(4, 1, 1))
        edges[3].waypoints = [Waypoint(5, 5)]
        apply_circuit_layout(nodes, edges)
        assert edges[3].waypoints == []

    def test_dangling_edge(self):
        """Test edges with a missing endpoint get no waypoints."""
        nodes, edges = create_chain()
        edges.append(Edge(9, 1, 42))
        apply_circuit_layout(nodes, edges)
        assert edges[-1].waypoints == []
