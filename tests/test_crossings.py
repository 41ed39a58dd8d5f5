"""
Tests for via insertion at routed edge crossings.
"""

import pytest

from diagram_layout import Edge, Node, Waypoint, resolve_crossings
from diagram_layout.orthogonal import edge_polyline, insert_via

# =============================================================================
# Test Fixtures
# =============================================================================


def create_node(node_id, cx, cy):
    """20x20 node centered at (cx, cy)."""
    node = Node(node_id, width=20, height=20)
    node.move_center_to(cx, cy)
    return node


def create_x():
    """Two straight edges crossing at (50, 50)."""
    nodes = [
        create_node(1, 0, 0),
        create_node(2, 100, 100),
        create_node(3, 0, 100),
        create_node(4, 100, 0),
    ]
    edges = [Edge(1, 1, 2), Edge(2, 3, 4)]
    return nodes, edges


def create_routed_crossing():
    """
    Horizontal edge 1 at y=50 and routed edge 9 whose third segment runs
    down x=150 through it.
    """
    nodes = [
        create_node(1, 0, 50),
        create_node(2, 200, 50),
        create_node(3, 50, -100),
        create_node(4, 150, 200),
    ]
    edges = [
        Edge(1, 1, 2),
        Edge(9, 3, 4, waypoints=[Waypoint(50, -50), Waypoint(150, -50), Waypoint(150, 150)]),
    ]
    return nodes, edges


def vias(edge):
    return [wp for wp in edge.waypoints if wp.is_via]


# =============================================================================
# Crossing Resolution
# =============================================================================


class TestResolveCrossings:
    """Tests for resolve_crossings."""

    def test_larger_id_gets_via(self):
        """Test exactly one via on the edge with the larger id."""
        nodes, edges = create_x()
        assert resolve_crossings(nodes, edges) == 1

        assert edges[0].waypoints == []
        (via,) = vias(edges[1])
        assert via.layer == 1
        assert via.x == pytest.approx(50, abs=1)
        assert via.y == pytest.approx(50, abs=1)

    def test_order_independent(self):
        """Test the same edge gets the via whatever the batch order."""
        nodes, edges = create_x()
        resolve_crossings(nodes, list(reversed(edges)))
        assert edges[0].waypoints == []
        assert len(vias(edges[1])) == 1

    def test_idempotent(self):
        """Test a second pass inserts nothing."""
        nodes, edges = create_x()
        resolve_crossings(nodes, edges)
        assert resolve_crossings(nodes, edges) == 0
        assert len(vias(edges[1])) == 1
        assert edges[0].waypoints == []

    def test_via_inserted_in_crossing_segment(self):
        """Test the via lands between the waypoints it splits."""
        nodes, edges = create_routed_crossing()
        assert resolve_crossings(nodes, edges) == 1

        points = edges[1].waypoints
        assert len(points) == 4
        assert points[2].is_via
        assert (points[2].x, points[2].y) == pytest.approx((150, 50))
        assert (points[1].x, points[1].y) == (150, -50)
        assert (points[3].x, points[3].y) == (150, 150)

    def test_routed_idempotent(self):
        """Test idempotency when the via splits a segment in two."""
        nodes, edges = create_routed_crossing()
        resolve_crossings(nodes, edges)
        assert resolve_crossings(nodes, edges) == 0
        assert len(edges[1].waypoints) == 4

    def test_shared_endpoint_skipped(self):
        """Test edges meeting at a node are not treated as crossing."""
        nodes = [create_node(1, 0, 0), create_node(2, 100, 100), create_node(3, 100, 0)]
        edges = [Edge(1, 1, 2), Edge(2, 1, 3)]
        assert resolve_crossings(nodes, edges) == 0

    def test_dangling_edge_skipped(self):
        """Test edges with a missing endpoint are ignored."""
        nodes, edges = create_x()
        edges.append(Edge(3, 1, 99))
        assert resolve_crossings(nodes, edges) == 1
        assert edges[2].waypoints == []

    def test_no_crossing(self):
        """Test parallel edges get nothing."""
        nodes = [create_node(i, x, y) for i, (x, y) in enumerate([(0, 0), (100, 0), (0, 50), (100, 50)])]
        edges = [Edge(1, 0, 1), Edge(2, 2, 3)]
        assert resolve_crossings(nodes, edges) == 0


# =============================================================================
# Helpers
# =============================================================================


class TestPolylineHelpers:
    """Tests for edge_polyline and insert_via."""

    def test_polyline(self):
        nodes, edges = create_routed_crossing()
        node_map = {node.id: node for node in nodes}
        assert edge_polyline(edges[1], node_map) == [
            (50, -100),
            (50, -50),
            (150, -50),
            (150, 150),
            (150, 200),
        ]

    def test_polyline_missing_endpoint(self):
        nodes, _ = create_x()
        node_map = {node.id: node for node in nodes}
        assert edge_polyline(Edge(5, 1, 42), node_map) == []

    def test_insert_via_off_edge(self):
        """Test a point not on the edge is rejected."""
        nodes, edges = create_x()
        node_map = {node.id: node for node in nodes}
        assert not insert_via(edges[0], node_map, 80, 10)
        assert edges[0].waypoints == []

    def test_insert_via_duplicate(self):
        """Test a via within 1px of an existing one is rejected."""
        nodes, edges = create_x()
        node_map = {node.id: node for node in nodes}
        assert insert_via(edges[0], node_map, 50, 50)
        assert not insert_via(edges[0], node_map, 50.5, 50.5)
        assert len(edges[0].waypoints) == 1
