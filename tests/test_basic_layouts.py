"""
Tests for grid, compact, symmetric and flip layouts.
"""

import pytest

from diagram_layout import (
    CompactLayout,
    Edge,
    FlipLayout,
    GridLayout,
    Node,
    SymmetricLayout,
    ValidationError,
    apply_compact,
    apply_grid,
    apply_symmetric_horizontal,
    apply_symmetric_vertical,
    flip_horizontal,
    flip_vertical,
    node_overlaps,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def create_nodes(count, **kwargs):
    """Create ``count`` default-sized nodes."""
    return [Node(i, **kwargs) for i in range(count)]


def create_star(leaves=4):
    """Hub 0 connected to ``leaves`` nodes, spread on a row."""
    nodes = [Node(i, x=200 * i, y=0) for i in range(leaves + 1)]
    edges = [Edge(i, 0, i) for i in range(1, leaves + 1)]
    return nodes, edges


# =============================================================================
# Grid Layout
# =============================================================================


class TestGridLayout:
    """Tests for GridLayout."""

    def test_row_major_auto_columns(self):
        """Test node i lands at row i // 3, column i % 3 for 5 nodes."""
        nodes = create_nodes(5)
        apply_grid(nodes)

        # Cell = largest node + spacing = 170 x 110
        for i, node in enumerate(nodes):
            row, col = divmod(i, 3)
            assert node.x == 100 + col * 170
            assert node.y == 100 + row * 110

    def test_single_node(self):
        """Test a single node goes to the start position."""
        node = Node(1, x=5, y=5)
        apply_grid([node], start_x=40, start_y=60)
        assert (node.x, node.y) == (40, 60)

    def test_explicit_columns(self):
        """Test a caller-supplied column count."""
        nodes = create_nodes(4)
        layout = GridLayout(nodes=nodes, columns=4)
        layout.run()
        assert len({node.y for node in nodes}) == 1
        assert layout.effective_columns() == 4

    def test_cell_uses_largest_node(self):
        """Test mixed sizes share a uniform cell."""
        nodes = [Node(0, width=200, height=30), Node(1, width=50, height=90)]
        apply_grid(nodes, spacing_x=10, spacing_y=10)
        assert nodes[1].x == 100 + 210

    def test_auto_columns(self):
        """Test ceil(sqrt(n)) columns."""
        assert GridLayout(nodes=create_nodes(10)).effective_columns() == 4
        assert GridLayout(nodes=create_nodes(9)).effective_columns() == 3


# =============================================================================
# Compact Layout
# =============================================================================


class TestCompactLayout:
    """Tests for CompactLayout."""

    def test_single_node_untouched(self):
        """Test fewer than two nodes is a no-op."""
        node = Node(1, x=33, y=44)
        apply_compact([node])
        assert (node.x, node.y) == (33, 44)

    def test_pulls_towards_centroid(self):
        """Test distant nodes move together but keep the margin."""
        nodes = [Node(1, x=0, y=0), Node(2, x=1000, y=0)]
        apply_compact(nodes)

        assert nodes[0].x == pytest.approx(500)
        assert nodes[1].x == pytest.approx(660)
        assert nodes[1].x - nodes[0].right >= 30
        assert nodes[0].y == nodes[1].y == 0

    def test_no_new_overlaps(self):
        """Test compaction never creates overlaps."""
        nodes = [Node(i, x=(i % 3) * 400, y=(i // 3) * 300) for i in range(9)]
        apply_compact(nodes, target_spacing=10)
        assert node_overlaps(nodes) == []

    def test_rebundles_edges(self):
        """Test edges get connection points when supplied."""
        nodes, edges = create_star()
        apply_compact(nodes, edges)
        assert all(edge.from_connection is not None for edge in edges)
        assert all(edge.to_connection is not None for edge in edges)

    def test_invalid_step(self):
        """Test a non-positive step size is rejected."""
        with pytest.raises(ValidationError):
            CompactLayout(step_size=0)


# =============================================================================
# Symmetric Layout
# =============================================================================


class TestSymmetricLayout:
    """Tests for SymmetricLayout."""

    def test_horizontal(self):
        """Test the hub sits at the centroid with leaves alternating sides."""
        nodes = [Node(0, x=0, y=0), Node(1, x=300, y=0), Node(2, x=600, y=0)]
        edges = [Edge(1, 1, 0), Edge(2, 1, 2)]
        apply_symmetric_horizontal(nodes, edges)

        cx = 360
        assert nodes[1].center_x == pytest.approx(cx)
        assert nodes[0].center_x == pytest.approx(cx - 150)
        assert nodes[2].center_x == pytest.approx(cx + 150)
        assert all(node.center_y == pytest.approx(30) for node in nodes)

    def test_vertical_default_spacing(self):
        """Test vertical placement uses 120px steps."""
        nodes, edges = create_star(2)
        apply_symmetric_vertical(nodes, edges)

        cy = 30
        assert nodes[0].center_y == pytest.approx(cy)
        assert sorted(n.center_y for n in nodes[1:]) == pytest.approx([cy - 120, cy + 120])
        assert len({round(n.center_x, 6) for n in nodes}) == 1

    def test_levels_grow(self):
        """Test offsets grow by one level every two placements."""
        nodes, edges = create_star(4)
        apply_symmetric_horizontal(nodes, edges, spacing=100)
        offsets = sorted(round(n.center_x - nodes[0].center_x) for n in nodes)
        assert offsets == [-200, -100, 0, 100, 200]

    def test_single_node_stays(self):
        """Test a single node stays at its own center."""
        node = Node(1, x=70, y=80)
        apply_symmetric_horizontal([node], [])
        assert (node.x, node.y) == (70, 80)

    def test_invalid_axis(self):
        with pytest.raises(ValidationError):
            SymmetricLayout(axis="diagonal")

    def test_default_spacing_by_axis(self):
        assert SymmetricLayout(axis="horizontal").spacing == 150
        assert SymmetricLayout(axis="vertical").spacing == 120


# =============================================================================
# Flip
# =============================================================================


class TestFlip:
    """Tests for flip_horizontal / flip_vertical."""

    def test_horizontal(self):
        """Test mirroring about the bounding box's vertical center line."""
        nodes = [Node(1, x=0, y=0, width=100), Node(2, x=300, y=50, width=100)]
        flip_horizontal(nodes)
        assert nodes[0].x == pytest.approx(300)
        assert nodes[1].x == pytest.approx(0)
        assert [n.y for n in nodes] == [0, 50]

    def test_vertical(self):
        """Test mirroring about the horizontal center line."""
        nodes = [Node(1, x=0, y=0, height=50), Node(2, x=0, y=200, height=100)]
        flip_vertical(nodes)
        assert nodes[0].y == pytest.approx(250)
        assert nodes[1].y == pytest.approx(0)

    def test_double_flip_restores(self):
        """Test flipping twice is the identity."""
        nodes = [Node(i, x=37 * i, y=53 * i, width=40 + i) for i in range(5)]
        before = [(n.x, n.y) for n in nodes]
        FlipLayout(nodes=nodes, axis="horizontal").run().run()
        for node, (x, y) in zip(nodes, before):
            assert node.x == pytest.approx(x)
            assert node.y == pytest.approx(y)

    def test_single_node_unchanged(self):
        """Test a lone node is its own mirror image."""
        nodes = [Node(1, x=40, y=70, width=90, height=30)]
        flip_horizontal(nodes)
        flip_vertical(nodes)
        assert (nodes[0].x, nodes[0].y) == pytest.approx((40, 70))

    def test_empty(self):
        flip_horizontal([])
        flip_vertical([])
        layout = FlipLayout(nodes=[])
        assert layout.run() is layout

    def test_invalid_axis(self):
        with pytest.raises(ValidationError):
            FlipLayout(axis="both")
