"""Unit tests for the mutual reachability spanning tree."""

import pytest
import numpy as np
from scipy.sparse.csgraph import connected_components, minimum_spanning_tree
from scipy.sparse import coo_matrix
from scipy.spatial.distance import cdist

from hdbscan_star.core.core_distances import calculate_core_distances
from hdbscan_star.core.graph import UndirectedGraph
from hdbscan_star.core.mst import construct_mst
from hdbscan_star.clustering.metrics import mutual_reachability_matrix
from hdbscan_star.errors import InvalidParameterError


def _edge_components(graph: UndirectedGraph) -> int:
    n = graph.num_vertices
    adjacency = coo_matrix(
        (np.ones(graph.num_edges), (graph.vertices_a, graph.vertices_b)),
        shape=(n, n)
    )
    n_components, _ = connected_components(adjacency, directed=False)
    return n_components


class TestConstructMST:
    """Test cases for construct_mst."""

    def setup_method(self):
        """Set up test fixtures."""
        np.random.seed(42)
        self.points = np.random.rand(30, 2) * 10
        self.distances = cdist(self.points, self.points)
        self.core_distances = calculate_core_distances(self.distances, 4)

    def test_edge_count(self):
        """Test N-1 tree edges, plus N self-edges when requested."""
        n = len(self.points)

        mst = construct_mst(self.distances, self.core_distances, False)
        assert mst.num_edges == n - 1
        assert mst.self_edge_count() == 0

        mst = construct_mst(self.distances, self.core_distances, True)
        assert mst.num_edges == 2 * n - 1
        assert mst.self_edge_count() == n

    def test_connected(self):
        """Test that the tree spans every point."""
        mst = construct_mst(self.distances, self.core_distances, False)

        assert _edge_components(mst) == 1

    def test_weights_are_mutual_reachability(self):
        """Test that every edge carries the mutual reachability distance."""
        mst = construct_mst(self.distances, self.core_distances, False)
        mrd = mutual_reachability_matrix(self.distances, self.core_distances)

        for a, b, weight in mst:
            assert weight == pytest.approx(mrd[a, b])

    def test_total_weight_is_minimal(self):
        """Test the total weight against scipy's spanning tree."""
        mst = construct_mst(self.distances, self.core_distances, False)
        mrd = mutual_reachability_matrix(self.distances, self.core_distances)
        np.fill_diagonal(mrd, 0.0)

        expected = minimum_spanning_tree(mrd).sum()
        assert mst.weights.sum() == pytest.approx(expected)

    def test_self_edges_carry_core_distance(self):
        """Test that self-edges are appended with the core distance."""
        n = len(self.points)
        mst = construct_mst(self.distances, self.core_distances, True)

        np.testing.assert_array_equal(mst.vertices_a[n - 1:], np.arange(n))
        np.testing.assert_array_equal(mst.vertices_b[n - 1:], np.arange(n))
        np.testing.assert_allclose(mst.weights[n - 1:], self.core_distances)

    def test_tie_break_prefers_lowest_index(self):
        """Test that equal candidates resolve to the lowest point index."""
        distances = np.ones((3, 3)) - np.eye(3)
        mst = construct_mst(distances, np.zeros(3), False)

        # Point 2 is the root; point 0 is attached first and never improves on 1
        assert mst.vertices_a.tolist() == [2, 2]
        assert mst.vertices_b.tolist() == [0, 1]

    def test_two_pairs_scenario(self):
        """Test two far-apart pairs with k=2."""
        points = np.array([[0, 0], [0, 1], [10, 10], [10, 11]], dtype=float)
        distances = cdist(points, points)
        core_distances = calculate_core_distances(distances, 2)

        mst = construct_mst(distances, core_distances, True)
        tree_weights = sorted(mst.weights[:3].tolist())

        assert tree_weights[:2] == pytest.approx([1.0, 1.0])
        assert tree_weights[2] == pytest.approx(np.sqrt(181.0))
        assert mst.self_edge_count() == 4
        np.testing.assert_allclose(mst.weights[3:], [1.0, 1.0, 1.0, 1.0])

    def test_too_few_points(self):
        """Test that a single point is rejected."""
        with pytest.raises(InvalidParameterError):
            construct_mst(np.zeros((1, 1)), np.zeros(1), True)

    def test_length_mismatch(self):
        """Test that core distances must match the matrix."""
        with pytest.raises(InvalidParameterError):
            construct_mst(self.distances, self.core_distances[:-1], True)


class TestUndirectedGraph:
    """Test cases for UndirectedGraph."""

    def test_adjacency_and_removal(self):
        """Test adjacency lists, self-edges and edge removal."""
        graph = UndirectedGraph(3, [0, 1, 2], [1, 2, 2], [1.0, 2.0, 0.5])

        assert sorted(graph.edge_list_for_vertex(1)) == [0, 2]
        assert graph.edge_list_for_vertex(2) == [1, 2]

        graph.remove_edge(2, 2)
        assert graph.edge_list_for_vertex(2) == [1]

        graph.remove_edge(0, 1)
        assert graph.edge_list_for_vertex(0) == []
        assert graph.edge_list_for_vertex(1) == [2]

        # Removing a missing edge is a no-op
        graph.remove_edge(0, 1)
        assert graph.edge_list_for_vertex(0) == []

    def test_sort_by_weight(self):
        """Test ascending stable sort of the edge arrays."""
        graph = UndirectedGraph(3, [0, 1, 2], [1, 2, 2], [2.0, 1.0, 2.0])
        graph.sort_by_weight()

        assert graph.weights.tolist() == [1.0, 2.0, 2.0]
        assert graph.vertices_a.tolist() == [1, 0, 2]
