"""Unit tests for hierarchy construction."""

import pytest
import numpy as np
from scipy.spatial.distance import cdist

from hdbscan_star.core.core_distances import calculate_core_distances
from hdbscan_star.core.mst import construct_mst
from hdbscan_star.clustering.constraints import Constraint, ConstraintType
from hdbscan_star.clustering.hierarchy import compute_hierarchy_and_cluster_tree
from hdbscan_star.errors import InvalidParameterError

# Two unit squares far apart plus one distant outlier (index 8)
POINTS = np.array([
    [0, 0], [0, 1], [1, 0], [1, 1],
    [10, 10], [10, 11], [11, 10], [11, 11],
    [5, 40]
], dtype=float)


def build_mst(points=POINTS, min_points=3, self_edges=True):
    distances = cdist(points, points)
    core_distances = calculate_core_distances(distances, min_points)
    return construct_mst(distances, core_distances, self_edges), core_distances


class TestComputeHierarchy:
    """Test cases for compute_hierarchy_and_cluster_tree."""

    def test_two_squares_and_outlier(self):
        """Test the clusters and noise levels of a simple layout."""
        mst, core_distances = build_mst()
        result = compute_hierarchy_and_cluster_tree(mst, 3)
        tree = result.tree

        assert len(tree) == 3
        assert tree.is_finalized()

        children = [tree[2], tree[3]]
        member_sets = sorted(sorted(c.members.tolist()) for c in children)
        assert member_sets == [[0, 1, 2, 3], [4, 5, 6, 7]]

        bridge = np.sqrt(81.0 + 81.0)
        for child in children:
            assert child.parent == 1
            assert child.birth_level == pytest.approx(bridge)
            assert child.death_level == pytest.approx(1.0)
            assert child.stability == pytest.approx(4 * (1.0 - 1.0 / bridge))

        # The outlier leaves the root at its own core distance
        assert result.point_noise_levels[8] == pytest.approx(core_distances[8])
        assert result.point_last_clusters[8] == 1
        np.testing.assert_allclose(result.point_noise_levels[:8], 1.0)
        assert set(result.point_last_clusters[:8].tolist()) == {2, 3}

    def test_min_cluster_size_too_large(self):
        """Test that no split happens when no component is big enough."""
        mst, _ = build_mst()
        result = compute_hierarchy_and_cluster_tree(mst, 20)

        assert len(result.tree) == 1
        assert not result.tree.root.has_children
        assert result.tree.is_finalized()
        assert np.all(result.point_last_clusters == 1)

    def test_without_self_edges(self):
        """Test that every point still ends up as noise."""
        mst, _ = build_mst(self_edges=False)
        result = compute_hierarchy_and_cluster_tree(mst, 3)

        assert result.tree.is_finalized()
        assert np.all(result.point_noise_levels > 0)

    def test_constraints_are_counted(self):
        """Test must-link credit for the clusters born from the root."""
        mst, _ = build_mst()
        constraints = [
            Constraint(0, 3, ConstraintType.MUST_LINK),
            Constraint(0, 4, ConstraintType.CANNOT_LINK)
        ]
        result = compute_hierarchy_and_cluster_tree(mst, 3, constraints)
        tree = result.tree

        square_a = next(c for c in (tree[2], tree[3]) if 0 in c.members)
        square_b = next(c for c in (tree[2], tree[3]) if 4 in c.members)

        assert square_a.num_constraints_satisfied == 2 + 1
        assert square_b.num_constraints_satisfied == 1
        # Both constraints also hold for the root when everything is one cluster
        assert tree.root.num_constraints_satisfied == 2

    @pytest.mark.parametrize('constraints', [
        None,
        [Constraint(8, 0, ConstraintType.CANNOT_LINK)]
    ])
    def test_virtual_children_released(self, constraints):
        """Test that noise records do not outlive their level."""
        mst, _ = build_mst()
        result = compute_hierarchy_and_cluster_tree(mst, 3, constraints)

        held = {
            cluster.label: sorted(cluster.virtual_child_cluster)
            for cluster in result.tree
            if cluster.virtual_child_cluster
        }
        assert held == {}

    def test_invalid_min_cluster_size(self):
        """Test that min_cluster_size < 1 is rejected."""
        mst, _ = build_mst()

        with pytest.raises(InvalidParameterError):
            compute_hierarchy_and_cluster_tree(mst, 0)

    def test_constraint_out_of_range(self):
        """Test that constraints must refer to existing points."""
        mst, _ = build_mst()

        with pytest.raises(InvalidParameterError):
            compute_hierarchy_and_cluster_tree(
                mst, 3, [Constraint(0, 99, ConstraintType.MUST_LINK)]
            )
