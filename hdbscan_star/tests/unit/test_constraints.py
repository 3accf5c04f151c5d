"""Unit tests for constraint accounting."""

import pytest
import numpy as np

from hdbscan_star.clustering.cluster import ClusterTree
from hdbscan_star.clustering.constraints import (
    Constraint,
    ConstraintType,
    calculate_num_constraints_satisfied,
    validate_constraints
)
from hdbscan_star.clustering.hierarchy import create_new_cluster
from hdbscan_star.errors import InvalidParameterError

MUST_LINK = ConstraintType.MUST_LINK
CANNOT_LINK = ConstraintType.CANNOT_LINK


class TestConstraintAccounting:
    """Test cases for calculate_num_constraints_satisfied."""

    def setup_method(self):
        """Split a 4-point root into 2 = {0, 1} and 3 = {2, 3}."""
        self.tree = ClusterTree(4)
        self.labels = np.ones(4, dtype=np.intp)
        create_new_cluster(self.tree, {0, 1}, self.labels, 1, 2, 5.0)
        create_new_cluster(self.tree, {2, 3}, self.labels, 1, 3, 5.0)

    def test_must_link_same_new_cluster(self):
        """Test that a satisfied must-link earns exactly 2."""
        calculate_num_constraints_satisfied(
            {2, 3}, self.tree, [Constraint(0, 1, MUST_LINK)], self.labels
        )

        assert self.tree[2].num_constraints_satisfied == 2
        assert self.tree[3].num_constraints_satisfied == 0

    def test_must_link_split_apart(self):
        """Test that a broken must-link earns nothing."""
        calculate_num_constraints_satisfied(
            {2, 3}, self.tree, [Constraint(0, 2, MUST_LINK)], self.labels
        )

        assert self.tree[2].num_constraints_satisfied == 0
        assert self.tree[3].num_constraints_satisfied == 0

    def test_cannot_link_split_apart(self):
        """Test that a satisfied cannot-link credits both new clusters."""
        calculate_num_constraints_satisfied(
            {2, 3}, self.tree, [Constraint(1, 2, CANNOT_LINK)], self.labels
        )

        assert self.tree[2].num_constraints_satisfied == 1
        assert self.tree[3].num_constraints_satisfied == 1

    def test_cannot_link_same_cluster(self):
        """Test that a violated cannot-link earns nothing."""
        calculate_num_constraints_satisfied(
            {2, 3}, self.tree, [Constraint(2, 3, CANNOT_LINK)], self.labels
        )

        assert self.tree[3].num_constraints_satisfied == 0

    def test_cannot_link_only_credits_new_clusters(self):
        """Test that an older cluster is not credited in a later round."""
        create_new_cluster(self.tree, {2}, self.labels, 3, 4, 2.0)
        create_new_cluster(self.tree, {3}, self.labels, 3, 5, 2.0)

        calculate_num_constraints_satisfied(
            {4, 5}, self.tree, [Constraint(0, 2, CANNOT_LINK)], self.labels
        )

        assert self.tree[2].num_constraints_satisfied == 0
        assert self.tree[4].num_constraints_satisfied == 1

    def test_noise_endpoint_credits_parent_virtual_child(self):
        """Test crediting the parent whose virtual child holds a noise point."""
        create_new_cluster(self.tree, {3}, self.labels, 3, 0, 2.0)
        create_new_cluster(self.tree, {2}, self.labels, 3, 4, 2.0)

        calculate_num_constraints_satisfied(
            {4}, self.tree, [Constraint(2, 3, CANNOT_LINK)], self.labels
        )

        assert self.tree[4].num_constraints_satisfied == 1
        assert self.tree[3].propagated_num_constraints_satisfied == 1
        assert self.tree[3].virtual_child_cluster is None

    def test_both_noise_endpoints(self):
        """Test a cannot-link whose endpoints both fell to noise."""
        create_new_cluster(self.tree, {0, 1}, self.labels, 2, 0, 2.0)
        create_new_cluster(self.tree, {2}, self.labels, 3, 4, 2.0)
        create_new_cluster(self.tree, {3}, self.labels, 3, 0, 2.0)

        calculate_num_constraints_satisfied(
            {4}, self.tree, [Constraint(0, 1, CANNOT_LINK)], self.labels
        )

        # Cluster 2 is not a parent of a new cluster this round
        assert self.tree[2].propagated_num_constraints_satisfied == 0
        assert self.tree[3].propagated_num_constraints_satisfied == 0
        assert self.tree[2].virtual_child_cluster == {0, 1}

    def test_no_constraints_is_noop(self):
        """Test that an empty constraint list leaves the tree unchanged."""
        create_new_cluster(self.tree, {3}, self.labels, 3, 0, 2.0)
        calculate_num_constraints_satisfied({2, 3}, self.tree, [], self.labels)

        assert self.tree[3].virtual_child_cluster == {3}


class TestConstraint:
    """Test cases for Constraint construction and validation."""

    def test_from_tokens(self):
        """Test parsing raw constraint values."""
        constraint = Constraint.from_tokens('3', ' 7', ' ML ')

        assert constraint == Constraint(3, 7, MUST_LINK)
        assert Constraint.from_tokens(1, 2, 'cl').constraint_type is CANNOT_LINK

    def test_unknown_type(self):
        """Test that an unknown constraint token is rejected."""
        with pytest.raises(InvalidParameterError):
            Constraint.from_tokens(1, 2, 'maybe')

    def test_validate_range(self):
        """Test that constraints must refer to existing points."""
        assert validate_constraints(None, 4) == []
        assert len(validate_constraints([Constraint(0, 3, MUST_LINK)], 4)) == 1

        with pytest.raises(InvalidParameterError):
            validate_constraints([Constraint(0, 4, MUST_LINK)], 4)
