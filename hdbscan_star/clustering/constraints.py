"""Pairwise must-link / cannot-link constraints and their accounting."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ..config.constants import (
    CONSTRAINT_MUST_LINK,
    CONSTRAINT_CANNOT_LINK,
    MUST_LINK_CREDIT,
    CANNOT_LINK_CREDIT,
    NOISE_LABEL
)
from ..errors import InvalidParameterError
from .cluster import ClusterTree


class ConstraintType(Enum):
    MUST_LINK = CONSTRAINT_MUST_LINK
    CANNOT_LINK = CONSTRAINT_CANNOT_LINK


@dataclass(frozen=True)
class Constraint:
    """A must-link or cannot-link requirement between two points."""
    point_a: int
    point_b: int
    constraint_type: ConstraintType

    @classmethod
    def from_tokens(cls, point_a, point_b, token: str) -> 'Constraint':
        """Build a constraint from raw values such as ('3', '7', 'ml')."""
        try:
            constraint_type = ConstraintType(str(token).strip().lower())
        except ValueError:
            raise InvalidParameterError(
                f"Unknown constraint type: {token!r}. "
                f"Expected '{CONSTRAINT_MUST_LINK}' or '{CONSTRAINT_CANNOT_LINK}'"
            ) from None
        return cls(int(point_a), int(point_b), constraint_type)


def validate_constraints(constraints: Optional[Iterable[Constraint]],
                         num_points: int) -> List[Constraint]:
    """
    Check that every constraint refers to existing points.

    Raises:
        InvalidParameterError: If an index is out of range
    """
    if not constraints:
        return []

    constraints = list(constraints)
    for constraint in constraints:
        for point in (constraint.point_a, constraint.point_b):
            if not 0 <= point < num_points:
                raise InvalidParameterError(
                    f"Constraint {constraint} refers to point {point}, "
                    f"outside [0, {num_points})"
                )
    return constraints


def calculate_num_constraints_satisfied(new_cluster_labels: Iterable[int],
                                        tree: ClusterTree,
                                        constraints: Sequence[Constraint],
                                        cluster_labels) -> None:
    """
    Credit the constraints satisfied by one round of new clusters.

    A must-link whose endpoints share a new label earns that cluster 2. A
    cannot-link whose endpoints ended up apart (or both in noise) earns 1
    for each endpoint sitting in a new cluster; an endpoint in noise credits
    the first parent whose virtual child cluster holds it. The parents'
    virtual child clusters are released afterwards.

    Args:
        new_cluster_labels: Labels created in this round
        tree: Cluster tree owning those labels
        constraints: All constraints of the run
        cluster_labels: Current label of every point
    """
    if not constraints:
        return

    new_cluster_labels = set(new_cluster_labels)

    parents: List[int] = []
    for label in sorted(new_cluster_labels):
        parent = tree[label].parent
        if parent is not None and parent not in parents:
            parents.append(parent)

    for constraint in constraints:
        label_a = int(cluster_labels[constraint.point_a])
        label_b = int(cluster_labels[constraint.point_b])

        if constraint.constraint_type is ConstraintType.MUST_LINK:
            if label_a == label_b and label_a in new_cluster_labels:
                tree.add_constraints_satisfied(label_a, MUST_LINK_CREDIT)

        elif label_a != label_b or label_a == NOISE_LABEL:
            if label_a != NOISE_LABEL and label_a in new_cluster_labels:
                tree.add_constraints_satisfied(label_a, CANNOT_LINK_CREDIT)
            if label_b != NOISE_LABEL and label_b in new_cluster_labels:
                tree.add_constraints_satisfied(label_b, CANNOT_LINK_CREDIT)

            if label_a == NOISE_LABEL:
                _credit_virtual_child(tree, parents, constraint.point_a)
            if label_b == NOISE_LABEL:
                _credit_virtual_child(tree, parents, constraint.point_b)

    for parent in parents:
        tree.release_virtual_child_cluster(parent)


def _credit_virtual_child(tree: ClusterTree, parents: List[int], point: int) -> None:
    for parent in parents:
        if tree.virtual_child_cluster_contains_point(parent, point):
            tree.add_virtual_child_constraints_satisfied(parent, CANNOT_LINK_CREDIT)
            break
