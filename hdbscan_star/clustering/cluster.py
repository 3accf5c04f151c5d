"""Cluster tree nodes and the arena that owns them."""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set

import numpy as np

from ..config.constants import NOISE_LABEL, ROOT_LABEL
from ..errors import InconsistentStateError, InvalidParameterError


@dataclass(eq=False)
class Cluster:
    """
    A node of the condensed cluster tree.

    Nodes refer to their parent by label; every mutation goes through the
    owning ClusterTree.
    """
    label: int
    parent: Optional[int]
    birth_level: float
    num_points: int
    members: np.ndarray = field(repr=False, default_factory=lambda: np.empty(0, dtype=np.intp))

    death_level: float = 0.0
    stability: float = 0.0
    has_children: bool = False

    num_constraints_satisfied: int = 0
    propagated_num_constraints_satisfied: int = 0
    propagated_stability: float = 0.0
    propagated_lowest_child_death_level: float = math.inf
    propagated_descendants: List[int] = field(default_factory=list)

    virtual_child_cluster: Optional[Set[int]] = field(default=None, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None


class ClusterTree:
    """
    Arena of Cluster records addressed by label.

    The root (label 1) holds every point when the tree is created. Label 0
    is reserved for noise and never has a node.
    """

    def __init__(self, num_points: int):
        if num_points < 1:
            raise InvalidParameterError(f"A cluster tree needs at least 1 point, got {num_points}")

        self.num_points = int(num_points)
        self.propagated = False
        self._clusters: Dict[int, Cluster] = {}

        root = Cluster(
            label=ROOT_LABEL,
            parent=None,
            birth_level=math.nan,
            num_points=self.num_points,
            members=np.arange(self.num_points, dtype=np.intp)
        )
        self._clusters[ROOT_LABEL] = root

    def __len__(self) -> int:
        return len(self._clusters)

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self._clusters.values())

    def __contains__(self, label: int) -> bool:
        return label in self._clusters

    def __getitem__(self, label: int) -> Cluster:
        try:
            return self._clusters[label]
        except KeyError:
            raise KeyError(f"No cluster with label {label}") from None

    @property
    def root(self) -> Cluster:
        return self._clusters[ROOT_LABEL]

    @property
    def max_label(self) -> int:
        return max(self._clusters)

    def leaves(self) -> List[Cluster]:
        return [cluster for cluster in self if not cluster.has_children]

    def is_finalized(self) -> bool:
        """True once every point has left every cluster."""
        return all(cluster.num_points == 0 for cluster in self)

    def create_cluster(self,
                       label: int,
                       parent: int,
                       birth_level: float,
                       members: Iterable[int]) -> Cluster:
        """
        Add a child cluster born at the given level.

        Raises:
            InvalidParameterError: If the label is noise or already taken,
                or the parent does not exist
        """
        if label == NOISE_LABEL or label in self._clusters:
            raise InvalidParameterError(f"Cannot create cluster with label {label}")
        parent_cluster = self[parent]

        members = np.asarray(sorted(members), dtype=np.intp)
        cluster = Cluster(
            label=label,
            parent=parent,
            birth_level=birth_level,
            num_points=len(members),
            members=members
        )
        if birth_level == 0:
            cluster.stability = math.inf

        parent_cluster.has_children = True
        self._clusters[label] = cluster
        return cluster

    def detach_points(self, label: int, num_points: int, level: float) -> None:
        """
        Remove points from a cluster at the given level.

        Each removed point adds (1/level - 1/birth_level) to the stability.
        A birth or detach level of 0 makes the stability infinite. The
        cluster dies when its last point leaves.

        Raises:
            InconsistentStateError: If more points leave than the cluster holds
        """
        cluster = self[label]
        cluster.num_points -= num_points
        if cluster.num_points < 0:
            raise InconsistentStateError(
                f"Cluster {label} cannot have less than 0 points"
            )

        if cluster.is_root:
            # The root has no birth level to measure stability against
            pass
        elif cluster.birth_level == 0 or level == 0:
            cluster.stability = math.inf
        else:
            cluster.stability += num_points * (1.0 / level - 1.0 / cluster.birth_level)

        if cluster.num_points == 0:
            cluster.death_level = level

    def add_points_to_virtual_child_cluster(self, label: int, points: Iterable[int]) -> None:
        cluster = self[label]
        if cluster.virtual_child_cluster is None:
            cluster.virtual_child_cluster = set()
        cluster.virtual_child_cluster.update(points)

    def virtual_child_cluster_contains_point(self, label: int, point: int) -> bool:
        virtual = self[label].virtual_child_cluster
        return virtual is not None and point in virtual

    def add_virtual_child_constraints_satisfied(self, label: int, num_constraints: int) -> None:
        self[label].propagated_num_constraints_satisfied += num_constraints

    def add_constraints_satisfied(self, label: int, num_constraints: int) -> None:
        self[label].num_constraints_satisfied += num_constraints

    def release_virtual_child_cluster(self, label: int) -> None:
        self[label].virtual_child_cluster = None

    def propagate(self, label: int) -> None:
        """
        Push this cluster's results into its parent.

        The parent inherits the lower of the two lowest-child death levels.
        It then takes either this cluster itself or this cluster's selected
        descendants, whichever satisfies more constraints; on a tie in
        constraints the larger stability wins, and this cluster wins ties
        in stability.
        """
        cluster = self[label]

        if math.isinf(cluster.propagated_lowest_child_death_level):
            cluster.propagated_lowest_child_death_level = cluster.death_level

        if cluster.parent is None:
            return
        parent = self[cluster.parent]

        if cluster.propagated_lowest_child_death_level < parent.propagated_lowest_child_death_level:
            parent.propagated_lowest_child_death_level = cluster.propagated_lowest_child_death_level

        if not cluster.has_children:
            select_self = True
        elif cluster.num_constraints_satisfied != cluster.propagated_num_constraints_satisfied:
            select_self = cluster.num_constraints_satisfied > cluster.propagated_num_constraints_satisfied
        else:
            select_self = cluster.stability >= cluster.propagated_stability

        if select_self:
            parent.propagated_num_constraints_satisfied += cluster.num_constraints_satisfied
            parent.propagated_stability += cluster.stability
            parent.propagated_descendants.append(cluster.label)
        else:
            parent.propagated_num_constraints_satisfied += cluster.propagated_num_constraints_satisfied
            parent.propagated_stability += cluster.propagated_stability
            parent.propagated_descendants.extend(cluster.propagated_descendants)
