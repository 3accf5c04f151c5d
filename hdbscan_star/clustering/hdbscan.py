"""HDBSCAN* clustering built from the core engine."""

from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from ..config.constants import (
    DEFAULT_MIN_POINTS,
    DEFAULT_MIN_CLUSTER_SIZE,
    DEFAULT_SELF_EDGES,
    METRIC_EUCLIDEAN,
    NOISE_LABEL
)
from ..config.parameters import HDBSCANParameters
from ..core.core_distances import calculate_core_distances
from ..core.mst import construct_mst
from ..utils.logging import get_logger
from ..utils.validation import validate_distance_matrix
from .base import Clusterer
from .cluster import ClusterTree
from .constraints import Constraint, validate_constraints
from .hierarchy import compute_hierarchy_and_cluster_tree
from .metrics import compute_distance_matrix
from .outliers import OutlierScore, calculate_outlier_scores, scores_by_point
from .propagation import propagate_tree
from .selection import find_prominent_clusters, membership_probabilities

logger = get_logger(__name__)


class HDBSCANStarClusterer(Clusterer):
    """Hierarchical density-based clustering with GLOSH outlier scores."""

    def __init__(self,
                 min_points: int = DEFAULT_MIN_POINTS,
                 min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE,
                 metric: str = METRIC_EUCLIDEAN,
                 self_edges: bool = DEFAULT_SELF_EDGES,
                 constraints: Optional[Iterable[Constraint]] = None):
        """
        Initialize HDBSCAN* clusterer.

        Args:
            min_points: Neighborhood size for core distances, including the point
            min_cluster_size: Smallest component that counts as a cluster
            metric: Distance metric for feature vectors ('precomputed' for
                distance matrices)
            self_edges: Add one self-edge per point to the spanning tree
            constraints: Optional must-link / cannot-link constraints
        """
        self.params = HDBSCANParameters(
            min_points=min_points,
            min_cluster_size=min_cluster_size,
            metric=metric,
            self_edges=self_edges
        ).validate()
        self.constraints = list(constraints) if constraints else []

        self.labels_: Optional[np.ndarray] = None
        self.probabilities_: Optional[np.ndarray] = None
        self.outlier_scores_: Optional[List[OutlierScore]] = None
        self.core_distances_: Optional[np.ndarray] = None
        self.cluster_tree_: Optional[ClusterTree] = None
        self.infinite_stability_: bool = False
        self.n_clusters_: Optional[int] = None
        self.n_noise_: Optional[int] = None

    @classmethod
    def from_parameters(cls,
                        params: HDBSCANParameters,
                        constraints: Optional[Iterable[Constraint]] = None) -> 'HDBSCANStarClusterer':
        """Create a clusterer from a parameter object."""
        return cls(
            min_points=params.min_points,
            min_cluster_size=params.min_cluster_size,
            metric=params.metric,
            self_edges=params.self_edges,
            constraints=constraints
        )

    def cluster(self,
                vectors: np.ndarray,
                **kwargs) -> Dict[int, List[int]]:
        """
        Perform HDBSCAN* clustering on feature vectors.

        Args:
            vectors: Feature matrix (n_samples, n_features), or a distance
                matrix when the metric is 'precomputed'
            **kwargs: 'constraints' overrides the constraints given at init

        Returns:
            Dict mapping cluster labels to lists of sample indices; label 0
            holds the noise points
        """
        distances = compute_distance_matrix(vectors, self.params.metric)
        return self.cluster_distances(distances, constraints=kwargs.get('constraints'))

    def cluster_distances(self,
                          distances: np.ndarray,
                          constraints: Optional[Iterable[Constraint]] = None) -> Dict[int, List[int]]:
        """
        Perform HDBSCAN* clustering on a precomputed distance matrix.

        Args:
            distances: Square distance matrix (n_samples, n_samples)
            constraints: Optional constraints, defaults to those given at init

        Returns:
            Dict mapping cluster labels to lists of sample indices
        """
        distances = validate_distance_matrix(distances)
        n_samples = distances.shape[0]
        if constraints is not None:
            self.constraints = list(constraints)
        constraints = validate_constraints(self.constraints, n_samples)

        logger.info(
            f"HDBSCAN* input: {n_samples} points, min_points={self.params.min_points}, "
            f"min_cluster_size={self.params.min_cluster_size}, "
            f"{len(constraints)} constraints"
        )

        self.core_distances_ = calculate_core_distances(distances, self.params.min_points)

        # Handle edge cases
        if n_samples == 1:
            self._set_single_point_result()
            return self.prepare_clusters(self.labels_)

        mst = construct_mst(distances, self.core_distances_, self.params.self_edges)
        hierarchy = compute_hierarchy_and_cluster_tree(
            mst, self.params.min_cluster_size, constraints
        )
        tree = hierarchy.tree

        self.infinite_stability_ = propagate_tree(tree)
        if self.infinite_stability_:
            logger.warning(
                "Some clusters have infinite stability: the density estimate is "
                "not well-defined for some points, usually because of duplicate "
                "points or numerical roundoff. Consider a larger min_points."
            )

        self.cluster_tree_ = tree
        self.labels_ = find_prominent_clusters(tree, n_samples)
        self.probabilities_ = membership_probabilities(self.labels_, self.core_distances_)
        self.outlier_scores_ = calculate_outlier_scores(
            tree,
            hierarchy.point_noise_levels,
            hierarchy.point_last_clusters,
            self.core_distances_
        )

        self.n_clusters_ = len(set(self.labels_.tolist()) - {NOISE_LABEL})
        self.n_noise_ = int(np.sum(self.labels_ == NOISE_LABEL))
        logger.info(f"Found {self.n_clusters_} clusters and {self.n_noise_} noise points")

        return self.prepare_clusters(self.labels_)

    def _set_single_point_result(self) -> None:
        self.cluster_tree_ = None
        self.infinite_stability_ = False
        self.labels_ = np.array([NOISE_LABEL], dtype=np.intp)
        self.probabilities_ = np.zeros(1, dtype=np.float64)
        self.outlier_scores_ = [OutlierScore(0.0, float(self.core_distances_[0]), 0)]
        self.n_clusters_ = 0
        self.n_noise_ = 1

    def get_params(self) -> Dict[str, Any]:
        """Get clustering parameters."""
        params = {'algorithm': 'hdbscan_star'}
        params.update(self.params.to_dict())
        params.update({
            'n_constraints': len(self.constraints),
            'n_clusters': self.n_clusters_,
            'n_noise': self.n_noise_,
            'infinite_stability': self.infinite_stability_
        })
        return params

    def get_results(self) -> Dict[str, Any]:
        """Collect the fitted results in a serialisable dictionary."""
        if self.labels_ is None:
            return {}

        results = {
            'labels': self.labels_,
            'probabilities': self.probabilities_,
            'outlier_scores': scores_by_point(self.outlier_scores_),
            'clusters': self.prepare_clusters(self.labels_),
            'clustering_params': self.get_params()
        }
        if self.cluster_tree_ is not None:
            results['cluster_tree'] = [
                {
                    'label': c.label,
                    'parent': c.parent,
                    'birth_level': c.birth_level,
                    'death_level': c.death_level,
                    'stability': c.stability,
                    'constraints_satisfied': c.num_constraints_satisfied
                }
                for c in self.cluster_tree_
                if not c.is_root
            ]
        return results
