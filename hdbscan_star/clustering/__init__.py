"""Cluster tree, propagation and HDBSCAN* clustering."""

from .base import Clusterer
from .cluster import Cluster, ClusterTree
from .constraints import (
    Constraint,
    ConstraintType,
    calculate_num_constraints_satisfied,
    validate_constraints
)
from .hierarchy import HierarchyResult, create_new_cluster, compute_hierarchy_and_cluster_tree
from .propagation import propagate_tree
from .outliers import OutlierScore, calculate_outlier_scores, scores_by_point
from .selection import find_prominent_clusters, membership_probabilities
from .metrics import (
    compute_distance_matrix,
    mutual_reachability_distance,
    mutual_reachability_matrix,
    evaluate_clustering
)
from .hdbscan import HDBSCANStarClusterer

__all__ = [
    'Clusterer',
    'Cluster',
    'ClusterTree',
    'Constraint',
    'ConstraintType',
    'calculate_num_constraints_satisfied',
    'validate_constraints',
    'HierarchyResult',
    'create_new_cluster',
    'compute_hierarchy_and_cluster_tree',
    'propagate_tree',
    'OutlierScore',
    'calculate_outlier_scores',
    'scores_by_point',
    'find_prominent_clusters',
    'membership_probabilities',
    'compute_distance_matrix',
    'mutual_reachability_distance',
    'mutual_reachability_matrix',
    'evaluate_clustering',
    'HDBSCANStarClusterer'
]
