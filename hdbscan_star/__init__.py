"""HDBSCAN*: hierarchical density-based clustering with GLOSH outlier scores."""

from .errors import HDBSCANError, InvalidParameterError, InconsistentStateError
from .config import HDBSCANParameters
from .core import calculate_core_distances, construct_mst, UndirectedGraph
from .clustering import (
    Cluster,
    ClusterTree,
    Constraint,
    ConstraintType,
    OutlierScore,
    HDBSCANStarClusterer,
    create_new_cluster,
    compute_hierarchy_and_cluster_tree,
    propagate_tree,
    calculate_num_constraints_satisfied,
    calculate_outlier_scores,
    find_prominent_clusters,
    membership_probabilities
)

__version__ = '1.0.0'

__all__ = [
    'HDBSCANError',
    'InvalidParameterError',
    'InconsistentStateError',
    'HDBSCANParameters',
    'calculate_core_distances',
    'construct_mst',
    'UndirectedGraph',
    'Cluster',
    'ClusterTree',
    'Constraint',
    'ConstraintType',
    'OutlierScore',
    'HDBSCANStarClusterer',
    'create_new_cluster',
    'compute_hierarchy_and_cluster_tree',
    'propagate_tree',
    'calculate_num_constraints_satisfied',
    'calculate_outlier_scores',
    'find_prominent_clusters',
    'membership_probabilities'
]
