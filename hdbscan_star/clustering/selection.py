"""Flat cluster extraction from a propagated cluster tree."""

import numpy as np

from ..config.constants import NOISE_LABEL
from ..errors import InconsistentStateError
from ..utils.validation import validate_lengths
from .cluster import ClusterTree


def find_prominent_clusters(tree: ClusterTree, num_points: int) -> np.ndarray:
    """
    Produce the flat partitioning selected by propagation.

    The selected clusters are the root's propagated descendants. Each one
    labels the points it held when it was born; all other points are noise.

    Args:
        tree: Propagated cluster tree
        num_points: Number of points in the data set

    Returns:
        Array of cluster labels (num_points,), 0 for noise

    Raises:
        InconsistentStateError: If the tree has not been propagated
    """
    if not tree.propagated:
        raise InconsistentStateError(
            "Cluster tree must be propagated before selecting clusters"
        )

    labels = np.full(num_points, NOISE_LABEL, dtype=np.intp)
    for label in tree.root.propagated_descendants:
        labels[tree[label].members] = label
    return labels


def membership_probabilities(labels, core_distances) -> np.ndarray:
    """
    Estimate how strongly each point belongs to its flat cluster.

    Within a cluster a point scores (max_core - core) / max_core, where
    max_core is the largest core distance in that cluster. Noise scores 0.

    Args:
        labels: Flat cluster labels
        core_distances: Core distance of each point

    Returns:
        Array of probabilities in [0, 1]
    """
    labels = np.asarray(labels)
    core_distances = np.asarray(core_distances, dtype=np.float64)
    validate_lengths(len(labels), core_distances=core_distances)

    probabilities = np.zeros(len(labels), dtype=np.float64)
    for label in np.unique(labels):
        if label == NOISE_LABEL:
            continue
        mask = labels == label
        max_core_distance = core_distances[mask].max()
        if max_core_distance == 0:
            probabilities[mask] = 1.0
        else:
            probabilities[mask] = (max_core_distance - core_distances[mask]) / max_core_distance
    return probabilities
