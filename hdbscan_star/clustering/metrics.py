"""Distance matrices and clustering quality metrics."""

from typing import Dict

import numpy as np
from scipy.spatial.distance import cdist
from sklearn.metrics import silhouette_score

from ..config.constants import (
    METRIC_ALIASES,
    METRIC_EUCLIDEAN,
    METRIC_PRECOMPUTED,
    NOISE_LABEL,
    SUPPORTED_METRICS
)
from ..errors import InvalidParameterError
from ..utils.validation import validate_distance_matrix, validate_lengths


def compute_distance_matrix(vectors: np.ndarray,
                            metric: str = METRIC_EUCLIDEAN) -> np.ndarray:
    """
    Calculate the pairwise distance matrix of a set of vectors.

    Args:
        vectors: Feature matrix (n_samples, n_features)
        metric: scipy distance metric name, or 'precomputed' to pass a
            square matrix through unchanged

    Returns:
        Distance matrix (n_samples, n_samples)

    Raises:
        InvalidParameterError: If the metric is unknown or the input is empty
    """
    metric = METRIC_ALIASES.get(metric, metric)
    if metric not in SUPPORTED_METRICS:
        raise InvalidParameterError(
            f"Unknown metric: {metric}. Available: {SUPPORTED_METRICS}"
        )

    if metric == METRIC_PRECOMPUTED:
        return validate_distance_matrix(vectors)

    vectors = np.asarray(vectors, dtype=np.float64)
    if vectors.ndim == 1:
        vectors = vectors.reshape(-1, 1)
    if vectors.ndim != 2 or vectors.shape[0] == 0:
        raise InvalidParameterError(
            f"Expected a non-empty 2D feature matrix, got shape {vectors.shape}"
        )

    distances = cdist(vectors, vectors, metric=metric)
    # Cosine distance of zero vectors is undefined
    return np.nan_to_num(distances, nan=0.0)


def mutual_reachability_distance(distances: np.ndarray,
                                 core_distances: np.ndarray,
                                 a: int,
                                 b: int) -> float:
    """Mutual reachability distance between two points."""
    return float(max(distances[a, b], core_distances[a], core_distances[b]))


def mutual_reachability_matrix(distances: np.ndarray,
                               core_distances: np.ndarray) -> np.ndarray:
    """
    Calculate the full mutual reachability matrix.

    Args:
        distances: Square distance matrix
        core_distances: Core distance of each point

    Returns:
        Matrix of max(distance, core_a, core_b)
    """
    distances = validate_distance_matrix(distances)
    core_distances = np.asarray(core_distances, dtype=np.float64)
    validate_lengths(distances.shape[0], core_distances=core_distances)

    mrd = np.maximum(distances, core_distances[:, np.newaxis])
    return np.maximum(mrd, core_distances[np.newaxis, :])


def evaluate_clustering(distances: np.ndarray,
                        labels: np.ndarray) -> Dict[str, float]:
    """
    Evaluate a flat clustering against its distance matrix.

    Args:
        distances: Square distance matrix
        labels: Flat cluster labels, 0 for noise

    Returns:
        Dictionary with cluster and noise counts, plus the silhouette score
        of the non-noise points when there are at least two clusters
    """
    distances = validate_distance_matrix(distances)
    labels = np.asarray(labels)
    validate_lengths(distances.shape[0], labels=labels)

    non_noise_mask = labels != NOISE_LABEL
    n_clusters = len(set(labels[non_noise_mask].tolist()))

    metrics = {
        'n_clusters': n_clusters,
        'n_noise': int(np.sum(~non_noise_mask))
    }

    # Silhouette needs 2 <= n_clusters <= n_samples - 1
    if 1 < n_clusters < int(np.sum(non_noise_mask)):
        filtered = distances[np.ix_(non_noise_mask, non_noise_mask)].copy()
        np.fill_diagonal(filtered, 0.0)
        metrics['silhouette'] = float(silhouette_score(
            filtered, labels[non_noise_mask], metric='precomputed'
        ))

    return metrics
