"""GLOSH outlier scores derived from a propagated cluster tree."""

from dataclasses import dataclass
from typing import List

import numpy as np

from ..errors import InconsistentStateError, InvalidParameterError
from ..utils.validation import validate_lengths
from .cluster import ClusterTree


@dataclass(frozen=True, order=True)
class OutlierScore:
    """Outlier score of one point; ordered by score, core distance, index."""
    score: float
    core_distance: float
    point_index: int


def calculate_outlier_scores(tree: ClusterTree,
                             point_noise_levels,
                             point_last_clusters,
                             core_distances) -> List[OutlierScore]:
    """
    Score every point by how early it fell out of its last cluster.

    score = 1 - (lowest child death level of the last cluster / the level
    at which the point became noise), or 0 when that level is 0.

    Args:
        tree: Propagated cluster tree
        point_noise_levels: Level at which each point became noise
        point_last_clusters: Label each point had before becoming noise
        core_distances: Core distance of each point

    Returns:
        One OutlierScore per point, highest score first

    Raises:
        InconsistentStateError: If the tree has not been propagated
        InvalidParameterError: If the arrays disagree in length or refer
            to unknown clusters
    """
    if not tree.propagated:
        raise InconsistentStateError(
            "Cluster tree must be propagated before calculating outlier scores"
        )

    noise_levels = np.asarray(point_noise_levels, dtype=np.float64)
    last_clusters = np.asarray(point_last_clusters, dtype=np.intp)
    core_distances = np.asarray(core_distances, dtype=np.float64)
    num_points = len(noise_levels)
    validate_lengths(num_points,
                     point_last_clusters=last_clusters,
                     core_distances=core_distances)

    unknown = sorted({int(label) for label in last_clusters if int(label) not in tree})
    if unknown:
        raise InvalidParameterError(f"Points refer to unknown clusters: {unknown}")

    epsilon_max = np.array([
        tree[int(label)].propagated_lowest_child_death_level for label in last_clusters
    ], dtype=np.float64)

    scores = np.zeros(num_points, dtype=np.float64)
    nonzero = noise_levels != 0
    scores[nonzero] = 1.0 - epsilon_max[nonzero] / noise_levels[nonzero]

    outlier_scores = [
        OutlierScore(float(scores[i]), float(core_distances[i]), i)
        for i in range(num_points)
    ]
    outlier_scores.sort(reverse=True)
    return outlier_scores


def scores_by_point(outlier_scores: List[OutlierScore]) -> np.ndarray:
    """Lay sorted outlier scores back out by point index."""
    scores = np.zeros(len(outlier_scores), dtype=np.float64)
    for outlier_score in outlier_scores:
        scores[outlier_score.point_index] = outlier_score.score
    return scores
