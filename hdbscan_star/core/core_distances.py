"""Core distance estimation from a pairwise distance matrix."""

import numpy as np

from ..utils.logging import get_logger
from ..utils.validation import validate_distance_matrix, validate_min_points

logger = get_logger(__name__)


def calculate_core_distances(distances, k: int) -> np.ndarray:
    """
    Calculate the core distance of every point.

    The core distance is the distance to the (k-1)-th nearest other point,
    so k counts the point itself and k=1 gives zero everywhere. When k-1
    exceeds the number of other points the distance to the farthest point
    is used instead.

    Args:
        distances: Square distance matrix (n_points, n_points)
        k: Neighborhood size, including the point itself

    Returns:
        Array of core distances (n_points,)

    Raises:
        InvalidParameterError: If k < 1 or the matrix is malformed
    """
    k = validate_min_points(k)
    distances = validate_distance_matrix(distances)
    n_points = distances.shape[0]

    num_neighbors = k - 1
    if num_neighbors == 0 or n_points == 1:
        return np.zeros(n_points, dtype=np.float64)

    if num_neighbors > n_points - 1:
        logger.warning(
            f"k={k} exceeds the {n_points - 1} available neighbors, "
            f"using the farthest point as core distance"
        )
        num_neighbors = n_points - 1

    # Drop the diagonal so a point is never its own neighbor
    off_diagonal = ~np.eye(n_points, dtype=bool)
    neighbor_distances = distances[off_diagonal].reshape(n_points, n_points - 1)

    # Partial selection per row; no full sort of all distances
    kth = num_neighbors - 1
    core_distances = np.partition(neighbor_distances, kth, axis=1)[:, kth]

    logger.debug(
        f"Core distances for {n_points} points with k={k}: "
        f"min={core_distances.min():.6f}, max={core_distances.max():.6f}"
    )
    return core_distances
