"""Minimum spanning tree over the mutual reachability distance."""

import numpy as np

from ..errors import InvalidParameterError
from ..utils.logging import get_logger
from ..utils.validation import validate_distance_matrix, validate_lengths
from .graph import UndirectedGraph

logger = get_logger(__name__)


def construct_mst(distances,
                  core_distances,
                  self_edges: bool) -> UndirectedGraph:
    """
    Build the mutual reachability minimum spanning tree with dense Prim.

    The tree is grown from the last point. After each attachment the
    newest point relaxes the best known distance of every unattached
    point, then the unattached point with the smallest distance is
    attached next. On ties the lowest point index wins.

    Args:
        distances: Square distance matrix (n_points, n_points)
        core_distances: Core distance of every point
        self_edges: Append one self-edge per point weighted by its core distance

    Returns:
        UndirectedGraph with n_points - 1 tree edges, followed by
        n_points self-edges if requested

    Raises:
        InvalidParameterError: If fewer than two points are given or the
            array lengths disagree
    """
    distances = validate_distance_matrix(distances)
    core_distances = np.asarray(core_distances, dtype=np.float64)
    n_points = distances.shape[0]

    validate_lengths(n_points, core_distances=core_distances)
    if n_points < 2:
        raise InvalidParameterError(
            f"A spanning tree needs at least 2 points, got {n_points}"
        )

    attached = np.zeros(n_points, dtype=bool)
    nearest_mrd_neighbors = np.zeros(n_points, dtype=np.intp)
    nearest_mrd_distances = np.full(n_points, np.inf)

    current_point = n_points - 1
    attached[current_point] = True

    for _ in range(n_points - 1):
        # Mutual reachability from the newest attached point to every point
        mrd = np.maximum(distances[current_point], core_distances)
        mrd = np.maximum(mrd, core_distances[current_point])

        improved = ~attached & (mrd < nearest_mrd_distances)
        nearest_mrd_distances[improved] = mrd[improved]
        nearest_mrd_neighbors[improved] = current_point

        candidates = np.flatnonzero(~attached)
        # argmin returns the first minimum, i.e. the lowest index
        current_point = candidates[np.argmin(nearest_mrd_distances[candidates])]
        attached[current_point] = True

    # The root (last point) owns no edge; every other point owns the edge
    # that attached it
    tree_vertices = np.arange(n_points - 1)
    vertices_a = nearest_mrd_neighbors[:-1]
    vertices_b = tree_vertices
    weights = nearest_mrd_distances[:-1]

    if self_edges:
        points = np.arange(n_points)
        vertices_a = np.concatenate([vertices_a, points])
        vertices_b = np.concatenate([vertices_b, points])
        weights = np.concatenate([weights, core_distances])

    logger.debug(
        f"Constructed MST over {n_points} points with {len(weights)} edges "
        f"(self_edges={self_edges})"
    )
    return UndirectedGraph(n_points, vertices_a, vertices_b, weights)
