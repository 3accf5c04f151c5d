"""Input validation utilities."""

from pathlib import Path
from typing import Union

import numpy as np

from ..errors import InvalidParameterError


def validate_file_exists(path: Union[str, Path]) -> Path:
    """
    Validate that file exists.

    Args:
        path: File path

    Returns:
        Path object

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def validate_distance_matrix(distances) -> np.ndarray:
    """
    Validate a pairwise distance matrix and return it as a float array.

    The matrix must be square, non-empty, finite and non-negative. It does
    not have to be symmetric; the diagonal is ignored.

    Args:
        distances: Array-like of shape (n_points, n_points)

    Returns:
        float64 ndarray view or copy of the input

    Raises:
        InvalidParameterError: If the matrix is malformed
    """
    matrix = np.asarray(distances, dtype=np.float64)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidParameterError(
            f"Distance matrix must be square, got shape {matrix.shape}"
        )
    if matrix.shape[0] == 0:
        raise InvalidParameterError("Distance matrix is empty")

    off_diagonal = ~np.eye(matrix.shape[0], dtype=bool)
    values = matrix[off_diagonal]
    if not np.all(np.isfinite(values)):
        raise InvalidParameterError("Distance matrix contains NaN or infinite values")
    if np.any(values < 0):
        raise InvalidParameterError("Distance matrix contains negative values")

    return matrix


def validate_min_points(k: int) -> int:
    """Validate the neighbor count used for core distances."""
    if k is None or int(k) < 1:
        raise InvalidParameterError(f"k must be at least 1, got {k}")
    return int(k)


def validate_min_cluster_size(min_cluster_size: int) -> int:
    """Validate the minimum size of a valid cluster."""
    if min_cluster_size is None or int(min_cluster_size) < 1:
        raise InvalidParameterError(
            f"min_cluster_size must be at least 1, got {min_cluster_size}"
        )
    return int(min_cluster_size)


def validate_lengths(expected: int, **arrays) -> None:
    """
    Validate that every per-point array has the expected length.

    Args:
        expected: Number of points
        **arrays: Named arrays to check

    Raises:
        InvalidParameterError: If any length differs
    """
    mismatched = {
        name: len(values) for name, values in arrays.items()
        if len(values) != expected
    }
    if mismatched:
        raise InvalidParameterError(
            f"Expected arrays of length {expected}, got {mismatched}"
        )
