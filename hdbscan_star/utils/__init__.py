"""Utility modules for the HDBSCAN* engine."""

from .io import read_json, write_json, ensure_directory, convert_numpy
from .logging import get_logger, set_package_level
from .validation import (
    validate_file_exists,
    validate_distance_matrix,
    validate_min_points,
    validate_min_cluster_size,
    validate_lengths
)

__all__ = [
    'read_json',
    'write_json',
    'ensure_directory',
    'convert_numpy',
    'get_logger',
    'set_package_level',
    'validate_file_exists',
    'validate_distance_matrix',
    'validate_min_points',
    'validate_min_cluster_size',
    'validate_lengths'
]
