"""JSON data handlers."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from ..errors import InvalidParameterError
from ..utils.io import read_json, write_json


def load_vectors(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load a feature matrix or distance matrix from JSON.

    Expected format, either a bare list of rows or:
    {
        "vectors": [[0.0, 1.0], [2.0, 3.0], ...]
    }
    ("distances" is accepted in place of "vectors")

    Args:
        filepath: Path to JSON file

    Returns:
        2D float array
    """
    data = read_json(filepath)

    if isinstance(data, dict):
        for key in ('vectors', 'distances'):
            if key in data:
                data = data[key]
                break
        else:
            raise InvalidParameterError(
                f"Expected 'vectors' or 'distances' key in {filepath}, got {list(data.keys())}"
            )

    matrix = np.asarray(data, dtype=np.float64)
    if matrix.ndim != 2:
        raise InvalidParameterError(f"Expected a 2D matrix in {filepath}, got shape {matrix.shape}")
    return matrix


def save_clusters(results: Dict[str, Any],
                  filepath: Union[str, Path],
                  metadata: Optional[Dict[str, Any]] = None) -> None:
    """
    Save flat clustering results to JSON.

    Args:
        results: Results dictionary from HDBSCANStarClusterer.get_results()
        filepath: Output file path
        metadata: Extra metadata stored under 'metadata'
    """
    output = {
        'labels': results.get('labels'),
        'probabilities': results.get('probabilities'),
        'clusters': {str(label): indices for label, indices in results.get('clusters', {}).items()},
        'cluster_tree': results.get('cluster_tree', []),
        'metadata': metadata or results.get('clustering_params', {})
    }
    write_json(output, filepath)
