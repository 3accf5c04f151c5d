"""I/O utilities for HDBSCAN* inputs and results."""

from .json_handler import (
    load_vectors,
    save_clusters
)

from .csv_handler import (
    load_constraints,
    write_outlier_scores_csv
)

__all__ = [
    'load_vectors',
    'save_clusters',
    'load_constraints',
    'write_outlier_scores_csv'
]
