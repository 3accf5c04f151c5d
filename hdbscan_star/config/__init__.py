"""Configuration module for the HDBSCAN* engine."""

from .parameters import HDBSCANParameters

from .constants import (
    # Labels
    NOISE_LABEL,
    ROOT_LABEL,
    FIRST_CHILD_LABEL,
    # Defaults
    DEFAULT_MIN_POINTS,
    DEFAULT_MIN_CLUSTER_SIZE,
    DEFAULT_SELF_EDGES,
    # Metrics
    METRIC_EUCLIDEAN,
    METRIC_PRECOMPUTED,
    METRIC_ALIASES,
    SUPPORTED_METRICS,
    # Constraints
    CONSTRAINT_MUST_LINK,
    CONSTRAINT_CANNOT_LINK,
    MUST_LINK_CREDIT,
    CANNOT_LINK_CREDIT,
    # Logging
    LOG_LEVELS,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    # Output
    CLUSTERS_FILENAME,
    OUTLIER_SCORES_FILENAME
)

__all__ = [
    'HDBSCANParameters',
    'NOISE_LABEL',
    'ROOT_LABEL',
    'FIRST_CHILD_LABEL',
    'DEFAULT_MIN_POINTS',
    'DEFAULT_MIN_CLUSTER_SIZE',
    'DEFAULT_SELF_EDGES',
    'METRIC_EUCLIDEAN',
    'METRIC_PRECOMPUTED',
    'METRIC_ALIASES',
    'SUPPORTED_METRICS',
    'CONSTRAINT_MUST_LINK',
    'CONSTRAINT_CANNOT_LINK',
    'MUST_LINK_CREDIT',
    'CANNOT_LINK_CREDIT',
    'LOG_LEVELS',
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'CLUSTERS_FILENAME',
    'OUTLIER_SCORES_FILENAME'
]
