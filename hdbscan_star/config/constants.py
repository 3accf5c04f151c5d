"""Shared constants for the HDBSCAN* engine."""

# Cluster labels
NOISE_LABEL = 0
ROOT_LABEL = 1
FIRST_CHILD_LABEL = 2

# Default parameters
DEFAULT_MIN_POINTS = 4
DEFAULT_MIN_CLUSTER_SIZE = 4
DEFAULT_SELF_EDGES = True

# Distance metrics (scipy.spatial.distance names)
METRIC_EUCLIDEAN = 'euclidean'
METRIC_MANHATTAN = 'cityblock'
METRIC_COSINE = 'cosine'
METRIC_CHEBYSHEV = 'chebyshev'
METRIC_PRECOMPUTED = 'precomputed'

METRIC_ALIASES = {
    'manhattan': METRIC_MANHATTAN,
}

SUPPORTED_METRICS = [
    METRIC_EUCLIDEAN,
    METRIC_MANHATTAN,
    METRIC_COSINE,
    METRIC_CHEBYSHEV,
    METRIC_PRECOMPUTED
]

# Constraint file tokens
CONSTRAINT_MUST_LINK = 'ml'
CONSTRAINT_CANNOT_LINK = 'cl'

# Constraint credit
MUST_LINK_CREDIT = 2
CANNOT_LINK_CREDIT = 1

# Logging
LOG_DEBUG = 'DEBUG'
LOG_INFO = 'INFO'
LOG_WARNING = 'WARNING'
LOG_ERROR = 'ERROR'
LOG_LEVELS = [LOG_DEBUG, LOG_INFO, LOG_WARNING, LOG_ERROR]
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Output files
CLUSTERS_FILENAME = 'clusters.json'
OUTLIER_SCORES_FILENAME = 'outlier_scores.csv'
