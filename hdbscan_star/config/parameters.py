"""Parameter configuration for HDBSCAN* runs."""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from ..errors import InvalidParameterError
from .constants import (
    DEFAULT_MIN_POINTS,
    DEFAULT_MIN_CLUSTER_SIZE,
    DEFAULT_SELF_EDGES,
    METRIC_EUCLIDEAN,
    METRIC_ALIASES,
    SUPPORTED_METRICS
)


@dataclass
class HDBSCANParameters:
    """Parameters controlling density estimation and cluster extraction."""
    # Core distance is the distance to the min_points-th nearest neighbor,
    # counting the point itself
    min_points: int = DEFAULT_MIN_POINTS

    # Smallest component that still counts as a cluster
    min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE

    metric: str = METRIC_EUCLIDEAN
    self_edges: bool = DEFAULT_SELF_EDGES

    def __post_init__(self):
        self.metric = METRIC_ALIASES.get(self.metric, self.metric)

    def validate(self) -> 'HDBSCANParameters':
        """
        Check parameter ranges.

        Returns:
            self, for chaining

        Raises:
            InvalidParameterError: If any parameter is out of range
        """
        if int(self.min_points) < 1:
            raise InvalidParameterError(
                f"min_points must be at least 1, got {self.min_points}"
            )
        if int(self.min_cluster_size) < 1:
            raise InvalidParameterError(
                f"min_cluster_size must be at least 1, got {self.min_cluster_size}"
            )
        if self.metric not in SUPPORTED_METRICS:
            raise InvalidParameterError(
                f"Unknown metric: {self.metric}. "
                f"Available: {SUPPORTED_METRICS}"
            )
        return self

    @classmethod
    def default(cls) -> 'HDBSCANParameters':
        """Create default parameters."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HDBSCANParameters':
        """Create parameters from a dictionary, ignoring unknown keys."""
        params = cls.default()
        for key, value in data.items():
            if hasattr(params, key):
                setattr(params, key, value)
        params.metric = METRIC_ALIASES.get(params.metric, params.metric)
        return params.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)
