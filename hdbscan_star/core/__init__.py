"""Density estimation and spanning tree construction."""

from .core_distances import calculate_core_distances
from .graph import UndirectedGraph
from .mst import construct_mst

__all__ = [
    'calculate_core_distances',
    'UndirectedGraph',
    'construct_mst'
]
