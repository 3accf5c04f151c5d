"""Bottom-up propagation over the cluster tree."""

import heapq
import math
from typing import List

import numpy as np

from ..errors import InconsistentStateError
from ..utils.logging import get_logger
from .cluster import ClusterTree

logger = get_logger(__name__)


class _ExaminationQueue:
    """Clusters waiting to propagate, highest label first."""

    def __init__(self):
        self._heap: List[int] = []
        self._queued = set()

    def __len__(self) -> int:
        return len(self._heap)

    def put(self, label: int) -> None:
        # Re-inserting a queued label leaves a single entry
        if label not in self._queued:
            self._queued.add(label)
            heapq.heappush(self._heap, -label)

    def pop_last(self) -> int:
        label = -heapq.heappop(self._heap)
        self._queued.discard(label)
        return label


def propagate_tree(tree: ClusterTree) -> bool:
    """
    Propagate constraint satisfaction, stability and lowest child death
    level from every cluster to its parent.

    Leaves seed the queue; a parent is queued the first time one of its
    children is processed. Children always carry higher labels than their
    parent, so popping the highest label first processes every child
    before its parent. Must be called once, after the hierarchy is built
    and before cluster selection or outlier scoring.

    Args:
        tree: A finalized cluster tree

    Returns:
        True if any cluster has infinite stability

    Raises:
        InconsistentStateError: If the tree still holds points or was
            already propagated
    """
    if tree.propagated:
        raise InconsistentStateError("Cluster tree has already been propagated")
    if not tree.is_finalized():
        raise InconsistentStateError(
            "Cluster tree still holds points; finish splitting before propagating"
        )

    clusters_to_examine = _ExaminationQueue()
    added_to_examination_list = np.zeros(tree.max_label + 1, dtype=bool)
    infinite_stability = False

    for cluster in tree.leaves():
        clusters_to_examine.put(cluster.label)
        added_to_examination_list[cluster.label] = True

    visited = 0
    while clusters_to_examine:
        label = clusters_to_examine.pop_last()
        tree.propagate(label)
        visited += 1

        current = tree[label]
        if math.isinf(current.stability):
            infinite_stability = True

        parent = current.parent
        if parent is not None and not added_to_examination_list[parent]:
            clusters_to_examine.put(parent)
            added_to_examination_list[parent] = True

    tree.propagated = True
    logger.debug(f"Propagated {visited} clusters, infinite stability: {infinite_stability}")
    return infinite_stability
