"""Undirected weighted graph used to hold the mutual reachability MST."""

from typing import Iterator, List, Tuple

import numpy as np


class UndirectedGraph:
    """
    Edge list plus per-vertex adjacency lists.

    Edge i joins vertices_a[i] and vertices_b[i] with weight weights[i].
    A self-edge (a == b) appears once in its vertex's adjacency list.
    """

    def __init__(self,
                 num_vertices: int,
                 vertices_a,
                 vertices_b,
                 weights):
        self.num_vertices = int(num_vertices)
        self.vertices_a = np.asarray(vertices_a, dtype=np.intp)
        self.vertices_b = np.asarray(vertices_b, dtype=np.intp)
        self.weights = np.asarray(weights, dtype=np.float64)

        if not (len(self.vertices_a) == len(self.vertices_b) == len(self.weights)):
            raise ValueError("Edge arrays must have the same length")

        self._adjacency: List[List[int]] = [[] for _ in range(self.num_vertices)]
        for a, b in zip(self.vertices_a.tolist(), self.vertices_b.tolist()):
            self._adjacency[a].append(b)
            if a != b:
                self._adjacency[b].append(a)

    @property
    def num_edges(self) -> int:
        return len(self.weights)

    def __len__(self) -> int:
        return self.num_edges

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        for a, b, weight in zip(self.vertices_a.tolist(),
                                self.vertices_b.tolist(),
                                self.weights.tolist()):
            yield a, b, weight

    def sort_by_weight(self) -> None:
        """Reorder the edge arrays by ascending weight (stable)."""
        order = np.argsort(self.weights, kind='stable')
        self.vertices_a = self.vertices_a[order]
        self.vertices_b = self.vertices_b[order]
        self.weights = self.weights[order]

    def remove_edge(self, vertex_one: int, vertex_two: int) -> None:
        """Remove one adjacency entry between two vertices."""
        _discard(self._adjacency[vertex_one], vertex_two)
        if vertex_one != vertex_two:
            _discard(self._adjacency[vertex_two], vertex_one)

    def edge_list_for_vertex(self, vertex: int) -> List[int]:
        """Current neighbors of a vertex (itself if it still has a self-edge)."""
        return self._adjacency[vertex]

    def self_edge_count(self) -> int:
        return int(np.sum(self.vertices_a == self.vertices_b))


def _discard(neighbors: List[int], vertex: int) -> None:
    if vertex in neighbors:
        neighbors.remove(vertex)
