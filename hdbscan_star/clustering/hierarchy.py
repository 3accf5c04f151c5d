"""Cluster splitting and the hierarchy construction driver."""

from collections import deque
from dataclasses import dataclass
from typing import Optional, Sequence, Set

import numpy as np

from ..config.constants import FIRST_CHILD_LABEL, NOISE_LABEL, ROOT_LABEL
from ..core.graph import UndirectedGraph
from ..utils.logging import get_logger
from ..utils.validation import validate_min_cluster_size
from .cluster import Cluster, ClusterTree
from .constraints import Constraint, calculate_num_constraints_satisfied, validate_constraints

logger = get_logger(__name__)


@dataclass
class HierarchyResult:
    """Outcome of walking the MST from the heaviest edge down."""
    tree: ClusterTree
    point_noise_levels: np.ndarray
    point_last_clusters: np.ndarray


def create_new_cluster(tree: ClusterTree,
                       points: Set[int],
                       cluster_labels: np.ndarray,
                       parent_label: int,
                       cluster_label: int,
                       edge_weight: float) -> Optional[Cluster]:
    """
    Remove a set of points from their parent cluster and, unless the new
    label is noise, create a cluster for them.

    Args:
        tree: Cluster tree that owns the parent
        points: Points leaving the parent
        cluster_labels: Label of every point, updated in place
        parent_label: Label of the cluster the points leave
        cluster_label: Label for the points (0 for noise)
        edge_weight: Level at which the points leave

    Returns:
        The new Cluster, or None if the points became noise
    """
    cluster_labels[list(points)] = cluster_label
    tree.detach_points(parent_label, len(points), edge_weight)

    if cluster_label != NOISE_LABEL:
        return tree.create_cluster(cluster_label, parent_label, edge_weight, points)

    tree.add_points_to_virtual_child_cluster(parent_label, points)
    return None


def compute_hierarchy_and_cluster_tree(mst: UndirectedGraph,
                                       min_cluster_size: int,
                                       constraints: Optional[Sequence[Constraint]] = None) -> HierarchyResult:
    """
    Build the cluster tree by removing MST edges in decreasing weight order.

    All edges sharing the heaviest remaining weight are removed together.
    Each affected cluster is then re-explored from its affected vertices:
    if two or more components with at least min_cluster_size points remain,
    each becomes a new cluster; components that are too small, or have no
    edges left, fall to noise. Virtual child records are released at the
    end of every level. The graph's adjacency lists are consumed.

    Args:
        mst: Mutual reachability spanning tree
        min_cluster_size: Smallest component that counts as a cluster
        constraints: Optional must-link / cannot-link constraints

    Returns:
        HierarchyResult with the finished tree and, for every point, the
        level at which it became noise and its last cluster label
    """
    min_cluster_size = validate_min_cluster_size(min_cluster_size)
    num_points = mst.num_vertices
    constraints = validate_constraints(constraints, num_points)

    mst.sort_by_weight()

    tree = ClusterTree(num_points)
    cluster_labels = np.full(num_points, ROOT_LABEL, dtype=np.intp)
    point_noise_levels = np.zeros(num_points, dtype=np.float64)
    point_last_clusters = np.zeros(num_points, dtype=np.intp)

    calculate_num_constraints_satisfied({ROOT_LABEL}, tree, constraints, cluster_labels)

    next_cluster_label = FIRST_CHILD_LABEL
    edge_index = mst.num_edges - 1
    num_levels = 0

    while edge_index >= 0:
        current_edge_weight = float(mst.weights[edge_index])
        new_cluster_labels: Set[int] = set()
        affected_cluster_labels: Set[int] = set()
        affected_vertices: Set[int] = set()

        # Remove every edge tied at the current weight
        while edge_index >= 0 and mst.weights[edge_index] == current_edge_weight:
            first_vertex = int(mst.vertices_a[edge_index])
            second_vertex = int(mst.vertices_b[edge_index])
            edge_index -= 1
            mst.remove_edge(first_vertex, second_vertex)

            if cluster_labels[first_vertex] == NOISE_LABEL:
                continue

            affected_vertices.add(first_vertex)
            affected_vertices.add(second_vertex)
            affected_cluster_labels.add(int(cluster_labels[first_vertex]))

        if not affected_cluster_labels:
            continue
        num_levels += 1
        examined_cluster_labels = sorted(affected_cluster_labels)

        while affected_cluster_labels:
            examined_label = max(affected_cluster_labels)
            affected_cluster_labels.discard(examined_label)

            examined_vertices = {
                vertex for vertex in affected_vertices
                if cluster_labels[vertex] == examined_label
            }
            affected_vertices -= examined_vertices

            next_cluster_label = _split_cluster(
                tree, mst, examined_label, examined_vertices, cluster_labels,
                min_cluster_size, current_edge_weight, next_cluster_label,
                new_cluster_labels, point_noise_levels, point_last_clusters
            )

        calculate_num_constraints_satisfied(new_cluster_labels, tree, constraints, cluster_labels)

        # Only clusters examined at this level can have gained noise points
        for label in examined_cluster_labels:
            tree.release_virtual_child_cluster(label)

    logger.info(
        f"Built cluster tree with {len(tree)} clusters over {num_levels} levels "
        f"for {num_points} points"
    )
    return HierarchyResult(tree, point_noise_levels, point_last_clusters)


def _split_cluster(tree: ClusterTree,
                   mst: UndirectedGraph,
                   examined_label: int,
                   examined_vertices: Set[int],
                   cluster_labels: np.ndarray,
                   min_cluster_size: int,
                   edge_weight: float,
                   next_cluster_label: int,
                   new_cluster_labels: Set[int],
                   point_noise_levels: np.ndarray,
                   point_last_clusters: np.ndarray) -> int:
    """
    Explore the components around the affected vertices of one cluster.

    The first valid component is only explored in full if a second valid
    component turns up; otherwise only spurious components are explored,
    to label them noise. Returns the next unused cluster label.
    """
    first_child_cluster: Optional[Set[int]] = None
    unexplored_first_child_points: Optional[deque] = None
    num_child_clusters = 0

    while examined_vertices:
        constructing_sub_cluster: Set[int] = set()
        unexplored_sub_cluster_points: deque = deque()
        any_edges = False
        incremented_child_count = False

        root_vertex = max(examined_vertices)
        examined_vertices.discard(root_vertex)
        constructing_sub_cluster.add(root_vertex)
        unexplored_sub_cluster_points.append(root_vertex)

        while unexplored_sub_cluster_points:
            vertex_to_explore = unexplored_sub_cluster_points.popleft()
            for neighbor in mst.edge_list_for_vertex(vertex_to_explore):
                any_edges = True
                if neighbor not in constructing_sub_cluster:
                    constructing_sub_cluster.add(neighbor)
                    unexplored_sub_cluster_points.append(neighbor)
                    examined_vertices.discard(neighbor)

            if (not incremented_child_count
                    and len(constructing_sub_cluster) >= min_cluster_size
                    and any_edges):
                incremented_child_count = True
                num_child_clusters += 1

                # Park the first valid child until a second one shows up
                if first_child_cluster is None:
                    first_child_cluster = constructing_sub_cluster
                    unexplored_first_child_points = unexplored_sub_cluster_points
                    break

        is_valid = len(constructing_sub_cluster) >= min_cluster_size and any_edges

        if num_child_clusters >= 2 and is_valid:
            # Exploring from another vertex may reach the parked first child
            if max(first_child_cluster) in constructing_sub_cluster:
                num_child_clusters -= 1
            else:
                create_new_cluster(tree, constructing_sub_cluster, cluster_labels,
                                   examined_label, next_cluster_label, edge_weight)
                new_cluster_labels.add(next_cluster_label)
                next_cluster_label += 1

        elif not is_valid:
            create_new_cluster(tree, constructing_sub_cluster, cluster_labels,
                               examined_label, NOISE_LABEL, edge_weight)
            points = list(constructing_sub_cluster)
            point_noise_levels[points] = edge_weight
            point_last_clusters[points] = examined_label

    if (num_child_clusters >= 2
            and cluster_labels[min(first_child_cluster)] == examined_label):
        while unexplored_first_child_points:
            vertex_to_explore = unexplored_first_child_points.popleft()
            for neighbor in mst.edge_list_for_vertex(vertex_to_explore):
                if neighbor not in first_child_cluster:
                    first_child_cluster.add(neighbor)
                    unexplored_first_child_points.append(neighbor)

        create_new_cluster(tree, first_child_cluster, cluster_labels,
                           examined_label, next_cluster_label, edge_weight)
        new_cluster_labels.add(next_cluster_label)
        next_cluster_label += 1

    return next_cluster_label
