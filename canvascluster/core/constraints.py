"""
Cluster count enforcement.

Brings the number of groups into ``[min_clusters, max_clusters]``: too many
groups are merged pairwise by nearest centroid, too few are grown by halving
the largest splittable group along its longer axis. Ties always resolve to the
first candidate in list order so results are reproducible.
"""

import math
from collections.abc import Mapping, Sequence

from canvascluster.core.models import NodePosition

DEFAULT_MIN_CLUSTERS = 4
DEFAULT_MAX_CLUSTERS = 8

# A split must leave at least this many nodes on each side
MIN_SPLIT_HALF = 2
MIN_SPLITTABLE_SIZE = 2 * MIN_SPLIT_HALF


def centroid_of(
    node_ids: Sequence[str], nodes_by_id: Mapping[str, NodePosition]
) -> tuple[float, float]:
    """Mean position of the given nodes."""
    sum_x = 0.0
    sum_y = 0.0
    for node_id in node_ids:
        node = nodes_by_id[node_id]
        sum_x += node.x
        sum_y += node.y
    return sum_x / len(node_ids), sum_y / len(node_ids)


def merge_closest(
    groups: list[list[str]], nodes_by_id: Mapping[str, NodePosition], max_clusters: int
) -> list[list[str]]:
    """Merge the nearest pair of groups until at most ``max_clusters`` remain."""
    while len(groups) > max_clusters:
        centroids = [centroid_of(group, nodes_by_id) for group in groups]

        min_dist = math.inf
        merge_i, merge_j = 0, 1
        for i in range(len(groups)):
            ax, ay = centroids[i]
            for j in range(i + 1, len(groups)):
                bx, by = centroids[j]
                dist = math.sqrt((ax - bx) ** 2 + (ay - by) ** 2)
                if dist < min_dist:
                    min_dist = dist
                    merge_i, merge_j = i, j

        groups[merge_i] = groups[merge_i] + groups[merge_j]
        del groups[merge_j]

    return groups


def split_largest(
    groups: list[list[str]], nodes_by_id: Mapping[str, NodePosition], min_clusters: int
) -> list[list[str]]:
    """
    Halve the largest splittable group until ``min_clusters`` groups exist.

    Stops early, leaving fewer groups, when no group has enough members to
    produce two halves of at least ``MIN_SPLIT_HALF`` nodes.
    """
    while len(groups) < min_clusters:
        largest_idx = -1
        largest_size = 0
        for i, group in enumerate(groups):
            if len(group) >= MIN_SPLITTABLE_SIZE and len(group) > largest_size:
                largest_size = len(group)
                largest_idx = i

        if largest_idx == -1:
            break

        members = groups[largest_idx]
        xs = [nodes_by_id[node_id].x for node_id in members]
        ys = [nodes_by_id[node_id].y for node_id in members]
        x_range = max(xs) - min(xs)
        y_range = max(ys) - min(ys)

        if x_range >= y_range:
            ordered = sorted(members, key=lambda node_id: nodes_by_id[node_id].x)
        else:
            ordered = sorted(members, key=lambda node_id: nodes_by_id[node_id].y)

        mid = len(ordered) // 2
        first_half = ordered[:mid]
        second_half = ordered[mid:]

        if len(first_half) < MIN_SPLIT_HALF or len(second_half) < MIN_SPLIT_HALF:
            break

        groups[largest_idx] = first_half
        groups.append(second_half)

    return groups


def enforce_cluster_bounds(
    groups: Sequence[Sequence[str]],
    nodes_by_id: Mapping[str, NodePosition],
    min_clusters: int = DEFAULT_MIN_CLUSTERS,
    max_clusters: int = DEFAULT_MAX_CLUSTERS,
) -> list[list[str]]:
    """
    Adjust groups so their count lies in ``[min_clusters, max_clusters]``.

    Args:
        groups: Pre-constraint node id lists (left untouched)
        nodes_by_id: Node lookup
        min_clusters: Target lower bound, best effort
        max_clusters: Hard upper bound

    Returns:
        New list of node id lists
    """
    adjusted = [list(group) for group in groups]
    adjusted = merge_closest(adjusted, nodes_by_id, max_clusters)
    return split_largest(adjusted, nodes_by_id, min_clusters)
