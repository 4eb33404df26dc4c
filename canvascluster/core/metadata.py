"""Per-cluster metadata: centroid, bounds, type and status tables, stable ids."""

import math
from collections.abc import Mapping, Sequence

from canvascluster.core.models import Bounds, Cluster, ClusterSummary, NodePosition, Point


def describe_group(node_ids: Sequence[str], nodes_by_id: Mapping[str, NodePosition]) -> Cluster:
    """
    Compute centroid, bounds and frequency tables for one group.

    The returned cluster has an empty id; ``build_clusters`` assigns it.
    """
    sum_x = 0.0
    sum_y = 0.0
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    type_counts: dict[str, int] = {}
    status_counts: dict[str, int] = {}

    for node_id in node_ids:
        node = nodes_by_id[node_id]
        sum_x += node.x
        sum_y += node.y
        min_x = min(min_x, node.x)
        min_y = min(min_y, node.y)
        max_x = max(max_x, node.x)
        max_y = max(max_y, node.y)

        type_counts[node.type] = type_counts.get(node.type, 0) + 1
        if node.status:
            status_counts[node.status] = status_counts.get(node.status, 0) + 1

    # Earliest type wins ties
    dominant_type = ""
    max_type_count = 0
    for node_type, count in type_counts.items():
        if count > max_type_count:
            max_type_count = count
            dominant_type = node_type

    count = len(node_ids)
    return Cluster(
        id="",
        node_ids=list(node_ids),
        centroid=Point(sum_x / count, sum_y / count),
        bounds=Bounds(min_x, min_y, max_x, max_y),
        dominant_type=dominant_type,
        summary=ClusterSummary(
            node_count=count, type_counts=type_counts, status_counts=status_counts
        ),
    )


def cluster_id_for(centroid: Point, grid_size: float) -> str:
    """Coarse id from the grid cell holding the centroid."""
    gx = math.floor(centroid.x / grid_size)
    gy = math.floor(centroid.y / grid_size)
    return f"cluster-{gx}-{gy}"


def build_clusters(
    groups: Sequence[Sequence[str]], nodes_by_id: Mapping[str, NodePosition], grid_size: float
) -> list[Cluster]:
    """
    Turn final node groups into Cluster records.

    Ids collide when two centroids share a grid cell; later clusters then get
    their output index appended.
    """
    result: list[Cluster] = []
    seen_ids: set[str] = set()
    for index, node_ids in enumerate(groups):
        cluster = describe_group(node_ids, nodes_by_id)
        cluster_id = cluster_id_for(cluster.centroid, grid_size)
        if cluster_id in seen_ids:
            cluster_id = f"{cluster_id}-{index}"
        cluster.id = cluster_id
        seen_ids.add(cluster_id)
        result.append(cluster)
    return result
