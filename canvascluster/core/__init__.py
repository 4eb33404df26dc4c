"""Core canvascluster modules."""

from canvascluster.core.bubble import build_status_text, compute_bubble_size
from canvascluster.core.cluster_engine import ClusterEngine, compute_clusters
from canvascluster.core.graph_builder import GraphBuilder
from canvascluster.core.models import (
    Bounds,
    Cluster,
    ClusterSummary,
    EdgeInfo,
    NodePosition,
    Point,
)
from canvascluster.core.union_find import UnionFind

__all__ = [
    "NodePosition",
    "EdgeInfo",
    "Cluster",
    "ClusterSummary",
    "Point",
    "Bounds",
    "UnionFind",
    "ClusterEngine",
    "compute_clusters",
    "GraphBuilder",
    "build_status_text",
    "compute_bubble_size",
]
