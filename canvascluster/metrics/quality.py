"""Quality diagnostics for a canvas clustering."""

from collections.abc import Mapping, Sequence

import numpy as np
from sklearn.metrics import silhouette_score

from canvascluster.core.constraints import DEFAULT_MAX_CLUSTERS, DEFAULT_MIN_CLUSTERS
from canvascluster.core.models import Cluster, NodePosition
from canvascluster.utils.logging_utils import get_logger

logger = get_logger(__name__)


class QualityCalculator:
    """Calculates spatial quality metrics for clusters."""

    def __init__(
        self,
        min_clusters: int = DEFAULT_MIN_CLUSTERS,
        max_clusters: int = DEFAULT_MAX_CLUSTERS,
    ):
        self.min_clusters = min_clusters
        self.max_clusters = max_clusters
        self.logger = get_logger(self.__class__.__name__)

    def _positions(
        self, node_ids: Sequence[str], nodes_by_id: Mapping[str, NodePosition]
    ) -> np.ndarray:
        return np.array([[nodes_by_id[n].x, nodes_by_id[n].y] for n in node_ids], dtype=float)

    def compactness(self, cluster: Cluster, nodes_by_id: Mapping[str, NodePosition]) -> float:
        """
        Mean Euclidean distance from members to the cluster centroid.

        Lower is tighter. 0.0 for a cluster whose members share one position.
        """
        points = self._positions(cluster.node_ids, nodes_by_id)
        center = np.array([cluster.centroid.x, cluster.centroid.y])
        dists = np.sqrt(np.sum((points - center) ** 2, axis=1))
        return float(np.mean(dists))

    def bounds_area(self, cluster: Cluster) -> float:
        """Area of the cluster's bounding box."""
        return float(cluster.bounds.width * cluster.bounds.height)

    def silhouette(
        self, clusters: Sequence[Cluster], nodes_by_id: Mapping[str, NodePosition]
    ) -> float:
        """
        Silhouette score of the clustering over member positions.

        Range: [-1, 1], higher means better separated clusters. Returns 0.0
        when the score is undefined (fewer than two clusters, or no more
        samples than clusters).
        """
        node_ids = []
        labels = []
        for label, cluster in enumerate(clusters):
            node_ids.extend(cluster.node_ids)
            labels.extend([label] * len(cluster.node_ids))

        n_labels = len(set(labels))
        if n_labels < 2 or len(node_ids) <= n_labels:
            return 0.0

        features = self._positions(node_ids, nodes_by_id)
        score = silhouette_score(features, labels)
        self.logger.debug(f"Silhouette score: {score:.4f}")
        return float(score)

    def evaluate(
        self, clusters: Sequence[Cluster], nodes: Sequence[NodePosition]
    ) -> dict[str, float | int | bool]:
        """
        Summarize a clustering.

        Args:
            clusters: Engine output
            nodes: Nodes the clustering was computed from

        Returns:
            Dictionary of metric names to values
        """
        nodes_by_id = {node.id: node for node in nodes}
        clustered = sum(len(cluster.node_ids) for cluster in clusters)
        compactness = [self.compactness(cluster, nodes_by_id) for cluster in clusters]

        report = {
            "num_clusters": len(clusters),
            "clustered_nodes": clustered,
            "unclustered_nodes": len(nodes) - clustered,
            "mean_compactness": float(np.mean(compactness)) if compactness else 0.0,
            "max_compactness": float(np.max(compactness)) if compactness else 0.0,
            "silhouette": self.silhouette(clusters, nodes_by_id),
            "within_bounds": self.min_clusters <= len(clusters) <= self.max_clusters,
        }

        self.logger.info(
            f"{report['num_clusters']} clusters covering {clustered}/{len(nodes)} nodes "
            f"(silhouette={report['silhouette']:.3f})"
        )
        return report
