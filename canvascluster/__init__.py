"""
canvascluster: far-zoom cluster summaries for node-graph canvases
"""

__version__ = "1.0.0"
__author__ = "canvascluster Team"

from canvascluster.core.cluster_engine import ClusterEngine, compute_clusters
from canvascluster.core.models import Cluster, EdgeInfo, NodePosition

__all__ = ["ClusterEngine", "compute_clusters", "Cluster", "EdgeInfo", "NodePosition"]
