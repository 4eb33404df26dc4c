"""
Spatial cluster engine for far-zoom canvas summaries.

Collapses positioned canvas nodes into a handful of summary clusters in four
passes:

1. Grid bucketing with straggler absorption
2. Edge-informed merge of neighbouring cells (union-find)
3. Cluster count enforcement (nearest-centroid merge / longest-axis split)
4. Metadata computation

Every call recomputes from scratch and leaves its inputs untouched.
"""

from collections.abc import Sequence

from canvascluster.core.cell_merger import merge_cells
from canvascluster.core.constraints import (
    DEFAULT_MAX_CLUSTERS,
    DEFAULT_MIN_CLUSTERS,
    enforce_cluster_bounds,
)
from canvascluster.core.grid import bucket_nodes
from canvascluster.core.metadata import build_clusters
from canvascluster.core.models import Cluster, EdgeInfo, NodePosition
from canvascluster.exceptions import ConfigurationError
from canvascluster.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_GRID_SIZE = 400.0


def validate_settings(grid_size: float, min_clusters: int, max_clusters: int) -> None:
    """
    Check engine settings.

    Raises:
        ConfigurationError: If grid_size is not positive, min_clusters is below
            1, or max_clusters is below min_clusters
    """
    if grid_size <= 0:
        raise ConfigurationError(f"grid_size must be positive, got: {grid_size}")
    if min_clusters < 1:
        raise ConfigurationError(f"min_clusters must be >= 1, got: {min_clusters}")
    if max_clusters < min_clusters:
        raise ConfigurationError(
            f"max_clusters ({max_clusters}) must be >= min_clusters ({min_clusters})"
        )


def compute_clusters(
    nodes: Sequence[NodePosition],
    edges: Sequence[EdgeInfo],
    grid_size: float = DEFAULT_GRID_SIZE,
    min_clusters: int = DEFAULT_MIN_CLUSTERS,
    max_clusters: int = DEFAULT_MAX_CLUSTERS,
) -> list[Cluster]:
    """
    Compute summary clusters for a canvas.

    Args:
        nodes: Canvas nodes with unique ids and finite coordinates
        edges: Canvas edges; dangling references are ignored
        grid_size: Grid cell edge length in canvas units
        min_clusters: Lower bound on cluster count, reached when a split allows
        max_clusters: Upper bound on cluster count

    Returns:
        Clusters in a deterministic order. Nodes alone in their cell and not
        absorbed by an edge are left out; with no cell holding two nodes the
        result is empty.

    Raises:
        ConfigurationError: If the grid size or cluster bounds are out of range
    """
    validate_settings(grid_size, min_clusters, max_clusters)

    if not nodes:
        return []

    nodes_by_id = {node.id: node for node in nodes}

    buckets = bucket_nodes(nodes, edges, grid_size)
    if not buckets.candidate_cells:
        logger.debug(f"No candidate cells among {len(nodes)} nodes")
        return []

    groups = merge_cells(buckets, edges)
    logger.debug(
        f"{len(buckets.candidate_cells)} candidate cells merged into {len(groups)} groups"
    )

    groups = enforce_cluster_bounds(groups, nodes_by_id, min_clusters, max_clusters)
    clusters = build_clusters(groups, nodes_by_id, grid_size)

    logger.debug(f"Computed {len(clusters)} clusters from {len(nodes)} nodes")
    return clusters


class ClusterEngine:
    """Cluster engine bound to a fixed set of settings."""

    def __init__(
        self,
        grid_size: float | None = None,
        min_clusters: int | None = None,
        max_clusters: int | None = None,
        config: dict | None = None,
    ):
        """
        Initialize the engine.

        Explicit arguments win over the ``engine`` section of ``config``,
        which wins over the built-in defaults.

        Args:
            grid_size: Grid cell edge length
            min_clusters: Lower bound on cluster count
            max_clusters: Upper bound on cluster count
            config: Full configuration dictionary

        Raises:
            ConfigurationError: If the settings are out of range
        """
        self.config = config or {}
        engine_config = self.config.get("engine", {})

        self.grid_size = (
            grid_size if grid_size is not None else engine_config.get("grid_size", DEFAULT_GRID_SIZE)
        )
        self.min_clusters = (
            min_clusters
            if min_clusters is not None
            else engine_config.get("min_clusters", DEFAULT_MIN_CLUSTERS)
        )
        self.max_clusters = (
            max_clusters
            if max_clusters is not None
            else engine_config.get("max_clusters", DEFAULT_MAX_CLUSTERS)
        )
        self.logger = get_logger(self.__class__.__name__)

        validate_settings(self.grid_size, self.min_clusters, self.max_clusters)

        self.logger.debug(
            f"Initialized cluster engine (grid_size={self.grid_size}, "
            f"bounds=[{self.min_clusters}, {self.max_clusters}])"
        )

    def compute(self, nodes: Sequence[NodePosition], edges: Sequence[EdgeInfo]) -> list[Cluster]:
        """Compute clusters with this engine's settings."""
        return compute_clusters(
            nodes,
            edges,
            grid_size=self.grid_size,
            min_clusters=self.min_clusters,
            max_clusters=self.max_clusters,
        )

    def unclustered_node_ids(
        self, nodes: Sequence[NodePosition], clusters: Sequence[Cluster]
    ) -> list[str]:
        """Ids of nodes that no cluster covers, in input order."""
        covered = {node_id for cluster in clusters for node_id in cluster.node_ids}
        return [node.id for node in nodes if node.id not in covered]
