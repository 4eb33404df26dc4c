"""Graph adapters between networkx canvases and the cluster engine."""

import json
from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.patches import Rectangle

from canvascluster.core.models import Cluster, EdgeInfo, NodePosition
from canvascluster.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_NODE_TYPE = "text"


class GraphBuilder:
    """Builds canvas and cluster-level graphs and exports them."""

    def __init__(self):
        """Initialize the graph builder."""
        self.logger = get_logger(self.__class__.__name__)

    def build_canvas_graph(
        self, nodes: Sequence[NodePosition], edges: Sequence[EdgeInfo]
    ) -> nx.Graph:
        """
        Build an undirected canvas graph.

        Nodes: canvas nodes with x, y, type and status attributes
        Edges: canvas edges whose endpoints both exist

        Args:
            nodes: Canvas nodes
            edges: Canvas edges

        Returns:
            NetworkX graph
        """
        G = nx.Graph()
        for node in nodes:
            G.add_node(node.id, x=node.x, y=node.y, type=node.type, status=node.status)

        skipped = 0
        for edge in edges:
            # add_edge would silently create missing endpoints
            if edge.source in G and edge.target in G:
                G.add_edge(edge.source, edge.target)
            else:
                skipped += 1

        if skipped:
            self.logger.debug(f"Skipped {skipped} edges with unknown endpoints")

        self.logger.info(f"Canvas graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges")
        return G

    def canvas_from_graph(self, G: nx.Graph) -> tuple[list[NodePosition], list[EdgeInfo]]:
        """
        Extract engine inputs from a graph.

        Positions come from ``x``/``y`` node attributes or a ``pos`` pair.
        Nodes with no position are skipped.

        Args:
            G: NetworkX graph

        Returns:
            Tuple of (nodes, edges) in graph iteration order
        """
        nodes = []
        for node_id, data in G.nodes(data=True):
            if "x" in data and "y" in data:
                x, y = data["x"], data["y"]
            elif "pos" in data:
                x, y = data["pos"]
            else:
                self.logger.warning(f"Node {node_id!r} has no position, skipping")
                continue

            nodes.append(
                NodePosition(
                    id=str(node_id),
                    x=float(x),
                    y=float(y),
                    type=data.get("type") or DEFAULT_NODE_TYPE,
                    status=data.get("status"),
                )
            )

        edges = [EdgeInfo(source=str(u), target=str(v)) for u, v in G.edges()]
        return nodes, edges

    def build_cluster_graph(
        self, clusters: Sequence[Cluster], edges: Sequence[EdgeInfo]
    ) -> nx.Graph:
        """
        Build a graph with one node per cluster.

        Edge weight counts the canvas edges running between two clusters.
        Edges inside a cluster or touching an unclustered node are ignored.

        Args:
            clusters: Engine output
            edges: Canvas edges

        Returns:
            NetworkX graph keyed by cluster id
        """
        G = nx.Graph()
        node_to_cluster: dict[str, str] = {}
        for cluster in clusters:
            G.add_node(
                cluster.id,
                node_count=cluster.summary.node_count,
                dominant_type=cluster.dominant_type,
                x=cluster.centroid.x,
                y=cluster.centroid.y,
            )
            for node_id in cluster.node_ids:
                node_to_cluster[node_id] = cluster.id

        for edge in edges:
            source = node_to_cluster.get(edge.source)
            target = node_to_cluster.get(edge.target)
            if source is None or target is None or source == target:
                continue
            if G.has_edge(source, target):
                G[source][target]["weight"] += 1
            else:
                G.add_edge(source, target, weight=1)

        self.logger.info(
            f"Cluster graph: {G.number_of_nodes()} clusters, {G.number_of_edges()} links"
        )
        return G

    def get_graph_metrics(self, G: nx.Graph) -> dict[str, float]:
        """
        Calculate basic graph metrics.

        Args:
            G: NetworkX graph

        Returns:
            Dictionary of metric names to values
        """
        metrics = {
            "num_nodes": G.number_of_nodes(),
            "num_edges": G.number_of_edges(),
            "density": nx.density(G) if G.number_of_nodes() > 1 else 0.0,
            "num_components": nx.number_connected_components(G),
        }

        if G.number_of_nodes() > 0:
            degrees = [d for n, d in G.degree()]
            metrics["avg_degree"] = sum(degrees) / len(degrees)

        return metrics

    def export_graph(self, G: nx.Graph, output_path: str, format: str = "graphml") -> Path:
        """
        Export graph to a file.

        Supported formats:
        - graphml: GraphML format (XML-based, preserves attributes)
        - gml: GML format
        - json: JSON node-link format
        - adjlist: Adjacency list format

        Args:
            G: NetworkX graph
            output_path: Output file path (extension will be added if missing)
            format: Export format

        Returns:
            Path written
        """
        output_path = Path(output_path)

        if not output_path.suffix:
            output_path = output_path.with_suffix(f".{format}")

        self.logger.info(f"Exporting graph to {format} format: {output_path}")

        # GraphML and GML reject None attribute values
        clean = G.copy()
        for _, data in clean.nodes(data=True):
            for key in [k for k, v in data.items() if v is None]:
                del data[key]

        if format == "graphml":
            nx.write_graphml(clean, str(output_path))
        elif format == "gml":
            nx.write_gml(clean, str(output_path))
        elif format == "json":
            from networkx.readwrite import json_graph

            data = json_graph.node_link_data(clean)
            with open(output_path, "w") as f:
                json.dump(data, f, indent=2)
        elif format == "adjlist":
            nx.write_adjlist(clean, str(output_path))
        else:
            raise ValueError(f"Unsupported format: {format}")

        self.logger.info(f"Graph exported successfully to {output_path}")
        return output_path

    def visualize_clusters(
        self,
        nodes: Sequence[NodePosition],
        clusters: Sequence[Cluster],
        output_file: str,
        title: str = "Canvas Clusters",
        figsize: tuple[int, int] = (12, 8),
    ) -> None:
        """
        Plot canvas nodes coloured by cluster with each cluster's bounds.

        Args:
            nodes: Canvas nodes
            clusters: Engine output for those nodes
            output_file: Image path to write
            title: Plot title
            figsize: Figure size
        """
        self.logger.info(f"Visualizing clusters: {title}")

        nodes_by_id = {node.id: node for node in nodes}
        clustered = {node_id for cluster in clusters for node_id in cluster.node_ids}

        fig, ax = plt.subplots(figsize=figsize)
        cmap = plt.get_cmap("tab10")

        loose = [node for node in nodes if node.id not in clustered]
        if loose:
            ax.scatter(
                [n.x for n in loose], [n.y for n in loose], c="lightgray", s=20, label="unclustered"
            )

        for i, cluster in enumerate(clusters):
            color = cmap(i % 10)
            members = [nodes_by_id[node_id] for node_id in cluster.node_ids]
            ax.scatter([n.x for n in members], [n.y for n in members], color=color, s=30)
            bounds = cluster.bounds
            ax.add_patch(
                Rectangle(
                    (bounds.min_x, bounds.min_y),
                    bounds.width,
                    bounds.height,
                    fill=False,
                    edgecolor=color,
                    linestyle="--",
                )
            )
            ax.annotate(
                f"{cluster.id} ({cluster.summary.node_count})",
                (cluster.centroid.x, cluster.centroid.y),
                fontsize=8,
                ha="center",
            )

        # Canvas y grows downwards
        ax.invert_yaxis()
        ax.set_title(title)
        if loose:
            ax.legend()
        fig.tight_layout()
        fig.savefig(output_file, dpi=150, bbox_inches="tight")
        plt.close(fig)

        self.logger.info(f"Cluster plot saved to {output_file}")
