import argparse
import json
import sys
from pathlib import Path

from canvascluster import __version__
from canvascluster.config import CanvasClusterConfig, load_config
from canvascluster.core.cluster_engine import ClusterEngine
from canvascluster.exceptions import CanvasClusterError
from canvascluster.io import load_workspace, write_clusters
from canvascluster.utils.logging_utils import get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="canvascluster: summarize a canvas workspace as far-zoom clusters"
    )
    parser.add_argument("--version", action="version", version=f"canvascluster {__version__}")

    parser.add_argument(
        "--workspace", required=True, help="Path to the workspace file (JSON or YAML)"
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument("--grid-size", type=float, help="Grid cell size in canvas units")
    parser.add_argument("--min-clusters", type=int, help="Lower bound on cluster count")
    parser.add_argument("--max-clusters", type=int, help="Upper bound on cluster count")
    parser.add_argument("--output", help="Write JSON results to this file instead of stdout")
    parser.add_argument(
        "--report", action="store_true", help="Include quality metrics in the output"
    )
    parser.add_argument("--plot", metavar="FILE", help="Save a cluster plot image to FILE")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging (DEBUG level)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else CanvasClusterConfig()
    except (FileNotFoundError, ValueError) as e:
        setup_logger("canvascluster", level="INFO")
        logger.error(str(e))
        return 1

    # Logs go to stderr so they don't corrupt JSON on stdout
    log_level = "DEBUG" if args.verbose else config.logging.level
    setup_logger(
        "canvascluster",
        level=log_level,
        log_file=config.logging.file,
        format_string=config.logging.format,
        stream=sys.stderr,
    )

    # Construct config overrides
    engine_overrides = {}
    if args.grid_size is not None:
        engine_overrides["grid_size"] = args.grid_size
    if args.min_clusters is not None:
        engine_overrides["min_clusters"] = args.min_clusters
    if args.max_clusters is not None:
        engine_overrides["max_clusters"] = args.max_clusters

    engine_config = {**config.engine.model_dump(), **engine_overrides}

    try:
        engine = ClusterEngine(config={"engine": engine_config})
        nodes, edges = load_workspace(args.workspace)
    except CanvasClusterError as e:
        logger.error(str(e))
        return 1

    clusters = engine.compute(nodes, edges)
    logger.info(f"{len(clusters)} clusters from {len(nodes)} nodes and {len(edges)} edges")

    extra = {}
    if config.output.include_unclustered:
        extra["unclustered"] = engine.unclustered_node_ids(nodes, clusters)

    if args.report:
        from canvascluster.metrics import QualityCalculator

        calculator = QualityCalculator(engine.min_clusters, engine.max_clusters)
        extra["report"] = calculator.evaluate(clusters, nodes)

    if args.plot:
        from canvascluster.core.graph_builder import GraphBuilder

        GraphBuilder().visualize_clusters(nodes, clusters, args.plot, title=Path(args.workspace).name)

    if args.output:
        try:
            write_clusters(clusters, args.output, indent=config.output.indent, extra=extra)
        except CanvasClusterError as e:
            logger.error(str(e))
            return 1
    else:
        payload = {"clusters": [cluster.to_dict() for cluster in clusters], **extra}
        print(json.dumps(payload, indent=config.output.indent))

    return 0


if __name__ == "__main__":
    sys.exit(main())
