"""
Workspace document loading.

Reads canvas workspace files (JSON, or YAML for hand-written fixtures) and
projects their nodes and edges into engine inputs. Canvas nodes keep their
position under ``position: {x, y}`` and their kind under ``data.type``; flat
``x``/``y``/``type`` keys are accepted as well.
"""

import json
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from canvascluster.core.models import Cluster, EdgeInfo, NodePosition
from canvascluster.exceptions import FileOperationError, InputValidationError
from canvascluster.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_NODE_TYPE = "text"
YAML_SUFFIXES = {".yaml", ".yml"}


def _node_from_document(raw: Any, index: int) -> NodePosition:
    if not isinstance(raw, dict):
        raise InputValidationError(f"Node at index {index} must be a mapping")
    if "id" not in raw:
        raise InputValidationError(f"Node at index {index} has no id")

    position = raw.get("position") or raw
    try:
        x = float(position["x"])
        y = float(position["y"])
    except (KeyError, TypeError, ValueError):
        raise InputValidationError(f"Node {raw['id']!r} has no usable position")
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InputValidationError(f"Node {raw['id']!r} has non-finite coordinates ({x}, {y})")

    data = raw.get("data") or {}
    if not isinstance(data, dict):
        raise InputValidationError(f"Node {raw['id']!r} has non-mapping data")

    return NodePosition(
        id=str(raw["id"]),
        x=x,
        y=y,
        type=data.get("type") or raw.get("type") or DEFAULT_NODE_TYPE,
        status=data.get("status") or raw.get("status"),
    )


def parse_workspace(document: dict[str, Any]) -> tuple[list[NodePosition], list[EdgeInfo]]:
    """
    Project a workspace document into engine inputs.

    Args:
        document: Parsed workspace with ``nodes`` and optional ``edges`` lists

    Returns:
        Tuple of (nodes, edges) in document order

    Raises:
        InputValidationError: If a node lacks an id or finite coordinates, an
            id repeats, an edge lacks an endpoint, or an entry is not a mapping
    """
    if not isinstance(document, dict):
        raise InputValidationError("Workspace document must be a mapping")

    raw_nodes = document.get("nodes") or []
    raw_edges = document.get("edges") or []
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise InputValidationError("Workspace nodes and edges must be lists")

    nodes = []
    seen_ids = set()
    for i, raw in enumerate(raw_nodes):
        node = _node_from_document(raw, i)
        if node.id in seen_ids:
            raise InputValidationError(f"Duplicate node id {node.id!r} at index {i}")
        seen_ids.add(node.id)
        nodes.append(node)

    edges = []
    for i, raw in enumerate(raw_edges):
        if not isinstance(raw, dict):
            raise InputValidationError(f"Edge at index {i} must be a mapping")
        if "source" not in raw or "target" not in raw:
            raise InputValidationError(f"Edge at index {i} needs both source and target")
        edges.append(EdgeInfo(source=str(raw["source"]), target=str(raw["target"])))

    logger.debug(f"Parsed workspace with {len(nodes)} nodes and {len(edges)} edges")
    return nodes, edges


def load_workspace(workspace_file: str | Path) -> tuple[list[NodePosition], list[EdgeInfo]]:
    """
    Load engine inputs from a workspace file.

    Raises:
        FileOperationError: If the file is missing or cannot be parsed
        InputValidationError: If the document is malformed
    """
    path = Path(workspace_file)
    if not path.exists():
        raise FileOperationError(f"Workspace file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise FileOperationError(f"Failed to read workspace {path}: {e}")

    if document is None:
        document = {}

    return parse_workspace(document)


def write_clusters(
    clusters: Sequence[Cluster],
    output_file: str | Path,
    indent: int = 2,
    extra: dict[str, Any] | None = None,
) -> Path:
    """
    Write clusters as JSON: ``{"clusters": [...], **extra}``.

    Raises:
        FileOperationError: If the file cannot be written
    """
    path = Path(output_file)
    payload: dict[str, Any] = {"clusters": [cluster.to_dict() for cluster in clusters]}
    if extra:
        payload.update(extra)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent)
    except OSError as e:
        raise FileOperationError(f"Failed to write clusters to {path}: {e}")

    logger.info(f"Wrote {len(clusters)} clusters to {path}")
    return path
