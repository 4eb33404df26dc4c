"""Tests for workspace loading and cluster output."""

import json
from pathlib import Path

import pytest

from canvascluster.core.cluster_engine import compute_clusters
from canvascluster.core.models import Cluster, EdgeInfo, NodePosition
from canvascluster.exceptions import FileOperationError, InputValidationError
from canvascluster.io import load_workspace, parse_workspace, write_clusters

CANVAS_DOCUMENT = {
    "nodes": [
        {"id": "n1", "type": "task", "position": {"x": 10, "y": 10}, "data": {"status": "done"}},
        {"id": "n2", "type": "custom", "position": {"x": 50, "y": 50}, "data": {"type": "note"}},
        {"id": "n3", "x": 450, "y": 10},
    ],
    "edges": [{"id": "e1", "source": "n2", "target": "n3"}],
}


class TestParseWorkspace:
    def test_canvas_document(self):
        nodes, edges = parse_workspace(CANVAS_DOCUMENT)

        assert nodes == [
            NodePosition("n1", 10.0, 10.0, "task", "done"),
            NodePosition("n2", 50.0, 50.0, "note"),
            NodePosition("n3", 450.0, 10.0, "text"),
        ]
        assert edges == [EdgeInfo("n2", "n3")]

    def test_missing_edges_key(self):
        nodes, edges = parse_workspace({"nodes": [{"id": "a", "x": 0, "y": 0}]})

        assert len(nodes) == 1
        assert edges == []

    def test_node_without_id(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": [{"x": 0, "y": 0}]})
        assert "index 0" in str(exc_info.value)

    def test_node_without_position(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": [{"id": "a", "position": {"x": 1}}]})
        assert "'a'" in str(exc_info.value)

    def test_edge_without_target(self):
        with pytest.raises(InputValidationError):
            parse_workspace({"nodes": [], "edges": [{"source": "a"}]})

    def test_non_mapping_document(self):
        with pytest.raises(InputValidationError):
            parse_workspace(["not", "a", "workspace"])

    @pytest.mark.parametrize(
        "node",
        [
            {"id": "a", "x": "inf", "y": 0},
            {"id": "a", "x": 0, "y": float("-inf")},
            {"id": "a", "position": {"x": float("nan"), "y": 0}},
        ],
    )
    def test_non_finite_coordinates(self, node):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": [node, {"id": "b", "x": 0, "y": 0}]})
        assert "non-finite" in str(exc_info.value)

    def test_duplicate_node_ids(self):
        document = {"nodes": [{"id": "a", "x": 0, "y": 0}, {"id": "a", "x": 10, "y": 10}]}

        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace(document)
        assert "Duplicate node id 'a'" in str(exc_info.value)

    def test_duplicate_ids_after_string_conversion(self):
        document = {"nodes": [{"id": 1, "x": 0, "y": 0}, {"id": "1", "x": 10, "y": 10}]}

        with pytest.raises(InputValidationError):
            parse_workspace(document)

    def test_string_node_entry(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": ["id-not-a-node"]})
        assert "index 0" in str(exc_info.value)

    def test_string_edge_entry(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": [], "edges": ["source-target"]})
        assert "Edge at index 0" in str(exc_info.value)

    def test_string_data_value(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_workspace({"nodes": [{"id": "a", "x": 0, "y": 0, "data": "note"}]})
        assert "data" in str(exc_info.value)

    def test_nodes_not_a_list(self):
        with pytest.raises(InputValidationError):
            parse_workspace({"nodes": 5})


class TestLoadWorkspace:
    def test_load_json(self, tmp_path: Path):
        workspace = tmp_path / "workspace.json"
        workspace.write_text(json.dumps(CANVAS_DOCUMENT))

        nodes, edges = load_workspace(workspace)

        assert [n.id for n in nodes] == ["n1", "n2", "n3"]
        assert len(edges) == 1

    def test_load_yaml(self, tmp_path: Path):
        workspace = tmp_path / "workspace.yaml"
        workspace.write_text("""
nodes:
  - id: a
    x: 0
    y: 0
    type: note
  - id: b
    x: 20
    y: 20
edges:
  - source: a
    target: b
""")

        nodes, edges = load_workspace(str(workspace))

        assert nodes[1] == NodePosition("b", 20.0, 20.0, "text")
        assert edges == [EdgeInfo("a", "b")]

    def test_empty_file(self, tmp_path: Path):
        workspace = tmp_path / "empty.yaml"
        workspace.write_text("")

        assert load_workspace(workspace) == ([], [])

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileOperationError):
            load_workspace(tmp_path / "nope.json")

    def test_json_nan_is_rejected(self, tmp_path: Path):
        workspace = tmp_path / "nan.json"
        workspace.write_text('{"nodes": [{"id": "a", "x": NaN, "y": 0}]}')

        with pytest.raises(InputValidationError):
            load_workspace(workspace)

    def test_yaml_infinity_is_rejected(self, tmp_path: Path):
        workspace = tmp_path / "inf.yaml"
        workspace.write_text("nodes:\n  - id: a\n    x: .inf\n    y: 0\n")

        with pytest.raises(InputValidationError):
            load_workspace(workspace)

    def test_invalid_json(self, tmp_path: Path):
        workspace = tmp_path / "broken.json"
        workspace.write_text("{nodes: ")

        with pytest.raises(FileOperationError) as exc_info:
            load_workspace(workspace)
        assert "Failed to read workspace" in str(exc_info.value)


class TestWriteClusters:
    def test_write_and_read_back(self, tmp_path: Path):
        nodes, edges = parse_workspace(CANVAS_DOCUMENT)
        clusters = compute_clusters(nodes, edges)

        path = write_clusters(clusters, tmp_path / "out" / "clusters.json", extra={"source": "test"})

        data = json.loads(path.read_text())
        assert data["source"] == "test"
        assert [Cluster.from_dict(c) for c in data["clusters"]] == clusters
        assert data["clusters"][0]["node_ids"] == ["n1", "n2", "n3"]
