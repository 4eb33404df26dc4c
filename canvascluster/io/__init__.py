"""Workspace file input and cluster result output."""

from .workspace_loader import load_workspace, parse_workspace, write_clusters

__all__ = ["load_workspace", "parse_workspace", "write_clusters"]
