"""Text and sizing helpers for rendering clusters as bubbles."""

from canvascluster.core.models import Cluster

BASE_BUBBLE_SIZE = 56
MAX_BUBBLE_GROWTH = 24


def build_status_text(cluster: Cluster) -> str | None:
    """
    Build human-readable status text for a cluster bubble.

    - If the cluster contains task nodes: "X/Y done" where X = done count, Y = task count
    - Else if any statuses are present: "N status" for the most common status
    - Else: None
    """
    type_counts = cluster.summary.type_counts
    status_counts = cluster.summary.status_counts

    task_count = type_counts.get("task", 0)
    if task_count > 0:
        done_count = status_counts.get("done", 0)
        return f"{done_count}/{task_count} done"

    if not status_counts:
        return None

    top_status = ""
    top_count = 0
    for status, count in status_counts.items():
        if count > top_count:
            top_count = count
            top_status = status
    return f"{top_count} {top_status}"


def compute_bubble_size(node_count: int) -> int:
    """Bubble diameter in pixels: grows 2px per node, capped."""
    return BASE_BUBBLE_SIZE + min(node_count * 2, MAX_BUBBLE_GROWTH)
