"""Edge-informed merge of neighbouring candidate cells."""

from collections.abc import Sequence

from canvascluster.core.grid import GridBuckets, are_adjacent
from canvascluster.core.models import EdgeInfo
from canvascluster.core.union_find import UnionFind


def merge_cells(buckets: GridBuckets, edges: Sequence[EdgeInfo]) -> list[list[str]]:
    """
    Merge candidate cells that are neighbours and share at least one edge.

    Cells that are not 8-connected are never merged, however many edges run
    between them.

    Args:
        buckets: Output of grid bucketing
        edges: Canvas edges

    Returns:
        Node id lists, one per merged group, in first-encounter order
    """
    uf = UnionFind()
    for key in buckets.candidate_cells:
        uf.make_set(key)

    node_to_cell = buckets.node_to_cell
    for edge in edges:
        cell_a = node_to_cell.get(edge.source)
        cell_b = node_to_cell.get(edge.target)
        if (
            cell_a is not None
            and cell_b is not None
            and cell_a != cell_b
            and buckets.is_candidate(cell_a)
            and buckets.is_candidate(cell_b)
            and are_adjacent(cell_a, cell_b)
        ):
            uf.union(cell_a, cell_b)

    groups = []
    for cell_keys in uf.groups():
        node_ids: list[str] = []
        for key in cell_keys:
            node_ids.extend(buckets.cells[key])
        groups.append(node_ids)
    return groups
