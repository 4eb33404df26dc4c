"""
Grid bucketing with straggler absorption.

Nodes are dropped into square cells of ``grid_size`` canvas units. Cells with
two or more members seed clusters; a lone node in a neighbouring cell is
pulled into a seeding cell when an edge bridges the two, so shifting the
whole canvas across a cell boundary does not orphan it.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from canvascluster.core.models import EdgeInfo, NodePosition

CellKey = tuple[int, int]

# Cells need this many members to seed a cluster
MIN_CANDIDATE_SIZE = 2


@dataclass
class GridBuckets:
    """Cell membership for one engine call."""

    cells: dict[CellKey, list[str]] = field(default_factory=dict)
    node_to_cell: dict[str, CellKey] = field(default_factory=dict)
    candidate_cells: list[CellKey] = field(default_factory=list)
    _candidate_set: set[CellKey] = field(default_factory=set, repr=False)

    def is_candidate(self, key: CellKey) -> bool:
        return key in self._candidate_set

    def set_candidates(self, keys: Iterable[CellKey]) -> None:
        self.candidate_cells = list(keys)
        self._candidate_set = set(self.candidate_cells)


def cell_of(x: float, y: float, grid_size: float) -> CellKey:
    """Grid cell containing the point (x, y)."""
    return (math.floor(x / grid_size), math.floor(y / grid_size))


def are_adjacent(a: CellKey, b: CellKey) -> bool:
    """True if two cells are 8-connected neighbours (never a cell with itself)."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return dx <= 1 and dy <= 1 and not (dx == 0 and dy == 0)


def bucket_nodes(
    nodes: Sequence[NodePosition], edges: Sequence[EdgeInfo], grid_size: float
) -> GridBuckets:
    """
    Assign nodes to grid cells and absorb edge-bridged stragglers.

    Args:
        nodes: Canvas nodes, in caller order
        edges: Canvas edges; edges naming unknown nodes are ignored
        grid_size: Cell edge length, must be positive

    Returns:
        GridBuckets with cells in first-encounter order
    """
    buckets = GridBuckets()
    cells = buckets.cells
    node_to_cell = buckets.node_to_cell

    for node in nodes:
        key = cell_of(node.x, node.y, grid_size)
        if key not in cells:
            cells[key] = []
        cells[key].append(node.id)
        node_to_cell[node.id] = key

    buckets.set_candidates(key for key, ids in cells.items() if len(ids) >= MIN_CANDIDATE_SIZE)

    for edge in edges:
        cell_a = node_to_cell.get(edge.source)
        cell_b = node_to_cell.get(edge.target)
        if cell_a is None or cell_b is None or cell_a == cell_b:
            continue

        a_is_candidate = buckets.is_candidate(cell_a)
        b_is_candidate = buckets.is_candidate(cell_b)
        if a_is_candidate == b_is_candidate or not are_adjacent(cell_a, cell_b):
            continue

        if a_is_candidate:
            _absorb(buckets, into=cell_a, source=cell_b)
        else:
            _absorb(buckets, into=cell_b, source=cell_a)

    return buckets


def _absorb(buckets: GridBuckets, into: CellKey, source: CellKey) -> None:
    """Move every member of ``source`` into ``into`` and empty ``source``."""
    target_ids = buckets.cells[into]
    for node_id in buckets.cells[source]:
        buckets.node_to_cell[node_id] = into
        target_ids.append(node_id)
    buckets.cells[source] = []
