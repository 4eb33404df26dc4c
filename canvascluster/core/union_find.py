"""Disjoint-set over hashable keys."""

from collections.abc import Hashable


class UnionFind:
    """Disjoint-set with path compression and union by rank."""

    def __init__(self):
        self.parent: dict[Hashable, Hashable] = {}
        self.rank: dict[Hashable, int] = {}

    def make_set(self, x: Hashable) -> None:
        if x not in self.parent:
            self.parent[x] = x
            self.rank[x] = 0

    def find(self, x: Hashable) -> Hashable:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # Path compression
        current = x
        while current != root:
            next_node = self.parent[current]
            self.parent[current] = root
            current = next_node

        return root

    def union(self, x: Hashable, y: Hashable) -> None:
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return

        rank_x = self.rank[root_x]
        rank_y = self.rank[root_y]

        if rank_x < rank_y:
            self.parent[root_x] = root_y
        elif rank_x > rank_y:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] = rank_x + 1

    def groups(self) -> list[list[Hashable]]:
        """
        Return the current sets.

        Sets are ordered by the insertion position of their earliest member,
        and members keep insertion order.
        """
        by_root: dict[Hashable, list[Hashable]] = {}
        for key in self.parent:
            by_root.setdefault(self.find(key), []).append(key)
        return list(by_root.values())
