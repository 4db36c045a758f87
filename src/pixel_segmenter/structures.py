"""Basic data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class DisjointSetForest:
    """Union-find forest over flat cell indices with per-segment statistics.

    Every list is indexed by cell index. ``sizes`` and
    ``internal_differences`` only hold meaningful values at roots; entries
    left behind on absorbed roots are stale and are never read.
    """

    cell_count: int

    def __post_init__(self) -> None:
        if self.cell_count < 0:
            raise ValueError("cell_count must be non-negative")
        self.parent: List[int] = list(range(self.cell_count))
        self.rank: List[int] = [0] * self.cell_count
        self.sizes: List[int] = [1] * self.cell_count
        self.internal_differences: List[float] = [0.0] * self.cell_count
        self.root_count = self.cell_count

    def find(self, index: int) -> int:
        root = index
        parent = self.parent
        while parent[root] != root:
            root = parent[root]
        while parent[index] != root:
            parent[index], index = root, parent[index]
        return root

    def union(self, left: int, right: int, weight: float) -> int:
        """Merge the segments of `left` and `right`, returning the surviving root.

        The survivor's internal difference becomes `weight`. Edges arrive in
        non-decreasing weight order, so `weight` is the largest edge inside
        the merged segment.
        """

        root_left = self.find(left)
        root_right = self.find(right)
        if root_left == root_right:
            return root_left

        if self.rank[root_left] < self.rank[root_right]:
            root_left, root_right = root_right, root_left
        elif self.rank[root_left] == self.rank[root_right]:
            self.rank[root_left] += 1

        self.parent[root_right] = root_left
        self.sizes[root_left] += self.sizes[root_right]
        self.internal_differences[root_left] = float(weight)
        self.root_count -= 1
        return root_left

    def is_root(self, index: int) -> bool:
        return self.parent[index] == index

    def segment_size(self, root: int) -> int:
        self._require_root(root)
        return self.sizes[root]

    def internal_difference_of(self, root: int) -> float:
        self._require_root(root)
        return self.internal_differences[root]

    def threshold(self, root: int, scale: float) -> float:
        """Return the tolerance a new edge must stay under to join `root`."""

        self._require_root(root)
        return self.internal_differences[root] + scale / self.sizes[root]

    def roots(self) -> List[int]:
        return [index for index in range(self.cell_count) if self.is_root(index)]

    def _require_root(self, index: int) -> None:
        if self.parent[index] != index:
            raise ValueError(f"cell {index} is not a segment root")
