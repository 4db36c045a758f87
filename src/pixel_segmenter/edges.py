"""Adjacency enumeration and weighted edge construction."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .distance import Weighter
from .errors import WeighterFailure
from .grid import Coordinate, Grid


# Forward half of the 8-neighbourhood; the other half is covered from the neighbour's side.
NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = ((1, 0), (0, 1), (1, 1), (1, -1))


@dataclass(frozen=True, order=True)
class Edge:
    """Weighted link between two adjacent cells.

    Ordering compares ``(weight, first, second)`` so edges that share a
    weight remain distinct and sort in a fixed order.
    """

    weight: float
    first: Coordinate
    second: Coordinate


def iter_adjacent_pairs(height: int, width: int) -> Iterator[Tuple[Coordinate, Coordinate]]:
    """Yield every 8-adjacent pair of an `height` x `width` grid exactly once."""

    for row in range(height):
        for col in range(width):
            for d_row, d_col in NEIGHBOR_OFFSETS:
                other_row = row + d_row
                other_col = col + d_col
                if 0 <= other_row < height and 0 <= other_col < width:
                    yield (row, col), (other_row, other_col)


def expected_edge_count(height: int, width: int) -> int:
    if height <= 0 or width <= 0:
        return 0
    return height * (width - 1) + width * (height - 1) + 2 * (height - 1) * (width - 1)


def checked_weight(weighter: Weighter, first: Coordinate, second: Coordinate, sample_a, sample_b) -> float:
    """Call `weighter` and reject anything that is not a finite non-negative real."""

    try:
        value = weighter(sample_a, sample_b)
    except Exception as exc:
        raise WeighterFailure(f"weighter failed for cells {first} and {second}: {exc}") from exc

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise WeighterFailure(
            f"weighter returned non-numeric value {value!r} for cells {first} and {second}"
        )
    weight = float(value)
    if math.isnan(weight) or math.isinf(weight):
        raise WeighterFailure(f"weighter returned {weight} for cells {first} and {second}")
    if weight < 0:
        raise WeighterFailure(f"weighter returned negative weight {weight} for cells {first} and {second}")
    return weight


def build_edges(grid: Grid, weighter: Weighter) -> List[Edge]:
    """Return the weighted edge for every adjacent pair of `grid`, in enumeration order."""

    edges: List[Edge] = []
    for first, second in iter_adjacent_pairs(grid.height, grid.width):
        weight = checked_weight(
            weighter,
            first,
            second,
            grid.sample(*first),
            grid.sample(*second),
        )
        edges.append(Edge(weight, first, second))
    return edges


def sort_edges(edges: Iterable[Edge]) -> List[Edge]:
    return sorted(edges)


__all__ = [
    "Edge",
    "NEIGHBOR_OFFSETS",
    "build_edges",
    "checked_weight",
    "expected_edge_count",
    "iter_adjacent_pairs",
    "sort_edges",
]
