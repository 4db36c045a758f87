"""Core pipeline for graph-based color segmentation."""

from __future__ import annotations

import math
import numbers
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set

import numpy as np
import pandas as pd

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .distance import Weighter, euclidean_distance
from .edges import Edge, build_edges, expected_edge_count, sort_edges
from .errors import InvalidParameter
from .grid import Coordinate, Grid
from .structures import DisjointSetForest


@dataclass
class SegmentationStats:
    """Summary metrics for a segmentation run."""

    total_cells: int
    edge_count: int
    merges: int
    rejections_by_reason: Dict[str, int]
    skipped_same_segment: int
    segment_count: int
    runtime_seconds: float


@dataclass
class SegmenterConfig:
    """Configuration parameters for :class:GraphSegmenter."""

    scale: float = 300.0
    use_tqdm: bool | None = None
    verbose: bool = False
    track_history: bool = False


@dataclass
class SegmentationResult:
    """Result bundle returned by :class:GraphSegmenter.

    Segment identities are root cell indices. They are stable for this
    result only; a different run may pick different roots for the same
    partition, which is why :meth:`label_array` renumbers them.
    """

    grid: Grid
    forest: DisjointSetForest
    stats: SegmentationStats
    processed_edges: List[Edge] = field(default_factory=list)
    history: List[int] = field(default_factory=list)

    def representative_of(self, row: int, col: int) -> int:
        return self.forest.find(self.grid.index_of(row, col))

    def all_segments(self) -> Set[int]:
        return set(self.forest.roots())

    def segment_map(self) -> Dict[int, List[Coordinate]]:
        """Return every segment root mapped to its cells in row-major order."""

        members: Dict[int, List[Coordinate]] = defaultdict(list)
        for index in range(self.grid.size):
            members[self.forest.find(index)].append(self.grid.coordinate_of(index))
        return dict(members)

    def label_array(self) -> np.ndarray:
        """Return an ``H x W`` array of dense labels numbered by first appearance."""

        labels = np.empty(self.grid.shape, dtype=np.int64)
        root_to_label: Dict[int, int] = {}
        for index in range(self.grid.size):
            root = self.forest.find(index)
            label = root_to_label.setdefault(root, len(root_to_label))
            row, col = self.grid.coordinate_of(index)
            labels[row, col] = label
        return labels

    def to_dataframe(self) -> pd.DataFrame:
        labels = self.label_array()
        records = [
            {
                "row": cell.row,
                "col": cell.col,
                "segment_id": self.forest.find(self.grid.index_of(*cell.coordinate)),
                "label": int(labels[cell.coordinate]),
            }
            for cell in self.grid
        ]
        return pd.DataFrame.from_records(records, columns=["row", "col", "segment_id", "label"])

    def segment_summary(self) -> pd.DataFrame:
        """Return one row per segment with its size, cohesion and bounding box."""

        cells = self.to_dataframe()
        summary = (
            cells.groupby("label")
            .agg(
                segment_id=("segment_id", "first"),
                size=("row", "size"),
                min_row=("row", "min"),
                max_row=("row", "max"),
                min_col=("col", "min"),
                max_col=("col", "max"),
            )
            .reset_index()
        )
        summary["internal_difference"] = summary["segment_id"].map(self.forest.internal_difference_of)
        return summary[
            ["label", "segment_id", "size", "internal_difference", "min_row", "max_row", "min_col", "max_col"]
        ]


def validate_scale(scale: Any) -> float:
    if isinstance(scale, bool) or not isinstance(scale, numbers.Real):
        raise InvalidParameter(f"scale must be a real number, got {scale!r}")
    value = float(scale)
    if math.isnan(value) or math.isinf(value) or value <= 0:
        raise InvalidParameter(f"scale must be a finite positive number, got {scale!r}")
    return value


def merge_threshold(forest: DisjointSetForest, root_a: int, root_b: int, scale: float) -> float:
    """Return the smaller of the two segments' tolerances."""

    return min(forest.threshold(root_a, scale), forest.threshold(root_b, scale))


class GraphSegmenter:
    """Partition a grid into regions of similar color by greedy edge merging."""

    def __init__(self, config: SegmenterConfig | None = None, weighter: Weighter | None = None) -> None:
        self.config = config or SegmenterConfig()
        self.weighter = weighter or euclidean_distance

    def segment(self, grid: Grid) -> SegmentationResult:
        """Run the full merge loop over `grid` and return the resulting partition."""

        scale = validate_scale(self.config.scale)
        verbose = self.config.verbose
        overall_start_time = time.time()
        if verbose:
            print(f"--- Segmentation Started ({grid.height}x{grid.width} grid, scale={scale:g}) ---")

        t0 = time.time()
        if verbose:
            print("1. Building adjacency graph and edge weights...")
        edges = build_edges(grid, self.weighter)
        if verbose:
            expected = expected_edge_count(grid.height, grid.width)
            print(f"   Built {len(edges)} of {expected} expected edges. Done in {time.time() - t0:.2f}s")

        t0 = time.time()
        if verbose:
            print("2. Sorting edges by weight...")
        ordered = sort_edges(edges)
        if verbose:
            print(f"   Done in {time.time() - t0:.2f}s")

        t0 = time.time()
        if verbose:
            print("3. Merging segments...")
        forest = DisjointSetForest(grid.size)
        stats_counter: defaultdict[str, int] = defaultdict(int)
        history: List[int] = []

        iterator: Iterable[Edge] = ordered
        if ordered and self._use_tqdm:
            iterator = tqdm(ordered, desc="   Merging Edges", unit="edge")

        for edge in iterator:
            left = grid.index_of(*edge.first)
            right = grid.index_of(*edge.second)
            root_left = forest.find(left)
            root_right = forest.find(right)
            if root_left == root_right:
                stats_counter["skipped_same_segment"] += 1
            elif edge.weight < merge_threshold(forest, root_left, root_right, scale):
                forest.union(left, right, edge.weight)
                stats_counter["merged"] += 1
            else:
                stats_counter["rejected_threshold"] += 1
            if self.config.track_history:
                history.append(forest.root_count)

        if verbose:
            print(f"   Merge Stats: {dict(stats_counter)}")
            print(f"   Done in {time.time() - t0:.2f}s")

        elapsed = time.time() - overall_start_time
        stats = SegmentationStats(
            total_cells=grid.size,
            edge_count=len(ordered),
            merges=stats_counter["merged"],
            rejections_by_reason={k: v for k, v in stats_counter.items() if k.startswith("rejected")},
            skipped_same_segment=stats_counter["skipped_same_segment"],
            segment_count=forest.root_count,
            runtime_seconds=elapsed,
        )

        if verbose:
            print("\n--- Results Summary ---")
            print(f"   - Total cells processed: {stats.total_cells}")
            print(f"   - Segments found: {stats.segment_count}")
            print(f"\n--- Segmentation Finished in {elapsed:.2f} seconds ---")

        return SegmentationResult(
            grid=grid,
            forest=forest,
            stats=stats,
            processed_edges=ordered,
            history=history,
        )

    @property
    def _use_tqdm(self) -> bool:
        if self.config.use_tqdm is not None:
            return self.config.use_tqdm and _TQDM_AVAILABLE
        return _TQDM_AVAILABLE


def segment(
    samples: Grid | Sequence[Sequence[Any]] | np.ndarray,
    scale: float,
    weighter: Weighter | None = None,
) -> SegmentationResult:
    """Segment `samples` with scale `scale` using default settings otherwise."""

    scale = validate_scale(scale)
    if isinstance(samples, Grid):
        grid = samples
    elif isinstance(samples, np.ndarray):
        grid = Grid.from_array(samples)
    else:
        grid = Grid.from_rows(samples)
    config = SegmenterConfig(scale=scale, use_tqdm=False)
    return GraphSegmenter(config, weighter).segment(grid)


__all__ = [
    "GraphSegmenter",
    "SegmentationResult",
    "SegmentationStats",
    "SegmenterConfig",
    "merge_threshold",
    "segment",
    "validate_scale",
]
