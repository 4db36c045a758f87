"""Pixel Segmenter library initialization."""

from .coloring import colorize
from .distance import euclidean_distance
from .edges import Edge, build_edges, iter_adjacent_pairs, sort_edges
from .errors import InvalidInput, InvalidParameter, SegmentationError, WeighterFailure
from .grid import Cell, Grid
from .pipeline import GraphSegmenter, SegmentationResult, SegmentationStats, SegmenterConfig, segment
from .runner import segment_file
from .structures import DisjointSetForest

__all__ = [
    "Cell",
    "DisjointSetForest",
    "Edge",
    "GraphSegmenter",
    "Grid",
    "InvalidInput",
    "InvalidParameter",
    "SegmentationError",
    "SegmentationResult",
    "SegmentationStats",
    "SegmenterConfig",
    "WeighterFailure",
    "build_edges",
    "colorize",
    "euclidean_distance",
    "iter_adjacent_pairs",
    "segment",
    "segment_file",
    "sort_edges",
]
