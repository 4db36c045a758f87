"""Exceptions raised by the segmentation engine."""

from __future__ import annotations


class SegmentationError(ValueError):
    """Base class for every failure reported by the segmenter."""


class InvalidInput(SegmentationError):
    """The sample grid is empty, jagged, or has an unsupported shape."""


class InvalidParameter(SegmentationError):
    """The scale parameter is not a finite positive number."""


class WeighterFailure(SegmentationError):
    """The edge weighter raised or produced an unusable weight."""


__all__ = [
    "SegmentationError",
    "InvalidInput",
    "InvalidParameter",
    "WeighterFailure",
]
