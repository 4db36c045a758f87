"""Display colors for finished segmentations."""

from __future__ import annotations

from typing import Dict

import numpy as np

from .pipeline import SegmentationResult


def colorize(
    result: SegmentationResult,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> np.ndarray:
    """Return an ``H x W x 3`` uint8 image painting each segment one random color.

    Pass `seed` (or a ready `rng`) for repeatable colors; the partition
    itself never depends on it.
    """

    generator = rng if rng is not None else np.random.default_rng(seed)
    height, width = result.grid.shape
    image = np.zeros((height, width, 3), dtype=np.uint8)

    palette: Dict[int, np.ndarray] = {}
    for cell in result.grid:
        root = result.representative_of(*cell.coordinate)
        color = palette.get(root)
        if color is None:
            color = generator.integers(0, 256, size=3, dtype=np.uint8)
            palette[root] = color
        image[cell.coordinate] = color
    return image


__all__ = ["colorize"]
