"""Color distance used as the default edge weighter."""

from __future__ import annotations

from typing import Any, Callable

import numpy as np


Weighter = Callable[[Any, Any], float]


def euclidean_distance(sample_a: Any, sample_b: Any) -> float:
    """Return the Euclidean distance between two color samples.

    Scalars are treated as single-channel samples, so grayscale grids work
    without conversion.
    """

    first = np.atleast_1d(np.asarray(sample_a, dtype=np.float64))
    second = np.atleast_1d(np.asarray(sample_b, dtype=np.float64))
    if first.shape != second.shape:
        raise ValueError(f"samples have different channel counts: {first.shape} vs {second.shape}")
    return float(np.linalg.norm(first - second))


__all__ = ["Weighter", "euclidean_distance"]
