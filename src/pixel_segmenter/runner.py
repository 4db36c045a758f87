"""Convenience helpers for running the segmenter end-to-end on image files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
from PIL import Image, UnidentifiedImageError

from .coloring import colorize
from .errors import SegmentationError
from .grid import Grid
from .pipeline import GraphSegmenter, SegmentationResult, SegmenterConfig


def segment_file(
    input_path: str | Path,
    output_path: str | Path,
    config: Optional[SegmenterConfig] = None,
    seed: int | None = None,
    summary_path: str | Path | None = None,
) -> SegmentationResult | None:
    """Segment the image at `input_path` and write a colored segment map."""

    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        pixels = load_image(input_path)
    except FileNotFoundError:
        print(f"ERROR: Input file not found at '{input_path}'.")
        return None
    except UnidentifiedImageError:
        print(f"ERROR: Unsupported image format for '{input_path}'.")
        return None

    config = config or SegmenterConfig()
    segmenter = GraphSegmenter(config)
    try:
        result = segmenter.segment(Grid.from_array(pixels))
    except SegmentationError as exc:
        print(f"ERROR: {exc}")
        return None

    save_image(colorize(result, seed=seed), output_path)
    if config.verbose:
        print(f"   Segment map saved to '{output_path}'")

    if summary_path is not None:
        try:
            save_dataframe(result.segment_summary(), summary_path)
        except ValueError as exc:
            print(f"ERROR: {exc}")
            return None
        if config.verbose:
            print(f"   Segment summary saved to '{summary_path}'")

    return result


def load_image(path: Path) -> np.ndarray:
    with Image.open(path) as image:
        return np.asarray(image.convert("RGB"))


def save_image(pixels: np.ndarray, path: str | Path) -> None:
    Image.fromarray(pixels).save(Path(path))


def save_dataframe(dataframe: pd.DataFrame, output_path: str | Path) -> None:
    path = Path(output_path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        dataframe.to_csv(path, index=False)
        return
    if suffix in {".xls", ".xlsx"}:
        dataframe.to_excel(path, index=False)
        return
    raise ValueError(f"Unsupported output file format: '{suffix}'")
