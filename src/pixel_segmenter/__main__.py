"""Command line entry point for the pixel segmenter."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .pipeline import SegmenterConfig
from .runner import segment_file


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Partition an image into regions of similar color.")
    parser.add_argument("input", type=Path, help="Path to the input image")
    parser.add_argument("output", type=Path, help="Path where the colored segment map will be written")
    parser.add_argument(
        "--scale",
        type=float,
        default=os.getenv("SEGMENTER_SCALE", "300"),
        help="Scale parameter k; larger values give fewer, larger segments (default: 300)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the segment display colors")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional CSV or Excel file receiving one row per segment",
    )
    parser.add_argument(
        "--disable-tqdm",
        action="store_true",
        help="Disable progress bars even if tqdm is installed",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress messages")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])

    config = SegmenterConfig(
        scale=args.scale,
        use_tqdm=not args.disable_tqdm,
        verbose=not args.quiet,
    )

    result = segment_file(args.input, args.output, config, seed=args.seed, summary_path=args.summary)
    return 0 if result is not None else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
