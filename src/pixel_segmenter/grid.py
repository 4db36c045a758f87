"""Grid model holding one color sample per cell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple

import numpy as np

from .errors import InvalidInput


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """A single grid position and the sample stored there."""

    row: int
    col: int
    sample: Any

    @property
    def coordinate(self) -> Coordinate:
        return self.row, self.col


def _is_row_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray))


class Grid:
    """Rectangular H x W grid of samples addressed by (row, col)."""

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        if not _is_row_sequence(rows) or len(rows) == 0:
            raise InvalidInput("grid must contain at least one row")
        for row in rows:
            if not _is_row_sequence(row):
                raise InvalidInput("grid rows must be sequences of samples")
        width = len(rows[0])
        if width == 0:
            raise InvalidInput("grid rows must contain at least one sample")
        for index, row in enumerate(rows):
            if len(row) != width:
                raise InvalidInput(
                    f"grid rows must share one length: row 0 has {width} samples, row {index} has {len(row)}"
                )

        self._height = len(rows)
        self._width = width
        self._cells: List[Cell] = [
            Cell(row_index, col_index, sample)
            for row_index, row in enumerate(rows)
            for col_index, sample in enumerate(row)
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        return cls(rows)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Grid":
        """Build a grid from an ``H x W`` or ``H x W x C`` array.

        Multi-channel pixels become tuples so every sample is hashable and
        immutable once stored.
        """

        data = np.asarray(array)
        if data.ndim not in (2, 3):
            raise InvalidInput(f"expected a 2D or 3D array, got {data.ndim} dimension(s)")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise InvalidInput(f"array dimensions must be positive, got {data.shape[:2]}")

        if data.ndim == 2:
            rows = [[value.item() for value in row] for row in data]
        else:
            rows = [[tuple(pixel.tolist()) for pixel in row] for row in data]
        return cls(rows)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def shape(self) -> Tuple[int, int]:
        return self._height, self._width

    @property
    def size(self) -> int:
        return self._height * self._width

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def index_of(self, row: int, col: int) -> int:
        if not self.contains(row, col):
            raise IndexError(f"cell ({row}, {col}) is outside a {self._height}x{self._width} grid")
        return row * self._width + col

    def coordinate_of(self, index: int) -> Coordinate:
        if not 0 <= index < self.size:
            raise IndexError(f"cell index {index} is outside a grid of {self.size} cells")
        return divmod(index, self._width)

    def cell(self, row: int, col: int) -> Cell:
        return self._cells[self.index_of(row, col)]

    def sample(self, row: int, col: int) -> Any:
        return self.cell(row, col).sample

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Grid(height={self._height}, width={self._width})"


__all__ = ["Cell", "Coordinate", "Grid"]
