"""Coordinate mapping between cells, the flat buffer and canvas pixels.

Every cell is a ``cell_size`` square; cells are separated by a 1px grid line
and the canvas has a 1px line on every outer edge.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple


class PixelRect(NamedTuple):
    """Axis-aligned pixel rectangle (x, y is the top-left corner)."""

    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class CoordinateMapper:
    """Pure mapping functions for a fixed universe size and cell size."""

    width: int
    height: int
    cell_size: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError("Universe dimensions must be positive")
        if self.cell_size < 1:
            raise ValueError("Cell size must be at least 1 pixel")

    @property
    def pitch(self) -> int:
        """Distance in pixels between the origins of adjacent cells."""
        return self.cell_size + 1

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.width}x{self.height} universe")

    def flat_index(self, row: int, col: int) -> int:
        """Row-major offset of (row, col) in the status buffer."""
        self._check(row, col)
        return row * self.width + col

    def pixel_rect(self, row: int, col: int) -> PixelRect:
        """Canvas rectangle covered by the cell at (row, col)."""
        self._check(row, col)
        return PixelRect(col * self.pitch + 1, row * self.pitch + 1,
                         self.cell_size, self.cell_size)

    def line_offset(self, i: int) -> int:
        """Canvas coordinate of the i-th grid line (0 <= i <= width or height)."""
        return i * self.pitch + 1

    def canvas_size(self) -> Tuple[int, int]:
        """(width, height) of the canvas in pixels."""
        return self.pitch * self.width + 1, self.pitch * self.height + 1

    def cells(self) -> Iterator[Tuple[int, int]]:
        """All (row, col) pairs in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col
