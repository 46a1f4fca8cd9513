"""Reference Game of Life engine.

The universe keeps its cells in a LinearMemory as one status byte per cell,
row-major. Two regions are reserved and used as front/back buffers: ``tick``
writes the next generation into the back buffer and swaps, so the offset
reported by ``cells`` changes on every tick. Renderers must therefore
re-acquire the buffer after each tick instead of holding on to it.
"""

import numpy as np
from typing import Iterable, Optional, Tuple
import logging
from numba import jit

from .cell import Cell
from .memory import LinearMemory

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64

DEAD = 0
ALIVE = 1


@jit(nopython=True, cache=True)
def _next_generation(cells: np.ndarray, out: np.ndarray, width: int, height: int) -> int:
    """Write the next generation of ``cells`` into ``out``.

    Uses toroidal boundary conditions (edges wrap around).

    Returns:
        Number of live cells in the new generation
    """
    live = 0
    for row in range(height):
        for col in range(width):
            count = 0
            for i in range(3):
                # Offsets height-1, 0, 1: on a 1-high torus "up" and "here" coincide
                delta_row = height - 1 if i == 0 else i - 1
                for j in range(3):
                    delta_col = width - 1 if j == 0 else j - 1
                    if delta_row == 0 and delta_col == 0:
                        continue
                    neighbor_row = (row + delta_row) % height
                    neighbor_col = (col + delta_col) % width
                    count += cells[neighbor_row * width + neighbor_col]

            idx = row * width + col
            if cells[idx] == ALIVE:
                alive = count == 2 or count == 3
            else:
                alive = count == 3

            if alive:
                out[idx] = ALIVE
                live += 1
            else:
                out[idx] = DEAD
    return live


class Universe:
    """Toroidal Game of Life universe backed by linear memory.

    Attributes:
        width: Universe width in cells (fixed)
        height: Universe height in cells (fixed)
        memory: Linear memory holding the cell buffers
    """

    def __init__(self, width: int, height: int,
                 cells: Optional[Iterable[int]] = None,
                 memory: Optional[LinearMemory] = None):
        """Initialize universe with given dimensions.

        Args:
            width: Universe width (cells)
            height: Universe height (cells)
            cells: Optional initial row-major statuses (width*height values)
            memory: Linear memory to allocate cells in (new memory if None)

        Raises:
            ValueError: If dimensions are invalid or cells has the wrong length
        """
        if width < 1 or height < 1:
            raise ValueError("Universe dimensions must be positive")

        self.width = width
        self.height = height
        self.memory = memory if memory is not None else LinearMemory(initial_pages=0)

        size = width * height
        self._front = self.memory.allocate(size)
        self._back = self.memory.allocate(size)

        if cells is not None:
            initial = np.fromiter((int(Cell(int(value))) for value in cells), dtype=np.uint8)
            if len(initial) != size:
                raise ValueError(f"Initial cells length {len(initial)} doesn't match universe size {size}")
            self.memory.region(self._front, size)[:] = initial

        logger.debug(f"Created universe {width}x{height} at offset {self._front}")

    @classmethod
    def new(cls, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> 'Universe':
        """Create the default universe: cell i is alive when i % 2 == 0 or i % 7 == 0."""
        cells = (Cell.ALIVE if i % 2 == 0 or i % 7 == 0 else Cell.DEAD
                 for i in range(width * height))
        return cls(width, height, cells)

    @classmethod
    def from_alive(cls, width: int, height: int,
                   alive: Iterable[Tuple[int, int]]) -> 'Universe':
        """Create a universe where only the given (row, col) cells are alive."""
        universe = cls(width, height)
        for row, col in alive:
            universe.set_cell(row, col, Cell.ALIVE)
        return universe

    def get_index(self, row: int, column: int) -> int:
        """Row-major offset of a cell inside the cell buffer."""
        return row * self.width + column

    def cells(self) -> int:
        """Byte offset of the live cell buffer in ``memory``.

        Only valid until the next tick.
        """
        return self._front

    def tick(self) -> None:
        """Advance the universe by one generation."""
        size = self.width * self.height
        current = self.memory.region(self._front, size)
        nxt = self.memory.region(self._back, size)

        live = _next_generation(current, nxt, self.width, self.height)
        self._front, self._back = self._back, self._front

        logger.debug(f"Tick complete: {live} live cells, buffer now at offset {self._front}")

    def _live_buffer(self) -> np.ndarray:
        return self.memory.region(self._front, self.width * self.height)

    def get_cell(self, row: int, col: int) -> Cell:
        """Get state of individual cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.width}x{self.height} universe")
        return Cell(int(self._live_buffer()[self.get_index(row, col)]))

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        """Set state of individual cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.width}x{self.height} universe")
        self._live_buffer()[self.get_index(row, col)] = int(Cell(cell))

    def load_pattern(self, pattern: np.ndarray, row: int, col: int) -> None:
        """Load a 2D pattern with its top-left corner at (row, col).

        Pattern cells that fall off an edge wrap around.

        Args:
            pattern: 2D array, truthy entries are alive
            row: Top row for placement
            col: Left column for placement
        """
        buffer = self._live_buffer()
        pattern_height, pattern_width = pattern.shape
        for py in range(pattern_height):
            for px in range(pattern_width):
                if pattern[py, px]:
                    target_row = (row + py) % self.height
                    target_col = (col + px) % self.width
                    buffer[self.get_index(target_row, target_col)] = ALIVE

    def live_count(self) -> int:
        """Get total number of live cells."""
        return int(np.count_nonzero(self._live_buffer()))

    def to_array(self) -> np.ndarray:
        """Copy of the live buffer shaped (height, width)."""
        return self._live_buffer().reshape(self.height, self.width).copy()

    def render(self) -> str:
        """Text dump of the universe, one line per row."""
        return str(self)

    def __str__(self) -> str:
        lines = []
        buffer = self._live_buffer()
        for row in range(self.height):
            start = row * self.width
            line = buffer[start:start + self.width]
            lines.append(''.join(Cell.DEAD.symbol if value == DEAD else Cell.ALIVE.symbol
                                 for value in line))
        return '\n'.join(lines) + '\n'

    def __repr__(self) -> str:
        return f"Universe({self.width}x{self.height}, alive={self.live_count()})"
