"""Read-only view over the engine's live cell buffer.

A view is borrowed for a single frame. It is taken from the memory's current
backing array at the offset the engine reports right now, and must be
released before the engine ticks again.
"""

import numpy as np
from typing import Iterator, Optional
import logging

from .cell import Cell
from .memory import LinearMemory

logger = logging.getLogger(__name__)


class StaleViewError(RuntimeError):
    """Raised when a released cell view is read."""


class CellStateView:
    """Fixed-length, read-only sequence of cell statuses.

    Attributes:
        width: Universe width in cells
        height: Universe height in cells
        strict: Reject status bytes other than DEAD/ALIVE
    """

    def __init__(self, memory: LinearMemory, offset: int, width: int, height: int,
                 strict: bool = True):
        """Wrap ``width*height`` bytes of memory starting at ``offset``.

        Raises:
            IndexError: If the region is not inside the memory
        """
        size = width * height
        if offset < 0 or offset + size > memory.size:
            raise IndexError(f"Cell buffer [{offset}, {offset + size}) outside memory of {memory.size} bytes")

        cells = memory.buffer[offset:offset + size].view()
        cells.flags.writeable = False

        self.width = width
        self.height = height
        self.strict = strict
        self._cells: Optional[np.ndarray] = cells

    @classmethod
    def acquire(cls, universe, memory: Optional[LinearMemory] = None,
                strict: bool = True) -> 'CellStateView':
        """Take a fresh view of the universe's current cells.

        Args:
            universe: Engine exposing width, height, cells() and memory
            memory: Memory to read from (defaults to ``universe.memory``)
            strict: Reject status bytes other than DEAD/ALIVE

        Returns:
            View valid until the next tick
        """
        if memory is None:
            memory = universe.memory
        return cls(memory, universe.cells(), universe.width, universe.height, strict=strict)

    def _require_cells(self) -> np.ndarray:
        if self._cells is None:
            raise StaleViewError("Cell view was released; acquire a new one after tick()")
        return self._cells

    @property
    def released(self) -> bool:
        return self._cells is None

    def status(self, idx: int) -> Cell:
        """Status of the cell at a flat index.

        Raises:
            IndexError: If idx is outside [0, width*height)
            ValueError: If strict and the byte is not a valid status
            StaleViewError: If the view was released
        """
        cells = self._require_cells()
        if not 0 <= idx < len(cells):
            raise IndexError(f"Flat index {idx} outside [0, {len(cells)})")
        return Cell.from_byte(cells[idx], strict=self.strict)

    def as_array(self) -> np.ndarray:
        """Read-only numpy array of the raw status bytes."""
        return self._require_cells()

    def release(self) -> None:
        """Drop the reference to the engine's buffer."""
        self._cells = None

    def __len__(self) -> int:
        return self.width * self.height

    def __getitem__(self, idx: int) -> Cell:
        return self.status(idx)

    def __iter__(self) -> Iterator[Cell]:
        for idx in range(len(self)):
            yield self.status(idx)

    def __enter__(self) -> 'CellStateView':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"CellStateView({self.width}x{self.height}, {state})"
