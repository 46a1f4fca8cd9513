"""Linear byte memory owned by the simulation engine.

Mimics a flat, page-granular heap: regions are handed out as byte offsets and
the backing numpy array is replaced when the memory grows. Anything holding a
slice of an old backing array silently sees stale data after a grow, so
readers must go through ``buffer`` again after every mutating engine call.
"""

import numpy as np
import logging

logger = logging.getLogger(__name__)

PAGE_SIZE = 65536  # bytes per page


class LinearMemory:
    """Growable flat byte buffer with bump allocation.

    Attributes:
        pages: Number of pages currently backing the memory
    """

    def __init__(self, initial_pages: int = 1):
        """Create memory with the given number of zeroed pages.

        Args:
            initial_pages: Pages to allocate up front

        Raises:
            ValueError: If initial_pages is negative
        """
        if initial_pages < 0:
            raise ValueError("Initial page count cannot be negative")

        self._buffer = np.zeros(initial_pages * PAGE_SIZE, dtype=np.uint8)
        self._next_free = 0

    @property
    def buffer(self) -> np.ndarray:
        """Current backing array. Replaced (not resized) on grow."""
        return self._buffer

    @property
    def pages(self) -> int:
        return len(self._buffer) // PAGE_SIZE

    @property
    def size(self) -> int:
        """Size of the memory in bytes."""
        return len(self._buffer)

    def grow(self, pages: int) -> int:
        """Grow memory by a number of pages.

        The existing contents are copied into a fresh array, so views taken
        from the previous ``buffer`` no longer track writes.

        Args:
            pages: Number of pages to add

        Returns:
            Previous page count
        """
        if pages < 0:
            raise ValueError("Cannot grow memory by a negative page count")

        previous = self.pages
        if pages == 0:
            return previous

        new_buffer = np.zeros((previous + pages) * PAGE_SIZE, dtype=np.uint8)
        new_buffer[:len(self._buffer)] = self._buffer
        self._buffer = new_buffer

        logger.debug(f"Linear memory grew from {previous} to {self.pages} pages")
        return previous

    def allocate(self, nbytes: int) -> int:
        """Reserve a region and return its byte offset.

        Grows the memory when the region does not fit.

        Args:
            nbytes: Size of the region in bytes

        Returns:
            Offset of the first byte of the region
        """
        if nbytes < 0:
            raise ValueError("Allocation size cannot be negative")

        end = self._next_free + nbytes
        if end > self.size:
            missing = end - self.size
            self.grow(-(-missing // PAGE_SIZE))  # ceil division

        offset = self._next_free
        self._next_free = end
        return offset

    def region(self, offset: int, nbytes: int) -> np.ndarray:
        """Writable slice of the current buffer.

        Raises:
            IndexError: If the region lies outside the memory
        """
        if offset < 0 or nbytes < 0 or offset + nbytes > self.size:
            raise IndexError(f"Region [{offset}, {offset + nbytes}) outside memory of {self.size} bytes")
        return self._buffer[offset:offset + nbytes]

    def __repr__(self) -> str:
        return f"LinearMemory(pages={self.pages}, used={self._next_free})"
