"""Cell status values shared by the engine and the renderer.

Each cell is stored as a single byte in the engine's buffer. Only two values
are valid; anything else is a contract violation by the engine.
"""

from enum import IntEnum


class Cell(IntEnum):
    """Status of a single cell (one byte on the wire)."""

    DEAD = 0
    ALIVE = 1

    @classmethod
    def from_byte(cls, value: int, strict: bool = True) -> 'Cell':
        """Decode a raw status byte.

        Args:
            value: Byte read from the cell buffer
            strict: If False, any non-zero byte decodes as ALIVE

        Returns:
            Decoded cell status

        Raises:
            ValueError: If strict and value is neither 0 nor 1
        """
        if strict:
            return cls(int(value))
        return cls.ALIVE if value else cls.DEAD

    @property
    def symbol(self) -> str:
        """Character used by text dumps of a universe."""
        return '◼' if self is Cell.ALIVE else '◻'
