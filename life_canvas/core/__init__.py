"""
Engine-facing core: cell statuses, linear memory, the reference universe,
the per-frame cell view and coordinate mapping.
"""

from .cell import Cell
from .memory import LinearMemory, PAGE_SIZE
from .universe import Universe
from .cell_view import CellStateView, StaleViewError
from .mapper import CoordinateMapper, PixelRect

__all__ = [
    'Cell',
    'LinearMemory',
    'PAGE_SIZE',
    'Universe',
    'CellStateView',
    'StaleViewError',
    'CoordinateMapper',
    'PixelRect',
]
