"""Drawing surface and the two per-frame renderers."""

from .surface import DrawingContext, PixelCanvas, CanvasContext2D
from .grid_lines import GridLineRenderer
from .cell_fill import CellFillRenderer

__all__ = [
    'DrawingContext',
    'PixelCanvas',
    'CanvasContext2D',
    'GridLineRenderer',
    'CellFillRenderer',
]
