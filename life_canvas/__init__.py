"""
life_canvas: animated pixel-canvas renderer for Conway's Game of Life.

The engine owns the cell buffer; every frame the renderer ticks it, borrows
the buffer through a fresh CellStateView and redraws grid and cells.
"""

from .core import Cell, CellStateView, CoordinateMapper, LinearMemory, PixelRect, StaleViewError, Universe
from .config import RenderConfig
from .rendering import CellFillRenderer, GridLineRenderer, PixelCanvas
from .animation import AnimationScheduler, ManualFrameHost, PygletFrameHost, SchedulerState
from .app import Pipeline, create_canvas, create_pipeline

__version__ = "0.1.0"

__all__ = [
    'Cell',
    'CellStateView',
    'CoordinateMapper',
    'LinearMemory',
    'PixelRect',
    'StaleViewError',
    'Universe',
    'RenderConfig',
    'CellFillRenderer',
    'GridLineRenderer',
    'PixelCanvas',
    'AnimationScheduler',
    'ManualFrameHost',
    'PygletFrameHost',
    'SchedulerState',
    'Pipeline',
    'create_canvas',
    'create_pipeline',
]
