"""
Canvas and pipeline setup.

Reads the universe dimensions once, allocates a canvas of
``(cell_size+1)*width+1`` by ``(cell_size+1)*height+1`` pixels and wires the
scheduler. Setup faults are raised here, before any frame is drawn.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import numbers

from .animation.hosts import FrameHost, ManualFrameHost
from .animation.scheduler import AnimationScheduler
from .config import RenderConfig
from .core.mapper import CoordinateMapper
from .core.universe import Universe
from .rendering.surface import PixelCanvas

logger = logging.getLogger(__name__)


@dataclass
class Pipeline:
    """Everything needed to run and inspect one animation."""

    universe: object
    canvas: PixelCanvas
    scheduler: AnimationScheduler
    host: FrameHost


def _check_universe(universe) -> None:
    if universe is None:
        raise ValueError("A universe is required")
    for name in ("width", "height", "tick", "cells"):
        if not hasattr(universe, name):
            raise TypeError(f"Universe handle is missing '{name}'")
    if not callable(universe.tick) or not callable(universe.cells):
        raise TypeError("Universe tick and cells must be callable")
    for name in ("width", "height"):
        value = getattr(universe, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
            raise ValueError(f"Universe {name} must be a positive integer, got {value!r}")


def create_canvas(universe, config: Optional[RenderConfig] = None) -> PixelCanvas:
    """Allocate a canvas sized for the universe."""
    config = config or RenderConfig.standard()
    _check_universe(universe)

    mapper = CoordinateMapper(universe.width, universe.height, config.cell_size)
    width, height = mapper.canvas_size()
    return PixelCanvas(width, height, background=config.dead_color)


def create_pipeline(universe=None,
                    config: Optional[RenderConfig] = None,
                    host: Optional[FrameHost] = None,
                    memory=None,
                    strict: bool = True) -> Pipeline:
    """Build canvas, context and scheduler for a universe.

    Args:
        universe: Engine handle (default 64x64 universe if None)
        config: Render configuration (standard if None)
        host: Frame host (headless ManualFrameHost if None)
        memory: Memory holding the cell buffer (defaults to universe.memory)
        strict: Treat status bytes other than DEAD/ALIVE as errors

    Returns:
        Pipeline ready to ``scheduler.start()``

    Raises:
        ValueError: If the universe is missing or has invalid dimensions
        TypeError: If the universe handle lacks required members
    """
    if universe is None:
        universe = Universe.new()
    config = config or RenderConfig.standard()
    host = host if host is not None else ManualFrameHost()

    if memory is None and not hasattr(universe, "memory"):
        raise TypeError("Universe handle has no memory; pass memory explicitly")

    canvas = create_canvas(universe, config)
    context = canvas.get_context("2d")
    scheduler = AnimationScheduler(universe, context, host, config, memory=memory, strict=strict)

    logger.info(f"Pipeline ready: {universe.width}x{universe.height} cells on "
                f"{canvas.width}x{canvas.height} canvas")
    return Pipeline(universe=universe, canvas=canvas, scheduler=scheduler, host=host)
