"""
Animation scheduler.

Drives the render loop: tick the engine, redraw the grid, re-acquire the cell
buffer, redraw the cells, then ask the host for the next frame. Frame 0 shows
the universe's initial configuration without ticking; every later frame shows
the state after exactly one more tick.
"""

from enum import Enum
from typing import Optional
import logging

from ..config import RenderConfig
from ..core.cell_view import CellStateView
from ..core.mapper import CoordinateMapper
from ..core.memory import LinearMemory
from ..rendering.cell_fill import CellFillRenderer
from ..rendering.grid_lines import GridLineRenderer
from ..rendering.surface import DrawingContext
from .hosts import FrameHost

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class AnimationScheduler:
    """Re-arming tick/draw loop over a universe.

    Attributes:
        universe: Engine exposing width, height, tick(), cells() and memory
        context: Drawing context of the canvas
        host: Frame pacing host
        config: Render configuration
        state: Current scheduler state
        last_error: Exception that stopped the loop, if any
    """

    def __init__(self, universe, context: DrawingContext, host: FrameHost,
                 config: Optional[RenderConfig] = None,
                 memory: Optional[LinearMemory] = None,
                 strict: bool = True):
        """Initialize scheduler. Nothing is drawn until start().

        Args:
            universe: Engine to animate
            context: Drawing context sized for the universe
            host: Frame pacing host
            config: Render configuration (standard if None)
            memory: Memory holding the cell buffer (defaults to universe.memory)
            strict: Treat status bytes other than DEAD/ALIVE as errors

        Raises:
            ValueError: If universe, context or host is missing
        """
        if universe is None or context is None or host is None:
            raise ValueError("Scheduler needs a universe, a drawing context and a frame host")

        self.universe = universe
        self.context = context
        self.host = host
        self.config = config or RenderConfig.standard()
        self.memory = memory
        self.strict = strict

        self.mapper = CoordinateMapper(universe.width, universe.height, self.config.cell_size)
        self.grid_renderer = GridLineRenderer(self.mapper, self.config.grid_color)
        self.cell_renderer = CellFillRenderer(self.mapper, self.config.dead_color,
                                              self.config.alive_color)

        self.state = SchedulerState.IDLE
        self.last_error: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def draw_frame(self) -> None:
        """Redraw grid and cells from the universe's current buffer."""
        self.grid_renderer.draw(self.context)
        with CellStateView.acquire(self.universe, self.memory, strict=self.strict) as view:
            self.cell_renderer.draw(self.context, view)

    def start(self) -> None:
        """Draw the initial frame and enter the loop.

        Raises:
            RuntimeError: If the scheduler was already started
        """
        if self.state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler cannot start from state {self.state.value}")

        logger.info(f"Starting animation of {self.mapper.width}x{self.mapper.height} universe")
        self._guarded(self.draw_frame)

        self.state = SchedulerState.RUNNING
        self.host.request_frame(self._on_frame)

    def stop(self) -> None:
        """Stop re-arming. A callback already handed to the host becomes a no-op."""
        if self.state is SchedulerState.RUNNING:
            logger.info("Animation stopped")
        self.state = SchedulerState.STOPPED

    def _on_frame(self) -> None:
        if self.state is not SchedulerState.RUNNING:
            return

        self._guarded(self.universe.tick)
        self._guarded(self.draw_frame)

        # Re-check: a renderer or host hook may have stopped us
        if self.state is SchedulerState.RUNNING:
            self.host.request_frame(self._on_frame)

    def _guarded(self, step) -> None:
        try:
            step()
        except Exception as e:
            self.state = SchedulerState.STOPPED
            self.last_error = e
            logger.exception(f"Animation stopped by fault in {getattr(step, '__name__', step)}")
            raise

    def __repr__(self) -> str:
        return f"AnimationScheduler({self.mapper.width}x{self.mapper.height}, state={self.state.value})"
