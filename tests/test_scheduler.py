"""Tests for the animation scheduler and frame hosts."""

import pytest
import numpy as np

from conftest import RecordingContext, SpyUniverse
from life_canvas.animation.hosts import ManualFrameHost, PygletFrameHost
from life_canvas.animation.scheduler import AnimationScheduler, SchedulerState
from life_canvas.config import RenderConfig, parse_color
from life_canvas.core.mapper import CoordinateMapper
from life_canvas.core.universe import Universe
from life_canvas.rendering.surface import PixelCanvas

CONFIG = RenderConfig(cell_size=3)


def make_scheduler(universe, context=None, config=CONFIG):
    host = ManualFrameHost()
    if context is None:
        mapper = CoordinateMapper(universe.width, universe.height, config.cell_size)
        context = PixelCanvas(*mapper.canvas_size()).get_context()
    return AnimationScheduler(universe, context, host, config), host


def canvas_cells(scheduler):
    """Decode the alive/dead pattern currently shown on the canvas."""
    canvas = scheduler.context.canvas
    alive_rgb = parse_color(scheduler.config.alive_color)
    shown = np.zeros((scheduler.mapper.height, scheduler.mapper.width), dtype=np.uint8)
    for row, col in scheduler.mapper.cells():
        rect = scheduler.mapper.pixel_rect(row, col)
        shown[row, col] = canvas.pixel(rect.x, rect.y) == alive_rgb
    return shown


class TestManualFrameHost:
    def test_one_pending_callback(self):
        host = ManualFrameHost()
        host.request_frame(lambda: None)
        with pytest.raises(RuntimeError, match="already pending"):
            host.request_frame(lambda: None)

    def test_run_dispatches_until_empty(self):
        host = ManualFrameHost()
        calls = []
        host.request_frame(lambda: calls.append(1))

        assert host.run(5) == 1
        assert calls == [1]
        assert not host.pending

    def test_rearming_callback(self):
        host = ManualFrameHost()
        calls = []

        def loop():
            calls.append(len(calls))
            host.request_frame(loop)

        host.request_frame(loop)
        assert host.run(4) == 4
        assert calls == [0, 1, 2, 3]
        assert host.pending

    def test_cancel(self):
        host = ManualFrameHost()
        host.request_frame(lambda: None)
        host.cancel()
        assert host.run(1) == 0

    def test_pyglet_host_rejects_bad_rate(self):
        with pytest.raises(ValueError):
            PygletFrameHost(fps=0)


class TestSchedulerLifecycle:
    """Idle -> Running -> Stopped."""

    def test_initial_frame_without_tick(self):
        """Frame 0 shows the starting configuration; tick is not called."""
        spy = SpyUniverse(Universe.from_alive(5, 5, [(2, 1), (2, 2), (2, 3)]))
        scheduler, host = make_scheduler(spy)

        assert scheduler.state is SchedulerState.IDLE
        scheduler.start()

        assert scheduler.state is SchedulerState.RUNNING
        assert spy.ticks == 0
        assert host.pending
        assert np.array_equal(canvas_cells(scheduler), spy.to_array())

    def test_missing_context(self):
        with pytest.raises(ValueError, match="drawing context"):
            AnimationScheduler(Universe(4, 4), None, ManualFrameHost(), CONFIG)

    def test_start_twice(self):
        scheduler, _ = make_scheduler(Universe(4, 4))
        scheduler.start()
        with pytest.raises(RuntimeError, match="cannot start"):
            scheduler.start()

    def test_stop_prevents_rearm(self):
        spy = SpyUniverse(Universe.new(6, 6))
        scheduler, host = make_scheduler(spy)
        scheduler.start()
        scheduler.stop()

        assert host.run(3) == 1
        assert spy.ticks == 0
        assert not host.pending
        assert scheduler.state is SchedulerState.STOPPED

    def test_stop_then_start(self):
        scheduler, _ = make_scheduler(Universe(4, 4))
        scheduler.start()
        scheduler.stop()
        with pytest.raises(RuntimeError):
            scheduler.start()


class TestFrameOrdering:
    """Each frame is exactly one tick followed by a full redraw."""

    @pytest.mark.parametrize("frames", [1, 2, 5, 12])
    def test_tick_count(self, frames):
        spy = SpyUniverse(Universe.new(8, 8))
        scheduler, host = make_scheduler(spy)
        scheduler.start()

        assert host.run(frames) == frames
        assert spy.ticks == frames

    def test_each_frame_shows_post_tick_state(self):
        """Frame N reflects the buffer after tick N, never before."""
        reference = Universe.new(10, 10)
        spy = SpyUniverse(Universe.new(10, 10))
        scheduler, host = make_scheduler(spy)
        scheduler.start()

        for _ in range(6):
            host.run(1)
            reference.tick()
            assert np.array_equal(canvas_cells(scheduler), reference.to_array())

    def test_cells_read_after_tick(self):
        """cells() is re-read once per frame, after that frame's tick."""
        spy = SpyUniverse(Universe.new(4, 4))
        scheduler, host = make_scheduler(spy)
        scheduler.start()
        host.run(3)

        assert spy.log == [
            ("cells", 0),
            ("tick", 1), ("cells", 1),
            ("tick", 2), ("cells", 2),
            ("tick", 3), ("cells", 3),
        ]

    def test_grid_drawn_before_cells(self):
        context = RecordingContext()
        scheduler, host = make_scheduler(Universe.new(3, 3), context=context)
        scheduler.start()
        context.clear()
        host.run(1)

        kinds = [c[0] for c in context.calls]
        assert kinds[0] == "begin_path"
        assert kinds.index("stroke") < kinds.index("fill_rect")
        assert kinds.count("fill_rect") == 9

    def test_end_to_end_4x4_seed(self):
        """One iteration over an L-shaped seed fills the completed block."""
        context = RecordingContext()
        universe = Universe.from_alive(4, 4, [(1, 1), (1, 2), (2, 1)])
        scheduler, host = make_scheduler(universe, context=context)

        scheduler.start()
        initial = [f[0] for f in context.fills()]
        context.clear()
        host.run(1)
        after_tick = [f[0] for f in context.fills()]

        dead, alive = CONFIG.dead_color, CONFIG.alive_color
        seed = {(1, 1), (1, 2), (2, 1)}
        block = seed | {(2, 2)}
        assert initial == [alive if (r, c) in seed else dead for r in range(4) for c in range(4)]
        assert after_tick == [alive if (r, c) in block else dead for r in range(4) for c in range(4)]


class TestFaults:
    """Faults stop the loop and propagate."""

    def test_tick_fault(self):
        spy = SpyUniverse(Universe.new(4, 4), fail_on_tick=2)
        scheduler, host = make_scheduler(spy)
        scheduler.start()
        host.run(1)

        with pytest.raises(RuntimeError, match="engine fault"):
            host.run(1)

        assert scheduler.state is SchedulerState.STOPPED
        assert isinstance(scheduler.last_error, RuntimeError)
        assert not host.pending
        assert host.run(5) == 0

    def test_cells_fault(self):
        """cells() failing after a tick stops the loop like a tick fault."""
        spy = SpyUniverse(Universe.new(4, 4), fail_on_cells=2)
        scheduler, host = make_scheduler(spy)
        scheduler.start()

        with pytest.raises(RuntimeError, match="cell buffer unavailable"):
            host.run(1)

        assert spy.ticks == 1
        assert scheduler.state is SchedulerState.STOPPED
        assert isinstance(scheduler.last_error, RuntimeError)
        assert not host.pending
        assert host.run(5) == 0

    def test_renderer_fault(self):
        class BrokenContext(RecordingContext):
            def fill_rect(self, x, y, w, h):
                raise OSError("surface lost")

        scheduler, host = make_scheduler(Universe.new(4, 4), context=BrokenContext())
        with pytest.raises(OSError, match="surface lost"):
            scheduler.start()

        assert scheduler.state is SchedulerState.STOPPED
        assert not host.pending

    def test_invalid_status_byte(self):
        """A third status value is a contract violation in strict mode."""
        universe = Universe(4, 4)
        universe.memory.region(universe.cells(), 16)[5] = 2
        scheduler, host = make_scheduler(universe)

        with pytest.raises(ValueError):
            scheduler.start()
        assert scheduler.state is SchedulerState.STOPPED

    def test_lenient_status_byte(self):
        universe = Universe(4, 4)
        universe.memory.region(universe.cells(), 16)[5] = 2
        mapper = CoordinateMapper(4, 4, CONFIG.cell_size)
        canvas = PixelCanvas(*mapper.canvas_size())
        scheduler = AnimationScheduler(universe, canvas.get_context(), ManualFrameHost(), CONFIG, strict=False)

        scheduler.start()
        rect = mapper.pixel_rect(1, 1)
        assert canvas.pixel(rect.x, rect.y) == parse_color(CONFIG.alive_color)
