"""Shared test doubles for the render pipeline."""

import pytest


class RecordingContext:
    """Drawing context that records every call instead of drawing."""

    def __init__(self):
        self.calls = []
        self.stroke_style = None
        self.fill_style = None

    def begin_path(self):
        self.calls.append(("begin_path",))

    def move_to(self, x, y):
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y):
        self.calls.append(("line_to", x, y))

    def stroke(self):
        self.calls.append(("stroke", self.stroke_style))

    def fill_rect(self, x, y, w, h):
        self.calls.append(("fill_rect", self.fill_style, x, y, w, h))

    def fills(self):
        """(colour, x, y, w, h) of every fill_rect call, in order."""
        return [call[1:] for call in self.calls if call[0] == "fill_rect"]

    def clear(self):
        self.calls.clear()


class SpyUniverse:
    """Wraps a universe and logs tick()/cells() calls in order."""

    def __init__(self, universe, fail_on_tick=None, fail_on_cells=None):
        self._universe = universe
        self.width = universe.width
        self.height = universe.height
        self.memory = universe.memory
        self.ticks = 0
        self.log = []
        self.fail_on_tick = fail_on_tick
        self.fail_on_cells = fail_on_cells
        self.cells_calls = 0

    def tick(self):
        self.ticks += 1
        self.log.append(("tick", self.ticks))
        if self.fail_on_tick is not None and self.ticks == self.fail_on_tick:
            raise RuntimeError("engine fault")
        self._universe.tick()

    def cells(self):
        self.cells_calls += 1
        self.log.append(("cells", self.ticks))
        if self.fail_on_cells is not None and self.cells_calls == self.fail_on_cells:
            raise RuntimeError("cell buffer unavailable")
        return self._universe.cells()

    def to_array(self):
        return self._universe.to_array()


@pytest.fixture
def recording_context():
    return RecordingContext()
