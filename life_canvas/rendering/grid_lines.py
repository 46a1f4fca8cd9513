"""Grid line rendering.

Draws the static lattice separating cells. Independent of cell data, so it can
run before the engine has produced anything.
"""

from ..config import Color, GRID_COLOR
from ..core.mapper import CoordinateMapper
from .surface import DrawingContext


class GridLineRenderer:
    """Strokes width+1 vertical and height+1 horizontal lines."""

    def __init__(self, mapper: CoordinateMapper, grid_color: Color = GRID_COLOR):
        self.mapper = mapper
        self.grid_color = grid_color

    def draw(self, ctx: DrawingContext) -> None:
        """Draw the full grid onto ``ctx`` as one stroked path."""
        canvas_width, canvas_height = self.mapper.canvas_size()

        ctx.begin_path()
        ctx.stroke_style = self.grid_color

        # Vertical lines
        for i in range(self.mapper.width + 1):
            x = self.mapper.line_offset(i)
            ctx.move_to(x, 0)
            ctx.line_to(x, canvas_height)

        # Horizontal lines
        for j in range(self.mapper.height + 1):
            y = self.mapper.line_offset(j)
            ctx.move_to(0, y)
            ctx.line_to(canvas_width, y)

        ctx.stroke()
