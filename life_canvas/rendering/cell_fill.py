"""Cell fill rendering.

Paints every cell as a filled square coloured by its status. The whole
universe is redrawn every frame.
"""

from ..config import Color, DEAD_COLOR, ALIVE_COLOR
from ..core.cell import Cell
from ..core.cell_view import CellStateView
from ..core.mapper import CoordinateMapper
from .surface import DrawingContext


class CellFillRenderer:
    """Fills each cell rectangle with the dead or alive colour."""

    def __init__(self, mapper: CoordinateMapper,
                 dead_color: Color = DEAD_COLOR,
                 alive_color: Color = ALIVE_COLOR):
        self.mapper = mapper
        self.dead_color = dead_color
        self.alive_color = alive_color

    def draw(self, ctx: DrawingContext, view: CellStateView) -> None:
        """Fill all cells in row-major order from a freshly acquired view.

        Raises:
            ValueError: If the view does not match the mapper's dimensions
        """
        if (view.width, view.height) != (self.mapper.width, self.mapper.height):
            raise ValueError(f"View is {view.width}x{view.height} but renderer expects "
                             f"{self.mapper.width}x{self.mapper.height}")

        for row, col in self.mapper.cells():
            status = view.status(self.mapper.flat_index(row, col))
            ctx.fill_style = self.alive_color if status is Cell.ALIVE else self.dead_color
            ctx.fill_rect(*self.mapper.pixel_rect(row, col))
