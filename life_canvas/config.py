"""
Render configuration.

Colours and cell size are fixed for the lifetime of a pipeline; changing them
means building a new one.
"""

from dataclasses import dataclass
import string
from typing import Tuple, Union

# Defaults
CELL_SIZE = 5              # Cell edge length in pixels
GRID_COLOR = "#CCCCCC"     # Grid lines
DEAD_COLOR = "#FFFFFF"     # Dead cells
ALIVE_COLOR = "#000000"    # Alive cells

RGB = Tuple[int, int, int]
Color = Union[str, RGB]


def parse_color(color: Color) -> RGB:
    """Convert '#RGB', '#RRGGBB' or an RGB tuple to an RGB tuple.

    Raises:
        ValueError: If the colour cannot be parsed
    """
    if isinstance(color, str):
        s = color[1:] if color.startswith("#") else color
        if len(s) == 3:
            s = "".join(ch * 2 for ch in s)
        if len(s) != 6 or not all(ch in string.hexdigits for ch in s):
            raise ValueError(f"Invalid hex colour: {color!r}")
        return tuple(int(s[i:i + 2], 16) for i in (0, 2, 4))

    rgb = tuple(color)
    if len(rgb) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in rgb):
        raise ValueError(f"Invalid RGB colour: {color!r}")
    return rgb


@dataclass(frozen=True)
class RenderConfig:
    """Immutable rendering parameters.

    Attributes:
        cell_size: Cell edge length in pixels
        grid_color: Colour of the grid lines
        dead_color: Fill colour for dead cells
        alive_color: Fill colour for alive cells
    """

    cell_size: int = CELL_SIZE
    grid_color: Color = GRID_COLOR
    dead_color: Color = DEAD_COLOR
    alive_color: Color = ALIVE_COLOR

    def __post_init__(self):
        if not isinstance(self.cell_size, int) or self.cell_size < 1:
            raise ValueError(f"Cell size must be a positive integer, got {self.cell_size!r}")
        for color in (self.grid_color, self.dead_color, self.alive_color):
            parse_color(color)

    @classmethod
    def standard(cls) -> 'RenderConfig':
        """Default white-background, black-cell configuration."""
        return cls()
