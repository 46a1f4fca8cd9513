"""
Immediate-mode 2D drawing surface backed by a numpy RGB array.

``DrawingContext`` is the small subset of a canvas 2D API the renderers rely
on. ``PixelCanvas`` implements it without any windowing system so frames can
be rendered headless, inspected in tests, shown by a window or saved.

Pixel (px, py) covers the square [px, px+1) x [py, py+1). A 1px wide stroke
centred on integer coordinate c therefore covers pixel c-1; grid lines drawn
at ``i*(cell_size+1)+1`` land on the columns between cells.
"""

import math
import numpy as np
from typing import List, Optional, Protocol, Tuple
import logging

from ..config import Color, RGB, parse_color

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class DrawingContext(Protocol):
    """Drawing operations used by the grid and cell renderers."""

    stroke_style: Color
    fill_style: Color

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...


class PixelCanvas:
    """Fixed-size RGB pixel buffer.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        pixels: (height, width, 3) uint8 array
    """

    def __init__(self, width: int, height: int, background: Color = (255, 255, 255)):
        """Allocate the canvas.

        Raises:
            ValueError: If either dimension is not positive
        """
        if width < 1 or height < 1:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = parse_color(background)
        self._context: Optional[CanvasContext2D] = None

        logger.debug(f"Allocated {width}x{height} canvas")

    def get_context(self, kind: str = "2d") -> 'CanvasContext2D':
        """Return the canvas' drawing context (always the same object)."""
        if kind != "2d":
            raise ValueError(f"Unsupported context type: {kind!r}")
        if self._context is None:
            self._context = CanvasContext2D(self)
        return self._context

    def pixel(self, x: int, y: int) -> RGB:
        """RGB value at pixel (x, y)."""
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def colors(self) -> set:
        """Distinct RGB values present on the canvas."""
        flat = self.pixels.reshape(-1, 3)
        return {tuple(int(c) for c in rgb) for rgb in np.unique(flat, axis=0)}

    def to_image(self):
        """Copy of the canvas as a Pillow image."""
        from PIL import Image

        return Image.fromarray(self.pixels.copy())

    def save_png(self, path: str) -> None:
        self.to_image().save(path, format="PNG")
        logger.info(f"Canvas saved to {path}")

    def __repr__(self) -> str:
        return f"PixelCanvas({self.width}x{self.height})"


class CanvasContext2D:
    """Rasterizing context for a PixelCanvas.

    Supports 1px strokes of straight path segments and filled rectangles.
    Like a browser canvas, ``stroke`` keeps the current path; ``begin_path``
    starts a new one.
    """

    def __init__(self, canvas: PixelCanvas):
        self.canvas = canvas
        self._stroke_rgb: RGB = (0, 0, 0)
        self._fill_rgb: RGB = (0, 0, 0)
        self._stroke_style: Color = "#000000"
        self._fill_style: Color = "#000000"
        self._segments: List[Tuple[Point, Point]] = []
        self._cursor: Optional[Point] = None

    @property
    def stroke_style(self) -> Color:
        return self._stroke_style

    @stroke_style.setter
    def stroke_style(self, value: Color) -> None:
        self._stroke_rgb = parse_color(value)
        self._stroke_style = value

    @property
    def fill_style(self) -> Color:
        return self._fill_style

    @fill_style.setter
    def fill_style(self, value: Color) -> None:
        self._fill_rgb = parse_color(value)
        self._fill_style = value

    def begin_path(self) -> None:
        self._segments = []
        self._cursor = None

    def move_to(self, x: float, y: float) -> None:
        self._cursor = (x, y)

    def line_to(self, x: float, y: float) -> None:
        # A line_to without a current point behaves like move_to
        if self._cursor is not None:
            self._segments.append((self._cursor, (x, y)))
        self._cursor = (x, y)

    def stroke(self) -> None:
        """Rasterize every segment of the current path with the stroke colour."""
        for start, end in self._segments:
            self._draw_segment(start, end)

    def _draw_segment(self, start: Point, end: Point) -> None:
        (x0, y0), (x1, y1) = start, end
        steps = int(max(abs(x1 - x0), abs(y1 - y0))) + 1

        xs = np.floor(np.linspace(x0, x1, steps + 1) - 0.5).astype(np.int64)
        ys = np.floor(np.linspace(y0, y1, steps + 1) - 0.5).astype(np.int64)

        inside = (xs >= 0) & (xs < self.canvas.width) & (ys >= 0) & (ys < self.canvas.height)
        self.canvas.pixels[ys[inside], xs[inside]] = self._stroke_rgb

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        """Fill a rectangle, clipped to the canvas."""
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h

        left = max(0, math.floor(x))
        top = max(0, math.floor(y))
        right = min(self.canvas.width, math.floor(x + w))
        bottom = min(self.canvas.height, math.floor(y + h))

        if left < right and top < bottom:
            self.canvas.pixels[top:bottom, left:right] = self._fill_rgb
