"""
Pyglet window showing a PixelCanvas.

The window only blits the canvas; the scheduler does all drawing through the
pyglet clock via PygletFrameHost.
"""

import numpy as np
import pyglet
import logging

from .app import Pipeline
from .rendering.surface import PixelCanvas

logger = logging.getLogger(__name__)


class LifeWindow(pyglet.window.Window):
    def __init__(self, canvas: PixelCanvas, caption: str = "Game of Life"):
        super().__init__(width=canvas.width, height=canvas.height, caption=caption)
        self.canvas = canvas

    def _canvas_image(self) -> pyglet.image.ImageData:
        # Pyglet expects bottom-left origin; canvas row 0 is the top
        flipped = np.ascontiguousarray(np.flipud(self.canvas.pixels))
        return pyglet.image.ImageData(self.canvas.width, self.canvas.height, "RGB",
                                      flipped.tobytes(), pitch=self.canvas.width * 3)

    def on_draw(self):
        self.clear()
        self._canvas_image().blit(0, 0)


def run_window(pipeline: Pipeline) -> None:
    """Open a window for the pipeline and run until it is closed.

    The pipeline must have been created with a PygletFrameHost.
    """
    window = LifeWindow(pipeline.canvas)

    @window.event
    def on_close():
        pipeline.scheduler.stop()

    pipeline.scheduler.start()
    logger.info("Entering pyglet event loop")
    pyglet.app.run()
