#!/usr/bin/env python3
"""
Game of Life canvas runner.

Opens a pyglet window animating the default universe, or renders a fixed
number of frames headless and optionally saves the last one as PNG:

    python scripts/run_life.py
    python scripts/run_life.py --headless --frames 100 --output logs/frame.png
"""

import sys
import logging
from pathlib import Path

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from life_canvas import RenderConfig, Universe, create_pipeline
from life_canvas.animation import ManualFrameHost, PygletFrameHost


def run_headless(width=64, height=64, cell_size=5, frames=100, output=None):
    """Render ``frames`` frames after the initial one without a window."""
    universe = Universe.new(width, height)
    pipeline = create_pipeline(universe, RenderConfig(cell_size=cell_size), ManualFrameHost())

    pipeline.scheduler.start()
    dispatched = pipeline.host.run(frames)
    pipeline.scheduler.stop()

    logger.info(f"Rendered {dispatched} frames after the initial one, {universe.live_count()} cells alive")

    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        pipeline.canvas.save_png(output)

    return pipeline


def run_gui(width=64, height=64, cell_size=5, fps=60.0):
    from life_canvas.gui import run_window

    universe = Universe.new(width, height)
    pipeline = create_pipeline(universe, RenderConfig(cell_size=cell_size), PygletFrameHost(fps))
    run_window(pipeline)


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Animated Game of Life canvas")
    parser.add_argument("--width", type=int, default=64, help="Universe width in cells")
    parser.add_argument("--height", type=int, default=64, help="Universe height in cells")
    parser.add_argument("--cell-size", type=int, default=5, help="Cell size in pixels")
    parser.add_argument("--fps", type=float, default=60.0, help="Target frame rate (window mode)")
    parser.add_argument("--headless", action="store_true", help="Render without opening a window")
    parser.add_argument("--frames", type=int, default=100, help="Frames to render in headless mode")
    parser.add_argument("--output", type=str, default=None, help="PNG path for the last headless frame")

    args = parser.parse_args()

    try:
        if args.headless:
            run_headless(args.width, args.height, args.cell_size, args.frames, args.output)
        else:
            run_gui(args.width, args.height, args.cell_size, args.fps)
    except Exception as e:
        logger.error(f"Run failed: {e}")
        sys.exit(1)
