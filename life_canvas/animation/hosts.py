"""
Frame pacing hosts.

A host runs a callback once, when it is ready to paint the next frame. It is
not periodic: a looping caller has to request again from inside every
callback. Stopping a loop means the host simply stops invoking callbacks.
"""

from typing import Callable, Optional, Protocol
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameHost(Protocol):
    """One-shot "call me on the next frame" primitive."""

    def request_frame(self, callback: FrameCallback) -> None: ...


class ManualFrameHost:
    """Headless host pumped explicitly by the caller.

    Holds at most one pending callback; ``run`` dispatches them one at a time,
    so a callback that re-requests is picked up on the next iteration.
    """

    def __init__(self):
        self._pending: Optional[FrameCallback] = None
        self.dispatched = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: FrameCallback) -> None:
        """Schedule ``callback`` for the next frame.

        Raises:
            RuntimeError: If a callback is already waiting
        """
        if self._pending is not None:
            raise RuntimeError("A frame callback is already pending")
        self._pending = callback

    def run(self, frames: int) -> int:
        """Dispatch up to ``frames`` callbacks.

        Exceptions raised by a callback propagate to the caller.

        Returns:
            Number of callbacks actually dispatched
        """
        count = 0
        while count < frames and self._pending is not None:
            callback, self._pending = self._pending, None
            self.dispatched += 1
            count += 1
            callback()
        return count

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        self._pending = None


class PygletFrameHost:
    """Host backed by the pyglet clock, for use inside ``pyglet.app.run()``."""

    def __init__(self, fps: float = 60.0):
        if fps <= 0:
            raise ValueError("Frame rate must be positive")
        self.interval = 1.0 / fps

    def request_frame(self, callback: FrameCallback) -> None:
        import pyglet

        def _dispatch(dt: float) -> None:
            callback()

        pyglet.clock.schedule_once(_dispatch, self.interval)
