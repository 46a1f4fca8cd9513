"""Frame hosts and the animation scheduler."""

from .hosts import FrameHost, ManualFrameHost, PygletFrameHost
from .scheduler import AnimationScheduler, SchedulerState

__all__ = [
    'FrameHost',
    'ManualFrameHost',
    'PygletFrameHost',
    'AnimationScheduler',
    'SchedulerState',
]
