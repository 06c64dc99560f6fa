"""UI package holding the workspace domain layer and the Qt shell.

The domain layer lives in :mod:`codealchemy.ui.domain`; it is not imported
here so that services can depend on :mod:`codealchemy.ui.models` without
pulling the coordinator in.
"""

from .events import EventBus
from .scheduling import AsyncioScheduler, Scheduler, TimerSlot

__all__ = [
    "AsyncioScheduler",
    "EventBus",
    "Scheduler",
    "TimerSlot",
]
