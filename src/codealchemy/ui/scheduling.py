"""Timer scheduling primitives shared by the workspace domain managers.

Every wait in the workspace is a scheduled callback, never a blocking call.
Domain managers receive a :class:`Scheduler` through their constructor so the
production code can run on the qasync-driven asyncio loop while tests use a
virtual clock.

Each logical concern (typing settle, tool transition, one toast expiry, one
copy reset) owns exactly one :class:`TimerSlot`. Scheduling on a slot always
cancels the previous timer of that slot first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

LOGGER = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    """Handle returned by :meth:`Scheduler.call_later`."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Minimal clock + timer interface used by the domain layer."""

    def now(self) -> float:
        """Return monotonic time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        """Run ``callback`` after ``delay`` seconds unless cancelled."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop (qasync in the desktop app)."""

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The loop given at construction, else the running loop (bound on first use)."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)


class TimerSlot:
    """A single cancellable timer for one logical concern.

    Only the most recently scheduled callback of a slot may run. A generation
    counter guards against handles that fire after being cancelled.

    Example::

        slot = TimerSlot(scheduler, "typing")
        slot.schedule(0.5, settle)
        slot.schedule(0.5, settle)  # first timer is cancelled
    """

    __slots__ = ("_scheduler", "_name", "_handle", "_generation", "_deadline")

    def __init__(self, scheduler: Scheduler, name: str) -> None:
        self._scheduler = scheduler
        self._name = name
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._deadline: float | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        """Whether a timer is currently armed on this slot."""
        return self._handle is not None

    @property
    def deadline(self) -> float | None:
        """Scheduler time at which the armed timer fires, if any."""
        return self._deadline

    def schedule(self, delay: float, callback: Callback) -> None:
        """Cancel any pending timer, then arm ``callback`` after ``delay`` seconds."""
        self.cancel()
        self._generation += 1
        generation = self._generation
        self._deadline = self._scheduler.now() + max(0.0, delay)

        def _fire() -> None:
            if generation != self._generation:
                LOGGER.debug("Ignoring stale timer for slot %s", self._name)
                return
            self._handle = None
            self._deadline = None
            callback()

        self._handle = self._scheduler.call_later(delay, _fire)
        LOGGER.debug("Timer armed: slot=%s, delay=%.3fs", self._name, delay)

    def cancel(self) -> bool:
        """Cancel the pending timer. Returns ``True`` if one was armed."""
        handle = self._handle
        if handle is None:
            return False
        self._handle = None
        self._deadline = None
        self._generation += 1
        handle.cancel()
        LOGGER.debug("Timer cancelled: slot=%s", self._name)
        return True


def ms_to_seconds(value_ms: float) -> float:
    """Convert a millisecond setting into scheduler seconds."""
    return max(0.0, float(value_ms)) / 1000.0


__all__ = [
    "AsyncioScheduler",
    "Callback",
    "Scheduler",
    "TimerHandle",
    "TimerSlot",
    "ms_to_seconds",
]
