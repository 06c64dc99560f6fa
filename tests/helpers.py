"""Shared test helpers and stub classes.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable

from codealchemy.ui.events import Event, EventBus


class FakeTimerHandle:
    """Handle returned by :class:`FakeScheduler`."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock scheduler.

    Time only moves when a test calls :meth:`advance`. Timers due within the
    advanced window fire in deadline order, ties in scheduling order, and
    each one sees ``now()`` equal to its own deadline.

    Example:
        scheduler = FakeScheduler()
        signal = DebouncedSignal(scheduler)
        signal.trigger()
        scheduler.advance(500)
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, FakeTimerHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimerHandle:
        handle = FakeTimerHandle(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of armed, uncancelled timers."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, ms: float) -> None:
        """Move the clock forward by ``ms`` milliseconds, firing due timers."""
        target = self._now + ms / 1000.0
        while self._queue and self._queue[0][0] <= target + 1e-9:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, when)
            handle.callback()
        self._now = target


class StubClipboardProvider:
    """Clipboard provider that records writes.

    Set ``fail`` to make writes raise. Set ``gate`` to an
    :class:`asyncio.Event` to hold writes until the test releases them.
    """

    def __init__(self, *, fail: bool = False, gate: asyncio.Event | None = None) -> None:
        self.fail = fail
        self.gate = gate
        self.writes: list[str] = []

    async def write_text(self, value: str) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("clipboard unavailable")
        self.writes.append(value)


class EventRecorder:
    """Collects every event of the given types published on a bus."""

    def __init__(self, bus: EventBus, *event_types: type[Event]) -> None:
        from codealchemy.ui import events as events_module

        self.events: list[Any] = []
        types = event_types or tuple(
            value
            for value in vars(events_module).values()
            if isinstance(value, type) and issubclass(value, Event) and value is not Event
        )
        for event_type in types:
            bus.subscribe(event_type, self.events.append)

    def of_type(self, event_type: type[Event]) -> list[Any]:
        return [event for event in self.events if isinstance(event, event_type)]

    def clear(self) -> None:
        self.events.clear()
