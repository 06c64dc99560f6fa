"""Debounced activity signal used for the search "typing" indicator."""

from __future__ import annotations

import logging
from typing import Callable

from ..scheduling import Scheduler, TimerSlot, ms_to_seconds

LOGGER = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD_MS = 500


class DebouncedSignal:
    """Turns a burst of triggers into one delayed "settled" edge.

    The signal is active from the first :meth:`trigger` of a burst until
    ``quiet_period_ms`` passes without another trigger. Every trigger restarts
    the settle timer, so the most recent one decides when the signal drops.

    ``on_change`` receives the new value on each edge only.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        quiet_period_ms: float = DEFAULT_QUIET_PERIOD_MS,
        on_change: Callable[[bool], None] | None = None,
        name: str = "debounce",
    ) -> None:
        self._slot = TimerSlot(scheduler, name)
        self._quiet_period = ms_to_seconds(quiet_period_ms)
        self._on_change = on_change
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pending(self) -> bool:
        """Whether a settle timer is armed."""
        return self._slot.active

    def trigger(self) -> None:
        self._slot.schedule(self._quiet_period, self._settle)
        if not self._active:
            self._set_active(True)

    def reset(self) -> None:
        self._slot.cancel()
        if self._active:
            self._set_active(False)

    def _settle(self) -> None:
        self._set_active(False)

    def _set_active(self, value: bool) -> None:
        self._active = value
        LOGGER.debug("DebouncedSignal %s -> %s", self._slot.name, value)
        if self._on_change is not None:
            self._on_change(value)


__all__ = ["DebouncedSignal", "DEFAULT_QUIET_PERIOD_MS"]
