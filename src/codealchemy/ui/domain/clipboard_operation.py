"""Clipboard copy operation with a time-boxed "copied" flag."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from ..models.workspace_models import CopyResult, CopyState
from ..scheduling import Scheduler, TimerSlot, ms_to_seconds

LOGGER = logging.getLogger(__name__)

DEFAULT_COPY_RESET_MS = 1800


class ClipboardProvider(Protocol):
    """Anything able to place text on the system clipboard."""

    async def write_text(self, value: str) -> None: ...


class ClipboardOperation:
    """Copy action owned by one copy button / output pairing.

    A successful copy sets ``copied`` and arms a reset timer; a later
    successful copy cancels that timer and arms its own. Calls that are
    superseded by a newer invocation while their write is still in flight
    leave the state alone and report ``ok=False``, so the last call always
    governs the reset and only it confirms the copy.
    """

    def __init__(
        self,
        provider: ClipboardProvider | None,
        scheduler: Scheduler,
        *,
        fallback: ClipboardProvider | None = None,
        reset_delay_ms: float = DEFAULT_COPY_RESET_MS,
        on_change: Callable[[CopyState], None] | None = None,
    ) -> None:
        self._provider = provider
        self._fallback = fallback
        self._scheduler = scheduler
        self._slot = TimerSlot(scheduler, "copy-reset")
        self._reset_delay = ms_to_seconds(reset_delay_ms)
        self._on_change = on_change
        self._state = CopyState()
        self._sequence = 0

    @property
    def state(self) -> CopyState:
        return self._state

    @property
    def copied(self) -> bool:
        return self._state.copied

    async def copy(self, value: str) -> CopyResult:
        if not value:
            return CopyResult(ok=False)

        self._sequence += 1
        token = self._sequence

        ok = await self._write(value)
        if token != self._sequence:
            LOGGER.debug("Copy #%d superseded by #%d", token, self._sequence)
            return CopyResult(ok=False, superseded=True)
        if not ok:
            return CopyResult(ok=False)

        reset_at = self._scheduler.now() + self._reset_delay
        self._slot.schedule(self._reset_delay, self._reset)
        self._set_state(CopyState(copied=True, reset_at=reset_at))
        return CopyResult(ok=True)

    def cancel(self) -> None:
        self._sequence += 1
        self._slot.cancel()
        if self._state.copied:
            self._set_state(CopyState())

    async def _write(self, value: str) -> bool:
        for label, provider in (("primary", self._provider), ("fallback", self._fallback)):
            if provider is None:
                continue
            try:
                await provider.write_text(value)
                return True
            except Exception as exc:
                LOGGER.warning("Clipboard %s write failed: %s", label, exc)
        return False

    def _reset(self) -> None:
        self._set_state(CopyState())

    def _set_state(self, state: CopyState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)


__all__ = ["ClipboardOperation", "ClipboardProvider", "DEFAULT_COPY_RESET_MS"]
