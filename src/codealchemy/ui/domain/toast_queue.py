"""Toast queue domain manager.

Holds short-lived notifications. Each entry owns its own expiry timer and
removes itself independently of the others. Entries are kept oldest first;
the view renders them in that order.
"""

from __future__ import annotations

import itertools
import logging

from ..events import EventBus, ToastExpired, ToastPosted
from ..models.workspace_models import ToastEntry
from ..scheduling import Scheduler, TimerSlot, ms_to_seconds

LOGGER = logging.getLogger(__name__)

DEFAULT_TOAST_LIFETIME_MS = 2000
DEFAULT_MAX_TOASTS = 5


class ToastQueue:
    """Ordered, capped collection of self-expiring toasts.

    Events Emitted:
        - ToastPosted: When an entry is appended
        - ToastExpired: When an entry is removed (expired, dropped or dismissed)
    """

    def __init__(
        self,
        scheduler: Scheduler,
        event_bus: EventBus,
        *,
        lifetime_ms: float = DEFAULT_TOAST_LIFETIME_MS,
        max_entries: int = DEFAULT_MAX_TOASTS,
    ) -> None:
        self._scheduler = scheduler
        self._bus = event_bus
        self._lifetime = ms_to_seconds(lifetime_ms)
        self._max_entries = max(1, int(max_entries))
        self._ids = itertools.count(1)
        self._entries: list[ToastEntry] = []
        self._timers: dict[int, TimerSlot] = {}

    @property
    def entries(self) -> tuple[ToastEntry, ...]:
        return tuple(self._entries)

    @property
    def lifetime(self) -> float:
        return self._lifetime

    def __len__(self) -> int:
        return len(self._entries)

    def notify(self, text: str) -> ToastEntry:
        now = self._scheduler.now()
        entry = ToastEntry(
            id=next(self._ids),
            text=text,
            created_at=now,
            expires_at=now + self._lifetime,
        )
        self._entries.append(entry)
        slot = TimerSlot(self._scheduler, f"toast-{entry.id}")
        self._timers[entry.id] = slot
        slot.schedule(self._lifetime, lambda: self._remove(entry.id, reason="expired"))
        LOGGER.debug("Toast posted: id=%d, text=%r", entry.id, text)
        self._bus.publish(ToastPosted(toast=entry))

        while len(self._entries) > self._max_entries:
            self._remove(self._entries[0].id, reason="dropped")
        return entry

    def dismiss(self, toast_id: int) -> bool:
        return self._remove(toast_id, reason="dismissed")

    def clear(self) -> None:
        for entry in list(self._entries):
            self._remove(entry.id, reason="cleared")

    def _remove(self, toast_id: int, *, reason: str) -> bool:
        slot = self._timers.pop(toast_id, None)
        if slot is not None:
            slot.cancel()
        for index, entry in enumerate(self._entries):
            if entry.id == toast_id:
                del self._entries[index]
                LOGGER.debug("Toast removed: id=%d, reason=%s", toast_id, reason)
                self._bus.publish(ToastExpired(toast_id=toast_id, reason=reason))
                return True
        return False


__all__ = ["DEFAULT_MAX_TOASTS", "DEFAULT_TOAST_LIFETIME_MS", "ToastQueue"]
