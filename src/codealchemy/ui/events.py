"""Event bus and workspace events.

The domain layer publishes these events; the Qt presentation subscribes to
them. Neither side holds a direct reference to the other's internals.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    TypeVar,
)
from weakref import WeakMethod, ref

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from typing import DefaultDict

    from .models.workspace_models import CopyState, ToastEntry, WorkspaceState

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Handler = Callable[[E], None]


@dataclass(slots=True)
class Event:
    """Base class for all workspace events."""


# Published on every state replacement; kept out of debug logging.
_QUIET_EVENT_TYPES: set[type] = set()


# =============================================================================
# Workspace Events
# =============================================================================


@dataclass(slots=True)
class WorkspaceStateChanged(Event):
    """Emitted whenever the coordinator replaces its state snapshot.

    Attributes:
        state: The new snapshot.
        previous: The snapshot it replaced.
    """

    state: WorkspaceState
    previous: WorkspaceState


_QUIET_EVENT_TYPES.add(WorkspaceStateChanged)


@dataclass(slots=True)
class ToolTransitionStarted(Event):
    """Emitted when the skeleton placeholder replaces the mounted tool.

    Attributes:
        target_id: The tool that will be rendered when the transition settles.
        previous_id: The tool that was rendered before the transition.
    """

    target_id: str
    previous_id: str


@dataclass(slots=True)
class ToolRendered(Event):
    """Emitted when a transition settles and a tool should be mounted.

    Attributes:
        tool_id: The tool now rendered in the content area.
    """

    tool_id: str


@dataclass(slots=True)
class ToolTransitionCancelled(Event):
    """Emitted when a pending transition is dropped before it settles.

    Attributes:
        tool_id: The tool that stays rendered in the content area.
        target_id: The tool the dropped transition was heading to.
    """

    tool_id: str
    target_id: str


@dataclass(slots=True)
class SearchTypingChanged(Event):
    """Emitted on the edges of the debounced search typing signal."""

    typing: bool


@dataclass(slots=True)
class SettingsVisibilityChanged(Event):
    """Emitted when the settings dialog is opened or closed."""

    visible: bool


@dataclass(slots=True)
class ThemeChanged(Event):
    """Emitted when the user switches between dark and light themes."""

    theme: str


# =============================================================================
# Notification Events
# =============================================================================


@dataclass(slots=True)
class ToastPosted(Event):
    """Emitted when a toast is appended to the queue."""

    toast: ToastEntry


@dataclass(slots=True)
class ToastExpired(Event):
    """Emitted when a toast leaves the queue.

    Attributes:
        toast_id: Identifier of the removed toast.
        reason: ``"expired"``, ``"dropped"``, ``"dismissed"`` or ``"cleared"``.
    """

    toast_id: int
    reason: str = "expired"


@dataclass(slots=True)
class CopyStateChanged(Event):
    """Emitted when a copy button's "copied" flag flips."""

    owner: str
    state: CopyState


class EventBus(Generic[E]):
    """A typed publish-subscribe event bus.

    Bound-method handlers are held through weak references so a destroyed
    widget never keeps receiving events. Plain functions and lambdas are held
    strongly.

    Example::

        bus = EventBus()
        bus.subscribe(ToolRendered, lambda event: print(event.tool_id))
        bus.publish(ToolRendered(tool_id="guid"))

    Thread Safety:
        Not thread-safe. Use it from the event loop thread only.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: DefaultDict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Register ``handler`` for events of exactly ``event_type``.

        Subscribing the same handler twice results in two invocations.
        """
        self._handlers[event_type].append(_HandlerRef.create(handler))
        logger.debug(
            "Subscribed handler %s to event type %s",
            _handler_name(handler),
            event_type.__name__,
        )

    def unsubscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Remove the first registration of ``handler``; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers is None:
            return
        for index, handler_ref in enumerate(handlers):
            if handler_ref.matches(handler):
                handlers.pop(index)
                logger.debug(
                    "Unsubscribed handler %s from event type %s",
                    _handler_name(handler),
                    event_type.__name__,
                )
                return

    def publish(self, event: E) -> None:
        """Invoke every handler synchronously, in registration order.

        A handler that raises is logged and the remaining handlers still run.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        is_quiet = event_type in _QUIET_EVENT_TYPES

        if not handlers:
            if not is_quiet:
                logger.debug("No handlers for event type %s", event_type.__name__)
            return

        if not is_quiet:
            logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        dead: list[_HandlerRef] = []
        # Handlers may subscribe or unsubscribe while we iterate.
        for handler_ref in list(handlers):
            handler = handler_ref.resolve()
            if handler is None:
                dead.append(handler_ref)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )

        for handler_ref in dead:
            if handler_ref in handlers:
                handlers.remove(handler_ref)

    def clear(self) -> None:
        self._handlers.clear()
        logger.debug("Cleared all event handlers")

    def handler_count(self, event_type: type[E] | None = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())


class _HandlerRef:
    """Weak reference for bound methods, strong reference for everything else."""

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: WeakMethod | ref | Handler, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> _HandlerRef:
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                pass
        return cls(handler, is_weak=False)

    def resolve(self) -> Handler | None:
        if not self._is_weak:
            return self._ref  # type: ignore[return-value]
        return self._ref()  # type: ignore[operator]

    def matches(self, handler: Handler) -> bool:
        resolved = self.resolve()
        if resolved is None:
            return False
        return resolved == handler


def _handler_name(handler: Handler) -> str:
    if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
        return f"{type(handler.__self__).__name__}.{handler.__func__.__name__}"
    if hasattr(handler, "__name__"):
        return handler.__name__
    return repr(handler)


__all__ = [
    "Event",
    "EventBus",
    "Handler",
    "WorkspaceStateChanged",
    "ToolTransitionStarted",
    "ToolRendered",
    "ToolTransitionCancelled",
    "SearchTypingChanged",
    "SettingsVisibilityChanged",
    "ThemeChanged",
    "ToastPosted",
    "ToastExpired",
    "CopyStateChanged",
]
