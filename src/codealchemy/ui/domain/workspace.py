"""Workspace coordinator.

Composes the tool registry, the transition state machine, the search typing
signal, the toast queue and clipboard operations behind the single control
surface the shell window binds to. The coordinator is the only writer of
:class:`WorkspaceState`; every change replaces the snapshot and is published
on the event bus.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Sequence

from ...services.settings import Settings, ThemePreference
from ..events import (
    CopyStateChanged,
    EventBus,
    SearchTypingChanged,
    SettingsVisibilityChanged,
    ThemeChanged,
    ToolRendered,
    ToolTransitionCancelled,
    ToolTransitionStarted,
    WorkspaceStateChanged,
)
from ..models.workspace_models import (
    IDLE,
    CopyState,
    IndicatorGeometry,
    ThemeMode,
    ToastEntry,
    ToolDescriptor,
    WorkspaceState,
)
from ..scheduling import Scheduler
from .clipboard_operation import ClipboardOperation, ClipboardProvider
from .debounced_signal import DebouncedSignal
from .indicator import compute_indicator
from .toast_queue import ToastQueue
from .tool_registry import ToolRegistry, filter_tools
from .transition import ToolTransitionMachine, complete_transition, settled_target

LOGGER = logging.getLogger(__name__)

COPIED_TOAST_TEXT = "Copied to clipboard"


@dataclass(frozen=True, slots=True)
class ToolRenderContext:
    """What a tool panel receives when it is mounted.

    Attributes:
        on_copied: Call after a successful copy to post the confirmation toast.
        create_copy_operation: Builds a :class:`ClipboardOperation` for one
            copy button, wired to the workspace clipboard providers.
    """

    on_copied: Callable[[], None]
    create_copy_operation: Callable[..., ClipboardOperation]


class WorkspaceCoordinator:
    """Owns :class:`WorkspaceState` and the timers that change it.

    Events Emitted:
        - WorkspaceStateChanged: On every state replacement
        - ToolTransitionStarted: When the skeleton replaces the mounted tool
        - ToolRendered: When a transition settles
        - ToolTransitionCancelled: When a pending transition is dropped
        - SearchTypingChanged: On typing signal edges
        - SettingsVisibilityChanged: When settings open or close
        - ThemeChanged: When the theme is switched
        - ToastPosted / ToastExpired: Through the toast queue
        - CopyStateChanged: When a copy operation's flag flips
    """

    def __init__(
        self,
        registry: ToolRegistry,
        event_bus: EventBus,
        *,
        scheduler: Scheduler,
        settings: Settings | None = None,
        theme_preference: ThemePreference | None = None,
        clipboard_provider: ClipboardProvider | None = None,
        clipboard_fallback: ClipboardProvider | None = None,
    ) -> None:
        self._registry = registry
        self._bus = event_bus
        self._scheduler = scheduler
        self._settings = settings or Settings()
        self._theme_preference = theme_preference or ThemePreference(None, self._settings)
        self._clipboard_provider = clipboard_provider
        self._clipboard_fallback = clipboard_fallback
        self._copy_owner_ids = itertools.count(1)

        self._transition = ToolTransitionMachine(
            scheduler, delay_ms=self._settings.transition_delay_ms
        )
        self._typing = DebouncedSignal(
            scheduler,
            quiet_period_ms=self._settings.typing_quiet_period_ms,
            on_change=self._handle_typing_changed,
            name="typing",
        )
        self._toasts = ToastQueue(
            scheduler,
            event_bus,
            lifetime_ms=self._settings.toast_lifetime_ms,
            max_entries=self._settings.toast_max_entries,
        )

        initial = registry.first().id
        self._state = WorkspaceState(
            query="",
            visible_tools=registry.tools,
            selected_tool_id=initial,
            rendered_tool_id=initial,
            theme=self._theme_preference.get(),
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkspaceState:
        return self._state

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def visible_tools(self) -> tuple[ToolDescriptor, ...]:
        return self._state.visible_tools

    @property
    def rendered_tool(self) -> ToolDescriptor:
        return self._registry.get(self._state.rendered_tool_id) or self._registry.first()

    @property
    def toasts(self) -> tuple[ToastEntry, ...]:
        return self._toasts.entries

    @property
    def theme(self) -> ThemeMode:
        return self._state.theme

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def set_query(self, text: str) -> None:
        """Update the search text, recompute the visible set and pulse typing."""
        text = text or ""
        if text == self._state.query:
            return
        visible = filter_tools(self._registry, text)
        self._apply(replace(self._state, query=text, visible_tools=visible))
        self._typing.trigger()
        self._auto_select_visible()

    def _auto_select_visible(self) -> None:
        if not self._settings.auto_select_first_visible:
            return
        visible = self._state.visible_tools
        if not visible:
            return
        if settled_target(self._state) in self._state.visible_ids:
            return
        LOGGER.debug("Selected tool hidden by filter; selecting %s", visible[0].id)
        self.select_tool(visible[0].id)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_tool(self, tool_id: str) -> bool:
        """Select ``tool_id``. Returns ``False`` for unknown ids or no-op selections."""
        if not self._registry.contains(tool_id):
            LOGGER.warning("Ignoring selection of unknown tool %s", tool_id)
            return False
        previous = self._state
        next_state = self._transition.select(previous, tool_id, self._complete_transition)
        if next_state is previous:
            return False
        self._apply(next_state)
        self._bus.publish(
            ToolTransitionStarted(target_id=tool_id, previous_id=previous.rendered_tool_id)
        )
        return True

    def cancel_transition(self) -> None:
        """Drop a pending transition; the rendered tool stays mounted."""
        target = self._state.pending_target
        self._apply(self._transition.cancel(self._state))
        if target is not None:
            self._publish_cancelled(target)

    def _complete_transition(self, target_id: str) -> None:
        next_state = complete_transition(self._state, target_id, self._registry)
        if next_state is self._state:
            return
        self._apply(next_state)
        LOGGER.debug("Tool rendered: %s", next_state.rendered_tool_id)
        self._bus.publish(ToolRendered(tool_id=next_state.rendered_tool_id))

    def set_registry(self, registry: ToolRegistry) -> None:
        """Swap the registry, repairing ids that no longer exist."""
        self._registry = registry
        state = self._state
        fallback = registry.first().id
        rendered = state.rendered_tool_id if registry.contains(state.rendered_tool_id) else fallback
        selected = state.selected_tool_id if registry.contains(state.selected_tool_id) else rendered
        transition = state.transition
        dropped = None
        if not registry.contains(settled_target(state)):
            self._transition.shutdown()
            dropped = state.pending_target
            transition = IDLE
            selected = rendered
        next_state = replace(
            state,
            visible_tools=filter_tools(registry, state.query),
            rendered_tool_id=rendered,
            selected_tool_id=selected,
            transition=transition,
        )
        self._apply(next_state)
        if rendered != state.rendered_tool_id:
            LOGGER.warning("Rendered tool %s vanished; falling back to %s", state.rendered_tool_id, rendered)
            self._bus.publish(ToolRendered(tool_id=rendered))
        elif dropped is not None:
            self._publish_cancelled(dropped)

    # ------------------------------------------------------------------
    # Notifications & clipboard
    # ------------------------------------------------------------------

    def notify(self, text: str) -> ToastEntry:
        return self._toasts.notify(text)

    def dismiss_toast(self, toast_id: int) -> bool:
        return self._toasts.dismiss(toast_id)

    def on_copied(self) -> None:
        self.notify(COPIED_TOAST_TEXT)

    def create_copy_operation(
        self,
        on_change: Callable[[CopyState], None] | None = None,
        *,
        owner: str | None = None,
    ) -> ClipboardOperation:
        """Build a copy operation; its flag changes are also published as events."""
        label = owner or f"copy-{next(self._copy_owner_ids)}"

        def _changed(state: CopyState) -> None:
            self._bus.publish(CopyStateChanged(owner=label, state=state))
            if on_change is not None:
                on_change(state)

        return ClipboardOperation(
            self._clipboard_provider,
            self._scheduler,
            fallback=self._clipboard_fallback,
            reset_delay_ms=self._settings.copy_reset_ms,
            on_change=_changed,
        )

    def tool_context(self) -> ToolRenderContext:
        return ToolRenderContext(
            on_copied=self.on_copied,
            create_copy_operation=self.create_copy_operation,
        )

    # ------------------------------------------------------------------
    # Settings & theme
    # ------------------------------------------------------------------

    def open_settings(self) -> None:
        self._set_settings_visible(True)

    def close_settings(self) -> None:
        self._set_settings_visible(False)

    def toggle_settings(self) -> None:
        self._set_settings_visible(not self._state.settings_visible)

    def _set_settings_visible(self, visible: bool) -> None:
        if self._state.settings_visible == visible:
            return
        self._apply(replace(self._state, settings_visible=visible))
        self._bus.publish(SettingsVisibilityChanged(visible=visible))

    def toggle_theme(self) -> ThemeMode:
        return self.set_theme("light" if self._state.theme == "dark" else "dark")

    def set_theme(self, theme: str) -> ThemeMode:
        applied = self._theme_preference.set(theme)
        if applied != self._state.theme:
            self._apply(replace(self._state, theme=applied))
            self._bus.publish(ThemeChanged(theme=applied))
        return applied

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def indicator_geometry(
        self,
        item_heights: Sequence[float] | Mapping[str, float],
        *,
        spacing: float = 0.0,
    ) -> IndicatorGeometry | None:
        return compute_indicator(
            self._state.visible_ids,
            self._state.rendered_tool_id,
            item_heights,
            spacing=spacing,
        )

    def shutdown(self) -> None:
        """Cancel every pending timer owned by the workspace."""
        self._transition.shutdown()
        self._typing.reset()
        self._toasts.clear()
        if self._state.is_transitioning:
            self._apply(replace(self._state, selected_tool_id=self._state.rendered_tool_id, transition=IDLE))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _publish_cancelled(self, target_id: str) -> None:
        LOGGER.debug("Transition to %s cancelled", target_id)
        self._bus.publish(
            ToolTransitionCancelled(tool_id=self._state.rendered_tool_id, target_id=target_id)
        )

    def _handle_typing_changed(self, typing: bool) -> None:
        self._apply(replace(self._state, typing=typing))
        self._bus.publish(SearchTypingChanged(typing=typing))

    def _apply(self, state: WorkspaceState) -> None:
        previous = self._state
        if state == previous:
            return
        self._state = state
        self._bus.publish(WorkspaceStateChanged(state=state, previous=previous))


__all__ = ["COPIED_TOAST_TEXT", "ToolRenderContext", "WorkspaceCoordinator"]
