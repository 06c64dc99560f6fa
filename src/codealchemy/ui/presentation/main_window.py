"""Workspace shell window.

The window creates the widgets, forwards user input to the
:class:`WorkspaceCoordinator` and updates itself from bus events. It holds
no workspace state of its own:

1. Sidebar: search text, visible tools, active item, indicator
2. Content area: a stack with the skeleton placeholder and the tool host,
   exactly one of which is visible at a time
3. Toast overlay anchored to the bottom-right corner
4. Settings dialog bound to ``settings_visible``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from ... import APP_NAME
from ...theme import theme_manager
from ..events import (
    SearchTypingChanged,
    SettingsVisibilityChanged,
    ThemeChanged,
    ToastExpired,
    ToastPosted,
    ToolRendered,
    ToolTransitionCancelled,
    ToolTransitionStarted,
    WorkspaceStateChanged,
)
from .settings_dialog import SettingsDialog
from .sidebar import Sidebar
from .tools import ToolPanel, create_tool_panel
from .widgets import ToastStack, ToolSkeleton

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from ..domain.workspace import WorkspaceCoordinator
    from ..events import EventBus

LOGGER = logging.getLogger(__name__)

SKELETON_PAGE = 0
TOOL_PAGE = 1


class MainWindow(QMainWindow):
    """Top-level shell bound to a :class:`WorkspaceCoordinator`."""

    def __init__(
        self,
        coordinator: "WorkspaceCoordinator",
        event_bus: "EventBus",
        *,
        apply_theme: bool = True,
    ) -> None:
        super().__init__()
        self._coordinator = coordinator
        self._event_bus = event_bus
        self._apply_theme = apply_theme
        self._panel: ToolPanel | None = None
        self._settings_dialog: SettingsDialog | None = None
        self._subscribed = False

        self.setWindowTitle(APP_NAME)
        self.resize(1100, 720)

        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.sidebar = Sidebar(
            on_query=coordinator.set_query,
            on_select=coordinator.select_tool,
            on_open_settings=coordinator.open_settings,
            parent=central,
        )
        layout.addWidget(self.sidebar)

        self.content = QStackedWidget(central)
        self.content.setObjectName("ca-content")
        self.skeleton = ToolSkeleton(self.content)
        self.tool_host = QWidget(self.content)
        self._tool_layout = QVBoxLayout(self.tool_host)
        self._tool_layout.setContentsMargins(0, 0, 0, 0)
        self.content.insertWidget(SKELETON_PAGE, self.skeleton)
        self.content.insertWidget(TOOL_PAGE, self.tool_host)
        layout.addWidget(self.content, 1)

        self.setCentralWidget(central)
        self.toast_stack = ToastStack(central)
        self.toast_stack.setVisible(False)

        self._subscribe_to_events()
        self._sync_sidebar()
        self._mount_tool(coordinator.state.rendered_tool_id)
        if apply_theme:
            theme_manager.apply_to_application(coordinator.theme)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def panel(self) -> ToolPanel | None:
        return self._panel

    @property
    def settings_dialog(self) -> SettingsDialog | None:
        return self._settings_dialog

    @property
    def showing_skeleton(self) -> bool:
        return self.content.currentIndex() == SKELETON_PAGE

    # ------------------------------------------------------------------
    # Event subscriptions
    # ------------------------------------------------------------------

    def _subscribe_to_events(self) -> None:
        bus = self._event_bus
        bus.subscribe(WorkspaceStateChanged, self._on_state_changed)
        bus.subscribe(ToolTransitionStarted, self._on_transition_started)
        bus.subscribe(ToolRendered, self._on_tool_rendered)
        bus.subscribe(ToolTransitionCancelled, self._on_transition_cancelled)
        bus.subscribe(SearchTypingChanged, self._on_typing_changed)
        bus.subscribe(SettingsVisibilityChanged, self._on_settings_visibility)
        bus.subscribe(ThemeChanged, self._on_theme_changed)
        bus.subscribe(ToastPosted, self._on_toast_posted)
        bus.subscribe(ToastExpired, self._on_toast_expired)
        self._subscribed = True
        LOGGER.debug("MainWindow: subscribed to events")

    def _unsubscribe_from_events(self) -> None:
        if not self._subscribed:
            return
        bus = self._event_bus
        bus.unsubscribe(WorkspaceStateChanged, self._on_state_changed)
        bus.unsubscribe(ToolTransitionStarted, self._on_transition_started)
        bus.unsubscribe(ToolRendered, self._on_tool_rendered)
        bus.unsubscribe(ToolTransitionCancelled, self._on_transition_cancelled)
        bus.unsubscribe(SearchTypingChanged, self._on_typing_changed)
        bus.unsubscribe(SettingsVisibilityChanged, self._on_settings_visibility)
        bus.unsubscribe(ThemeChanged, self._on_theme_changed)
        bus.unsubscribe(ToastPosted, self._on_toast_posted)
        bus.unsubscribe(ToastExpired, self._on_toast_expired)
        self._subscribed = False
        LOGGER.debug("MainWindow: unsubscribed from events")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_state_changed(self, event: WorkspaceStateChanged) -> None:
        self._sync_sidebar()

    def _on_transition_started(self, event: ToolTransitionStarted) -> None:
        self._unmount_tool()
        self.content.setCurrentIndex(SKELETON_PAGE)

    def _on_tool_rendered(self, event: ToolRendered) -> None:
        self._mount_tool(event.tool_id)

    def _on_transition_cancelled(self, event: ToolTransitionCancelled) -> None:
        if self._panel is None or self.showing_skeleton:
            self._mount_tool(event.tool_id)

    def _on_typing_changed(self, event: SearchTypingChanged) -> None:
        self.sidebar.set_typing(event.typing)

    def _on_settings_visibility(self, event: SettingsVisibilityChanged) -> None:
        if event.visible:
            dialog = self._ensure_settings_dialog()
            dialog.set_theme(self._coordinator.theme)
            dialog.show()
            dialog.raise_()
        elif self._settings_dialog is not None and self._settings_dialog.isVisible():
            self._settings_dialog.hide()

    def _on_theme_changed(self, event: ThemeChanged) -> None:
        if self._apply_theme:
            theme_manager.apply_to_application(event.theme)
        if self._settings_dialog is not None:
            self._settings_dialog.set_theme(event.theme)

    def _on_toast_posted(self, event: ToastPosted) -> None:
        self.toast_stack.add_toast(event.toast)

    def _on_toast_expired(self, event: ToastExpired) -> None:
        self.toast_stack.remove_toast(event.toast_id)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def _sync_sidebar(self) -> None:
        state = self._coordinator.state
        if self.sidebar.search.text() != state.query:
            self.sidebar.search.setText(state.query)
        self.sidebar.show_tools(state.visible_tools)
        self.sidebar.set_active(state.rendered_tool_id)
        self.sidebar.set_typing(state.typing)
        self.refresh_indicator()

    def refresh_indicator(self) -> None:
        geometry = self._coordinator.indicator_geometry(self.sidebar.item_heights())
        self.sidebar.place_indicator(geometry)

    def _mount_tool(self, tool_id: str) -> None:
        self._unmount_tool()
        descriptor = self._coordinator.registry.get(tool_id) or self._coordinator.rendered_tool
        self._panel = create_tool_panel(descriptor, self._coordinator.tool_context(), self.tool_host)
        self._tool_layout.addWidget(self._panel)
        self.content.setCurrentIndex(TOOL_PAGE)
        LOGGER.debug("MainWindow: mounted %s", descriptor.id)

    def _unmount_tool(self) -> None:
        panel = self._panel
        if panel is None:
            return
        self._panel = None
        panel.dispose()
        self._tool_layout.removeWidget(panel)
        panel.deleteLater()

    def _ensure_settings_dialog(self) -> SettingsDialog:
        if self._settings_dialog is None:
            self._settings_dialog = SettingsDialog(
                theme=self._coordinator.theme,
                on_toggle_theme=self._coordinator.toggle_theme,
                on_close=self._coordinator.close_settings,
                parent=self,
            )
        return self._settings_dialog

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------

    def resizeEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self.toast_stack.reposition()
        self.refresh_indicator()

    def closeEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        LOGGER.debug("MainWindow: close event")
        self._unsubscribe_from_events()
        self._unmount_tool()
        self._coordinator.shutdown()
        if self._settings_dialog is not None:
            self._settings_dialog.hide()
        super().closeEvent(event)


__all__ = ["MainWindow"]
