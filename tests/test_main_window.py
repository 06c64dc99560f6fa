"""Tests for the Qt workspace shell."""

from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import Qt

from codealchemy.ui.domain import WorkspaceCoordinator
from codealchemy.ui.domain.workspace import ToolRenderContext
from codealchemy.ui.domain.tool_registry import DEFAULT_TOOLS, ToolRegistry
from codealchemy.ui.events import EventBus, ToolRendered
from codealchemy.ui.presentation.main_window import MainWindow
from codealchemy.ui.presentation.tools import Base64ToolPanel, GuidToolPanel
from codealchemy.ui.presentation.widgets import CopyButton

from tests.helpers import FakeScheduler, StubClipboardProvider


@pytest.fixture
def window(qtbot, coordinator: WorkspaceCoordinator, event_bus: EventBus) -> MainWindow:
    widget = MainWindow(coordinator, event_bus, apply_theme=False)
    qtbot.addWidget(widget)
    with qtbot.waitExposed(widget):
        widget.show()
    return widget


def _click_tool(window: MainWindow, tool_id: str) -> None:
    tool_list = window.sidebar.tool_list
    for row in range(tool_list.count()):
        item = tool_list.item(row)
        if item.data(Qt.ItemDataRole.UserRole) == tool_id:
            tool_list.itemClicked.emit(item)
            return
    raise AssertionError(f"{tool_id} not listed")


# =============================================================================
# Tool transitions
# =============================================================================


class TestToolTransitions:
    def test_initial_tool_mounted(self, window: MainWindow) -> None:
        assert isinstance(window.panel, GuidToolPanel)
        assert not window.showing_skeleton
        assert window.sidebar.tool_ids() == ("guid", "base64")

    def test_selection_shows_skeleton_then_tool(
        self, window: MainWindow, scheduler: FakeScheduler
    ) -> None:
        _click_tool(window, "base64")

        assert window.showing_skeleton
        assert window.panel is None

        scheduler.advance(300)

        assert not window.showing_skeleton
        assert isinstance(window.panel, Base64ToolPanel)

    def test_rapid_switch_mounts_last_tool_only(
        self, window: MainWindow, scheduler: FakeScheduler, event_bus: EventBus
    ) -> None:
        mounted: list[str] = []
        event_bus.subscribe(ToolRendered, lambda event: mounted.append(event.tool_id))

        _click_tool(window, "base64")
        scheduler.advance(100)
        _click_tool(window, "guid")
        scheduler.advance(300)

        assert mounted == ["guid"]
        assert isinstance(window.panel, GuidToolPanel)

    def test_cancelled_transition_remounts_rendered_tool(
        self, window: MainWindow, coordinator: WorkspaceCoordinator, scheduler: FakeScheduler
    ) -> None:
        _click_tool(window, "base64")
        assert window.showing_skeleton

        coordinator.cancel_transition()
        scheduler.advance(1000)

        assert not window.showing_skeleton
        assert isinstance(window.panel, GuidToolPanel)

    def test_registry_swap_dropping_target_remounts_rendered_tool(
        self, window: MainWindow, coordinator: WorkspaceCoordinator, scheduler: FakeScheduler
    ) -> None:
        _click_tool(window, "base64")

        coordinator.set_registry(ToolRegistry(DEFAULT_TOOLS[:1]))
        scheduler.advance(1000)

        assert not window.showing_skeleton
        assert isinstance(window.panel, GuidToolPanel)
        assert window.sidebar.tool_ids() == ("guid",)


# =============================================================================
# Search
# =============================================================================


class TestSearch:
    def test_typing_filters_and_flags_search(
        self, qtbot, window: MainWindow, coordinator: WorkspaceCoordinator, scheduler: FakeScheduler
    ) -> None:
        qtbot.keyClicks(window.sidebar.search, "bas")

        assert coordinator.state.query == "bas"
        assert window.sidebar.tool_ids() == ("base64",)
        assert window.sidebar.search.property("typing") is True

        scheduler.advance(500)
        assert window.sidebar.search.property("typing") is False

    def test_no_match_shows_empty_label(self, window: MainWindow, coordinator: WorkspaceCoordinator) -> None:
        coordinator.set_query("zzz")

        assert window.sidebar.tool_ids() == ()
        assert not window.sidebar.empty_label.isHidden()
        assert isinstance(window.panel, GuidToolPanel)


# =============================================================================
# Settings, toasts, clipboard
# =============================================================================


class TestSettingsDialog:
    def test_open_toggle_theme_and_close(
        self, window: MainWindow, coordinator: WorkspaceCoordinator
    ) -> None:
        window.sidebar.settings_button.click()

        dialog = window.settings_dialog
        assert dialog is not None and dialog.isVisible()
        assert dialog.theme_label.text() == "Current Theme: Dark"

        dialog.theme_button.click()
        assert coordinator.theme == "light"
        assert dialog.theme_label.text() == "Current Theme: Light"

        dialog.close()
        assert not coordinator.state.settings_visible
        assert not dialog.isVisible()


class TestToasts:
    def test_toast_lifecycle(
        self, window: MainWindow, coordinator: WorkspaceCoordinator, scheduler: FakeScheduler
    ) -> None:
        entry = coordinator.notify("Hello")
        assert window.toast_stack.toast_ids == (entry.id,)

        scheduler.advance(2000)
        assert window.toast_stack.toast_ids == ()


class TestCopyButton:
    @pytest.mark.asyncio
    async def test_copy_marks_button_and_posts_toast(
        self,
        window: MainWindow,
        coordinator: WorkspaceCoordinator,
        clipboard: StubClipboardProvider,
        scheduler: FakeScheduler,
    ) -> None:
        panel = window.panel
        assert isinstance(panel, GuidToolPanel)
        assert not panel.copy_button.isEnabled()

        (value,) = panel.generate()
        assert panel.copy_button.isEnabled()

        result = await panel.copy_button._copy(value)

        assert result.ok
        assert clipboard.writes == [value]
        assert panel.copy_button.text() == "Copied"
        assert [toast.text for toast in coordinator.toasts] == ["Copied to clipboard"]

        scheduler.advance(1800)
        assert panel.copy_button.text() == "Copy"

    @pytest.mark.asyncio
    async def test_unmounted_panel_does_not_post_toast(
        self, window: MainWindow, coordinator: WorkspaceCoordinator
    ) -> None:
        panel = window.panel
        assert isinstance(panel, GuidToolPanel)
        button = panel.copy_button
        panel.dispose()

        await button._copy("value")

        assert coordinator.toasts == ()

    @pytest.mark.asyncio
    async def test_click_holds_task_until_copy_finishes(
        self, window: MainWindow, coordinator: WorkspaceCoordinator, clipboard: StubClipboardProvider
    ) -> None:
        panel = window.panel
        assert isinstance(panel, GuidToolPanel)
        panel.generate()
        gate = asyncio.Event()
        clipboard.gate = gate

        panel.copy_button.click()

        assert panel.copy_button.pending_copies == 1
        (task,) = tuple(panel.copy_button._tasks)
        gate.set()
        result = await task
        await asyncio.sleep(0)

        assert result.ok
        assert panel.copy_button.pending_copies == 0
        assert [toast.text for toast in coordinator.toasts] == ["Copied to clipboard"]

    @pytest.mark.asyncio
    async def test_failed_copy_task_is_logged(
        self, qtbot, coordinator: WorkspaceCoordinator, caplog: pytest.LogCaptureFixture
    ) -> None:
        def _boom() -> None:
            raise RuntimeError("toast layer gone")

        context = ToolRenderContext(
            on_copied=_boom, create_copy_operation=coordinator.create_copy_operation
        )
        button = CopyButton(context, lambda: "value")
        qtbot.addWidget(button)

        with caplog.at_level("ERROR"):
            button.click()
            (task,) = tuple(button._tasks)
            await asyncio.wait({task})
            await asyncio.sleep(0)

        assert button.pending_copies == 0
        assert "Copy task failed" in caplog.text


class TestBase64Panel:
    def test_encode_and_invalid_decode(self, window: MainWindow, scheduler: FakeScheduler) -> None:
        _click_tool(window, "base64")
        scheduler.advance(300)
        panel = window.panel
        assert isinstance(panel, Base64ToolPanel)

        panel.input.setPlainText("hello")
        assert panel.encode() == "aGVsbG8="
        assert panel.copy_button.isEnabled()

        panel.input.setPlainText("***")
        assert panel.decode() == ""
        assert "Invalid Base64" in panel.error_label.text()


def test_close_shuts_down_coordinator(
    window: MainWindow, coordinator: WorkspaceCoordinator, scheduler: FakeScheduler, event_bus: EventBus
) -> None:
    coordinator.select_tool("base64")
    coordinator.notify("bye")

    window.close()

    assert scheduler.pending == 0
    assert event_bus.handler_count(ToolRendered) == 0
    assert window.panel is None
