"""Small reusable widgets for the workspace shell."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

from ..domain.clipboard_operation import ClipboardOperation
from ..domain.workspace import ToolRenderContext
from ..models.workspace_models import CopyResult, CopyState, ToastEntry

LOGGER = logging.getLogger(__name__)

Schedule = Callable[[Awaitable[CopyResult]], "asyncio.Future[CopyResult]"]


def repolish(widget: QWidget) -> None:
    """Re-apply the style sheet after a dynamic property change."""
    style = widget.style()
    style.unpolish(widget)
    style.polish(widget)


class CopyButton(QPushButton):
    """Copy button bound to one output; owns its :class:`ClipboardOperation`."""

    def __init__(
        self,
        context: ToolRenderContext,
        value_getter: Callable[[], str],
        parent: QWidget | None = None,
        *,
        schedule: Schedule = asyncio.ensure_future,
    ) -> None:
        super().__init__("Copy", parent)
        self._context = context
        self._value_getter = value_getter
        self._schedule = schedule
        self._disposed = False
        self._tasks: set[asyncio.Future[CopyResult]] = set()
        self._operation: ClipboardOperation = context.create_copy_operation(
            on_change=self._apply_state
        )
        self.setObjectName("ca-copy-button")
        self.clicked.connect(self._handle_clicked)

    @property
    def operation(self) -> ClipboardOperation:
        return self._operation

    @property
    def pending_copies(self) -> int:
        return len(self._tasks)

    def refresh_enabled(self) -> None:
        self.setEnabled(bool(self._value_getter()))

    def dispose(self) -> None:
        """Called when the owning tool panel is unmounted."""
        self._disposed = True
        self._operation.cancel()

    def _handle_clicked(self) -> None:
        value = self._value_getter()
        if not value:
            return
        task = self._schedule(self._copy(value))
        self._tasks.add(task)
        task.add_done_callback(self._copy_finished)

    def _copy_finished(self, task: asyncio.Future[CopyResult]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error("Copy task failed", exc_info=exc)

    async def _copy(self, value: str) -> CopyResult:
        result = await self._operation.copy(value)
        if result.ok and not self._disposed:
            self._context.on_copied()
        return result

    def _apply_state(self, state: CopyState) -> None:
        if self._disposed:
            return
        self.setText("Copied" if state.copied else "Copy")
        self.setProperty("copied", state.copied)
        repolish(self)


class ToolSkeleton(QFrame):
    """Placeholder shown while a tool transition is pending."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ca-skeleton")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        for height, stretch in ((28, 0), (14, 0), (14, 0), (120, 1), (120, 1)):
            bar = QFrame(self)
            bar.setProperty("role", "skeleton")
            bar.setMinimumHeight(height)
            layout.addWidget(bar, stretch)


class ToastStack(QWidget):
    """Overlay listing the active toasts, oldest on top."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(8)
        self._labels: dict[int, QLabel] = {}

    @property
    def toast_ids(self) -> tuple[int, ...]:
        return tuple(self._labels)

    def add_toast(self, toast: ToastEntry) -> None:
        label = QLabel(f"✓  {toast.text}", self)
        label.setObjectName("ca-toast")
        self._labels[toast.id] = label
        self._layout.addWidget(label)
        self._reposition()

    def remove_toast(self, toast_id: int) -> None:
        label = self._labels.pop(toast_id, None)
        if label is None:
            return
        self._layout.removeWidget(label)
        label.deleteLater()
        self._reposition()

    def _reposition(self) -> None:
        self.setVisible(bool(self._labels))
        self.adjustSize()
        parent = self.parentWidget()
        if parent is None:
            return
        margin = 20
        self.move(
            max(0, parent.width() - self.width() - margin),
            max(0, parent.height() - self.height() - margin),
        )
        self.raise_()

    def reposition(self) -> None:
        self._reposition()


__all__ = ["CopyButton", "ToastStack", "ToolSkeleton", "repolish"]
