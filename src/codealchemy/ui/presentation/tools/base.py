"""Shared scaffolding for tool panels."""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from ...domain.workspace import ToolRenderContext
from ...models.workspace_models import ToolDescriptor
from ..widgets import CopyButton


class ToolPanel(QWidget):
    """Base class for a mounted tool.

    Panels may be unmounted at any moment by a transition; :meth:`dispose`
    runs right before the panel is deleted.
    """

    def __init__(
        self,
        descriptor: ToolDescriptor,
        context: ToolRenderContext,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.descriptor = descriptor
        self.context = context
        self._copy_buttons: list[CopyButton] = []
        self.setObjectName(f"ca-tool-{descriptor.id}")
        self.body = QVBoxLayout(self)
        self.body.setContentsMargins(24, 24, 24, 24)
        self.body.setSpacing(12)
        title = QLabel(descriptor.label, self)
        title.setObjectName("ca-tool-title")
        font = title.font()
        font.setPointSize(font.pointSize() + 6)
        font.setBold(True)
        title.setFont(font)
        self.body.addWidget(title)
        if descriptor.description:
            subtitle = QLabel(descriptor.description, self)
            subtitle.setProperty("role", "muted")
            self.body.addWidget(subtitle)

    def add_copy_button(self, button: CopyButton) -> CopyButton:
        self._copy_buttons.append(button)
        return button

    def dispose(self) -> None:
        for button in self._copy_buttons:
            button.dispose()
