"""GUID generator panel."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QWidget,
)

from ....tools.guid import MAX_COUNT, MIN_COUNT, create_formatted_guids
from ...domain.workspace import ToolRenderContext
from ...models.workspace_models import ToolDescriptor
from ..widgets import CopyButton
from .base import ToolPanel


class GuidToolPanel(ToolPanel):
    def __init__(
        self,
        descriptor: ToolDescriptor,
        context: ToolRenderContext,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(descriptor, context, parent)

        options = QHBoxLayout()
        options.addWidget(QLabel("Number of GUIDs", self))
        self.count_input = QSpinBox(self)
        self.count_input.setRange(MIN_COUNT, MAX_COUNT)
        self.count_input.setValue(1)
        options.addWidget(self.count_input)
        self.case_input = QComboBox(self)
        self.case_input.addItems(["lowercase", "uppercase"])
        options.addWidget(self.case_input)
        self.hyphens_input = QCheckBox("Hyphens", self)
        self.hyphens_input.setChecked(True)
        options.addWidget(self.hyphens_input)
        self.braces_input = QCheckBox("Braces", self)
        options.addWidget(self.braces_input)
        options.addStretch(1)
        self.body.addLayout(options)

        actions = QHBoxLayout()
        self.generate_button = QPushButton("Generate GUID", self)
        self.generate_button.setProperty("primary", True)
        self.generate_button.clicked.connect(self.generate)
        actions.addWidget(self.generate_button)
        self.copy_button = self.add_copy_button(CopyButton(context, self.output_text, self))
        actions.addWidget(self.copy_button)
        actions.addStretch(1)
        self.body.addLayout(actions)

        self.output = QPlainTextEdit(self)
        self.output.setReadOnly(True)
        self.output.setPlaceholderText("Generated GUID will appear here")
        self.body.addWidget(self.output, 1)
        self.copy_button.refresh_enabled()

    def output_text(self) -> str:
        return self.output.toPlainText()

    def generate(self) -> list[str]:
        guids = create_formatted_guids(
            self.count_input.value(),
            case_mode="uppercase" if self.case_input.currentText() == "uppercase" else "lowercase",
            include_hyphens=self.hyphens_input.isChecked(),
            include_braces=self.braces_input.isChecked(),
        )
        self.output.setPlainText("\n".join(guids))
        self.copy_button.refresh_enabled()
        return guids
