"""Base64 converter panel."""

from __future__ import annotations

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QWidget

from ....tools.base64_codec import decode_text, encode_text
from ...domain.workspace import ToolRenderContext
from ...models.workspace_models import ToolDescriptor
from ..widgets import CopyButton
from .base import ToolPanel


class Base64ToolPanel(ToolPanel):
    def __init__(
        self,
        descriptor: ToolDescriptor,
        context: ToolRenderContext,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(descriptor, context, parent)

        self.body.addWidget(QLabel("Input", self))
        self.input = QPlainTextEdit(self)
        self.input.setPlaceholderText("Type text to encode, or Base64 to decode")
        self.body.addWidget(self.input, 1)

        actions = QHBoxLayout()
        self.encode_button = QPushButton("Encode", self)
        self.encode_button.setProperty("primary", True)
        self.encode_button.clicked.connect(self.encode)
        actions.addWidget(self.encode_button)
        self.decode_button = QPushButton("Decode", self)
        self.decode_button.clicked.connect(self.decode)
        actions.addWidget(self.decode_button)
        self.copy_button = self.add_copy_button(CopyButton(context, self.output_text, self))
        actions.addWidget(self.copy_button)
        actions.addStretch(1)
        self.body.addLayout(actions)

        self.error_label = QLabel("", self)
        self.error_label.setProperty("role", "muted")
        self.body.addWidget(self.error_label)

        self.body.addWidget(QLabel("Output", self))
        self.output = QPlainTextEdit(self)
        self.output.setReadOnly(True)
        self.output.setPlaceholderText("Base64 output appears here")
        self.body.addWidget(self.output, 1)
        self.copy_button.refresh_enabled()

    def output_text(self) -> str:
        return self.output.toPlainText()

    def encode(self) -> str:
        return self._show(encode_text(self.input.toPlainText()))

    def decode(self) -> str:
        try:
            result = decode_text(self.input.toPlainText())
        except ValueError as exc:
            self.error_label.setText(str(exc))
            return ""
        return self._show(result)

    def _show(self, text: str) -> str:
        self.error_label.setText("")
        self.output.setPlainText(text)
        self.copy_button.refresh_enabled()
        return text
