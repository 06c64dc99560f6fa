"""Settings dialog: app identity and the theme switch."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ... import APP_NAME, __version__


class SettingsDialog(QDialog):
    """Modal-less dialog mirroring ``WorkspaceState.settings_visible``.

    Closing the dialog in any way reports back through ``on_close`` so the
    coordinator stays the single owner of the visibility flag.
    """

    def __init__(
        self,
        *,
        theme: str,
        on_toggle_theme: Callable[[], None],
        on_close: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("ca-settings")
        self.setWindowTitle(f"{APP_NAME} Settings")
        self.setModal(False)
        self._on_close = on_close

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        name = QLabel(APP_NAME, self)
        font = name.font()
        font.setPointSize(font.pointSize() + 4)
        font.setBold(True)
        name.setFont(font)
        layout.addWidget(name)
        version = QLabel(f"Version {__version__}", self)
        version.setProperty("role", "muted")
        layout.addWidget(version)

        row = QHBoxLayout()
        self.theme_label = QLabel(self)
        row.addWidget(self.theme_label, 1)
        self.theme_button = QPushButton("Switch Theme", self)
        self.theme_button.setProperty("primary", True)
        self.theme_button.clicked.connect(on_toggle_theme)
        row.addWidget(self.theme_button)
        layout.addLayout(row)

        close_button = QPushButton("Close", self)
        close_button.clicked.connect(self.close)
        layout.addWidget(close_button)

        self.finished.connect(self._handle_finished)
        self.set_theme(theme)

    def set_theme(self, theme: str) -> None:
        self.theme_label.setText(f"Current Theme: {theme.capitalize()}")

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        super().closeEvent(event)
        self._on_close()

    def _handle_finished(self, _result: int) -> None:
        self._on_close()


__all__ = ["SettingsDialog"]
