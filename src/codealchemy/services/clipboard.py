"""Qt-backed clipboard providers.

:class:`QtClipboardProvider` is the primary path. :class:`QtSelectionCopyProvider`
is the fallback: it copies through an invisible, selectable line edit the way
a user would with Ctrl+C.
"""

from __future__ import annotations

import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    """Raised when a provider could not place text on the clipboard."""


def _clipboard() -> Any:
    from PySide6.QtGui import QGuiApplication

    if QGuiApplication.instance() is None:
        raise ClipboardError("No Qt application is running")
    clipboard = QGuiApplication.clipboard()
    if clipboard is None:
        raise ClipboardError("System clipboard unavailable")
    return clipboard


class QtClipboardProvider:
    """Writes through ``QGuiApplication.clipboard()`` and verifies the result."""

    name = "qt-clipboard"

    async def write_text(self, value: str) -> None:
        clipboard = _clipboard()
        clipboard.setText(value)
        if clipboard.text() != value:
            raise ClipboardError("Clipboard did not accept the copied text")


class QtSelectionCopyProvider:
    """Copies via a hidden read-only ``QLineEdit`` selection."""

    name = "qt-selection"

    def __init__(self, parent: Any | None = None) -> None:
        self._parent = parent

    async def write_text(self, value: str) -> None:
        from PySide6.QtWidgets import QLineEdit

        clipboard = _clipboard()
        field = QLineEdit(self._parent)
        try:
            field.setVisible(False)
            field.setReadOnly(True)
            field.setText(value)
            field.selectAll()
            field.copy()
        finally:
            field.deleteLater()
        if clipboard.text() != value:
            raise ClipboardError("Selection copy did not reach the clipboard")
        LOGGER.debug("Clipboard written through selection fallback")


__all__ = ["ClipboardError", "QtClipboardProvider", "QtSelectionCopyProvider"]
