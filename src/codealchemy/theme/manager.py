"""Applies the workspace palettes to the running Qt application."""

from __future__ import annotations

import logging
from typing import Any, Mapping, cast

from ..ui.models.workspace_models import DEFAULT_THEME
from .palette import DARK_PALETTE, LIGHT_PALETTE, Palette

LOGGER = logging.getLogger(__name__)

_STYLESHEET = """
QMainWindow, QDialog {{ background: {background}; color: {foreground}; }}
QWidget#ca-sidebar {{ background: {surface}; border-right: 1px solid {border}; }}
QLineEdit#ca-search {{
    background: {surface_alt}; color: {foreground};
    border: 1px solid {border}; border-radius: 8px; padding: 6px 10px;
}}
QLineEdit#ca-search[typing="true"] {{ border-color: {accent}; }}
QListWidget#ca-tool-list {{ background: transparent; border: none; color: {foreground}; }}
QListWidget#ca-tool-list::item {{ padding: 8px 10px; border-radius: 6px; }}
QListWidget#ca-tool-list::item:selected {{ background: {selection}; color: {foreground}; }}
QFrame#ca-indicator {{ background: {accent}; border-radius: 2px; }}
QLabel[role="muted"] {{ color: {text_muted}; }}
QFrame[role="skeleton"] {{ background: {skeleton}; border-radius: 6px; }}
QPushButton {{
    background: {surface_alt}; color: {foreground};
    border: 1px solid {border}; border-radius: 6px; padding: 6px 12px;
}}
QPushButton[primary="true"], QPushButton[copied="true"] {{
    background: {accent}; color: {accent_foreground}; border: none;
}}
QPlainTextEdit {{
    background: {surface_alt}; color: {foreground};
    border: 1px solid {border}; border-radius: 6px;
}}
QLabel#ca-toast {{
    background: {toast_background}; color: {toast_foreground};
    border-radius: 8px; padding: 8px 14px;
}}
"""

# QPalette role name -> palette field
_QT_ROLES: Mapping[str, str] = {
    "Window": "background",
    "WindowText": "foreground",
    "Base": "surface_alt",
    "AlternateBase": "surface",
    "Text": "foreground",
    "Button": "surface_alt",
    "ButtonText": "foreground",
    "Highlight": "accent",
    "HighlightedText": "accent_foreground",
}


class ThemeManager:
    """Maps a theme mode to its palette and pushes it into Qt."""

    def __init__(self, palettes: Mapping[str, Palette] | None = None) -> None:
        self._palettes = dict(palettes or {"dark": DARK_PALETTE, "light": LIGHT_PALETTE})
        self._applied: str | None = None

    @property
    def applied_mode(self) -> str | None:
        return self._applied

    def palette(self, mode: str | None) -> Palette:
        """Return the palette for ``mode``; unknown modes get the default theme."""
        palette = self._palettes.get((mode or "").strip().lower())
        if palette is None:
            LOGGER.debug("No palette for theme %r; using %s", mode, DEFAULT_THEME)
            palette = self._palettes[DEFAULT_THEME]
        return palette

    def stylesheet(self, mode: str | None) -> str:
        return _STYLESHEET.format(**self.palette(mode).colors())

    def apply_to_application(self, mode: str | None, *, app: Any | None = None) -> Palette:
        palette = self.palette(mode)
        from PySide6.QtGui import QColor, QPalette
        from PySide6.QtWidgets import QApplication

        qt_app: Any = app if app is not None else QApplication.instance()
        if qt_app is None:
            return palette

        palette_cls = cast(Any, QPalette)
        qt_palette = palette_cls()
        for role_name, field_name in _QT_ROLES.items():
            role = getattr(palette_cls.ColorRole, role_name)
            qt_palette.setColor(role, QColor(*palette.rgb(field_name)))
        qt_app.setStyle("Fusion")
        qt_app.setPalette(qt_palette)
        qt_app.setStyleSheet(self.stylesheet(palette.mode))
        self._applied = palette.mode
        LOGGER.debug("Applied %s theme", palette.mode)
        return palette


theme_manager = ThemeManager()


__all__ = ["ThemeManager", "theme_manager"]
