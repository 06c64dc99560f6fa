"""Service layer helpers (settings, clipboard providers)."""

from .clipboard import ClipboardError, QtClipboardProvider, QtSelectionCopyProvider
from .settings import Settings, SettingsStore, ThemePreference

__all__ = [
    "ClipboardError",
    "QtClipboardProvider",
    "QtSelectionCopyProvider",
    "Settings",
    "SettingsStore",
    "ThemePreference",
]
