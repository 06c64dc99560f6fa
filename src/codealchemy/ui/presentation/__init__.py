"""Qt presentation layer.

Widgets here render :class:`~codealchemy.ui.models.WorkspaceState` and hand
user input to the coordinator. They subscribe to bus events for updates and
carry no workspace logic themselves.
"""

from __future__ import annotations

from .main_window import MainWindow
from .settings_dialog import SettingsDialog
from .sidebar import Sidebar
from .widgets import CopyButton, ToastStack, ToolSkeleton

__all__ = [
    "CopyButton",
    "MainWindow",
    "SettingsDialog",
    "Sidebar",
    "ToastStack",
    "ToolSkeleton",
]
