"""Domain layer for the workspace shell.

Domain Managers:
    - DebouncedSignal: Burst-to-edge activity signal (search typing)
    - ToolRegistry: Static tool list and search filter
    - ToolTransitionMachine: Selection to render swap with skeleton window
    - ToastQueue: Self-expiring notifications
    - ClipboardOperation: Copy with fallback and auto-reset flag
    - WorkspaceCoordinator: Composes the above behind one control surface

All domain managers:
    - Receive dependencies (scheduler, event bus) via constructor injection
    - Express waiting only as cancellable timers
    - Have no direct dependencies on Qt or UI widgets
"""

from __future__ import annotations

from .clipboard_operation import ClipboardOperation, ClipboardProvider
from .debounced_signal import DebouncedSignal
from .indicator import compute_indicator
from .toast_queue import ToastQueue
from .tool_registry import DEFAULT_TOOLS, ToolRegistry, default_registry, filter_tools
from .transition import ToolTransitionMachine
from .workspace import ToolRenderContext, WorkspaceCoordinator

__all__: list[str] = [
    "ClipboardOperation",
    "ClipboardProvider",
    "DEFAULT_TOOLS",
    "DebouncedSignal",
    "ToastQueue",
    "ToolRegistry",
    "ToolRenderContext",
    "ToolTransitionMachine",
    "WorkspaceCoordinator",
    "compute_indicator",
    "default_registry",
    "filter_tools",
]
