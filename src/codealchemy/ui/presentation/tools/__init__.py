"""Qt panels for the registered tools, keyed by tool id."""

from __future__ import annotations

from typing import Callable, Mapping

from PySide6.QtWidgets import QWidget

from ...domain.workspace import ToolRenderContext
from ...models.workspace_models import ToolDescriptor
from .base import ToolPanel
from .base64_panel import Base64ToolPanel
from .guid_panel import GuidToolPanel

PanelFactory = Callable[[ToolDescriptor, ToolRenderContext, "QWidget | None"], ToolPanel]

TOOL_PANELS: Mapping[str, PanelFactory] = {
    "guid": GuidToolPanel,
    "base64": Base64ToolPanel,
}


def create_tool_panel(
    descriptor: ToolDescriptor,
    context: ToolRenderContext,
    parent: QWidget | None = None,
) -> ToolPanel:
    """Build the panel for ``descriptor``; unknown ids get an empty panel."""

    factory = TOOL_PANELS.get(descriptor.id, ToolPanel)
    return factory(descriptor, context, parent)


__all__ = ["Base64ToolPanel", "GuidToolPanel", "TOOL_PANELS", "ToolPanel", "create_tool_panel"]
