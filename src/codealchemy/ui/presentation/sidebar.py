"""Sidebar: search box, filtered tool list and the active indicator."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from PySide6.QtCore import QSize, Qt
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..models.workspace_models import IndicatorGeometry, ToolDescriptor
from .widgets import repolish

LOGGER = logging.getLogger(__name__)

ITEM_HEIGHT = 40
INDICATOR_WIDTH = 3
TOOL_ID_ROLE = Qt.ItemDataRole.UserRole


class Sidebar(QFrame):
    """Left-hand navigation.

    The sidebar only forwards user input through the callbacks it is given;
    everything it displays comes from :meth:`show_tools`, :meth:`set_active`,
    :meth:`set_typing` and :meth:`place_indicator`.
    """

    def __init__(
        self,
        *,
        on_query: Callable[[str], None],
        on_select: Callable[[str], None],
        on_open_settings: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("ca-sidebar")
        self.setFixedWidth(240)
        self._on_select = on_select

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 16, 12, 12)
        layout.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("Code Alchemy", self)
        title.setObjectName("ca-sidebar-title")
        header.addWidget(title, 1)
        self.settings_button = QPushButton("⚙", self)
        self.settings_button.setObjectName("ca-settings-button")
        self.settings_button.setToolTip("Settings")
        self.settings_button.clicked.connect(on_open_settings)
        header.addWidget(self.settings_button)
        layout.addLayout(header)

        self.search = QLineEdit(self)
        self.search.setObjectName("ca-search")
        self.search.setPlaceholderText("Search tools...")
        self.search.setClearButtonEnabled(True)
        self.search.setProperty("typing", False)
        self.search.textChanged.connect(on_query)
        layout.addWidget(self.search)

        self.tool_list = QListWidget(self)
        self.tool_list.setObjectName("ca-tool-list")
        self.tool_list.setFrameShape(QFrame.Shape.NoFrame)
        self.tool_list.setSpacing(0)
        self.tool_list.itemClicked.connect(self._handle_item_clicked)
        layout.addWidget(self.tool_list, 1)

        self.empty_label = QLabel("No tools match your search", self)
        self.empty_label.setProperty("role", "muted")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setVisible(False)
        layout.addWidget(self.empty_label)

        self.indicator = QFrame(self.tool_list.viewport())
        self.indicator.setObjectName("ca-indicator")
        self.indicator.setFixedWidth(INDICATOR_WIDTH)
        self.indicator.setVisible(False)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def show_tools(self, tools: Sequence[ToolDescriptor]) -> None:
        current = self.tool_ids()
        wanted = tuple(tool.id for tool in tools)
        if current == wanted:
            return
        self.tool_list.clear()
        for tool in tools:
            item = QListWidgetItem(tool.label)
            item.setData(TOOL_ID_ROLE, tool.id)
            item.setToolTip(tool.description)
            item.setSizeHint(QSize(0, ITEM_HEIGHT))
            self.tool_list.addItem(item)
        self.empty_label.setVisible(not tools)

    def tool_ids(self) -> tuple[str, ...]:
        return tuple(
            self.tool_list.item(row).data(TOOL_ID_ROLE) for row in range(self.tool_list.count())
        )

    def item_heights(self) -> dict[str, float]:
        heights: dict[str, float] = {}
        for row in range(self.tool_list.count()):
            item = self.tool_list.item(row)
            height = self.tool_list.visualItemRect(item).height() or item.sizeHint().height()
            heights[item.data(TOOL_ID_ROLE)] = float(height)
        return heights

    def set_active(self, tool_id: str) -> None:
        for row in range(self.tool_list.count()):
            item = self.tool_list.item(row)
            selected = item.data(TOOL_ID_ROLE) == tool_id
            if item.isSelected() != selected:
                item.setSelected(selected)

    def set_typing(self, typing: bool) -> None:
        if self.search.property("typing") == typing:
            return
        self.search.setProperty("typing", typing)
        repolish(self.search)

    def place_indicator(self, geometry: IndicatorGeometry | None) -> None:
        if geometry is None:
            self.indicator.setVisible(False)
            return
        offset = self.tool_list.verticalScrollBar().value()
        self.indicator.setGeometry(0, int(geometry.top) - offset, INDICATOR_WIDTH, int(geometry.height))
        self.indicator.setVisible(True)
        self.indicator.raise_()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _handle_item_clicked(self, item: QListWidgetItem) -> None:
        tool_id = item.data(TOOL_ID_ROLE)
        if tool_id:
            self._on_select(str(tool_id))


__all__ = ["Sidebar", "TOOL_ID_ROLE"]
