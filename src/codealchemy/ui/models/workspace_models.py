"""Workspace state models shared by the domain layer and the view.

These are immutable snapshots. The :class:`WorkspaceCoordinator` replaces its
:class:`WorkspaceState` on every change instead of mutating fields, so any
snapshot handed to a subscriber stays consistent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Union

ThemeMode = Literal["dark", "light"]
THEME_MODES: tuple[str, ...] = ("dark", "light")
DEFAULT_THEME: ThemeMode = "dark"


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """Static description of a tool hosted in the workspace.

    Attributes:
        id: Unique, stable identifier.
        label: Display name shown in the sidebar.
        search_keywords: Extra lowercase terms matched by the search box.
        icon: Opaque icon handle resolved by the view.
        description: Subtitle shown above the tool panel.
    """

    id: str
    label: str
    search_keywords: frozenset[str] = field(default_factory=frozenset)
    icon: str = ""
    description: str = ""

    @classmethod
    def create(
        cls,
        tool_id: str,
        label: str,
        *,
        keywords: Iterable[str] = (),
        icon: str = "",
        description: str = "",
    ) -> ToolDescriptor:
        normalized = frozenset(word.strip().lower() for word in keywords if word and word.strip())
        return cls(
            id=tool_id,
            label=label,
            search_keywords=normalized,
            icon=icon,
            description=description,
        )


@dataclass(frozen=True, slots=True)
class Idle:
    """No tool transition in flight."""


@dataclass(frozen=True, slots=True)
class Pending:
    """A transition towards ``target_id`` started at scheduler time ``started_at``."""

    target_id: str
    started_at: float


TransitionState = Union[Idle, Pending]
IDLE = Idle()


@dataclass(frozen=True, slots=True)
class WorkspaceState:
    """Single owned snapshot of the workspace shell.

    ``rendered_tool_id`` equals ``selected_tool_id`` except while
    ``transition`` is :class:`Pending`, during which the view shows the
    skeleton placeholder and no tool panel.
    """

    query: str
    visible_tools: tuple[ToolDescriptor, ...]
    selected_tool_id: str
    rendered_tool_id: str
    transition: TransitionState = IDLE
    typing: bool = False
    settings_visible: bool = False
    theme: ThemeMode = DEFAULT_THEME

    @property
    def is_transitioning(self) -> bool:
        return isinstance(self.transition, Pending)

    @property
    def pending_target(self) -> str | None:
        transition = self.transition
        return transition.target_id if isinstance(transition, Pending) else None

    @property
    def visible_ids(self) -> tuple[str, ...]:
        return tuple(tool.id for tool in self.visible_tools)


@dataclass(frozen=True, slots=True)
class ToastEntry:
    """A short-lived notification."""

    id: int
    text: str
    created_at: float
    expires_at: float


@dataclass(frozen=True, slots=True)
class CopyState:
    """Per copy-button "recently copied" flag."""

    copied: bool = False
    reset_at: float | None = None


@dataclass(frozen=True, slots=True)
class CopyResult:
    """Outcome of a clipboard copy attempt.

    ``ok`` is true only when this call wrote the clipboard and set the
    copied flag. A call overtaken by a newer one reports ``superseded``.
    """

    ok: bool
    superseded: bool = False


@dataclass(frozen=True, slots=True)
class IndicatorGeometry:
    """Vertical placement of the sidebar's active-item indicator."""

    top: float
    height: float


__all__ = [
    "CopyResult",
    "CopyState",
    "DEFAULT_THEME",
    "IDLE",
    "Idle",
    "IndicatorGeometry",
    "Pending",
    "THEME_MODES",
    "ThemeMode",
    "ToastEntry",
    "ToolDescriptor",
    "TransitionState",
    "WorkspaceState",
]
