"""Tool transition state machine.

The workspace never mounts a tool the moment it is selected. Selection moves
the state to ``Pending(target)`` and shows a skeleton placeholder; only when
the transition timer fires does ``rendered_tool_id`` swap to the target.
A newer selection cancels the running timer, so a superseded target is never
rendered.

The transitions are plain functions over :class:`WorkspaceState`;
:class:`ToolTransitionMachine` owns the single timer slot that drives them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from ..models.workspace_models import IDLE, Pending, WorkspaceState
from ..scheduling import Scheduler, TimerSlot, ms_to_seconds
from .tool_registry import ToolRegistry

LOGGER = logging.getLogger(__name__)

DEFAULT_TRANSITION_DELAY_MS = 300


def settled_target(state: WorkspaceState) -> str:
    """Return the tool that will be visible once the state settles."""
    return state.pending_target or state.rendered_tool_id


def select_tool(state: WorkspaceState, tool_id: str, now: float) -> WorkspaceState:
    """Apply a selection. Returns ``state`` itself when the selection is a no-op."""
    if tool_id == settled_target(state):
        return state
    return replace(
        state,
        selected_tool_id=tool_id,
        transition=Pending(target_id=tool_id, started_at=now),
    )


def complete_transition(
    state: WorkspaceState, target_id: str, registry: ToolRegistry
) -> WorkspaceState:
    """Finish the transition towards ``target_id``.

    Returns ``state`` unchanged if the transition was superseded. A target
    missing from the registry falls back to the first registered tool.
    """
    if state.pending_target != target_id:
        return state
    rendered = target_id
    if not registry.contains(target_id):
        rendered = registry.first().id
        LOGGER.warning(
            "Transition target %s is no longer registered; falling back to %s",
            target_id,
            rendered,
        )
    return replace(state, rendered_tool_id=rendered, selected_tool_id=rendered, transition=IDLE)


def cancel_transition(state: WorkspaceState) -> WorkspaceState:
    """Drop an in-flight transition and keep the rendered tool."""
    if not state.is_transitioning:
        return state
    return replace(state, selected_tool_id=state.rendered_tool_id, transition=IDLE)


class ToolTransitionMachine:
    """Drives :func:`select_tool` / :func:`complete_transition` with one timer."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        delay_ms: float = DEFAULT_TRANSITION_DELAY_MS,
    ) -> None:
        self._scheduler = scheduler
        self._slot = TimerSlot(scheduler, "transition")
        self._delay = ms_to_seconds(delay_ms)

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def timer_active(self) -> bool:
        return self._slot.active

    def select(
        self,
        state: WorkspaceState,
        tool_id: str,
        on_timeout: Callable[[str], None],
    ) -> WorkspaceState:
        """Return the post-selection state, arming the timer when a transition starts.

        ``on_timeout`` receives the target id when the transition settles.
        """
        next_state = select_tool(state, tool_id, self._scheduler.now())
        if next_state is state:
            LOGGER.debug("Selection of %s is a no-op", tool_id)
            return state
        self._slot.schedule(self._delay, lambda: on_timeout(tool_id))
        LOGGER.debug(
            "Transition started: %s -> %s", state.rendered_tool_id, tool_id
        )
        return next_state

    def cancel(self, state: WorkspaceState) -> WorkspaceState:
        self._slot.cancel()
        return cancel_transition(state)

    def shutdown(self) -> None:
        self._slot.cancel()


__all__ = [
    "DEFAULT_TRANSITION_DELAY_MS",
    "ToolTransitionMachine",
    "cancel_transition",
    "complete_transition",
    "select_tool",
    "settled_target",
]
