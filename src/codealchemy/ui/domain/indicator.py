"""Sidebar active-indicator geometry.

Derived from the visible list order, the rendered tool and per-item heights
whenever any of them change. It is never stored alongside workspace state.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from ..models.workspace_models import IndicatorGeometry


def compute_indicator(
    visible_ids: Sequence[str],
    active_id: str,
    item_heights: Sequence[float] | Mapping[str, float],
    *,
    spacing: float = 0.0,
) -> IndicatorGeometry | None:
    """Return the indicator placement, or ``None`` when ``active_id`` is hidden.

    ``item_heights`` is either aligned with ``visible_ids`` or keyed by id.
    """

    if active_id not in visible_ids:
        return None
    top = 0.0
    for index, tool_id in enumerate(visible_ids):
        height = _height_for(item_heights, index, tool_id)
        if tool_id == active_id:
            return IndicatorGeometry(top=top, height=height)
        top += height + spacing
    return None


def _height_for(
    item_heights: Sequence[float] | Mapping[str, float], index: int, tool_id: str
) -> float:
    if isinstance(item_heights, Mapping):
        return float(item_heights.get(tool_id, 0.0))
    if index < len(item_heights):
        return float(item_heights[index])
    return 0.0


__all__ = ["compute_indicator"]
