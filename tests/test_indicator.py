"""Unit tests for the sidebar indicator projection."""

from __future__ import annotations

from codealchemy.ui.domain.indicator import compute_indicator
from codealchemy.ui.models.workspace_models import IndicatorGeometry


def test_first_item() -> None:
    assert compute_indicator(["guid", "base64"], "guid", [40, 40]) == IndicatorGeometry(0.0, 40.0)


def test_offset_accumulates_heights_and_spacing() -> None:
    geometry = compute_indicator(["a", "b", "c"], "c", [40, 50, 30], spacing=4)
    assert geometry == IndicatorGeometry(top=98.0, height=30.0)


def test_mapping_heights() -> None:
    geometry = compute_indicator(["guid", "base64"], "base64", {"guid": 36, "base64": 44})
    assert geometry == IndicatorGeometry(top=36.0, height=44.0)


def test_hidden_active_tool() -> None:
    assert compute_indicator(["base64"], "guid", [40]) is None
    assert compute_indicator([], "guid", []) is None


def test_missing_heights_count_as_zero() -> None:
    assert compute_indicator(["a", "b"], "b", [40]) == IndicatorGeometry(top=40.0, height=0.0)
