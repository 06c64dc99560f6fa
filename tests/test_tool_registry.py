"""Unit tests for the tool registry and search filter."""

from __future__ import annotations

import pytest

from codealchemy.ui.domain.tool_registry import (
    DEFAULT_TOOLS,
    ToolRegistry,
    default_registry,
    filter_tools,
)
from codealchemy.ui.models.workspace_models import ToolDescriptor


@pytest.fixture
def registry() -> ToolRegistry:
    return default_registry()


# =============================================================================
# Registry
# =============================================================================


class TestToolRegistry:
    def test_default_order(self, registry: ToolRegistry) -> None:
        assert registry.ids() == ("guid", "base64")
        assert registry.first().id == "guid"
        assert len(registry) == 2

    def test_lookup(self, registry: ToolRegistry) -> None:
        assert registry.get("base64") is DEFAULT_TOOLS[1]
        assert registry.get("nope") is None
        assert "guid" in registry
        assert registry.contains("base64")
        assert not registry.contains("nope")

    def test_empty_registry_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            ToolRegistry([])

    def test_duplicate_ids_rejected(self) -> None:
        tool = ToolDescriptor.create("x", "X")
        with pytest.raises(ValueError, match="Duplicate"):
            ToolRegistry([tool, ToolDescriptor.create("x", "Other")])

    def test_descriptor_keywords_are_lowercased(self) -> None:
        tool = ToolDescriptor.create("x", "X", keywords=("JSON", "Pretty"))
        assert tool.search_keywords == frozenset({"json", "pretty"})


# =============================================================================
# Filter
# =============================================================================


class TestFilterTools:
    def test_blank_query_returns_everything(self, registry: ToolRegistry) -> None:
        assert filter_tools(registry, "") == registry.tools
        assert filter_tools(registry, "   ") == registry.tools

    def test_label_substring_is_case_insensitive(self, registry: ToolRegistry) -> None:
        assert [tool.id for tool in filter_tools(registry, "BAS")] == ["base64"]
        assert [tool.id for tool in filter_tools(registry, "generator")] == ["guid"]

    def test_keyword_match(self, registry: ToolRegistry) -> None:
        assert [tool.id for tool in filter_tools(registry, "uuid")] == ["guid"]
        assert [tool.id for tool in filter_tools(registry, "decode")] == ["base64"]

    def test_query_is_trimmed(self, registry: ToolRegistry) -> None:
        assert [tool.id for tool in registry.filter("  uuid  ")] == ["guid"]

    def test_shared_substring_keeps_registry_order(self, registry: ToolRegistry) -> None:
        # "e" appears in both labels
        assert [tool.id for tool in filter_tools(registry, "e")] == ["guid", "base64"]

    def test_no_match(self, registry: ToolRegistry) -> None:
        assert filter_tools(registry, "zzz") == ()
