"""Static tool registry and the sidebar search filter."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from ..models.workspace_models import ToolDescriptor


def filter_tools(registry: Iterable[ToolDescriptor], query: str) -> tuple[ToolDescriptor, ...]:
    """Return the tools whose label or keywords contain ``query``.

    Matching is a case-insensitive substring test on the trimmed query.
    A blank query returns every tool in registry order.
    """

    tools = tuple(registry)
    needle = (query or "").strip().casefold()
    if not needle:
        return tools
    return tuple(tool for tool in tools if _matches(tool, needle))


def _matches(tool: ToolDescriptor, needle: str) -> bool:
    if needle in tool.label.casefold():
        return True
    return any(needle in keyword.casefold() for keyword in tool.search_keywords)


class ToolRegistry:
    """Ordered, immutable collection of :class:`ToolDescriptor` entries."""

    __slots__ = ("_tools", "_index")

    def __init__(self, tools: Sequence[ToolDescriptor]) -> None:
        ordered = tuple(tools)
        if not ordered:
            raise ValueError("Tool registry requires at least one tool")
        index: dict[str, ToolDescriptor] = {}
        for tool in ordered:
            if tool.id in index:
                raise ValueError(f"Duplicate tool id '{tool.id}'")
            index[tool.id] = tool
        self._tools = ordered
        self._index = index

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._index

    @property
    def tools(self) -> tuple[ToolDescriptor, ...]:
        return self._tools

    def ids(self) -> tuple[str, ...]:
        return tuple(tool.id for tool in self._tools)

    def get(self, tool_id: str) -> ToolDescriptor | None:
        return self._index.get(tool_id)

    def contains(self, tool_id: str) -> bool:
        return tool_id in self._index

    def first(self) -> ToolDescriptor:
        return self._tools[0]

    def filter(self, query: str) -> tuple[ToolDescriptor, ...]:
        return filter_tools(self._tools, query)


DEFAULT_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor.create(
        "guid",
        "GUID Generator",
        keywords=("guid", "uuid", "id", "identifier"),
        icon="tabler:fingerprint",
        description="Create RFC 4122 UUID values instantly.",
    ),
    ToolDescriptor.create(
        "base64",
        "Base64 Converter",
        keywords=("base64", "encode", "decode", "text"),
        icon="tabler:file-code-2",
        description="Encode text into Base64 and decode it back.",
    ),
)


def default_registry() -> ToolRegistry:
    return ToolRegistry(DEFAULT_TOOLS)


__all__ = ["DEFAULT_TOOLS", "ToolRegistry", "default_registry", "filter_tools"]
