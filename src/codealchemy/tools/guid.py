"""GUID generation and formatting."""

from __future__ import annotations

import uuid
from typing import Callable, Literal

GuidCaseMode = Literal["lowercase", "uppercase"]

MIN_COUNT = 1
MAX_COUNT = 100


def format_guid(
    value: uuid.UUID | str,
    *,
    case_mode: GuidCaseMode = "lowercase",
    include_hyphens: bool = True,
    include_braces: bool = False,
) -> str:
    text = str(value)
    if not include_hyphens:
        text = text.replace("-", "")
    text = text.upper() if case_mode == "uppercase" else text.lower()
    if include_braces:
        text = f"{{{text}}}"
    return text


def create_formatted_guids(
    count: int = 1,
    *,
    case_mode: GuidCaseMode = "lowercase",
    include_hyphens: bool = True,
    include_braces: bool = False,
    factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> list[str]:
    """Generate ``count`` random UUIDs (clamped to 1..100) in the requested format."""

    safe_count = max(MIN_COUNT, min(MAX_COUNT, int(count)))
    return [
        format_guid(
            factory(),
            case_mode=case_mode,
            include_hyphens=include_hyphens,
            include_braces=include_braces,
        )
        for _ in range(safe_count)
    ]


__all__ = ["GuidCaseMode", "MAX_COUNT", "MIN_COUNT", "create_formatted_guids", "format_guid"]
