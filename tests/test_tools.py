"""Tests for the GUID and Base64 tool helpers."""

from __future__ import annotations

import re
import uuid

import pytest

from codealchemy.tools.base64_codec import decode_text, encode_bytes, encode_text
from codealchemy.tools.guid import MAX_COUNT, create_formatted_guids, format_guid

_FIXED = uuid.UUID("12345678-9abc-def0-1234-56789abcdef0")


class TestGuid:
    def test_default_format(self) -> None:
        (value,) = create_formatted_guids()
        assert re.fullmatch(r"[0-9a-f]{8}(-[0-9a-f]{4}){3}-[0-9a-f]{12}", value)

    def test_formatting_options(self) -> None:
        assert format_guid(_FIXED, case_mode="uppercase") == "12345678-9ABC-DEF0-1234-56789ABCDEF0"
        assert format_guid(_FIXED, include_hyphens=False) == "123456789abcdef0123456789abcdef0"
        assert format_guid(_FIXED, include_braces=True) == "{12345678-9abc-def0-1234-56789abcdef0}"

    def test_count_is_clamped(self) -> None:
        assert len(create_formatted_guids(0, factory=lambda: _FIXED)) == 1
        assert len(create_formatted_guids(500, factory=lambda: _FIXED)) == MAX_COUNT

    def test_values_are_unique(self) -> None:
        values = create_formatted_guids(20)
        assert len(set(values)) == 20


class TestBase64:
    def test_encode(self) -> None:
        assert encode_text("hello") == "aGVsbG8="
        assert encode_text("") == ""
        assert encode_bytes(b"\xff\x00") == "/wA="

    def test_decode_ignores_whitespace(self) -> None:
        assert decode_text(" aGVs\nbG8= ") == "hello"

    def test_decode_unicode(self) -> None:
        assert decode_text(encode_text("héllo ✓")) == "héllo ✓"

    def test_invalid_input(self) -> None:
        with pytest.raises(ValueError, match="Invalid Base64"):
            decode_text("not base64!")

    def test_non_utf8_payload(self) -> None:
        with pytest.raises(ValueError, match="UTF-8"):
            decode_text("/w==")
