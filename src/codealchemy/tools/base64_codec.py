"""Base64 helpers for the converter tool."""

from __future__ import annotations

import base64
import binascii


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def encode_text(value: str) -> str:
    return encode_bytes(value.encode("utf-8"))


def decode_text(value: str) -> str:
    """Decode Base64 into UTF-8 text, ignoring whitespace.

    Raises:
        ValueError: If ``value`` is not valid Base64 or not UTF-8 text.
    """

    normalized = "".join(value.split())
    try:
        raw = base64.b64decode(normalized, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid Base64 input: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("Decoded Base64 is not valid UTF-8 text") from exc


__all__ = ["decode_text", "encode_bytes", "encode_text"]
