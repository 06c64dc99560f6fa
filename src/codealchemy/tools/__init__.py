"""Pure logic behind the workspace tools."""

from .base64_codec import decode_text, encode_bytes, encode_text
from .guid import GuidCaseMode, create_formatted_guids, format_guid

__all__ = [
    "GuidCaseMode",
    "create_formatted_guids",
    "decode_text",
    "encode_bytes",
    "encode_text",
    "format_guid",
]
