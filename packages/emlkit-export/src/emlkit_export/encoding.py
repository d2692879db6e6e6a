"""Base64 and line-ending helpers for MIME bodies.

All text that ends up on the wire goes through :func:`normalize_line_endings`
once, and every encoded payload through :func:`wrap_base64`.
"""

from __future__ import annotations

import base64
import re

CRLF = "\r\n"
BASE64_LINE_LENGTH = 76

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_line_endings(text: str | None) -> str:
    """Convert CRLF, lone CR and lone LF line breaks to CRLF."""
    return _LINE_BREAK_RE.sub(CRLF, text or "")


def encode_bytes(data: bytes) -> str:
    """Base64-encode *data* with the standard alphabet."""
    return base64.b64encode(data).decode("ascii")


def encode_text(text: str) -> str:
    """Base64-encode the UTF-8 bytes of *text*."""
    return encode_bytes(text.encode("utf-8"))


def wrap_base64(encoded: str, line_length: int = BASE64_LINE_LENGTH) -> str:
    """Split *encoded* into fixed-width lines joined by CRLF.

    Empty input yields an empty string rather than a single empty line.
    """
    if not encoded:
        return ""
    return CRLF.join(
        encoded[i : i + line_length] for i in range(0, len(encoded), line_length)
    )


def extract_base64(value: str | None) -> str:
    """Return the base64 portion of a ``data:`` URI or raw base64 string.

    Everything up to and including the first comma is dropped, as is any
    whitespace left over from pre-wrapped input.
    """
    if not value:
        return ""
    _, comma, tail = value.partition(",")
    return _WHITESPACE_RE.sub("", tail if comma else value)
