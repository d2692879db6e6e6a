"""MIME part builders.

Each builder returns a list of lines (without terminators).  The assembler
joins the complete message once with CRLF.
"""

from __future__ import annotations

import base64
import binascii
import logging

from emlkit_export.encoding import (
    BASE64_LINE_LENGTH,
    encode_text,
    extract_base64,
    normalize_line_endings,
    wrap_base64,
)
from emlkit_export.filename import sanitize_filename
from emlkit_export.headers import sanitize_header_value
from emlkit_export.models import Attachment

logger = logging.getLogger("emlkit_export")

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
DEFAULT_ATTACHMENT_NAME = "attachment"
DEFAULT_ATTACHMENT_MIME_TYPE = "application/octet-stream"


def encode_body(content: str | None, line_length: int = BASE64_LINE_LENGTH) -> str:
    """CRLF-normalize *content*, encode it as UTF-8 base64 and wrap it."""
    return wrap_base64(encode_text(normalize_line_endings(content)), line_length)


def text_part_headers(content_type: str) -> list[str]:
    return [
        f'Content-Type: {content_type}; charset="utf-8"',
        "Content-Transfer-Encoding: base64",
    ]


def build_text_part(
    content: str | None,
    content_type: str,
    line_length: int = BASE64_LINE_LENGTH,
) -> list[str]:
    """Build a ``text/plain`` or ``text/html`` part."""
    return [
        *text_part_headers(content_type),
        "",
        encode_body(content, line_length),
    ]


def build_alternative_lines(
    boundary: str,
    text: str | None,
    html: str | None,
    include_header: bool,
    line_length: int = BASE64_LINE_LENGTH,
) -> list[str]:
    """Build a ``multipart/alternative`` block holding plain text then HTML.

    With *include_header* the block carries its own ``Content-Type`` line,
    which is needed when it is nested inside ``multipart/mixed``.
    """
    lines: list[str] = []

    if include_header:
        lines.append(f'Content-Type: multipart/alternative; boundary="{boundary}"')
        lines.append("")

    lines.append(f"--{boundary}")
    lines.extend(build_text_part(text, TEXT_PLAIN, line_length))
    lines.append(f"--{boundary}")
    lines.extend(build_text_part(html, TEXT_HTML, line_length))
    lines.append(f"--{boundary}--")

    return lines


def build_attachment_part(
    attachment: Attachment,
    line_length: int = BASE64_LINE_LENGTH,
    default_name: str = DEFAULT_ATTACHMENT_NAME,
    default_mime_type: str = DEFAULT_ATTACHMENT_MIME_TYPE,
) -> list[str] | None:
    """Build a part for *attachment*.

    Returns None when the attachment has no payload or the payload is not
    valid base64; such attachments contribute nothing to the message.
    Payloads with their trailing ``=`` padding stripped are re-padded.
    """
    payload = extract_base64(attachment.base64_payload)
    if not payload:
        return None

    payload += "=" * (-len(payload) % 4)
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.debug("emlkit_export | attachment payload is not valid base64")
        return None

    mime_type = sanitize_header_value(attachment.mime_type) or default_mime_type
    file_name = sanitize_filename(attachment.file_name or default_name, default_name)

    lines = [
        f'Content-Type: {mime_type}; name="{file_name}"',
        "Content-Transfer-Encoding: base64",
    ]

    if attachment.is_inline:
        content_id = sanitize_header_value(attachment.content_id).replace("<", "").replace(">", "")
        if content_id:
            lines.append(f"Content-ID: <{content_id}>")

    disposition = "inline" if attachment.is_inline else "attachment"
    lines.append(f'Content-Disposition: {disposition}; filename="{file_name}"')
    lines.append("")
    lines.append(wrap_base64(payload, line_length))

    return lines
