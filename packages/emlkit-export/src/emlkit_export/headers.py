"""Header value sanitation, RFC 2047 encoding, and address formatting."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from email.utils import format_datetime

from emlkit_export.encoding import encode_text
from emlkit_export.models import Recipient, RecipientRole

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]+")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
_NEEDS_QUOTES_RE = re.compile(r'[",<>@]')

ENCODED_WORD_PREFIX = "=?UTF-8?B?"


def sanitize_header_value(value: str | None) -> str:
    """Collapse control characters (CR and LF included) to one space and trim.

    The result can never start a new header line.
    """
    return _CONTROL_RE.sub(" ", value or "").strip()


def has_non_ascii(value: str) -> bool:
    return _NON_ASCII_RE.search(value) is not None


def encode_header_word(value: str | None) -> str:
    """Sanitize *value* and RFC 2047-encode it when it is not pure ASCII.

    Returns
    -------
    str
        The sanitized text unchanged when ASCII, otherwise a single
        ``=?UTF-8?B?...?=`` encoded word.  Empty input gives ``""``.
    """
    clean = sanitize_header_value(value)
    if not clean or not has_non_ascii(clean):
        return clean
    return f"{ENCODED_WORD_PREFIX}{encode_text(clean)}?="


def format_address(name: str | None, address: str | None) -> str:
    """Render a mailbox as ``name <address>`` or ``<address>``.

    Returns an empty string when no address is available; callers skip
    such mailboxes.
    """
    address = sanitize_header_value(address)
    if not address:
        return ""

    raw_name = sanitize_header_value(name)
    if not raw_name or raw_name == address:
        return f"<{address}>"

    if has_non_ascii(raw_name):
        return f"{encode_header_word(raw_name)} <{address}>"

    if _NEEDS_QUOTES_RE.search(raw_name):
        escaped = raw_name.replace('"', '\\"')
        return f'"{escaped}" <{address}>'

    return f"{raw_name} <{address}>"


def format_address_list(
    recipients: Iterable[Recipient], role: RecipientRole | str
) -> str:
    """Format every recipient with the given *role*, joined by ``", "``."""
    role = RecipientRole(role)
    formatted = (
        format_address(recipient.name or recipient.address, recipient.address)
        for recipient in recipients
        if recipient.role == role
    )
    return ", ".join(entry for entry in formatted if entry)


def format_date(value: datetime | None) -> str:
    """Render *value* in the RFC 1123 ``GMT`` form, or ``""`` if absent."""
    if value is None:
        return ""
    try:
        return format_datetime(value.astimezone(timezone.utc), usegmt=True)
    except (OverflowError, ValueError):
        return ""
