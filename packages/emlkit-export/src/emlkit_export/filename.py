"""Filesystem-safe file names for exported messages and their attachments."""

from __future__ import annotations

import re

from emlkit_export.models import Message

DEFAULT_FILE_NAME = "message.eml"
SUBJECT_PLACEHOLDER = "message"
TARGET_EXTENSION = ".eml"
SOURCE_EXTENSION = ".msg"

_TRAVERSAL_RE = re.compile(r"\.\./|\.\.\\")
_LEADING_SLASH_RE = re.compile(r"^/+")
_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_ILLEGAL_RE = re.compile(r'[<>:"|?*]')
_SEPARATOR_RE = re.compile(r"[/\\]")
_TARGET_SUFFIX_RE = re.compile(re.escape(TARGET_EXTENSION) + r"$", re.IGNORECASE)
_SOURCE_SUFFIX_RE = re.compile(re.escape(SOURCE_EXTENSION) + r"$", re.IGNORECASE)


def sanitize_filename(name: str | None, fallback: str = DEFAULT_FILE_NAME) -> str:
    """Make *name* safe to use as a downloaded file name.

    Strips path traversal, leading slashes, drive prefixes and control
    characters, replaces characters that are illegal on common filesystems
    with ``_``, and trims.  Returns *fallback* if nothing is left.
    """
    sanitized = _TRAVERSAL_RE.sub("", name or "")
    sanitized = _LEADING_SLASH_RE.sub("", sanitized)
    sanitized = _DRIVE_RE.sub("", sanitized)
    sanitized = _CONTROL_RE.sub("", sanitized)
    sanitized = _ILLEGAL_RE.sub("_", sanitized)
    sanitized = _SEPARATOR_RE.sub("_", sanitized)
    return sanitized.strip() or fallback


def derive_eml_file_name(
    message: Message,
    default_file_name: str = DEFAULT_FILE_NAME,
    subject_placeholder: str = SUBJECT_PLACEHOLDER,
) -> str:
    """Choose the output file name for *message*.

    An original ``.eml`` name is reused, an original ``.msg`` name gets its
    extension swapped, and anything else falls back to the subject.
    """
    original = (message.file_name or "").strip()

    if original:
        if _TARGET_SUFFIX_RE.search(original):
            return sanitize_filename(original, default_file_name)
        if _SOURCE_SUFFIX_RE.search(original):
            swapped = _SOURCE_SUFFIX_RE.sub(TARGET_EXTENSION, original)
            return sanitize_filename(swapped, default_file_name)

    subject = sanitize_filename(message.subject or subject_placeholder, subject_placeholder)
    base = _TARGET_SUFFIX_RE.sub("", subject).strip() or subject_placeholder
    return f"{base}{TARGET_EXTENSION}"
