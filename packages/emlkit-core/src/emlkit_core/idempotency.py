"""Deterministic message-key computation for deduplication.

This module provides :func:`compute_message_key`, which produces a
:class:`~emlkit_core.models.MessageKey` from the identifying fields of a
parsed message.  Identical inputs always yield the same
:pyattr:`MessageKey.key` digest.

The package **provides** the key but does **not** enforce any
deduplication policy -- that responsibility belongs to the caller.
"""

from __future__ import annotations

from datetime import datetime

from emlkit_core.models import MessageKey


def compute_message_key(
    sender_email: str | None = None,
    delivery_time: datetime | str | None = None,
    subject: str | None = None,
    file_name: str | None = None,
) -> MessageKey:
    """Compute a deterministic key for a parsed message.

    Parameters
    ----------
    sender_email:
        Sender address as recorded on the message.
    delivery_time:
        Delivery timestamp.  ``datetime`` values are rendered in ISO 8601
        form so that equal instants yield equal keys.
    subject:
        Message subject.
    file_name:
        Name of the file the message was loaded from.

    Returns
    -------
    MessageKey
        A populated key whose :pyattr:`~MessageKey.key` property yields the
        composite SHA-256 hex digest.
    """
    if isinstance(delivery_time, datetime):
        delivery_time = delivery_time.isoformat()

    return MessageKey(
        sender_email=sender_email or "",
        delivery_time=delivery_time or "",
        subject=subject or "",
        file_name=file_name or "",
    )
