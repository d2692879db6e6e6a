"""Shared Pydantic models for the emlkit framework.

Contains ``MessageKey``, the deterministic identity of an exported message.
"""

from __future__ import annotations

import hashlib

from pydantic import BaseModel


class MessageKey(BaseModel):
    """Deterministic key for duplicate detection.

    Combines the sender address, delivery time, subject, and original file
    name into a single SHA-256 digest.  Two messages loaded from the same
    source file produce the same key.
    """

    sender_email: str = ""
    delivery_time: str = ""
    subject: str = ""
    file_name: str = ""

    @property
    def key(self) -> str:
        """Deterministic string key for dedup lookups."""
        parts = [self.sender_email, self.delivery_time, self.subject, self.file_name]
        return hashlib.sha256("\x00".join(parts).encode()).hexdigest()
