"""Pydantic models and enumerations for the emlkit-export package.

Contains the input types ``Message``, ``Recipient`` and ``Attachment``, the
output ``ExportArtifact``, and the result types ``AssembledEml``,
``ExportOutcome`` and ``BulkExportResult``.

Input models resolve each logical field from an ordered list of candidate
keys at validation time (first present, non-empty value wins), so the rest
of the engine only ever sees strongly-typed optional fields.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from emlkit_core.idempotency import compute_message_key
from emlkit_core.models import MessageKey

from emlkit_export.errors import ExportError

__all__ = [
    "MessageKey",
    "RecipientRole",
    "EmailType",
    "Recipient",
    "Attachment",
    "Message",
    "ExportArtifact",
    "AssembledEml",
    "ExportOutcome",
    "BulkExportResult",
    "parse_date",
]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class RecipientRole(str, Enum):
    """Which address list a recipient belongs to."""

    TO = "to"
    CC = "cc"
    BCC = "bcc"


class EmailType(str, Enum):
    """Source format of the file a message was loaded from."""

    EML = "eml"
    MSG = "msg"


# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------

_RECIPIENT_NAME_KEYS = ("name", "display_name", "displayName")
_RECIPIENT_ADDRESS_KEYS = ("smtp_address", "smtpAddress", "email", "address")
_RECIPIENT_ROLE_KEYS = ("role", "recip_type", "recipType")

_ATTACHMENT_NAME_KEYS = ("file_name", "fileName", "long_filename", "longFilename", "name")
_ATTACHMENT_MIME_KEYS = ("mime_type", "mimeType", "attach_mime_tag", "attachMimeTag")
_ATTACHMENT_PAYLOAD_KEYS = (
    "base64_payload",
    "base64Payload",
    "content_base64",
    "contentBase64",
    "data_url",
    "dataUrl",
)
_ATTACHMENT_BYTES_KEYS = ("content", "data")
_ATTACHMENT_CID_KEYS = ("content_id", "contentId", "pidContentId")

_SUBJECT_KEYS = ("subject",)
_SENDER_NAME_KEYS = ("sender_name", "senderName")
_SENDER_EMAIL_KEYS = ("sender_email", "senderEmail", "sender_smtp_address", "senderSmtpAddress")
_BODY_KEYS = ("body_content", "bodyContent", "body")
_HTML_KEYS = ("body_content_html", "bodyContentHTML", "html_body", "bodyHTML")
_DATE_KEYS = (
    "delivery_time",
    "message_delivery_time",
    "messageDeliveryTime",
    "client_submit_time",
    "clientSubmitTime",
    "creation_time",
    "creationTime",
    "last_modification_time",
    "lastModificationTime",
    "timestamp",
)
_FILE_NAME_KEYS = ("file_name", "fileName")
_SOURCE_FORMAT_KEYS = ("source_format", "file_type", "_fileType")
_RAW_BYTES_KEYS = ("raw_bytes", "raw_buffer", "_rawBuffer")

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the first value under *keys* that is neither None nor empty."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, (str, *_BYTES_TYPES)) and len(value) == 0:
            continue
        return value
    return None


def _first_text(data: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    value = _first_present(data, keys)
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, _BYTES_TYPES):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _sequence(value: Any) -> list[Any]:
    """Keep mappings and already-built models; anything else is dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


def parse_date(value: Any) -> datetime | None:
    """Parse a loosely-typed date value into an aware ``datetime``.

    Accepts ``datetime`` / ``date`` objects, POSIX timestamps in seconds,
    ISO 8601 strings and RFC 2822 strings.  Naive values are taken as UTC.
    Returns None for anything that does not parse.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError, IndexError):
                return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Input Models
# ---------------------------------------------------------------------------


class Recipient(BaseModel):
    """A single addressee of a message."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    address: str | None = None
    role: RecipientRole | None = None

    @model_validator(mode="before")
    @classmethod
    def _resolve_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        role = _first_text(data, _RECIPIENT_ROLE_KEYS)
        role = role.strip().lower() if role else None
        return {
            "name": _first_text(data, _RECIPIENT_NAME_KEYS),
            "address": _first_text(data, _RECIPIENT_ADDRESS_KEYS),
            "role": role if role in {r.value for r in RecipientRole} else None,
        }


class Attachment(BaseModel):
    """A file carried by a message.

    ``base64_payload`` may be raw base64 or a ``data:`` URI.  Raw bytes
    supplied under ``content`` / ``data`` are encoded here.  A
    ``content_id`` marks the attachment as referenced inline by the HTML
    body.
    """

    model_config = ConfigDict(frozen=True)

    file_name: str | None = None
    mime_type: str | None = None
    base64_payload: str | None = None
    content_id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _resolve_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        payload = _first_present(data, _ATTACHMENT_PAYLOAD_KEYS)
        if payload is None:
            payload = _first_present(data, _ATTACHMENT_BYTES_KEYS)
        if isinstance(payload, _BYTES_TYPES):
            payload = base64.b64encode(bytes(payload)).decode("ascii")
        elif payload is not None:
            payload = str(payload)
        return {
            "file_name": _first_text(data, _ATTACHMENT_NAME_KEYS),
            "mime_type": _first_text(data, _ATTACHMENT_MIME_KEYS),
            "base64_payload": payload,
            "content_id": _first_text(data, _ATTACHMENT_CID_KEYS),
        }

    @property
    def is_inline(self) -> bool:
        """True when the attachment is referenced by content id."""
        return bool(self.content_id)


class Message(BaseModel):
    """An already-parsed email message, immutable during export."""

    model_config = ConfigDict(frozen=True)

    subject: str | None = None
    sender_name: str | None = None
    sender_email: str | None = None
    recipients: tuple[Recipient, ...] = ()
    body_content: str | None = None
    body_content_html: str | None = None
    attachments: tuple[Attachment, ...] = ()
    delivery_time: datetime | None = None
    file_name: str | None = None
    source_format: EmailType | None = None
    raw_bytes: bytes | None = None

    @model_validator(mode="before")
    @classmethod
    def _resolve_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        delivery_time = None
        for key in _DATE_KEYS:
            delivery_time = parse_date(data.get(key))
            if delivery_time is not None:
                break

        source_format = _first_text(data, _SOURCE_FORMAT_KEYS)
        source_format = source_format.strip().lower().lstrip(".") if source_format else None

        raw_bytes = _first_present(data, _RAW_BYTES_KEYS)
        raw_bytes = bytes(raw_bytes) if isinstance(raw_bytes, _BYTES_TYPES) else None

        return {
            "subject": _first_text(data, _SUBJECT_KEYS),
            "sender_name": _first_text(data, _SENDER_NAME_KEYS),
            "sender_email": _first_text(data, _SENDER_EMAIL_KEYS),
            "recipients": _sequence(data.get("recipients")),
            "body_content": _first_text(data, _BODY_KEYS),
            "body_content_html": _first_text(data, _HTML_KEYS),
            "attachments": _sequence(data.get("attachments")),
            "delivery_time": delivery_time,
            "file_name": _first_text(data, _FILE_NAME_KEYS),
            "source_format": (
                source_format if source_format in {t.value for t in EmailType} else None
            ),
            "raw_bytes": raw_bytes,
        }

    @property
    def message_key(self) -> MessageKey:
        """Deterministic identity used for duplicate detection."""
        return compute_message_key(
            sender_email=self.sender_email,
            delivery_time=self.delivery_time,
            subject=self.subject,
            file_name=self.file_name,
        )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class ExportArtifact(BaseModel):
    """A named, downloadable ``.eml`` payload."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    media_type: str = "message/rfc822"
    payload_base64: str

    @property
    def content(self) -> bytes:
        """Decoded file bytes."""
        return base64.b64decode(self.payload_base64)

    @property
    def data_url(self) -> str:
        """The payload as a ``data:`` URI suitable for a browser download."""
        return f"data:{self.media_type};base64,{self.payload_base64}"


class AssembledEml(BaseModel):
    """Serialized message text plus the warnings raised while building it."""

    text: str
    warnings: list[ExportError] = []


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ExportOutcome(BaseModel):
    """Result of exporting one message within a bulk export."""

    message_key: str
    file_name: str | None = None
    location: str | None = None
    passthrough: bool = False
    errors: list[str] = []
    warnings: list[str] = []
    error_details: list[ExportError] = []


class BulkExportResult(BaseModel):
    """Final result of exporting a batch of messages."""

    exporter_version: str | None = None
    outcomes: list[ExportOutcome] = []
    exported_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    locations: list[str] = []
    processing_time_seconds: float = 0.0
