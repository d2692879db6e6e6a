"""Shared fixtures for emlkit-export tests."""

from __future__ import annotations

import base64
import email
import email.policy
import random
from unittest.mock import MagicMock

import pytest

from emlkit_export.boundary import BoundaryGenerator


PLAIN_BODY = "Hello,\nthis is the plain body.\n"
HTML_BODY = "<html><body><p>Hello, this is <b>HTML</b>.</p></body></html>"
PDF_BYTES = b"%PDF-1.4\n" + bytes(range(256)) * 4
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 120

FIXED_CLOCK = 1771329600.0  # 2026-02-17T12:00:00Z


def _data_url(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


# ---------------------------------------------------------------------------
# Message fixtures (loosely-typed, as produced by the viewer's parser)
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_message() -> dict:
    """Message with only a plain-text body."""
    return {
        "subject": "Hello",
        "senderEmail": "a@x.com",
        "recipients": [{"recipType": "to", "address": "b@y.com"}],
        "bodyContent": "Hi",
        "attachments": [],
    }


@pytest.fixture
def alternative_message() -> dict:
    """Message with plain text and HTML, no attachments."""
    return {
        "subject": "Quarterly update",
        "senderName": "Alice Example",
        "senderEmail": "alice@example.com",
        "recipients": [
            {"recipType": "to", "name": "Bob", "smtpAddress": "bob@example.com"},
            {"recipType": "cc", "name": "Carol", "email": "carol@example.com"},
            {"recipType": "bcc", "name": "Dave", "address": "dave@example.com"},
        ],
        "bodyContent": PLAIN_BODY,
        "bodyContentHTML": HTML_BODY,
        "messageDeliveryTime": "2026-02-17T12:00:00Z",
        "fileName": "update.msg",
    }


@pytest.fixture
def mixed_message(alternative_message: dict) -> dict:
    """Plain + HTML + one regular attachment + one inline image."""
    return {
        **alternative_message,
        "attachments": [
            {
                "fileName": "report.pdf",
                "attachMimeTag": "application/pdf",
                "contentBase64": _data_url("application/pdf", PDF_BYTES),
            },
            {
                "fileName": "logo.png",
                "attachMimeTag": "image/png",
                "contentBase64": _data_url("image/png", PNG_BYTES),
                "contentId": "<logo@example>",
            },
        ],
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def boundaries() -> BoundaryGenerator:
    """Deterministic boundary generator."""
    return BoundaryGenerator(clock=lambda: FIXED_CLOCK, rng=random.Random(42))


@pytest.fixture
def parse_eml():
    """Parse serialized output with the stdlib email parser."""

    def _parse(data: bytes | str) -> email.message.EmailMessage:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return email.message_from_bytes(data, policy=email.policy.default)

    return _parse


@pytest.fixture
def mock_writer() -> MagicMock:
    """Mock satisfying the ArtifactWriter protocol."""
    writer = MagicMock()
    writer.write.side_effect = lambda file_name, content, media_type: f"/out/{file_name}"
    return writer


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
