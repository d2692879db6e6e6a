"""Eml assembler -- serializes a :class:`Message` to RFC 5322 + MIME text.

Body structure is chosen once per message:

* attachments present -> ``multipart/mixed`` whose first part is the body
  (a nested ``multipart/alternative`` when both plain text and HTML exist,
  otherwise the single body, otherwise an empty ``text/plain`` part),
  followed by one part per attachment with content;
* both bodies, no attachments -> top-level ``multipart/alternative``;
* one body -> that single part at top level;
* nothing -> an empty top-level ``text/plain`` part.

The whole message is built as a list of lines and joined once with CRLF.
"""

from __future__ import annotations

import logging

from emlkit_export.boundary import ALTERNATIVE_PREFIX, MIXED_PREFIX, BoundaryGenerator
from emlkit_export.config import EmlExportConfig
from emlkit_export.encoding import CRLF, normalize_line_endings
from emlkit_export.errors import ErrorCode, ExportError
from emlkit_export.headers import (
    encode_header_word,
    format_address,
    format_address_list,
    format_date,
    sanitize_header_value,
)
from emlkit_export.models import AssembledEml, Message, RecipientRole
from emlkit_export.parts import (
    TEXT_HTML,
    TEXT_PLAIN,
    build_alternative_lines,
    build_attachment_part,
    build_text_part,
    encode_body,
    text_part_headers,
)

logger = logging.getLogger("emlkit_export")

_LISTED_ROLES = (RecipientRole.TO, RecipientRole.CC)


def assemble_eml(
    message: Message,
    config: EmlExportConfig | None = None,
    boundaries: BoundaryGenerator | None = None,
) -> AssembledEml:
    """Serialize *message* and collect non-fatal warnings.

    Parameters
    ----------
    message:
        The parsed message.
    config:
        Export configuration.  Uses defaults when *None*.
    boundaries:
        Boundary source.  A fresh :class:`BoundaryGenerator` when *None*.

    Returns
    -------
    AssembledEml
        The message text (CRLF line endings throughout) and any warnings.
    """
    config = config or EmlExportConfig()
    boundaries = boundaries or BoundaryGenerator()
    line_length = config.base64_line_length
    warnings: list[ExportError] = []

    # ------------------------------------------------------------------
    # Header block
    # ------------------------------------------------------------------
    headers: list[str] = []

    subject = encode_header_word(message.subject)
    if subject:
        headers.append(f"Subject: {subject}")
    else:
        warnings.append(
            ExportError(
                code=ErrorCode.W_EML_NO_SUBJECT,
                message="Message has no subject",
                stage="headers",
                recoverable=True,
            )
        )

    from_address = format_address(message.sender_name, message.sender_email)
    if from_address:
        headers.append(f"From: {from_address}")

    for index, recipient in enumerate(message.recipients):
        if recipient.role in _LISTED_ROLES and not sanitize_header_value(recipient.address):
            warnings.append(
                ExportError(
                    code=ErrorCode.W_EML_RECIPIENT_SKIPPED,
                    message=f"Recipient {index} has no address",
                    stage="headers",
                    recoverable=True,
                )
            )

    to_list = format_address_list(message.recipients, RecipientRole.TO)
    if to_list:
        headers.append(f"To: {to_list}")

    cc_list = format_address_list(message.recipients, RecipientRole.CC)
    if cc_list:
        headers.append(f"Cc: {cc_list}")

    date = format_date(message.delivery_time)
    if date:
        headers.append(f"Date: {date}")
    else:
        warnings.append(
            ExportError(
                code=ErrorCode.W_EML_NO_DATE,
                message="Message has no usable date",
                stage="headers",
                recoverable=True,
            )
        )

    headers.append("MIME-Version: 1.0")

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------
    text = normalize_line_endings(message.body_content)
    html = normalize_line_endings(message.body_content_html)
    has_text = bool(text.strip())
    has_html = bool(html.strip())
    body: list[str]

    if message.attachments:
        mixed = boundaries.make(MIXED_PREFIX)
        headers.append(f'Content-Type: multipart/mixed; boundary="{mixed}"')

        body = [f"--{mixed}"]
        if has_text and has_html:
            alternative = boundaries.make(ALTERNATIVE_PREFIX)
            body.extend(build_alternative_lines(alternative, text, html, True, line_length))
        elif has_html:
            body.extend(build_text_part(html, TEXT_HTML, line_length))
        elif has_text:
            body.extend(build_text_part(text, TEXT_PLAIN, line_length))
        else:
            body.extend(build_text_part("", TEXT_PLAIN, line_length))

        for index, attachment in enumerate(message.attachments):
            part = build_attachment_part(
                attachment,
                line_length,
                default_name=config.default_attachment_name,
                default_mime_type=config.default_attachment_mime_type,
            )
            if part is None:
                logger.debug("emlkit_export | attachment=%d | skipped, no content", index)
                warnings.append(
                    ExportError(
                        code=ErrorCode.W_EML_ATTACHMENT_SKIPPED,
                        message=f"Attachment {index} has no usable content",
                        stage="attachments",
                        recoverable=True,
                    )
                )
                continue
            body.append(f"--{mixed}")
            body.extend(part)

        body.append(f"--{mixed}--")

    elif has_text and has_html:
        alternative = boundaries.make(ALTERNATIVE_PREFIX)
        headers.append(f'Content-Type: multipart/alternative; boundary="{alternative}"')
        body = build_alternative_lines(alternative, text, html, False, line_length)

    elif has_html or has_text:
        headers.extend(text_part_headers(TEXT_HTML if has_html else TEXT_PLAIN))
        body = [encode_body(html if has_html else text, line_length)]

    else:
        headers.extend(text_part_headers(TEXT_PLAIN))
        payload = encode_body("", line_length)
        body = [payload] if payload else []

    return AssembledEml(text=CRLF.join([*headers, "", *body]) + CRLF, warnings=warnings)


def build_eml(
    message: Message,
    config: EmlExportConfig | None = None,
    boundaries: BoundaryGenerator | None = None,
) -> str:
    """Serialize *message* to ``.eml`` text."""
    return assemble_eml(message, config, boundaries).text
