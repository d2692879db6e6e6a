"""Error codes and structured error model for the emlkit-export package.

``ErrorCode`` contains all export-specific error/warning codes plus the shared
codes from the core taxonomy.  ``ExportError`` extends ``BaseEmlError`` with
the narrowed ``code`` type.
"""

from __future__ import annotations

from enum import Enum

from emlkit_core.errors import BaseEmlError


class ErrorCode(str, Enum):
    """Error codes for emlkit-export.

    Fatal codes use an ``E_`` prefix; warnings use ``W_``.
    Values equal their names for stable metric/alerting strings.
    """

    # Shared fatal codes (reused from core taxonomy)
    E_INPUT_INVALID = "E_INPUT_INVALID"
    E_WRITE_FAILED = "E_WRITE_FAILED"

    # Warnings (non-fatal)
    W_EML_ATTACHMENT_SKIPPED = "W_EML_ATTACHMENT_SKIPPED"
    W_EML_RECIPIENT_SKIPPED = "W_EML_RECIPIENT_SKIPPED"
    W_EML_NO_SUBJECT = "W_EML_NO_SUBJECT"
    W_EML_NO_DATE = "W_EML_NO_DATE"
    W_DUPLICATE_SKIPPED = "W_DUPLICATE_SKIPPED"


class ExportError(BaseEmlError):
    """Structured error for the export pipeline.

    Narrows the ``code`` field to ``ErrorCode`` for type safety while
    remaining serialisation-compatible with the base class.
    """

    code: ErrorCode
