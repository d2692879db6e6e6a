"""Shared error codes and base error model for the emlkit framework.

``CoreErrorCode`` contains the error/warning codes common to all emlkit
packages.  ``BaseEmlError`` is a Pydantic model that each package extends
with its own narrowed ``code`` type.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class CoreErrorCode(str, Enum):
    """Error codes shared across all emlkit packages.

    Each package maintains its own *complete* ``ErrorCode`` enum that includes
    both the shared codes here and package-specific codes.  Values equal their
    names so they are stable strings suitable for metrics and alerting.
    """

    # Input errors
    E_INPUT_INVALID = "E_INPUT_INVALID"

    # Delivery errors
    E_WRITE_FAILED = "E_WRITE_FAILED"

    # Warnings (non-fatal)
    W_DUPLICATE_SKIPPED = "W_DUPLICATE_SKIPPED"


class BaseEmlError(BaseModel):
    """Base structured error with code, message, and context.

    The ``code`` field is typed as ``str`` so it accepts any package-specific
    ``ErrorCode`` enum member.
    """

    code: str
    message: str
    stage: str | None = None
    recoverable: bool = False
