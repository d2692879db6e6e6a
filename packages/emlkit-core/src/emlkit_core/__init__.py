"""emlkit-core -- Shared primitives for the emlkit framework.

Re-exports all public types: errors, models, protocols, and utilities.
"""

from emlkit_core.errors import BaseEmlError, CoreErrorCode
from emlkit_core.idempotency import compute_message_key
from emlkit_core.models import MessageKey
from emlkit_core.protocols import ArtifactWriter

__all__ = [
    # Errors
    "CoreErrorCode",
    "BaseEmlError",
    # Models
    "MessageKey",
    # Idempotency
    "compute_message_key",
    # Protocols
    "ArtifactWriter",
]
