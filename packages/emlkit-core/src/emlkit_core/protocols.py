"""Delivery protocols for the emlkit framework.

Defines the structural-subtyping interface that concrete artifact writers
must satisfy.  The protocol is ``@runtime_checkable`` so callers can
optionally verify conformance with ``isinstance`` checks.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ArtifactWriter(Protocol):
    """Interface for artifact delivery (e.g. a directory, a download response)."""

    def write(self, file_name: str, content: bytes, media_type: str) -> str:
        """Deliver *content* under *file_name*. Returns the final location."""
        ...
