"""Multipart boundary tokens.

A boundary is ``prefix-<epoch millis>-<random hex>``.  The hyphen never
occurs in base64 output, so a boundary line cannot collide with an encoded
payload line.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable

MIXED_PREFIX = "mixed"
ALTERNATIVE_PREFIX = "alt"


class BoundaryGenerator:
    """Produce collision-resistant boundary tokens.

    Parameters
    ----------
    clock:
        Returns the current time in seconds.  Defaults to ``time.time``.
    rng:
        Source of randomness.  Defaults to a private ``random.Random``.
        Boundaries only need to be unique within one document, not
        unguessable.
    """

    def __init__(
        self,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock or time.time
        self._rng = rng or random.Random()

    def make(self, prefix: str) -> str:
        """Return a new boundary token starting with *prefix*."""
        millis = int(self._clock() * 1000)
        return f"{prefix}-{millis}-{self._rng.getrandbits(52):x}"
