"""Filesystem-based ArtifactWriter implementation.

Writes each artifact as ``{base_path}/{file_name}``.  Existing files are
kept: a colliding name becomes ``name (1).eml``, ``name (2).eml``, ...
unless overwriting is enabled.

Implements the ArtifactWriter protocol via structural subtyping.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("emlkit_export")


class FilesystemArtifactWriter:
    """Write artifacts into a directory.

    Implements ArtifactWriter protocol (structural subtyping).
    Passes isinstance(writer, ArtifactWriter) check.
    """

    def __init__(self, base_path: str, overwrite: bool = False) -> None:
        """Initialize the writer.

        Args:
            base_path: Target directory. Created if it does not exist.
            overwrite: Replace existing files instead of picking a new name.
        """
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)
        self._overwrite = overwrite

    def write(self, file_name: str, content: bytes, media_type: str) -> str:
        """Write *content* and return the path it was written to.

        Only the final path component of *file_name* is used.
        """
        target = self._base_path / Path(file_name).name
        if not self._overwrite:
            target = self._unique_path(target)
        target.write_bytes(content)
        logger.debug("emlkit_export | wrote %d bytes (%s)", len(content), media_type)
        return str(target)

    @staticmethod
    def _unique_path(path: Path) -> Path:
        if not path.exists():
            return path
        counter = 1
        while True:
            candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
            if not candidate.exists():
                return candidate
            counter += 1
