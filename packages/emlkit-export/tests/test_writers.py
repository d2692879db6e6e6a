"""Tests for emlkit_export.writers.FilesystemArtifactWriter."""

from __future__ import annotations

from pathlib import Path

from emlkit_core.protocols import ArtifactWriter
from emlkit_export.writers import FilesystemArtifactWriter


class TestFilesystemArtifactWriter:
    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(FilesystemArtifactWriter(str(tmp_path)), ArtifactWriter)

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        FilesystemArtifactWriter(str(target))
        assert target.is_dir()

    def test_write_returns_path(self, tmp_path):
        writer = FilesystemArtifactWriter(str(tmp_path))
        location = writer.write("a.eml", b"data", "message/rfc822")
        assert Path(location) == tmp_path / "a.eml"
        assert Path(location).read_bytes() == b"data"

    def test_collisions_numbered(self, tmp_path):
        writer = FilesystemArtifactWriter(str(tmp_path))
        locations = [writer.write("a.eml", bytes([i]), "message/rfc822") for i in range(3)]
        assert [Path(p).name for p in locations] == ["a.eml", "a (1).eml", "a (2).eml"]
        assert (tmp_path / "a.eml").read_bytes() == b"\x00"

    def test_overwrite(self, tmp_path):
        writer = FilesystemArtifactWriter(str(tmp_path), overwrite=True)
        writer.write("a.eml", b"old", "message/rfc822")
        location = writer.write("a.eml", b"new", "message/rfc822")
        assert Path(location).read_bytes() == b"new"
        assert len(list(tmp_path.iterdir())) == 1

    def test_directory_components_ignored(self, tmp_path):
        writer = FilesystemArtifactWriter(str(tmp_path / "out"))
        location = writer.write("../escape.eml", b"x", "message/rfc822")
        assert Path(location).parent == tmp_path / "out"
        assert not (tmp_path / "escape.eml").exists()
