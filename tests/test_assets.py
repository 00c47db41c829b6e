"""Tests for knead.export.assets — directory copying."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from knead._errors import BuildError
from knead.export.assets import copy_tree


@pytest.fixture
def source(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    (src / "css").mkdir(parents=True)
    (src / "css" / "site.css").write_text("body {}")
    (src / "logo.svg").write_text("<svg/>")
    return src


class TestCopyTree:
    """copy_tree — preserve layout, skip hidden files."""

    def test_copies_nested(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        files = copy_tree(source, out, source_type="static")

        assert (out / "css" / "site.css").read_text() == "body {}"
        assert (out / "logo.svg").exists()
        assert [f.source_path for f in files] == ["css/site.css", "logo.svg"]
        assert all(f.source_type == "static" for f in files)
        assert files[0].size_bytes == len("body {}")

    def test_missing_source_dir(self, tmp_path: Path) -> None:
        assert copy_tree(tmp_path / "missing", tmp_path / "out", source_type="static") == ()

    def test_hidden_files_skipped(self, source: Path, tmp_path: Path) -> None:
        (source / ".env").write_text("SECRET=1")
        (source / ".cache").mkdir()
        (source / ".cache" / "blob").write_text("x")
        (source / "__pycache__").mkdir()
        (source / "__pycache__" / "m.pyc").write_bytes(b"\x00")
        out = tmp_path / "out"

        files = copy_tree(source, out, source_type="static")

        assert len(files) == 2
        assert not (out / ".env").exists()
        assert not (out / ".cache").exists()
        assert not (out / "__pycache__").exists()

    def test_skip_predicate(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        files = copy_tree(
            source, out, source_type="content", skip=lambda p: p.suffix == ".svg",
        )

        assert [f.source_path for f in files] == ["css/site.css"]
        assert not (out / "logo.svg").exists()

    def test_no_overwrite_keeps_existing(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        out.mkdir()
        (out / "logo.svg").write_text("rendered")

        files = copy_tree(source, out, source_type="static", overwrite=False)

        assert (out / "logo.svg").read_text() == "rendered"
        assert [f.source_path for f in files] == ["css/site.css"]

    def test_overwrite_replaces(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        out.mkdir()
        (out / "logo.svg").write_text("old")

        copy_tree(source, out, source_type="resource")

        assert (out / "logo.svg").read_text() == "<svg/>"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_rejected(self, source: Path, tmp_path: Path) -> None:
        (source / "link.svg").symlink_to(source / "logo.svg")

        with pytest.raises(BuildError, match="Symlinks"):
            copy_tree(source, tmp_path / "out", source_type="static")
