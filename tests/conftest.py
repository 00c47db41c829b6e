"""Shared test fixtures for knead."""

from __future__ import annotations

from pathlib import Path

import pytest

from knead.config import KneadConfig

BASE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head><title>{{ page.title }} | {{ site.title }}</title></head>
<body>
{{ page.toc }}
{{ content }}
</body>
</html>
"""


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal site structure for testing.

    Returns the path to the site root with content/, templates/, and static/
    dirs plus a knead.yaml.
    """
    (tmp_path / "knead.yaml").write_text("site:\n  title: Test Site\n")

    content = tmp_path / "content"
    content.mkdir()
    (content / "index.md").write_text(
        "---\ntitle: Home\n---\n\n# Welcome\n\nSee the [guide](docs/guide.md).\n"
    )

    docs = content / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text(
        "---\ntitle: Guide\n---\n\n# Guide\n\n## Setup\n\nHello world.\n"
    )
    (docs / "raw.html").write_text("---\ntitle: Raw\n---\n<p>raw   html</p>\n")
    (docs / "diagram.svg").write_text("<svg></svg>\n")

    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "base.html").write_text(BASE_TEMPLATE)

    static = tmp_path / "static"
    static.mkdir()
    (static / "style.css").write_text("body { margin: 0; }\n")

    return tmp_path


@pytest.fixture
def site_config(tmp_site: Path) -> KneadConfig:
    """A KneadConfig for tmp_site with the site mapping from knead.yaml."""
    return KneadConfig(root=tmp_site, site={"title": "Test Site"})
