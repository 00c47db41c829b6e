"""Markdown link rewriting — ``page.md`` links become ``page.html``.

Content is authored with links between Markdown sources so that it reads
correctly in an editor or on a code host. The built site serves ``.html``
files, so links to local ``.md`` files are rewritten. Targets are checked
against the content directory and a warning is printed for broken ones; the
link is rewritten either way.
"""

from __future__ import annotations

import posixpath
import sys
from pathlib import Path

_EXTERNAL_PREFIXES = ("http://", "https://", "//")


def is_external(dest: str) -> bool:
    return dest.startswith(_EXTERNAL_PREFIXES)


def split_anchor(dest: str) -> tuple[str, str]:
    """``"docs/x.md#sec"`` -> ``("docs/x.md", "sec")``."""
    base, _, anchor = dest.partition("#")
    return base, anchor


def resolve_target(base: str, source_file: str) -> str:
    """Resolve a link target to a path relative to the content directory.

    Absolute targets are rooted at the content directory; relative targets
    are resolved against the directory of *source_file*.
    """
    if base.startswith("/"):
        return posixpath.normpath(base).lstrip("/")
    return posixpath.normpath(posixpath.join(posixpath.dirname(source_file), base))


def rewrite_link(dest: str, source_file: str, content_dir: Path) -> str:
    """Rewrite a link destination found in *source_file*.

    Args:
        dest: The ``href`` as written in the Markdown source.
        source_file: The Markdown file, relative to *content_dir*, using
            forward slashes.
        content_dir: Absolute path to the content directory.

    Returns:
        The destination to use in the rendered HTML.

    """
    if is_external(dest):
        return dest

    base, anchor = split_anchor(dest)
    if not base.endswith(".md"):
        return dest

    target = resolve_target(base, source_file)
    if not (content_dir / target).is_file():
        print(
            f"  Warning: broken link → {dest} (resolved as {target})",
            file=sys.stderr,
        )

    html_path = base.removesuffix(".md") + ".html"
    if anchor:
        html_path += "#" + anchor
    return html_path
