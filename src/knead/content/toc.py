"""Table of contents — heading entries and their HTML rendering.

Entries are recorded flat, with their heading level, rather than as a tree:
documents are free to skip levels. Rendering nests ``<ul>`` lists by level,
treating a jump of more than one level as a single step deeper.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TOCItem:
    """A heading in a rendered page.

    Attributes:
        level: Heading level, 1 for ``<h1>`` through 6 for ``<h6>``.
        id: The heading's ``id`` attribute (anchor target).
        text: Plain text of the heading.

    """

    level: int
    id: str
    text: str


def generate_toc(items: Sequence[TOCItem]) -> str:
    """Render a ``<nav class="toc">`` block for *items*.

    Returns an empty string when there are no items.
    """
    if not items:
        return ""

    base = min(item.level for item in items)
    parts = ['<nav class="toc">\n', "<h2>Table of Contents</h2>\n", "<ul>\n"]

    depth = -1
    for item in items:
        target = 0 if depth < 0 else min(item.level - base, depth + 1)
        if target > depth:
            if depth >= 0:
                parts.append("\n<ul>\n")
            depth = target
        else:
            parts.append("</li>\n")
            while depth > target:
                parts.append("</ul>\n</li>\n")
                depth -= 1
        href = html.escape(item.id, quote=True)
        parts.append(f'<li><a href="#{href}">{html.escape(item.text, quote=False)}</a>')

    parts.append("</li>\n")
    while depth > 0:
        parts.append("</ul>\n</li>\n")
        depth -= 1
    parts.append("</ul>\n</nav>\n")
    return "".join(parts)


def generate_toc_filtered(
    items: Sequence[TOCItem],
    min_level: int,
    max_level: int,
) -> str:
    """Render a table of contents limited to headings in a level range."""
    return generate_toc([item for item in items if min_level <= item.level <= max_level])
