"""Markdown rendering — Patitas HTML plus heading anchors and link rewriting.

Patitas turns the page body into an HTML fragment. The fragment is then
post-processed with BeautifulSoup:

- every ``<h1>``–``<h6>`` gets a unique ``id``: its own if it has one,
  otherwise one derived from its text, de-duplicated with ``-1``, ``-2``,
  ... suffixes;
- each heading is recorded as a ``TOCItem`` for the table of contents;
- links to local ``.md`` files are rewritten to ``.html``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from knead._errors import ContentError
from knead.content.links import rewrite_link
from knead.content.toc import TOCItem

if TYPE_CHECKING:
    from pathlib import Path

_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_SPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class RenderedMarkdown:
    """Result of rendering one Markdown body.

    Attributes:
        html: The HTML fragment.
        toc_items: Headings in document order.

    """

    html: str
    toc_items: tuple[TOCItem, ...]


def slugify(text: str) -> str:
    """Derive an anchor id from heading text.

    ``"Getting Started!"`` -> ``"getting-started"``.
    """
    slug = _SLUG_STRIP.sub("", text.strip().lower())
    return _SLUG_SPACE.sub("-", slug) or "section"


class MarkdownRenderer:
    """Renders Markdown page bodies to HTML fragments.

    One renderer is shared by every page of a build.

    Args:
        content_dir: Absolute path to the content directory, used to check
            rewritten link targets.

    """

    def __init__(self, content_dir: Path) -> None:
        from patitas import Markdown

        self._content_dir = content_dir
        self._md = Markdown(plugins=["table"])

    def render(self, body: str, source_file: str) -> RenderedMarkdown:
        """Render *body*, the Markdown of *source_file* (content-relative).

        Raises:
            ContentError: If Patitas fails on the source.

        """
        try:
            fragment = self._md(body)
        except Exception as exc:
            msg = f"Failed rendering markdown {source_file}: {exc}"
            raise ContentError(msg) from exc
        return self._post_process(fragment, source_file)

    def _post_process(self, fragment: str, source_file: str) -> RenderedMarkdown:
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(fragment, "html.parser", multi_valued_attributes=None)

        items: list[TOCItem] = []
        seen: dict[str, int] = {}
        for heading in soup.find_all(_HEADING_TAGS):
            text = heading.get_text()
            anchor = _unique(heading.get("id") or slugify(text), seen)
            heading["id"] = anchor
            items.append(TOCItem(level=int(heading.name[1]), id=anchor, text=text))

        for link in soup.find_all("a", href=True):
            link["href"] = rewrite_link(link["href"], source_file, self._content_dir)

        return RenderedMarkdown(html=str(soup), toc_items=tuple(items))


def _unique(slug: str, seen: dict[str, int]) -> str:
    if slug not in seen:
        seen[slug] = 0
        return slug
    while True:
        seen[slug] += 1
        candidate = f"{slug}-{seen[slug]}"
        if candidate not in seen:
            seen[candidate] = 0
            return candidate
