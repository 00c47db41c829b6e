"""Pages — split a content file into frontmatter parameters and body.

Frontmatter is a YAML mapping delimited by ``---`` lines at the very top of
the file::

    ---
    title: Getting Started
    ---

    # Getting Started

Files without a leading ``---`` have no frontmatter and are used verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from knead._errors import FrontmatterError

_OPENING = re.compile(r"\A---[ \t]*\r?\n")
_CLOSING = re.compile(r"^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class Page:
    """A content file split into its parts.

    Attributes:
        params: Frontmatter parameters (empty when there is none).
        body: Content without the frontmatter block.

    """

    params: dict[str, Any] = field(default_factory=dict)
    body: str = ""


def parse_page(source: str) -> Page:
    """Extract YAML frontmatter iff the file begins with ``---``.

    Raises:
        FrontmatterError: If the block is unterminated, is not valid YAML, or
            is not a mapping.

    """
    trimmed = source.lstrip()
    opening = _OPENING.match(trimmed)
    if opening is None:
        return Page(params={}, body=source)

    closing = _CLOSING.search(trimmed, opening.end())
    if closing is None:
        msg = "unclosed frontmatter: missing closing '---' line"
        raise FrontmatterError(msg)

    raw = trimmed[opening.end():closing.start()]
    try:
        params = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        msg = f"invalid YAML frontmatter: {exc}"
        raise FrontmatterError(msg) from exc
    if not isinstance(params, dict):
        msg = f"frontmatter must be a mapping, got {type(params).__name__}"
        raise FrontmatterError(msg)

    return Page(params=params, body=trimmed[closing.end():].lstrip("\n"))
