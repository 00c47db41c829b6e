"""Tag categories — which elements are void, verbatim, inline or block.

Pure lookups over static tag sets. Tag names are compared case-insensitively.
``wbr`` is listed as both void and inline; ``classify`` reports it as void,
while the membership predicates answer each question on its own.
"""

from __future__ import annotations

from knead.htmltidy._types import Category

VOID_TAGS: frozenset[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "param", "source", "track", "wbr",
})

PRESERVE_TAGS: frozenset[str] = frozenset({"pre", "script", "style", "textarea"})

INLINE_TAGS: frozenset[str] = frozenset({
    "a", "abbr", "b", "bdi", "bdo", "cite",
    "code", "data", "del", "dfn", "em", "i", "ins", "kbd", "label",
    "mark", "q", "rp", "rt", "ruby", "s", "samp",
    "small", "span", "strong", "sub", "sup", "time",
    "u", "var", "wbr",
})

# Elements whose text children are raw text: the parser does not decode
# entities inside them, so the printer must not encode them either.
RAW_TEXT_TAGS: frozenset[str] = frozenset({
    "script", "style", "xmp", "iframe", "noembed", "noframes", "plaintext",
})


def is_void(tag: str) -> bool:
    """Void elements never have closing tags."""
    return tag.lower() in VOID_TAGS


def is_preserve(tag: str) -> bool:
    """Whether the element's contents are reproduced verbatim."""
    return tag.lower() in PRESERVE_TAGS


def is_inline(tag: str) -> bool:
    """Whether the element flows within a line of text."""
    return tag.lower() in INLINE_TAGS


def is_raw_text(tag: str) -> bool:
    return tag.lower() in RAW_TEXT_TAGS


def flow_category(tag: str) -> Category:
    """Category that drives whitespace flow around an element.

    Void elements flow like blocks unless they are also inline (``wbr``).
    Never returns ``Category.VOID``.
    """
    if is_preserve(tag):
        return Category.PRESERVE_CONTENT
    if is_inline(tag):
        return Category.INLINE
    return Category.BLOCK


def classify(tag: str) -> Category:
    """Return the formatting category for *tag*.

    Anything that is not void, preserve-content or inline is a block.
    """
    name = tag.lower()
    if name in VOID_TAGS:
        return Category.VOID
    if name in PRESERVE_TAGS:
        return Category.PRESERVE_CONTENT
    if name in INLINE_TAGS:
        return Category.INLINE
    return Category.BLOCK
