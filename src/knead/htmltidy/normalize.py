"""Whitespace normalization — the first of the two normalizer passes.

Walks the document tree with an inherited ``Mode`` and rewrites text nodes in
place:

- text runs have their whitespace collapsed to single spaces;
- whitespace-only text nodes between block boundaries are pruned;
- text at the edges of a block is trimmed;
- ``<pre>``, ``<textarea>``, ``<script>`` and ``<style>`` keep their content
  verbatim.

Each sibling step is a fold ``(mode_in, node) -> mode_out``: processing a node
may change the mode used for the siblings that follow it. Blanked text nodes
are unlinked only after their whole sibling group has been walked.

``normalize_html`` is the entry point used by the build: parse, normalize,
then print with ``HTMLPrinter``.

Note:
    Some text nodes may keep a trailing space after normalization (for
    instance before an inline element that is followed by a block). The
    printer relies on that exact spacing; keep it.

"""

from __future__ import annotations

import io
import re
from collections.abc import Iterable

from knead.htmltidy._types import SPACE_CHARS, WHITESPACE_CHARS, Mode, NodeKind
from knead.htmltidy.categories import Category, flow_category
from knead.htmltidy.printer import HTMLPrinter
from knead.htmltidy.tree import Tree, parse_document

_WHITESPACE_RUN = re.compile(f"[{re.escape(WHITESPACE_CHARS)}]+")


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace with a single ASCII space.

    Leading and trailing runs are reduced to one space, not removed.
    """
    return _WHITESPACE_RUN.sub(" ", text)


def is_all_whitespace(text: str) -> bool:
    """True for empty or whitespace-only text."""
    return not text.strip(WHITESPACE_CHARS)


def element_modes(ambient: Mode, category: Category) -> tuple[Mode, Mode]:
    """Return ``(child_mode, ambient_after)`` for an element.

    PRESERVE never reaches here: elements inside a verbatim region are
    skipped before their category matters.
    """
    if category is Category.PRESERVE_CONTENT:
        return Mode.PRESERVE, ambient
    if category is Category.INLINE:
        return Mode.NORMALIZE, Mode.NORMALIZE
    return Mode.FREE, Mode.FREE


def normalize_whitespace(tree: Tree, mode: Mode, siblings: Iterable[int]) -> None:
    """Normalize a sibling group and everything below it.

    Args:
        tree: The document tree, mutated in place.
        mode: Ambient mode at the start of the group.
        siblings: Node indices of the group, in document order.

    """
    siblings = tuple(siblings)
    for index in siblings:
        mode = _normalize_node(tree, mode, index)

    for index in siblings:
        node = tree[index]
        if node.kind is NodeKind.TEXT and node.data == "":
            tree.unlink(index)


def _normalize_node(tree: Tree, mode: Mode, index: int) -> Mode:
    node = tree[index]

    if node.kind is NodeKind.ELEMENT:
        if mode is Mode.PRESERVE:
            return mode
        child_mode, after = element_modes(mode, flow_category(node.data))
        normalize_whitespace(tree, child_mode, tree.children(index))
        return after

    if node.kind is NodeKind.TEXT:
        return _normalize_text(tree, mode, index)

    normalize_whitespace(tree, mode, tree.children(index))
    return mode


def _normalize_text(tree: Tree, mode: Mode, index: int) -> Mode:
    node = tree[index]

    if mode is Mode.NORMALIZE:
        node.data = collapse_whitespace(node.data)
        if (
            is_all_whitespace(node.data)
            and not tree.is_inline(node.prev_sibling)
            and not tree.is_inline(node.next_sibling)
        ):
            node.data = ""
        return mode

    if mode is Mode.FREE:
        node.data = collapse_whitespace(node.data)
        if is_all_whitespace(node.data):
            node.data = ""
            return mode
        # Keep the prefix clear for indentation below block nodes.
        if node.prev_sibling is None and not tree.is_inline(node.parent):
            node.data = node.data.lstrip(SPACE_CHARS)
        if node.next_sibling is None and not tree.is_inline(node.parent):
            node.data = node.data.rstrip(SPACE_CHARS)
        # Once real text has been seen the rest of the run must normalize.
        return Mode.NORMALIZE

    return mode


def normalize_html(html_text: str) -> str:
    """Parse a whole HTML document and return a tidied serialization.

    For most documents the result is a fixed point: feeding it back in yields
    the same text. Text that follows a block, void or comment sibling inside a
    paragraph-like run can gain a leading space on a second pass.

    Raises:
        HTMLParseError: If the parser rejects the document.

    """
    tree = parse_document(html_text)

    normalize_whitespace(tree, Mode.FREE, (tree.root,))

    out = io.StringIO()
    HTMLPrinter(out).print_nodes(tree, Mode.FREE, 0, (tree.root,))
    return out.getvalue()
