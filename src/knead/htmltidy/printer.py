"""HTML printer — the second normalizer pass.

Serializes a normalized tree into stably indented text. The printer walks the
tree with the same mode threading as the whitespace pass, with two deliberate
differences:

- In FREE mode an inline element's children are printed in PRESERVE mode, so
  the inline run is written as one unit without re-indentation. The siblings
  after it continue in NORMALIZE mode.
- In NORMALIZE mode a block or preserve-content element is printed as if the
  ambient mode were FREE (indented, on its own line), but its following
  siblings keep NORMALIZE.

Both passes are kept as separate functions on purpose; folding them into a
shared table would erase these differences.

Text is HTML-escaped except directly inside raw-text elements (``<script>``,
``<style>``, ...), so the output re-parses to the same tree.
"""

from __future__ import annotations

import html
from collections.abc import Iterable
from typing import TextIO

from knead.htmltidy._types import SPACE_CHARS, WHITESPACE_CHARS, Mode, NodeKind
from knead.htmltidy.tree import Tree

INDENT = "    "


def _has_space_suffix(text: str) -> bool:
    return bool(text) and text[-1] in WHITESPACE_CHARS


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


class HTMLPrinter:
    """Writes a document tree to a text sink.

    Args:
        out: Any writable text stream; ``io.StringIO`` in practice.

    """

    __slots__ = ("_out",)

    def __init__(self, out: TextIO) -> None:
        self._out = out

    def _write(self, text: str) -> None:
        self._out.write(text)

    def _indent(self, level: int) -> None:
        self._write(INDENT * level)

    def _text(self, tree: Tree, index: int, text: str) -> str:
        if tree.in_raw_text(index):
            return text
        return html.escape(text, quote=False)

    def print_nodes(
        self,
        tree: Tree,
        mode: Mode,
        indent: int,
        siblings: Iterable[int],
    ) -> None:
        """Print a sibling group at the given indentation level."""
        for index in siblings:
            mode = self._print_node(tree, mode, indent, index)

    def _print_node(self, tree: Tree, mode: Mode, indent: int, index: int) -> Mode:
        node = tree[index]

        if node.kind is NodeKind.DOCUMENT:
            self.print_nodes(tree, mode, indent, tree.children(index))
        elif node.kind is NodeKind.DOCTYPE:
            self._write(f"<!DOCTYPE {node.data}>\n")
        elif node.kind is NodeKind.TEXT:
            return self._print_text(tree, mode, indent, index)
        elif node.kind is NodeKind.ELEMENT:
            return self._print_element(tree, mode, indent, index)
        elif node.kind is NodeKind.COMMENT:
            if mode is Mode.FREE:
                self._indent(indent)
            self._write(f"<!--{node.data}-->")
            if mode is Mode.FREE:
                self._write("\n")
        return mode

    def _print_text(self, tree: Tree, mode: Mode, indent: int, index: int) -> Mode:
        node = tree[index]
        data = node.data

        if mode is Mode.PRESERVE:
            self._write(self._text(tree, index, data))
        elif mode is Mode.NORMALIZE:
            if not tree.is_inline(node.next_sibling) and (
                _has_space_suffix(data) or not tree.is_inline(node.parent)
            ):
                data = data.rstrip(SPACE_CHARS) + "\n"
            self._write(self._text(tree, index, data))
        elif mode is Mode.FREE:
            self._indent(indent)
            text = data.lstrip(SPACE_CHARS)
            if node.next_sibling is None:
                text = data.rstrip(SPACE_CHARS) + "\n"
            self._write(self._text(tree, index, text))
            return Mode.NORMALIZE
        return mode

    def _print_element(self, tree: Tree, mode: Mode, indent: int, index: int) -> Mode:
        node = tree[index]
        name = node.data
        inline = tree.is_inline(index)
        preserve = tree.is_preserve(index)
        child_mode = mode
        next_mode = mode

        if mode is Mode.NORMALIZE:
            if preserve:
                child_mode = Mode.PRESERVE
                mode = Mode.FREE
            elif not inline:
                child_mode = Mode.FREE
                mode = Mode.FREE
        elif mode is Mode.FREE:
            if preserve:
                child_mode = Mode.PRESERVE
            elif inline:
                # Print the inline interior atomically.
                child_mode = Mode.PRESERVE
                next_mode = Mode.NORMALIZE

        if mode is Mode.FREE:
            self._indent(indent)

        self._write("<" + name)
        for key, value in node.attrs:
            self._write(f' {key}="{_escape_attr(value)}"')
        self._write(">")

        if tree.is_void(index):
            if mode is Mode.FREE:
                self._write("\n")
            return next_mode

        first = tree.first_child(index)
        if preserve:
            # Browsers drop one leading newline in these elements, so always
            # write exactly one.
            if tree.is_text(first) and not tree[first].data.startswith("\n"):  # type: ignore[index]
                self._write("\n")
        elif not inline and mode is Mode.FREE:
            self._write("\n")

        self.print_nodes(tree, child_mode, indent + 1, tree.children(index))

        if mode is Mode.FREE and not (preserve or inline):
            self._indent(indent)

        self._write(f"</{name}>")

        following = node.next_sibling
        if mode is Mode.NORMALIZE:
            if following is not None and not (
                tree.is_inline(following) or tree.is_text(following)
            ):
                self._write("\n")
            elif following is None and not tree.is_inline(node.parent):
                self._write("\n")
        elif mode is Mode.FREE:
            if (
                not inline
                or tree.is_preserve(following)
                or (not tree.is_inline(following) and not tree.is_text(following))
            ):
                self._write("\n")

        return next_mode
