"""HTML normalizer — canonical whitespace and indentation for whole documents.

Two passes over a parsed document tree:

1. ``normalize_whitespace`` collapses and prunes whitespace according to
   CSS-like inline/block rules.
2. ``HTMLPrinter`` re-serializes the tree with four-space indentation.

Quick Start:
    >>> from knead.htmltidy import normalize_html
    >>> print(normalize_html("<p>  hello   <b>world</b> </p>"), end="")
    <html>
        <head>
        </head>
        <body>
            <p>
                hello <b>world</b>
            </p>
        </body>
    </html>

"""

from knead.htmltidy._types import Category, Mode, NodeKind
from knead.htmltidy.categories import classify, is_inline, is_preserve, is_void
from knead.htmltidy.normalize import (
    collapse_whitespace,
    normalize_html,
    normalize_whitespace,
)
from knead.htmltidy.printer import HTMLPrinter
from knead.htmltidy.tree import Node, Tree, parse_document

__all__ = [
    "Category",
    "HTMLPrinter",
    "Mode",
    "Node",
    "NodeKind",
    "Tree",
    "classify",
    "collapse_whitespace",
    "is_inline",
    "is_preserve",
    "is_void",
    "normalize_html",
    "normalize_whitespace",
    "parse_document",
]
