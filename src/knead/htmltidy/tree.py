"""Arena document tree — flat node storage addressed by index.

The normalizer needs parent and sibling lookups while it walks and mutates a
document. Rather than wiring nodes to each other, every node lives in one
list owned by the ``Tree``; parent, previous and next sibling are plain
indices into that list. Children are an ordered list of indices owned by
their parent record.

Trees are built from a BeautifulSoup document parsed with the html5lib tree
builder, which applies browser-grade error recovery (misplaced blocks are
hoisted out of ``<p>``, missing ``<head>``/``<body>`` are created, ...). The
printer renders whatever shape the parser produced.

Thread Safety:
    A tree is private to one call. The normalization pass mutates it in
    place, so a tree must never be shared between concurrent callers.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from knead._errors import HTMLParseError
from knead.htmltidy._types import NodeKind
from knead.htmltidy.categories import is_inline, is_preserve, is_raw_text, is_void

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag


@dataclass(slots=True)
class Node:
    """A single node record.

    Attributes:
        kind: What the node is.
        data: Tag name for elements, character data for text, comments and
            doctypes, empty for the document.
        attrs: Attribute ``(key, value)`` pairs in parse order.
        parent: Index of the owning node, ``None`` for the document or a
            node that has been unlinked.
        prev_sibling: Index of the previous sibling, if any.
        next_sibling: Index of the next sibling, if any.
        children: Ordered child indices.

    """

    kind: NodeKind
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    parent: int | None = None
    prev_sibling: int | None = None
    next_sibling: int | None = None
    children: list[int] = field(default_factory=list)


class Tree:
    """An HTML document stored as an arena of ``Node`` records.

    Index ``0`` is always the document node.
    """

    __slots__ = ("_nodes",)

    ROOT = 0

    def __init__(self) -> None:
        self._nodes: list[Node] = [Node(NodeKind.DOCUMENT)]

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> int:
        return self.ROOT

    # ----- construction -----

    def add(
        self,
        kind: NodeKind,
        data: str = "",
        attrs: Iterable[tuple[str, str]] = (),
    ) -> int:
        """Create a detached node and return its index."""
        self._nodes.append(Node(kind, data, list(attrs)))
        return len(self._nodes) - 1

    def append_child(self, parent: int, child: int) -> None:
        """Attach *child* as the last child of *parent*."""
        parent_node = self._nodes[parent]
        child_node = self._nodes[child]
        if parent_node.children:
            last = parent_node.children[-1]
            self._nodes[last].next_sibling = child
            child_node.prev_sibling = last
        child_node.parent = parent
        parent_node.children.append(child)

    def unlink(self, index: int) -> None:
        """Detach a node from its parent, repairing the sibling links."""
        node = self._nodes[index]
        if node.parent is None:
            return
        self._nodes[node.parent].children.remove(index)
        if node.prev_sibling is not None:
            self._nodes[node.prev_sibling].next_sibling = node.next_sibling
        if node.next_sibling is not None:
            self._nodes[node.next_sibling].prev_sibling = node.prev_sibling
        node.parent = node.prev_sibling = node.next_sibling = None

    # ----- lookups -----

    def children(self, index: int) -> tuple[int, ...]:
        """Snapshot of a node's children, safe to iterate while pruning."""
        return tuple(self._nodes[index].children)

    def first_child(self, index: int) -> int | None:
        children = self._nodes[index].children
        return children[0] if children else None

    def is_text(self, index: int | None) -> bool:
        return index is not None and self._nodes[index].kind is NodeKind.TEXT

    def is_element(self, index: int | None) -> bool:
        return index is not None and self._nodes[index].kind is NodeKind.ELEMENT

    def is_inline(self, index: int | None) -> bool:
        return self.is_element(index) and is_inline(self._nodes[index].data)  # type: ignore[index]

    def is_preserve(self, index: int | None) -> bool:
        return self.is_element(index) and is_preserve(self._nodes[index].data)  # type: ignore[index]

    def is_void(self, index: int | None) -> bool:
        return self.is_element(index) and is_void(self._nodes[index].data)  # type: ignore[index]

    def in_raw_text(self, index: int) -> bool:
        """Whether a text node sits directly inside a raw-text element."""
        parent = self._nodes[index].parent
        return self.is_element(parent) and is_raw_text(self._nodes[parent].data)  # type: ignore[index]

    # ----- conversion -----

    @classmethod
    def from_soup(cls, soup: BeautifulSoup) -> Tree:
        """Build an arena tree from a parsed BeautifulSoup document.

        Adjacent strings are merged into a single text node.
        """
        tree = cls()
        tree._convert_children(tree.ROOT, soup)
        return tree

    def _convert_children(self, parent: int, element: BeautifulSoup | Tag) -> None:
        from bs4 import Comment, Doctype, NavigableString, Tag

        for child in element.children:
            if isinstance(child, Doctype):
                self.append_child(parent, self.add(NodeKind.DOCTYPE, str(child)))
            elif isinstance(child, Comment):
                self.append_child(parent, self.add(NodeKind.COMMENT, str(child)))
            elif isinstance(child, NavigableString):
                siblings = self._nodes[parent].children
                if siblings and self.is_text(siblings[-1]):
                    self._nodes[siblings[-1]].data += str(child)
                else:
                    self.append_child(parent, self.add(NodeKind.TEXT, str(child)))
            elif isinstance(child, Tag):
                attrs = [
                    (str(key), value if isinstance(value, str) else " ".join(value))
                    for key, value in child.attrs.items()
                ]
                index = self.add(NodeKind.ELEMENT, child.name, attrs)
                self.append_child(parent, index)
                self._convert_children(index, child)


def parse_document(html_text: str) -> Tree:
    """Parse a whole HTML document into an arena tree.

    Raises:
        HTMLParseError: If the parser rejects the markup outright.

    """
    from bs4 import BeautifulSoup
    from bs4.builder import ParserRejectedMarkup

    try:
        soup = BeautifulSoup(html_text, "html5lib", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        msg = f"Failed to parse HTML document: {exc}"
        raise HTMLParseError(msg) from exc
    return Tree.from_soup(soup)
