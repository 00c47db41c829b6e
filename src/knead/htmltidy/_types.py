"""Shared enums for the HTML normalizer."""

from enum import Enum, IntEnum


class NodeKind(Enum):
    """The kinds of node an HTML document tree is made of."""

    DOCUMENT = "document"
    DOCTYPE = "doctype"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


class Mode(IntEnum):
    """Whitespace regime in effect at a point of sibling iteration.

    PRESERVE:
        Verbatim region (``<pre>`` and friends). Nothing is rewritten.
    NORMALIZE:
        Mid-flow with visible content around. Whitespace runs collapse to a
        single space but only vanish between two block boundaries.
    FREE:
        Nothing visible has been emitted on the line yet, so whitespace may be
        dropped entirely.

    """

    PRESERVE = 1
    NORMALIZE = 2
    FREE = 3


class Category(Enum):
    """Formatting category of an element, derived from its tag name."""

    VOID = "void"
    PRESERVE_CONTENT = "preserve_content"
    INLINE = "inline"
    BLOCK = "block"


# Characters trimmed at block edges. Other Unicode whitespace has already been
# collapsed to a plain space by the time trimming happens.
SPACE_CHARS = " \n\t"

# Unicode White_Space. ``str.isspace`` and ``\s`` also accept the U+001C-U+001F
# information separators, which are kept as ordinary characters here.
WHITESPACE_CHARS = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
