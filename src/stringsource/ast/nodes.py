from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


# --- Document tree node classes. ---

@dataclass(frozen=True)
class Node(object):
    """Base class for all document tree nodes.

    Nodes are produced by an external markup parser and are never modified
    by this library. Every node knows where its markup sits in the authored
    source.

    Attributes:
        range: The ``(start, end)`` offsets of the node's markup in the source,
            end exclusive.
        raw: The source substring exactly spanning ``range``.
    """
    range: tuple[int, int]
    raw: str

    @property
    def type(self) -> str:
        """The parser type tag of this node."""
        raise NotImplementedError

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Parent(Node):
    """Base class for nodes that hold child nodes.

    Attributes:
        children: The child nodes in document order.
    """
    children: tuple[Node, ...] = ()


# --- Leaf nodes ---

@dataclass(frozen=True)
class Text(Node):
    """Represents a run of plain text.

    Example:
        Hello **world**   // "Hello " and "world" are Text nodes

    Attributes:
        value: The text with markup removed.
    """
    value: str

    @property
    def type(self) -> str:
        return "Str"

    def __repr__(self):
        return f"Text({self.value!r}, {self.range})"


@dataclass(frozen=True)
class InlineCode(Node):
    """Represents an inline code span.

    Example:
        `code`

    Attributes:
        value: The code without the surrounding backticks.
    """
    value: str

    @property
    def type(self) -> str:
        return "Code"


@dataclass(frozen=True)
class Literal(Node):
    """Represents any other value-bearing leaf, such as a code block or comment.

    Attributes:
        value: The node's text payload.
        kind: The parser type tag, e.g. "CodeBlock".
    """
    value: str
    kind: str = "Literal"

    @property
    def type(self) -> str:
        return self.kind


@dataclass(frozen=True)
class Image(Node):
    """Represents an image.

    The alt text is the image's payload. The title is used only when there
    is no alt text.

    Example:
        ![alt](http://example.png "title")

    Attributes:
        url: The image location.
        alt: The alt text, or None.
        title: The title, or None.
    """
    url: str = ""
    alt: Optional[str] = None
    title: Optional[str] = None

    @property
    def type(self) -> str:
        return "Image"


# --- Parent nodes ---

@dataclass(frozen=True)
class Paragraph(Parent):
    """Represents a paragraph block.

    Text directly inside a paragraph is running text: its own range is
    already exactly its payload.
    """

    @property
    def type(self) -> str:
        return "Paragraph"


@dataclass(frozen=True)
class Emphasis(Parent):
    """Represents inline emphasis wrapping other inline nodes.

    Example:
        *em*  **strong**  ~~delete~~

    Attributes:
        kind: One of "Emphasis", "Strong" or "Delete".
    """
    kind: str = "Emphasis"

    @property
    def type(self) -> str:
        return self.kind


@dataclass(frozen=True)
class Link(Parent):
    """Represents a link.

    The payload of a link comes from its children. The title is metadata
    and never becomes part of the plain text.

    Example:
        [link](http://example "title")

    Attributes:
        url: The link target.
        title: The link title, or None.
    """
    url: str = ""
    title: Optional[str] = None

    @property
    def type(self) -> str:
        return "Link"


@dataclass(frozen=True)
class Html(Parent):
    """Represents inline HTML.

    Parsers either keep the markup as an opaque ``value`` or break it into
    child nodes.

    Example:
        <b>bold</b>

    Attributes:
        value: The opaque HTML text, or None when the markup was parsed.
    """
    value: Optional[str] = None

    @property
    def type(self) -> str:
        return "Html"


@dataclass(frozen=True)
class Container(Parent):
    """Represents any other structural node, such as a document or header.

    Attributes:
        kind: The parser type tag, e.g. "Document" or "Header".
    """
    kind: str = "Document"

    @property
    def type(self) -> str:
        return self.kind


def payload_of(node: Node) -> Optional[str]:
    """Return the text a node contributes on its own, or None.

    The first non-empty field among value, alt and title wins. An empty
    string counts as absent.
    """
    match node:
        case Text(value=value) | InlineCode(value=value) | Literal(value=value):
            return value or None
        case Html(value=value):
            return value or None
        case Image(alt=alt, title=title):
            return alt or title or None
        case _:
            return None


def children_of(node: Node) -> tuple[Node, ...]:
    """Return the child nodes of a node, or an empty tuple for leaves."""
    match node:
        case Parent(children=children):
            return children
        case _:
            return ()


# vim: set ts=4 sw=4 expandtab:
