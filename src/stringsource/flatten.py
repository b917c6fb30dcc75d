"""Flatten a document tree into plain text plus a segment table.

Each value-bearing node yields one piece: its payload and the two source
ranges it came from. Pieces are then folded, in document order, into the
plain text and the table of segments.

Two extraction modes exist. Plain text directly inside a paragraph is
running text, so its own range is its payload. Everything else is wrapped in
markup (``**``, ``[...](...)``, backticks), and the payload has to be found
inside the raw markup of its container to strip that padding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from .ast.nodes import Node, Paragraph, Text, children_of, payload_of
from .commands import ValueCommand, apply_command
from .source_map import Segment, SegmentTable


logger = logging.getLogger(__name__)

Replacer = Callable[[Node, Optional[Node]], Optional[ValueCommand]]


class Piece(NamedTuple):
    """A payload and its source ranges, before a generated range is assigned."""
    original: tuple[int, int]
    intermediate: tuple[int, int]
    text: str


@dataclass(frozen=True)
class Flattened:
    """The plain text of a tree and the segments it was built from."""
    text: str
    segments: SegmentTable

    @classmethod
    def fold(cls, pieces: Iterable[Piece]) -> Flattened:
        """Assign generated ranges to pieces in order and join their text."""
        parts: list[str] = []
        segments: list[Segment] = []
        length = 0
        for piece in pieces:
            end = length + len(piece.text)
            segments.append(Segment(
                original=piece.original,
                intermediate=piece.intermediate,
                generated=(length, end),
                text=piece.text,
            ))
            parts.append(piece.text)
            length = end
        return cls(text="".join(parts), segments=SegmentTable(segments))


def _left_padding(raw: str, value: str, container: Node) -> int:
    # Start at 1 so an alt text of "!" does not match the "!" of "![".
    left = raw.find(value, 1)
    if left < 0:
        left = raw.find(value)
    if left < 0:
        logger.debug("Payload %r not found in raw %s markup at %s", value, container.type, container.range)
        left = 0
    return left


def _piece_for(node: Node, parent: Node, authored: str, value: str) -> Piece:
    if isinstance(node, Text) and isinstance(parent, Paragraph):
        return Piece(node.range, node.range, value)

    # <p>`code`</p> => the code span is its own container
    # <p><strong>text</strong></p> => the text's container is <strong>
    container = node if isinstance(parent, Paragraph) else parent
    raw = container.raw
    left = _left_padding(raw, authored, container)
    right = len(raw) - (left + len(authored))
    start, end = container.range
    return Piece(container.range, (start + left, end - right), value)


def extract(node: Node, parent: Optional[Node] = None,
            replacer: Optional[Replacer] = None) -> Iterator[Piece]:
    """Yield the pieces of plain text under ``node`` in document order.

    Args:
        node: The node to visit.
        parent: The node's direct parent, or None for the root. The root
            never contributes a payload of its own.
        replacer: Optional callback choosing a value command per node.

    Yields:
        One Piece per value-bearing node.
    """
    if parent is not None:
        authored = payload_of(node)
        if authored is not None:
            value = authored
            if replacer is not None:
                value = payload_of(apply_command(replacer(node, parent), node))
            if value:
                yield _piece_for(node, parent, authored, value)
            return
    for child in children_of(node):
        yield from extract(child, node, replacer)


def flatten(root: Node, replacer: Optional[Replacer] = None) -> Flattened:
    """Flatten a document tree into plain text and its segment table.

    Args:
        root: The root of the tree.
        replacer: Optional callback ``(node, parent) -> ValueCommand | None``.
            The command rewrites the node's value before it is emitted;
            padding is still located with the authored value.

    Returns:
        The Flattened text and segments. An empty tree gives ``""`` and no
        segments.
    """
    flattened = Flattened.fold(extract(root, None, replacer))
    logger.debug("Flattened %s node into %d segments (%d chars)",
                 root.type, len(flattened.segments), len(flattened.text))
    return flattened


# vim: set ts=4 sw=4 expandtab:
