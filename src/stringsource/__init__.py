"""Plain text of a markup document tree, mapped back to its source.

The main entry point is :class:`StringSource`, which flattens a tree once and
answers offset and line/column queries against the original document.
"""

from typing import Any, Optional

from .ast.nodes import Node
from .commands import Empty, Mask, ValueCommand, apply_command
from .errors import (
    CommandError,
    MalformedPositionError,
    SourceTextUnavailableError,
    StringSourceError,
)
from .flatten import Replacer, flatten
from .source_map import LineIndex, Position, Segment, SegmentTable, coerce_position

# Import serialization functions
from .ast.serialization import (
    node_to_dict,
    node_to_json,
    node_from_dict,
    node_from_json,
    node_to_yaml,
    node_from_yaml,
    segments_to_dict,
    segments_to_json,
    segments_to_yaml,
)


class StringSource:
    """Plain text of a document tree, with a map back to the marked-up source.

    The tree is flattened once, at construction. Every query afterwards is
    read-only, so one instance can be shared freely.

    Offsets are 0-indexed. Positions use 1-indexed lines and 0-indexed
    columns in both the plain text and the original source.

    Original line/column queries need the full original source text. Pass it
    as ``source_text``; otherwise it is taken from ``root.raw`` when the
    root starts at offset 0, which holds for a whole document.

    Example:
        source = StringSource(tree)
        text = str(source)                      # "This is Example"
        index = text.index("Example")
        source.original_offset_for_generated_offset(index)
        source.original_position_for_generated_position(Position(line=1, column=8))
    """

    def __init__(self, root: Node, source_text: Optional[str] = None,
                 replacer: Optional[Replacer] = None):
        """Flatten ``root`` and build the position indexes.

        Args:
            root: The root of the document tree.
            source_text: The full original source. Needed for original
                line/column queries when ``root`` is a sub-tree.
            replacer: Optional callback ``(node, parent) -> ValueCommand | None``
                used to mask or clear node values before they are emitted.
        """
        self.root_node = root
        flattened = flatten(root, replacer=replacer)
        self._text = flattened.text
        self._segments = flattened.segments
        self._generated_lines = LineIndex(self._text)
        if source_text is None and root.start == 0:
            source_text = root.raw
        self._original_lines = LineIndex(source_text) if source_text is not None else None

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self):
        return f"StringSource({self._text!r}, segments={len(self._segments)})"

    def get_segments(self) -> list[Segment]:
        """Get all segments.

        Returns:
            List of all segments in emission order
        """
        return self._segments.get_segments()

    def segment_for_generated_offset(self, offset: int, end_bias: bool = False) -> Optional[Segment]:
        """Return the segment containing a plain-text offset, or None."""
        return self._segments.find(offset, end_bias=end_bias)

    def original_offset_for_generated_offset(self, offset: int, end_bias: bool = False) -> Optional[int]:
        """Map a plain-text offset to an offset in the original source.

        Args:
            offset: Offset in the plain text (0-indexed).
            end_bias: If True, an offset on the boundary between two segments
                resolves to the segment that ends there. Use it for the end of
                a match.

        Returns:
            The original offset, or None if ``offset`` maps to nothing.
        """
        return self._segments.original_offset_for(offset, end_bias=end_bias)

    def generated_position_for_generated_offset(self, offset: int) -> Optional[Position]:
        """Convert a plain-text offset to a plain-text line/column position."""
        return self._generated_lines.position_for(offset)

    def original_position_for_generated_offset(self, offset: int, end_bias: bool = False) -> Optional[Position]:
        """Map a plain-text offset to a line/column position in the original source.

        Raises:
            SourceTextUnavailableError: If the original source text is unknown.
        """
        original_lines = self._require_original_lines()
        original = self.original_offset_for_generated_offset(offset, end_bias=end_bias)
        if original is None:
            return None
        return original_lines.position_for(original)

    def original_offset_for_generated_position(self, position: Any, end_bias: bool = False) -> Optional[int]:
        """Map a plain-text line/column position to an offset in the original source.

        Raises:
            MalformedPositionError: If ``position`` is not a position.
        """
        offset = self._generated_lines.offset_for(coerce_position(position))
        if offset is None:
            return None
        return self.original_offset_for_generated_offset(offset, end_bias=end_bias)

    def original_position_for_generated_position(self, position: Any, end_bias: bool = False) -> Optional[Position]:
        """Map a plain-text line/column position to one in the original source.

        Args:
            position: A Position, or a mapping with ``line`` and ``column``.
            end_bias: See :meth:`original_offset_for_generated_offset`.

        Returns:
            The original Position, or None if the position maps to nothing.

        Raises:
            MalformedPositionError: If ``position`` is not a position.
            SourceTextUnavailableError: If the original source text is unknown.
        """
        position = coerce_position(position)
        original_lines = self._require_original_lines()
        original = self.original_offset_for_generated_position(position, end_bias=end_bias)
        if original is None:
            return None
        return original_lines.position_for(original)

    def _require_original_lines(self) -> LineIndex:
        if self._original_lines is None:
            raise SourceTextUnavailableError(
                f"{self.root_node.type} node starts at offset {self.root_node.start}; "
                "pass source_text to map positions into the original source"
            )
        return self._original_lines


__all__ = [
    "StringSource",
    # Nodes
    "Node",
    # Positions and segments
    "LineIndex",
    "Position",
    "Segment",
    "SegmentTable",
    # Commands
    "Empty",
    "Mask",
    "ValueCommand",
    "apply_command",
    "Replacer",
    "flatten",
    # Serialization
    "node_to_dict",
    "node_to_json",
    "node_from_dict",
    "node_from_json",
    "node_to_yaml",
    "node_from_yaml",
    "segments_to_dict",
    "segments_to_json",
    "segments_to_yaml",
    # Errors
    "CommandError",
    "MalformedPositionError",
    "SourceTextUnavailableError",
    "StringSourceError",
]
