"""Segment table and line index for mapping plain text back to its source.

A :class:`SegmentTable` records, for every run of plain text, where it came
from in the marked-up source. A :class:`LineIndex` converts between flat
offsets and line/column positions for any one text. Together they let a
caller take a finding at some line and column of the plain text and report
it at the matching line and column of the original document.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from .errors import MalformedPositionError


@dataclass(frozen=True)
class Position:
    """A line/column location in a text.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (0-indexed)
    """
    line: int
    column: int

    def __str__(self):
        return f"{self.line}:{self.column}"


def coerce_position(position: Any) -> Position:
    """Return ``position`` as a Position.

    Accepts a Position or a mapping with integer ``line`` and ``column``
    entries, as produced by JSON tooling.

    Raises:
        MalformedPositionError: If ``position`` has any other shape.
    """
    if isinstance(position, Position):
        line, column = position.line, position.column
    elif isinstance(position, Mapping) and "line" in position and "column" in position:
        line, column = position["line"], position["column"]
    else:
        raise MalformedPositionError(
            f"Expected a position with 'line' and 'column', got {position!r}"
        )
    for name, value in (("line", line), ("column", column)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedPositionError(f"Position {name} must be an int, got {value!r}")
    if isinstance(position, Position):
        return position
    return Position(line=line, column=column)


@dataclass(frozen=True)
class Segment:
    """One run of plain text and where it came from.

    Example:
        For ``**Str**`` the single segment is
        ``Segment(original=(0, 7), intermediate=(2, 5), generated=(0, 3), text="Str")``.

    Attributes:
        original: Source offsets spanning the node's full markup
        intermediate: Source offsets of exactly the payload, padding stripped
        generated: Offsets of the payload in the plain text
        text: The payload itself
    """
    original: tuple[int, int]
    intermediate: tuple[int, int]
    generated: tuple[int, int]
    text: str

    @property
    def padding(self) -> int:
        """Width of the markup before the payload."""
        return self.intermediate[0] - self.original[0]

    def original_offset(self, position: int) -> int:
        """Map a generated offset inside this segment to a source offset."""
        delta = position - self.generated[0]
        return self.original[0] + self.padding + delta


class SegmentTable:
    """An ordered, contiguous table of segments over a plain text.

    Segments are kept in emission order. Their generated ranges are
    strictly increasing and together cover the whole plain text, which is
    what lets lookups binary-search over them.
    """

    def __init__(self, segments: Iterable[Segment] = ()):
        self._segments: tuple[Segment, ...] = tuple(segments)
        self._starts = [seg.generated[0] for seg in self._segments]
        self._ends = [seg.generated[1] for seg in self._segments]

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other):
        if not isinstance(other, SegmentTable):
            return NotImplemented
        return self._segments == other._segments

    __hash__ = None

    def __repr__(self):
        return f"SegmentTable({list(self._segments)!r})"

    def find(self, position: int, end_bias: bool = False) -> Optional[Segment]:
        """Find the segment containing a generated offset.

        By default a segment contains ``start <= position < end``. With
        ``end_bias`` it contains ``start < position <= end`` instead, so an
        offset on a shared boundary resolves to the segment that ends there
        rather than the one that begins there.

        Returns:
            The matching segment, or None.
        """
        if not self._segments:
            return None
        if end_bias:
            idx = bisect_left(self._ends, position)
            if idx < len(self._segments) and self._starts[idx] < position:
                return self._segments[idx]
            return None
        idx = bisect_right(self._starts, position) - 1
        if idx >= 0 and position < self._ends[idx]:
            return self._segments[idx]
        return None

    def original_offset_for(self, position: int, end_bias: bool = False) -> Optional[int]:
        """Map a generated offset to an offset in the original source.

        Returns:
            The original offset, or None if no segment contains ``position``.
        """
        segment = self.find(position, end_bias=end_bias)
        if segment is None:
            return None
        return segment.original_offset(position)

    def get_segments(self) -> list[Segment]:
        """Get all segments.

        Returns:
            List of all segments in order
        """
        return list(self._segments)


class LineIndex:
    """Converts between flat offsets and line/column positions in one text.

    Lines are 1-indexed and columns 0-indexed. A line's trailing newline
    belongs to that line, and the offset just past the end of the text
    belongs to the last line.

    Example:
        >>> index = LineIndex("ab\\ncd")
        >>> index.position_for(3)
        Position(line=2, column=0)
        >>> index.offset_for(Position(line=1, column=2))
        2
    """

    def __init__(self, text: str):
        self._length = len(text)
        self._line_starts = [0]
        for i, char in enumerate(text):
            if char == '\n':
                self._line_starts.append(i + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _line_end(self, line: int) -> int:
        """Offset just past the last character of a 1-indexed line, newline included."""
        if line < len(self._line_starts):
            return self._line_starts[line]
        return self._length

    def offset_for(self, position: Any) -> Optional[int]:
        """Convert a line/column position to a flat offset.

        Raises:
            MalformedPositionError: If ``position`` is not a position.

        Returns:
            The offset, or None if the position lies outside the text.
        """
        position = coerce_position(position)
        if position.line < 1 or position.line > len(self._line_starts) or position.column < 0:
            return None
        offset = self._line_starts[position.line - 1] + position.column
        end = self._line_end(position.line)
        # The end of the text is a valid offset on the last line only.
        if position.line == len(self._line_starts):
            if offset > end:
                return None
        elif offset >= end:
            return None
        return offset

    def position_for(self, offset: int) -> Optional[Position]:
        """Convert a flat offset to a line/column position.

        The offset just past the end of the text is valid and maps to the
        end of the last line.

        Returns:
            The position, or None if the offset lies outside the text.
        """
        if offset < 0 or offset > self._length:
            return None
        line = bisect_right(self._line_starts, offset)
        return Position(line=line, column=offset - self._line_starts[line - 1])


# vim: set ts=4 sw=4 expandtab:
