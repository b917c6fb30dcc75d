"""Tests for the segment table, line index and position handling."""

import pytest
from stringsource.errors import MalformedPositionError
from stringsource.source_map import (
    LineIndex,
    Position,
    Segment,
    SegmentTable,
    coerce_position,
)


@pytest.fixture
def table():
    """Segments for ``**match** text``."""
    return SegmentTable([
        Segment(original=(0, 9), intermediate=(2, 7), generated=(0, 5), text="match"),
        Segment(original=(9, 14), intermediate=(9, 14), generated=(5, 10), text=" text"),
    ])


class TestSegmentTableLookup:
    """Test reverse lookup from generated offsets."""

    def test_start_of_padded_segment(self, table):
        """Offset 0 skips the leading markup."""
        assert table.original_offset_for(0) == 2

    def test_inside_segment(self, table):
        assert table.original_offset_for(3) == 5
        assert table.original_offset_for(7) == 11

    def test_boundary_defaults_to_following_segment(self, table):
        """Without bias a shared boundary belongs to the segment that begins there."""
        assert table.find(5) is table[1]
        assert table.original_offset_for(5) == 9

    def test_boundary_with_end_bias(self, table):
        """With end bias a shared boundary belongs to the segment that ends there."""
        assert table.find(5, end_bias=True) is table[0]
        assert table.original_offset_for(5, end_bias=True) == 7

    def test_end_bias_inside_segment(self, table):
        assert table.original_offset_for(3, end_bias=True) == 5

    def test_end_of_text(self, table):
        """The end of the text is only found with end bias."""
        assert table.original_offset_for(10) is None
        assert table.original_offset_for(10, end_bias=True) == 14

    def test_start_with_end_bias(self, table):
        """No segment ends at offset 0."""
        assert table.original_offset_for(0, end_bias=True) is None

    def test_out_of_range(self, table):
        assert table.original_offset_for(-1) is None
        assert table.original_offset_for(1000) is None
        assert table.original_offset_for(-1, end_bias=True) is None
        assert table.original_offset_for(11, end_bias=True) is None

    def test_empty_table(self):
        empty = SegmentTable()
        assert len(empty) == 0
        assert not empty
        assert empty.find(0) is None
        assert empty.original_offset_for(0) is None
        assert empty.original_offset_for(0, end_bias=True) is None

    def test_lookup_is_idempotent(self, table):
        assert [table.original_offset_for(i) for i in range(10)] == \
            [table.original_offset_for(i) for i in range(10)]

    def test_every_offset_is_covered(self, table):
        assert all(table.original_offset_for(i) is not None for i in range(10))

    def test_get_segments_returns_copy(self, table):
        segments = table.get_segments()
        segments.clear()
        assert len(table) == 2


class TestSegment:
    """Test single segment arithmetic."""

    def test_padding(self):
        segment = Segment(original=(1, 23), intermediate=(2, 6), generated=(1, 5), text="link")
        assert segment.padding == 1
        assert segment.original_offset(1) == 2
        assert segment.original_offset(4) == 5


class TestLineIndex:
    """Test offset and line/column conversion."""

    def test_position_for_offset(self):
        index = LineIndex("First\nalt text")
        assert index.position_for(0) == Position(line=1, column=0)
        assert index.position_for(5) == Position(line=1, column=5)
        assert index.position_for(6) == Position(line=2, column=0)
        assert index.position_for(10) == Position(line=2, column=4)

    def test_position_for_end_of_text(self):
        index = LineIndex("ab\ncd")
        assert index.position_for(5) == Position(line=2, column=2)
        assert index.position_for(6) is None
        assert index.position_for(-1) is None

    def test_offset_for_position(self):
        index = LineIndex("First\nalt text")
        assert index.offset_for(Position(line=1, column=0)) == 0
        assert index.offset_for(Position(line=1, column=5)) == 5
        assert index.offset_for(Position(line=2, column=4)) == 10

    def test_offset_for_out_of_range(self):
        index = LineIndex("First\nalt text")
        assert index.offset_for(Position(line=0, column=0)) is None
        assert index.offset_for(Position(line=-1, column=-1)) is None
        assert index.offset_for(Position(line=1, column=6)) is None
        assert index.offset_for(Position(line=2, column=9)) is None
        assert index.offset_for(Position(line=3, column=0)) is None

    def test_offset_for_end_of_text(self):
        """Only the last line may reach one past its final character."""
        index = LineIndex("First\nalt text")
        assert index.offset_for(Position(line=2, column=8)) == 14
        assert index.position_for(14) == Position(line=2, column=8)
        assert index.offset_for(Position(line=1, column=6)) is None

    def test_offset_for_mapping(self):
        index = LineIndex("ab\ncd")
        assert index.offset_for({"line": 2, "column": 1}) == 4

    def test_empty_text(self):
        index = LineIndex("")
        assert index.line_count == 1
        assert index.position_for(0) == Position(line=1, column=0)
        assert index.offset_for(Position(line=1, column=0)) == 0
        assert index.offset_for(Position(line=1, column=1)) is None

    def test_round_trip(self):
        text = "one\ntwo\n\nfour"
        index = LineIndex(text)
        for offset in range(len(text) + 1):
            assert index.offset_for(index.position_for(offset)) == offset


class TestCoercePosition:
    """Test position argument validation."""

    def test_position_passes_through(self):
        position = Position(line=1, column=2)
        assert coerce_position(position) is position

    def test_mapping(self):
        assert coerce_position({"line": 3, "column": 0}) == Position(line=3, column=0)

    @pytest.mark.parametrize("value", [
        None,
        "1:2",
        (1, 2),
        {"line": 1},
        {"column": 1},
        {"line": "1", "column": 2},
        {"line": 1.0, "column": 2},
        {"line": True, "column": 2},
    ])
    def test_malformed(self, value):
        with pytest.raises(MalformedPositionError):
            coerce_position(value)

    def test_malformed_is_type_error(self):
        with pytest.raises(TypeError):
            coerce_position(None)

    def test_str(self):
        assert str(Position(line=2, column=7)) == "2:7"
