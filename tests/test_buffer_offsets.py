import pytest

from format_engine.buffer import (
    BufferSnapshot,
    BufferValidationError,
    OffsetIndex,
    Position,
    Selection,
    ensure_position,
    split_lines,
)

SOURCE = "int x=1;\nint y  =2;\n"


def make_index(text: str = SOURCE) -> OffsetIndex:
    return OffsetIndex.build(split_lines(text))


def test_split_lines_keeps_terminators() -> None:
    assert split_lines(SOURCE) == ("int x=1;\n", "int y  =2;\n")
    assert split_lines("a\r\nb") == ("a\r\n", "b")
    assert split_lines("") == ()
    assert "".join(split_lines("x\n\ny")) == "x\n\ny"


def test_build_accumulates_line_offsets() -> None:
    index = make_index()

    assert [(entry.offset, entry.length) for entry in index] == [(0, 9), (9, 11)]
    assert index.total_length == len(SOURCE)
    assert index.line_count == 2


def test_empty_index_spans_nothing() -> None:
    index = OffsetIndex.build([])

    assert index.total_length == 0
    assert index.line_count == 0
    assert index.position_of(0) == Position(0, 0)
    assert index.offset_of(0, 0) == 0


def test_line_and_column_lookup() -> None:
    index = make_index()

    assert index.line_of(0) == 0
    assert index.line_of(8) == 0  # the newline belongs to its line
    assert index.line_of(9) == 1
    assert index.column_of(13) == 4
    assert index.position_of(16) == Position(1, 7)


def test_offset_round_trip_for_every_position() -> None:
    index = make_index()

    for line, text in enumerate(split_lines(SOURCE)):
        for column in range(len(text)):
            offset = index.offset_of(line, column)
            assert index.line_of(offset) == line
            assert index.column_of(offset) == column


def test_end_of_buffer_after_trailing_newline() -> None:
    index = make_index()

    assert index.position_of(len(SOURCE)) == Position(2, 0)
    assert index.offset_of(2, 0) == len(SOURCE)


def test_end_of_buffer_without_trailing_newline_clamps_to_last_line() -> None:
    index = make_index("ab\ncd")

    assert index.position_of(5) == Position(1, 2)
    assert index.offset_of(1, 2) == 5


def test_zero_length_lines_never_contain_an_offset() -> None:
    index = OffsetIndex.build(["", "ab", "", "c"])

    assert index.line_of(0) == 1
    assert index.line_of(2) == 3
    assert index.position_of(3) == Position(3, 1)


def test_offsets_outside_buffer_raise() -> None:
    index = make_index()

    with pytest.raises(IndexError):
        index.line_of(len(SOURCE) + 1)
    with pytest.raises(IndexError):
        index.line_of(-1)


def test_ensure_position_rejects_out_of_bounds() -> None:
    index = make_index()

    assert ensure_position(index, Position(2, 0)) == Position(2, 0)
    assert ensure_position(index, Position(0, 9)) == Position(0, 9)
    with pytest.raises(BufferValidationError):
        ensure_position(index, Position(0, 10))
    with pytest.raises(BufferValidationError):
        ensure_position(index, Position(3, 0))
    with pytest.raises(BufferValidationError):
        ensure_position(make_index("ab\ncd"), Position(2, 0))


def test_snapshot_index_is_built_from_its_lines() -> None:
    snapshot = BufferSnapshot.from_text(SOURCE)

    assert "".join(snapshot.lines) == SOURCE
    assert snapshot.index.total_length == len(SOURCE)
    assert snapshot.index is snapshot.index


def test_selection_helpers() -> None:
    cursor = Selection.cursor(1, 4)
    backwards = Selection.from_coordinates(1, 8, 0, 4)

    assert cursor.is_empty
    assert backwards.is_reversed
    assert backwards.normalized() == Selection.from_coordinates(0, 4, 1, 8)
    with pytest.raises(ValueError):
        Position(-1, 0)
