from __future__ import annotations

from models.region import Position, Range, Region
from services.text_document import TextDocument, region_to_range


def test_lines_and_offsets() -> None:
    doc = TextDocument("file:///a.txt", "ab\r\ncd\nef")

    assert doc.line_count == 3
    assert doc.line_at(0).text == "ab"
    assert doc.line_at(1).end == Position(line=1, character=2)
    assert doc.offset_at(Position(line=1, character=0)) == 4
    assert doc.position_at(8) == Position(line=2, character=1)


def test_offsets_are_clamped() -> None:
    doc = TextDocument("file:///a.txt", "ab\ncd")

    assert doc.offset_at(Position(line=0, character=99)) == 2
    assert doc.offset_at(Position(line=9, character=0)) == 5
    assert doc.position_at(-3) == Position(line=0, character=0)
    assert doc.position_at(3) == Position(line=1, character=0)
    # Inside a \r\n pair the position is the end of the line
    assert TextDocument("x", "ab\r\ncd").position_at(3) == Position(line=0, character=2)


def test_trailing_newline_adds_an_empty_line() -> None:
    doc = TextDocument("file:///a.txt", "ab\n")

    assert doc.line_count == 2
    assert doc.line_at(1).text == ""


def test_region_columns_are_one_based_and_end_exclusive() -> None:
    doc = TextDocument("file:///a.txt", "alpha beta\ngamma\n")

    range_ = region_to_range(doc, Region(start_line=1, start_column=7, end_column=11))

    assert doc.get_text(range_) == "beta"


def test_region_defaults_cover_whole_lines() -> None:
    doc = TextDocument("file:///a.txt", "alpha beta\ngamma delta\nend\n")

    assert doc.get_text(region_to_range(doc, Region(start_line=2))) == "gamma delta"
    assert doc.get_text(region_to_range(doc, Region(start_line=1, end_line=2))) == "alpha beta\ngamma delta"


def test_region_from_char_offsets() -> None:
    doc = TextDocument("file:///a.txt", "alpha beta\ngamma\n")

    range_ = region_to_range(doc, Region(char_offset=11, char_length=5))

    assert range_ == Range.of(1, 0, 1, 5)


def test_missing_region_is_document_start() -> None:
    doc = TextDocument("file:///a.txt", "alpha\n")

    assert region_to_range(doc, None) == Range.of(0, 0, 0, 0)


def test_region_past_end_is_clamped() -> None:
    doc = TextDocument("file:///a.txt", "short\n")

    range_ = region_to_range(doc, Region(start_line=7, start_column=3, end_column=9))

    assert range_.start == range_.end == Position(line=1, character=0)
