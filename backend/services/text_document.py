"""
Text Document - Line index over an immutable text
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

from models.region import Position, Range, Region

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TextLine:
    """A single line without its line break"""

    line_number: int
    text: str
    end: Position


class TextDocument:
    """Offset/position conversions over one version of a document"""

    def __init__(self, uri: str, text: str):
        self.uri = uri
        self.text = text
        self._line_starts = [0]
        self._line_ends = []
        for match in _LINE_BREAK.finditer(text):
            self._line_ends.append(match.start())
            self._line_starts.append(match.end())
        self._line_ends.append(len(text))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_at(self, line: int) -> TextLine:
        line = min(max(line, 0), self.line_count - 1)
        start = self._line_starts[line]
        end = self._line_ends[line]
        return TextLine(
            line_number=line,
            text=self.text[start:end],
            end=Position(line=line, character=end - start),
        )

    def offset_at(self, position: Position) -> int:
        """Offset of a position, clamped to the document and to its line"""
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return len(self.text)
        start = self._line_starts[position.line]
        end = self._line_ends[position.line]
        return start + min(max(position.character, 0), end - start)

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self.text))
        line = bisect_right(self._line_starts, offset) - 1
        # An offset inside a \r\n pair belongs to the end of the line
        character = min(offset, self._line_ends[line]) - self._line_starts[line]
        return Position(line=line, character=character)

    def get_text(self, range_: Range | None = None) -> str:
        if range_ is None:
            return self.text
        return self.text[self.offset_at(range_.start) : self.offset_at(range_.end)]


def region_to_range(document: TextDocument, region: Region | None) -> Range:
    """Convert a 1-based analysis region into a range on the given document"""
    if region is None:
        return Range.of(0, 0, 0, 0)

    if region.start_line is None:
        if region.char_offset is None:
            return Range.of(0, 0, 0, 0)
        start = document.position_at(region.char_offset)
        end = document.position_at(region.char_offset + (region.char_length or 0))
        return Range(start=start, end=end)

    start_line = region.start_line - 1
    start_character = (region.start_column or 1) - 1
    end_line = (region.end_line if region.end_line is not None else region.start_line) - 1
    if region.end_column is not None:
        end_character = region.end_column - 1
    else:
        end_character = document.line_at(end_line).end.character

    start = document.position_at(document.offset_at(Position(line=start_line, character=start_character)))
    end = document.position_at(document.offset_at(Position(line=end_line, character=end_character)))
    if document.offset_at(end) < document.offset_at(start):
        end = start
    return Range(start=start, end=end)
