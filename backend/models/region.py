"""Region and position models"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    """Zero-based line/character position in a document"""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int


class Range(BaseModel):
    """Half-open range between two positions"""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def of(cls, start_line: int, start_character: int, end_line: int, end_character: int) -> "Range":
        return cls(
            start=Position(line=start_line, character=start_character),
            end=Position(line=end_line, character=end_character),
        )

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


class Region(BaseModel):
    """Location region as recorded by the analysis (baseline coordinates).

    Lines and columns are 1-based and ``end_column`` is exclusive. A region may
    instead be given as a character offset and length.
    """

    start_line: int | None = None
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    char_offset: int | None = None
    char_length: int | None = None
