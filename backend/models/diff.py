"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class EditOp(str, Enum):
    """Kind of a run in a character-level edit script"""

    EQUAL = "equal"
    INSERT = "insert"  # present only in the current text
    DELETE = "delete"  # present only in the baseline text


class DiffBlock(BaseModel):
    """A single run of characters in an edit script"""

    op: EditOp
    text: str

    @property
    def length(self) -> int:
        return len(self.text)


# Ordered; Equal+Delete replay the baseline, Equal+Insert replay the current text
EditScript = list[DiffBlock]
