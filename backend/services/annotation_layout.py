"""
Annotation Layout Engine - Align end-of-line step callouts
"""

from __future__ import annotations

from dataclasses import dataclass

from models.editor import Callout
from models.region import Range

from .text_document import TextDocument

DEFAULT_CUSHION = 2
DEFAULT_FILLER = "┄"
DEFAULT_TAB_SIZE = 4


@dataclass(frozen=True)
class ProjectedStep:
    """A step of the pinned result after projection onto one document"""

    index: int  # position in the result's full location list
    range: Range | None
    message: str | None = None


def visual_column(line_text: str, character: int, tab_size: int) -> int:
    """Visual column of a character column, widening each preceding tab to tab_size"""
    character = min(max(character, 0), len(line_text))
    tabs = line_text.count("\t", 0, character)
    return character + tabs * (max(tab_size, 1) - 1)


def step_message(index: int, text: str | None) -> str:
    if text:
        return f"Step {index + 1}: {text}"
    return f"Step {index + 1}"


def layout_callouts(
    document: TextDocument,
    steps: list[ProjectedStep],
    tab_size: int,
    cushion: int = DEFAULT_CUSHION,
    filler: str = DEFAULT_FILLER,
) -> list[Callout]:
    """Callouts at the end of each step's end line, messages starting in one visual column"""
    placed = [step for step in steps if step.range is not None]
    if not placed:
        return []

    anchors = []
    for step in placed:
        line = document.line_at(step.range.end.line)
        anchors.append((line.end, visual_column(line.text, line.end.character, tab_size)))

    max_column = max(column for _, column in anchors) + cushion

    callouts = []
    for step, (end, column) in zip(placed, anchors):
        message = step_message(step.index, step.message)
        callouts.append(
            Callout(
                range=Range(start=end, end=end),
                hover_message=message,
                content_text=f" {filler * (max_column - column)} {message}",
                step_number=step.index + 1,
            )
        )
    return callouts
