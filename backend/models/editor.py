"""Editor-side data models"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .region import Range


class VisibleEditor(BaseModel):
    """An editor currently visible in the IDE"""

    uri: str
    text: str
    tab_size: int | None = Field(default=None, ge=1)  # None: use the configured layout.tabSize


class EditorsUpdateRequest(BaseModel):
    """Request replacing the visible editor set"""

    editors: list[VisibleEditor] = []


class Callout(BaseModel):
    """End-of-line annotation for a projected step"""

    range: Range  # empty range at the end of the anchor line
    hover_message: str
    content_text: str
    step_number: int


class EditorDecorations(BaseModel):
    """Both decoration sets for one editor, replaced together"""

    uri: str
    highlights: list[Range] = []
    callouts: list[Callout] = []
    generation: int = 0


class DecorationsResponse(BaseModel):
    """Decorations for all visible editors"""

    editors: list[EditorDecorations]
