"""Selection data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .editor import EditorDecorations
from .result import ResultId


class SelectionPhase(str, Enum):
    """States of the active-selection machine"""

    UNSET = "unset"
    PINNED = "pinned"


class SelectionRequest(BaseModel):
    """Selection event from the IDE; ``result_id`` is null when nothing resolvable was selected"""

    result_id: ResultId | None = None


class SelectionResponse(BaseModel):
    """Current selection state"""

    phase: SelectionPhase
    active_result_id: ResultId | None = None
    resolved: bool = False
    editors: list[EditorDecorations] = []
