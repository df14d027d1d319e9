"""Models module - Pydantic data models"""

from .diff import DiffBlock, EditOp, EditScript
from .editor import (
    Callout,
    DecorationsResponse,
    EditorDecorations,
    EditorsUpdateRequest,
    VisibleEditor,
)
from .region import Position, Range, Region
from .result import AnalysisLog, AnalysisResult, ResultId, StepLocation
from .selection import SelectionPhase, SelectionRequest, SelectionResponse

__all__ = [
    # Diff models
    "DiffBlock",
    "EditOp",
    "EditScript",
    # Region models
    "Position",
    "Range",
    "Region",
    # Result models
    "AnalysisLog",
    "AnalysisResult",
    "ResultId",
    "StepLocation",
    # Editor models
    "Callout",
    "DecorationsResponse",
    "EditorDecorations",
    "EditorsUpdateRequest",
    "VisibleEditor",
    # Selection models
    "SelectionPhase",
    "SelectionRequest",
    "SelectionResponse",
]
