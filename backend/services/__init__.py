"""Services module - Business logic layer"""

from .annotation_layout import ProjectedStep, layout_callouts, step_message, visual_column
from .baseline import BaselineCache, GitBaselineProvider, HttpBaselineProvider, NullBaselineProvider
from .config_manager import ConfigManager
from .diff_engine import DiffEngine
from .pipeline import AnnotationPipeline, DecorationHub
from .region_projector import project_region, project_span
from .selection_state import SelectionState
from .session import AnnotationSession
from .text_document import TextDocument, region_to_range

__all__ = [
    "AnnotationPipeline",
    "AnnotationSession",
    "BaselineCache",
    "ConfigManager",
    "DecorationHub",
    "DiffEngine",
    "GitBaselineProvider",
    "HttpBaselineProvider",
    "NullBaselineProvider",
    "ProjectedStep",
    "SelectionState",
    "TextDocument",
    "layout_callouts",
    "project_region",
    "project_span",
    "region_to_range",
    "step_message",
    "visual_column",
]
