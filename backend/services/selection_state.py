"""
Active-Selection State Machine - Which result is pinned for annotation
"""

from __future__ import annotations

from typing import Callable, TypeVar

from models.result import ResultId
from models.selection import SelectionPhase

from .events import Signal

T = TypeVar("T")


class SelectionState:
    """Sticky pin of the active result.

    Selection events without a result are ignored so that stepping through the
    flow of a pinned result keeps its annotations. The pinned id is never
    cleared; it may dangle after its log is removed until the next selection.
    """

    def __init__(self):
        self._active: ResultId | None = None
        self.changed = Signal("selection.changed")

    @property
    def phase(self) -> SelectionPhase:
        return SelectionPhase.UNSET if self._active is None else SelectionPhase.PINNED

    @property
    def active_result_id(self) -> ResultId | None:
        return self._active

    def select(self, candidate: ResultId | None) -> bool:
        """Apply a selection event; returns True when the pinned id changed"""
        if candidate is None or candidate == self._active:
            return False
        self._active = candidate
        self.changed.emit(candidate)
        return True

    def resolve(self, lookup: Callable[[ResultId], T | None]) -> T | None:
        """Re-resolve the pinned id; None when unset or no longer resolvable"""
        if self._active is None:
            return None
        return lookup(self._active)
