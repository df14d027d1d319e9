"""Visible editor registry"""

from __future__ import annotations

from models.editor import VisibleEditor

from .events import Signal


class EditorRegistry:
    """The set of editors currently visible in the IDE"""

    def __init__(self):
        self._editors: dict[str, VisibleEditor] = {}
        self.changed = Signal("editors.changed")

    def replace(self, editors: list[VisibleEditor]) -> None:
        self._editors = {editor.uri: editor for editor in editors}
        self.changed.emit(list(self._editors))

    def get(self, uri: str) -> VisibleEditor | None:
        return self._editors.get(uri)

    def uris(self) -> list[str]:
        return list(self._editors)

    def visible(self) -> list[VisibleEditor]:
        return list(self._editors.values())
