"""
Annotation Session - Wires state, event sources and the projection pipeline
"""

from __future__ import annotations

from typing import Any, Callable

from .annotation_layout import DEFAULT_CUSHION, DEFAULT_FILLER, DEFAULT_TAB_SIZE
from .baseline import BaselineCache, BaselineProvider, create_provider
from .editors import EditorRegistry
from .pipeline import AnnotationPipeline, DecorationHub
from .result_store import ResultStore
from .selection_state import SelectionState
from .uri_rebaser import UriRebaser


class AnnotationSession:
    """Everything one IDE connection needs, subscribed together"""

    def __init__(
        self,
        provider: BaselineProvider,
        rebaser: UriRebaser | None = None,
        cushion: int = DEFAULT_CUSHION,
        filler: str = DEFAULT_FILLER,
        tab_size: int = DEFAULT_TAB_SIZE,
    ):
        self.store = ResultStore()
        self.selection = SelectionState()
        self.editors = EditorRegistry()
        self.baselines = BaselineCache(provider)
        self.rebaser = rebaser or UriRebaser()
        self.hub = DecorationHub()
        self.pipeline = AnnotationPipeline(
            store=self.store,
            selection=self.selection,
            editors=self.editors,
            baselines=self.baselines,
            rebaser=self.rebaser,
            hub=self.hub,
            cushion=cushion,
            filler=filler,
            tab_size=tab_size,
        )

        # Passes run on: new pinned result, visible editor change, log removal
        self._unsubscribers: list[Callable[[], None]] = [
            self.selection.changed.subscribe(lambda result_id: self.pipeline.request_update("selection")),
            self.editors.changed.subscribe(lambda uris: self.pipeline.request_update("visible editors")),
            self.store.logs_removed.subscribe(lambda logs: self.pipeline.request_update("logs removed")),
        ]

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "AnnotationSession":
        layout = config.get("layout", {})
        return cls(
            provider=create_provider(config),
            rebaser=UriRebaser.from_config(config),
            cushion=layout.get("cushion", DEFAULT_CUSHION),
            filler=layout.get("filler", DEFAULT_FILLER),
            tab_size=layout.get("tabSize", DEFAULT_TAB_SIZE),
        )

    def close(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
