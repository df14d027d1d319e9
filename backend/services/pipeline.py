"""
Projection Pipeline - Turn the pinned result into per-editor decorations
"""

from __future__ import annotations

import asyncio

from models.diff import DiffBlock
from models.editor import EditorDecorations, VisibleEditor
from models.result import AnalysisResult

from .annotation_layout import (
    DEFAULT_CUSHION,
    DEFAULT_FILLER,
    DEFAULT_TAB_SIZE,
    ProjectedStep,
    layout_callouts,
)
from .baseline import BaselineCache
from .diff_engine import DiffEngine
from .editors import EditorRegistry
from .region_projector import project_region
from .result_store import ResultStore
from .selection_state import SelectionState
from .text_document import TextDocument
from .uri_rebaser import UriRebaser


class DecorationHub:
    """Latest decorations per visible editor, fanned out to subscribers"""

    def __init__(self, queue_size: int = 64):
        self.queue_size = queue_size
        self._latest: dict[str, EditorDecorations] = {}
        self._subscribers: list[asyncio.Queue] = []
        # Visible set of the newest pass that has started; older passes cannot publish
        self._retained_generation = 0
        self._retained: set[str] = set()

    def apply(self, decorations: EditorDecorations) -> bool:
        """Replace an editor's decorations unless a newer pass already owns them"""
        if decorations.generation < self._retained_generation or decorations.uri not in self._retained:
            print(
                f"[Pipeline] Dropping stale decorations for {decorations.uri} "
                f"(pass {decorations.generation}, visible set from pass {self._retained_generation})"
            )
            return False
        current = self._latest.get(decorations.uri)
        if current is not None and current.generation > decorations.generation:
            print(
                f"[Pipeline] Dropping stale decorations for {decorations.uri} "
                f"(pass {decorations.generation} < {current.generation})"
            )
            return False

        self._latest[decorations.uri] = decorations
        for queue in self._subscribers:
            if queue.full():
                # Slow consumer: drop its oldest update, the newest one supersedes it
                queue.get_nowait()
            queue.put_nowait(decorations)
        return True

    def retain(self, uris: list[str], generation: int) -> bool:
        """Forget editors that are no longer visible as of pass `generation`"""
        if generation < self._retained_generation:
            return False
        self._retained_generation = generation
        self._retained = set(uris)
        for uri in list(self._latest):
            if uri not in self._retained:
                del self._latest[uri]
        return True

    def get(self, uri: str) -> EditorDecorations | None:
        return self._latest.get(uri)

    def snapshot(self) -> list[EditorDecorations]:
        return list(self._latest.values())

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue):
        if queue in self._subscribers:
            self._subscribers.remove(queue)


class AnnotationPipeline:
    """Runs update passes: baseline fetch, diff, projection and layout per visible editor"""

    def __init__(
        self,
        store: ResultStore,
        selection: SelectionState,
        editors: EditorRegistry,
        baselines: BaselineCache,
        rebaser: UriRebaser,
        hub: DecorationHub,
        diff_engine: DiffEngine | None = None,
        cushion: int = DEFAULT_CUSHION,
        filler: str = DEFAULT_FILLER,
        tab_size: int = DEFAULT_TAB_SIZE,
    ):
        self.store = store
        self.selection = selection
        self.editors = editors
        self.baselines = baselines
        self.rebaser = rebaser
        self.hub = hub
        self.diff_engine = diff_engine or DiffEngine()
        self.cushion = cushion
        self.filler = filler
        self.tab_size = tab_size
        self._generation = 0
        self._latest_task: asyncio.Task | None = None
        # Last edit script per visible uri, reused while revision and both texts are unchanged
        self._scripts: dict[str, tuple[str | None, str, str, list[DiffBlock]]] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def request_update(self, reason: str = "") -> asyncio.Task:
        """Start a new pass; must be called with a running event loop"""
        self._generation += 1
        if reason:
            print(f"[Pipeline] Pass {self._generation} requested: {reason}")
        task = asyncio.ensure_future(self.run_pass(self._generation))
        self._latest_task = task
        return task

    async def settle(self) -> list[EditorDecorations]:
        """Wait for the most recent pass and return the current decorations"""
        if self._latest_task is not None:
            await self._latest_task
        return self.hub.snapshot()

    async def run_pass(self, generation: int) -> list[EditorDecorations]:
        editors = self.editors.visible()
        uris = [editor.uri for editor in editors]
        if not self.hub.retain(uris, generation):
            print(f"[Pipeline] Pass {generation} superseded before it started")
            return []
        for uri in list(self._scripts):
            if uri not in uris:
                del self._scripts[uri]

        result = self.selection.resolve(self.store.find_result)
        if result is None:
            # Unset, or the pinned result's log is gone: render nothing
            cleared = [EditorDecorations(uri=editor.uri, generation=generation) for editor in editors]
            return [item for item in cleared if self.hub.apply(item)]

        log = self.store.find_log(result.id)
        revision = log.revision_id if log else None
        applied = await asyncio.gather(
            *(self._decorate_editor(editor, result, revision, generation) for editor in editors)
        )
        return [item for item in applied if item is not None]

    async def _decorate_editor(
        self,
        editor: VisibleEditor,
        result: AnalysisResult,
        revision: str | None,
        generation: int,
    ) -> EditorDecorations | None:
        try:
            decorations = await self._build_decorations(editor, result, revision, generation)
        except Exception as e:
            print(f"[Pipeline] Skipping {editor.uri} in pass {generation}: {e}")
            return None
        return decorations if self.hub.apply(decorations) else None

    async def _build_decorations(
        self,
        editor: VisibleEditor,
        result: AnalysisResult,
        revision: str | None,
        generation: int,
    ) -> EditorDecorations:
        current_doc = TextDocument(editor.uri, editor.text)
        artifact_uri = await self.rebaser.translate_local_to_artifact(editor.uri)
        steps_in_doc = [
            (index, location)
            for index, location in enumerate(result.locations)
            if artifact_uri is not None and location.artifact_uri == artifact_uri
        ]
        if not steps_in_doc:
            return EditorDecorations(uri=editor.uri, generation=generation)

        baseline_text = await self.baselines.get(revision, editor.uri)
        baseline_doc = None
        script: list[DiffBlock] = []
        if baseline_text is not None:
            baseline_doc = TextDocument(editor.uri, baseline_text)
            script = self._edit_script(revision, editor.uri, baseline_text, editor.text)

        projected = []
        for index, location in steps_in_doc:
            try:
                range_ = project_region(script, current_doc, location.region, baseline_doc)
            except Exception as e:
                print(f"[Pipeline] Cannot project step {index + 1} in {editor.uri}: {e}")
                continue
            projected.append(ProjectedStep(index=index, range=range_, message=location.message))

        return EditorDecorations(
            uri=editor.uri,
            highlights=[step.range for step in projected if step.range is not None],
            callouts=layout_callouts(
                current_doc, projected, editor.tab_size or self.tab_size, self.cushion, self.filler
            ),
            generation=generation,
        )

    def _edit_script(self, revision: str | None, uri: str, baseline_text: str, text: str) -> list[DiffBlock]:
        cached = self._scripts.get(uri)
        if cached is not None and cached[:3] == (revision, baseline_text, text):
            return cached[3]
        script = self.diff_engine.diff_chars(baseline_text, text)
        self._scripts[uri] = (revision, baseline_text, text, script)
        return script
