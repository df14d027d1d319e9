"""Visible editor and decoration API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse

from models.editor import DecorationsResponse, EditorDecorations, EditorsUpdateRequest
from services.session import AnnotationSession

from .dependencies import get_session

router = APIRouter()


@router.put("", response_model=DecorationsResponse)
async def update_editors(
    request: EditorsUpdateRequest,
    session: AnnotationSession = Depends(get_session),
) -> DecorationsResponse:
    """Replace the visible editor set and return the re-rendered decorations"""
    session.editors.replace(request.editors)
    return DecorationsResponse(editors=await session.pipeline.settle())


@router.get("/decorations", response_model=DecorationsResponse)
async def get_decorations(session: AnnotationSession = Depends(get_session)) -> DecorationsResponse:
    """Latest decorations of every visible editor"""
    return DecorationsResponse(editors=session.hub.snapshot())


@router.get("/decorations/one", response_model=EditorDecorations)
async def get_editor_decorations(
    uri: str,
    session: AnnotationSession = Depends(get_session),
) -> EditorDecorations:
    """Latest decorations of one visible editor"""
    decorations = session.hub.get(uri)
    if decorations is None:
        raise HTTPException(status_code=404, detail=f"No visible editor: {uri}")
    return decorations


@router.get("/decorations/stream")
async def stream_decorations(session: AnnotationSession = Depends(get_session)):
    """Push decoration updates as they are applied (SSE)"""
    queue = session.hub.subscribe()

    async def event_generator():
        try:
            for decorations in session.hub.snapshot():
                yield {"event": "decorations", "data": decorations.model_dump_json()}
            while True:
                decorations = await queue.get()
                yield {"event": "decorations", "data": decorations.model_dump_json()}
        finally:
            session.hub.unsubscribe(queue)

    return EventSourceResponse(event_generator())
