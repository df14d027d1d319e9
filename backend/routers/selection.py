"""Selection API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from models.selection import SelectionRequest, SelectionResponse
from services.session import AnnotationSession

from .dependencies import get_session

router = APIRouter()


def build_response(session: AnnotationSession) -> SelectionResponse:
    return SelectionResponse(
        phase=session.selection.phase,
        active_result_id=session.selection.active_result_id,
        resolved=session.selection.resolve(session.store.find_result) is not None,
        editors=session.hub.snapshot(),
    )


@router.get("", response_model=SelectionResponse)
async def get_selection(session: AnnotationSession = Depends(get_session)) -> SelectionResponse:
    """Get the pinned result"""
    return build_response(session)


@router.post("", response_model=SelectionResponse)
async def select_result(
    request: SelectionRequest,
    session: AnnotationSession = Depends(get_session),
) -> SelectionResponse:
    """Selection event from the IDE; events without a known result leave the pin alone"""
    candidate = request.result_id
    if candidate is not None and session.store.find_result(candidate) is None:
        candidate = None

    if session.selection.select(candidate):
        await session.pipeline.settle()
    return build_response(session)
