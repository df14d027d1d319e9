"""Analysis log API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from models.result import AnalysisLog
from services.session import AnnotationSession

from .dependencies import get_session

router = APIRouter()


@router.get("", response_model=list[AnalysisLog])
async def list_logs(session: AnnotationSession = Depends(get_session)) -> list[AnalysisLog]:
    """List loaded analysis logs"""
    return session.store.logs


@router.post("")
async def add_log(log: AnalysisLog, session: AnnotationSession = Depends(get_session)) -> dict[str, Any]:
    """Load an analysis log (replaces a log with the same uri)"""
    session.store.add_log(log)
    return {"status": "success", "uri": log.uri, "resultCount": len(log.results)}


@router.delete("")
async def remove_log(
    uri: str = Query(..., description="Uri of the log to remove"),
    session: AnnotationSession = Depends(get_session),
) -> dict[str, Any]:
    """Remove a log; annotations of its results disappear on the next pass"""
    if not session.store.remove_log(uri):
        raise HTTPException(status_code=404, detail=f"Log not found: {uri}")

    editors = await session.pipeline.settle()
    return {
        "status": "success",
        "uri": uri,
        "editors": [decorations.model_dump() for decorations in editors],
    }
