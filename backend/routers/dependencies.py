"""Shared router dependencies"""

from __future__ import annotations

from fastapi import HTTPException, Request

from services.session import AnnotationSession


def get_session(request: Request) -> AnnotationSession:
    """The annotation session created by the application lifespan"""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Annotation session not initialized")
    return session
