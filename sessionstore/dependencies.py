"""FastAPI dependency injection: session access."""

from __future__ import annotations

from fastapi import HTTPException, Request

from .session import Session


def get_session(request: Request) -> Session:
    """Get the session from request state."""
    session = getattr(request.state, "session", None)
    if session is None:
        raise HTTPException(
            status_code=500,
            detail={"error": "Session unavailable", "message": "SessionMiddleware is not installed"},
        )
    return session


def destroy_session(request: Request) -> None:
    """Mark the session for destruction."""
    get_session(request).invalidate()
