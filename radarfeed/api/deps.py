"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import HTTPException, Request

from radarfeed.errors import (
    ApiError,
    InvalidSelectorError,
    NotFoundError,
    PreconditionError,
    RadarFeedError,
)
from radarfeed.services.session import Session


def get_session(request: Request) -> Session:
    """The shared session from app.state."""
    return request.app.state.session


def to_http_error(exc: RadarFeedError) -> HTTPException:
    """Map a feed error onto the HTTP status the API reports."""
    if isinstance(exc, InvalidSelectorError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, PreconditionError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ApiError):
        return HTTPException(status_code=502, detail=f"Feed error: {exc}")
    return HTTPException(status_code=500, detail=str(exc))
