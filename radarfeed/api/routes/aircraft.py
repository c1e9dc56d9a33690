"""Aircraft feed, search and detail endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from radarfeed.api.deps import get_session, to_http_error
from radarfeed.errors import RadarFeedError
from radarfeed.services.session import Session

router = APIRouter(prefix="/aircraft", tags=["aircraft"])


@router.get("")
async def list_aircraft(
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> dict[str, dict]:
    try:
        records = await session.aircraft(refresh)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return {fid: rec.model_dump(exclude_none=True) for fid, rec in records.items()}


@router.get("/search")
async def search_aircraft(
    field: str = Query(..., description="Aircraft field to match, e.g. callsign"),
    pattern: str = Query(..., description="Regular expression"),
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> list[dict]:
    try:
        records = await session.records_by_attribute(field, pattern, refresh)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return [rec.model_dump(exclude_none=True) for rec in records]


@router.get("/search/details")
async def search_aircraft_details(
    field: str = Query(...),
    pattern: str = Query(...),
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> dict:
    """Matches with details; per-flight failures are listed under ``errors``."""
    try:
        result = await session.details_by_attribute(field, pattern, refresh)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return result.model_dump(exclude_none=True)


@router.get("/{flight_id}")
async def get_aircraft_details(
    flight_id: str,
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> dict:
    try:
        record = await session.aircraft_details(flight_id, refresh)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return record.model_dump(exclude_none=True)
