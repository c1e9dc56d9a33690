"""Zone listing and selection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from radarfeed.api.deps import get_session, to_http_error
from radarfeed.errors import RadarFeedError
from radarfeed.services.session import Session

router = APIRouter(prefix="/zones", tags=["zones"])


class ZoneSelection(BaseModel):
    name: str = Field(..., min_length=1, description="Zone name or 'all'")


@router.get("")
async def list_zones(
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> dict:
    try:
        names = await session.zone_names(refresh)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return {"zones": names, "selected": session.selected_zone()}


@router.put("/selection")
async def select_zone(
    body: ZoneSelection,
    session: Session = Depends(get_session),
) -> dict:
    """Select a zone. Unknown names clear the selection (``zone`` is null)."""
    try:
        zone = await session.select_zone(body.name)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return {"zone": zone}
