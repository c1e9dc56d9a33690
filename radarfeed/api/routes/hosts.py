"""Load balancer listing and selection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from radarfeed.api.deps import get_session, to_http_error
from radarfeed.errors import RadarFeedError
from radarfeed.services.session import Session

router = APIRouter(prefix="/hosts", tags=["hosts"])


class HostSelection(BaseModel):
    """Host selector: hostname, index, 'latency' or 'random'."""

    selector: str | int = Field(..., description="Hostname, index, 'latency' or 'random'")


@router.get("")
async def list_hosts(
    refresh: bool = False,
    session: Session = Depends(get_session),
) -> dict:
    try:
        hosts = await session.load_balancers(refresh)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    selected = session.selected_host()
    return {
        "hosts": hosts,
        "selected": selected.model_dump() if selected else None,
    }


@router.put("/selection")
async def select_host(
    body: HostSelection,
    session: Session = Depends(get_session),
) -> dict:
    try:
        selected = await session.select_host(body.selector)
    except RadarFeedError as exc:
        raise to_http_error(exc)
    return selected.model_dump()
