"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from radarfeed.api.routes import aircraft, hosts, zones
from radarfeed.config import Settings
from radarfeed.errors import RadarFeedError
from radarfeed.services.session import Session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open one shared feed session, applying any configured selections."""
    settings = Settings.from_env()
    session = Session(settings)

    if settings.default_host:
        try:
            await session.select_host(settings.default_host)
        except RadarFeedError as exc:
            logger.warning("Startup host selection %r failed: %s", settings.default_host, exc)
    if settings.default_zone:
        try:
            if await session.select_zone(settings.default_zone) is None:
                logger.warning("Startup zone %r not found", settings.default_zone)
        except RadarFeedError as exc:
            logger.warning("Startup zone selection %r failed: %s", settings.default_zone, exc)

    app.state.session = session
    try:
        yield
    finally:
        await session.aclose()


app = FastAPI(
    title="radarfeed API",
    description="Live aircraft positions from the flight feed load balancers",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(hosts.router, prefix="/api")
app.include_router(zones.router, prefix="/api")
app.include_router(aircraft.router, prefix="/api")


@app.get("/api/health")
async def health():
    session: Session = app.state.session
    host = session.selected_host()
    snapshot = session.snapshot()
    return {
        "status": "ok",
        "host": host.hostname if host else None,
        "zone": session.selected_zone(),
        "aircraft_cached": len(snapshot.records) if snapshot else 0,
    }
