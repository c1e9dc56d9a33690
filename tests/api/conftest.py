"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from radarfeed.api.app import app
from radarfeed.services.session import Session
from tests.fake_feed import feed_settings


async def _fast_probe(host: str, timeout: float) -> float | None:
    return {"lb1.feed.test": 0.03, "lb2.feed.test": 0.01}.get(host)


@pytest.fixture
async def test_app(feed):
    """FastAPI app with a session wired to the fake feed."""
    async with feed.client() as http:
        session = Session(feed_settings(), http_client=http, prober=_fast_probe)
        app.state.session = session
        yield app
        await session.aclose()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
