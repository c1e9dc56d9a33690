"""Shared fixtures for feed tests."""

from __future__ import annotations

import pytest

from radarfeed.services.feed_client import FeedClient
from tests.fake_feed import FakeFeed, feed_settings


@pytest.fixture
def feed():
    """Fake feed with load balancers, zones and aircraft for lb1."""
    return FakeFeed.default()


@pytest.fixture
def settings():
    return feed_settings()


@pytest.fixture
async def feed_client(feed, settings):
    """FeedClient wired to the fake feed."""
    async with feed.client() as http:
        yield FeedClient(settings, http_client=http)
