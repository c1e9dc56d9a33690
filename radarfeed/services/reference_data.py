"""Airports and airlines reference lists."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from radarfeed.errors import DecodeError
from radarfeed.services.feed_client import FeedClient

logger = logging.getLogger(__name__)

PATH_AIRPORTS = "/_json/airports.php"
PATH_AIRLINES = "/_json/airlines.php"


class ReferenceData:
    """Cached ``rows`` of the airports and airlines endpoints."""

    def __init__(self, client: FeedClient):
        self._client = client
        self._rows: dict[str, list[dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    async def airports(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return await self._get(PATH_AIRPORTS, force_refresh)

    async def airlines(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return await self._get(PATH_AIRLINES, force_refresh)

    async def _get(self, path: str, force_refresh: bool) -> list[dict[str, Any]]:
        async with self._lock:
            if self._rows.get(path) and not force_refresh:
                return self._rows[path]

            url = self._client.settings.base_url + path
            payload = await self._client.fetch_json(url)
            rows = payload.get("rows") if isinstance(payload, dict) else None
            if not isinstance(rows, list):
                raise DecodeError("Expected an object with a 'rows' list", url)
            self._rows[path] = rows
            logger.info("Fetched %d rows from %s", len(rows), path)
            return rows
