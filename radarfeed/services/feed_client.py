"""Async JSON fetcher for the flight feed endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from radarfeed.config import Settings
from radarfeed.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


class FeedClient:
    """Async HTTP client returning decoded JSON.

    TLS certificate verification is disabled by default: the provider's
    edge hosts commonly serve self-signed or mismatched certificates. Set
    ``RADARFEED_VERIFY_TLS=1`` (or pass ``Settings(verify_tls=True)``) to
    turn it back on. An injected ``http_client`` keeps its own TLS settings.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings or Settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._settings.timeout,
            verify=self._settings.verify_tls,
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": self._settings.user_agent,
                **self._settings.extra_headers,
            },
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    async def fetch_json(self, url: str, timeout: float | None = None) -> Any:
        """GET *url* and decode the body as JSON.

        Raises ``TransportError`` for network, timeout and HTTP status
        failures, ``DecodeError`` when the body is not valid JSON.
        """
        logger.debug("GET %s", url)
        try:
            if timeout is None:
                resp = await self._client.get(url)
            else:
                resp = await self._client.get(url, timeout=timeout)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise TransportError("Request timed out", url) from exc
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"HTTP {exc.response.status_code}", url) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request failed: {exc}", url) from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError("Response is not valid JSON", url) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
