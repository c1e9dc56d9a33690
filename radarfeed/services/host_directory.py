"""Load balancer directory and host selection.

Selectors resolve in this order:

1. exact hostname (wins over a numeric reading of the same value)
2. numeric index into the current host list
3. ``"latency"``: fastest TCP connect to port 80
4. ``"random"``: uniformly random host
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Awaitable, Callable

from radarfeed.contracts.enums import SelectorMode
from radarfeed.contracts.host import SelectedHost
from radarfeed.errors import ApiError, DecodeError, InvalidSelectorError
from radarfeed.services.feed_client import FeedClient

logger = logging.getLogger(__name__)

PATH_LOAD_BALANCER = "/balance.json"
PROBE_PORT = 80

LATENCY = "latency"
RANDOM = "random"

Selector = str | int
Prober = Callable[[str, float], Awaitable[float | None]]


async def tcp_probe(host: str, timeout: float, port: int = PROBE_PORT) -> float | None:
    """Time a TCP connect to *host*; ``None`` if it fails or times out."""
    start = time.perf_counter()
    try:
        _reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout
        )
    except (OSError, asyncio.TimeoutError) as exc:
        logger.debug("Probe of %s:%d failed: %s", host, port, exc)
        return None
    elapsed = time.perf_counter() - start
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return elapsed


def _as_index(selector: Selector) -> int | None:
    if isinstance(selector, bool):
        return None
    if isinstance(selector, int):
        return selector
    text = selector.strip()
    return int(text) if text.isascii() and text.isdigit() else None


class HostDirectory:
    """Cached list of candidate edge hosts and the current selection."""

    def __init__(
        self,
        client: FeedClient,
        prober: Prober | None = None,
        rng: random.Random | None = None,
    ):
        self._client = client
        self._prober = prober or tcp_probe
        self._rng = rng or random.Random()
        self._hosts: list[str] = []
        self._selected: SelectedHost | None = None
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._client.settings.base_url + PATH_LOAD_BALANCER

    async def list(self, force_refresh: bool = False) -> list[str]:
        """Return the host list, fetching it when empty or on refresh."""
        async with self._lock:
            if self._hosts and not force_refresh:
                return list(self._hosts)

            url = self.url
            try:
                payload = await self._client.fetch_json(url)
            except ApiError as exc:
                logger.error("Failed to fetch load balancers: %s", exc)
                raise
            if not isinstance(payload, dict):
                raise DecodeError(
                    f"Expected an object of load balancers, got {type(payload).__name__}",
                    url,
                )
            self._hosts = [str(host) for host in payload]
            logger.info("Fetched %d load balancers", len(self._hosts))
            return list(self._hosts)

    def selected(self) -> SelectedHost | None:
        return self._selected

    async def select(self, selector: Selector) -> SelectedHost:
        """Resolve *selector* to one host and remember it.

        The previous selection is cleared first, so a failed attempt leaves
        no host selected.
        """
        self._selected = None
        hosts = await self.list()

        choice = await self._resolve(selector, hosts)
        if choice is None:
            raise InvalidSelectorError(selector)

        self._selected = choice
        logger.info(
            "Selected load balancer %s (index %d, %s mode)",
            choice.hostname, choice.index, choice.mode,
        )
        return choice

    async def _resolve(self, selector: Selector, hosts: list[str]) -> SelectedHost | None:
        if str(selector) in hosts:
            index = hosts.index(str(selector))
            return SelectedHost(index=index, hostname=hosts[index], mode=SelectorMode.HOSTNAME)

        index = _as_index(selector)
        if index is not None:
            if 0 <= index < len(hosts):
                return SelectedHost(index=index, hostname=hosts[index], mode=SelectorMode.INDEX)
            return None

        if selector == LATENCY:
            latencies = await self.probe_latencies(hosts)
            if not latencies:
                raise InvalidSelectorError(selector, "no load balancer reachable")
            index = min(latencies, key=lambda i: (latencies[i], i))
            return SelectedHost(
                index=index,
                hostname=hosts[index],
                mode=SelectorMode.LATENCY,
                latency_s=latencies[index],
            )

        if selector == RANDOM and hosts:
            index = self._rng.randrange(len(hosts))
            return SelectedHost(index=index, hostname=hosts[index], mode=SelectorMode.RANDOM)

        return None

    async def probe_latencies(self, hosts: list[str] | None = None) -> dict[int, float]:
        """Probe every host concurrently; map index to connect latency.

        Unreachable hosts are absent from the result.
        """
        if hosts is None:
            hosts = await self.list()
        settings = self._client.settings
        semaphore = asyncio.Semaphore(max(1, settings.probe_concurrency))

        async def _probe(host: str) -> float | None:
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self._prober(host, settings.probe_timeout),
                        timeout=settings.probe_timeout,
                    )
                except (OSError, asyncio.TimeoutError):
                    return None

        results = await asyncio.gather(*(_probe(h) for h in hosts))
        latencies = {i: r for i, r in enumerate(results) if r is not None}
        logger.info("Probed %d load balancers, %d reachable", len(hosts), len(latencies))
        return latencies
