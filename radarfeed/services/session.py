"""Feed session: host and zone selection, aircraft queries and search.

Usage:
    async with await Session.open(host="latency", zone="europe") as session:
        ids = await session.find_by_attribute("callsign", r"^BAW")
        result = await session.details_by_attribute("callsign", r"^BAW")
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import httpx

from radarfeed.config import Settings
from radarfeed.contracts.aircraft import AIRCRAFT_FIELDS, AircraftRecord, AircraftSnapshot
from radarfeed.contracts.host import SelectedHost
from radarfeed.contracts.result import FanOutResult, FlightError
from radarfeed.contracts.zone import ZoneNode
from radarfeed.errors import ApiError, NotFoundError, PreconditionError
from radarfeed.services.aircraft_store import AircraftStore
from radarfeed.services.feed_client import FeedClient
from radarfeed.services.host_directory import HostDirectory, Prober, Selector
from radarfeed.services.reference_data import ReferenceData
from radarfeed.services.zone_index import ZoneIndex

logger = logging.getLogger(__name__)


class Session:
    """One client session against the feed.

    Owns every cache. Host and zone selections can change between calls,
    so preconditions are checked on each aircraft query.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        prober: Prober | None = None,
    ):
        self.settings = settings or Settings()
        self._client = FeedClient(self.settings, http_client=http_client)
        self.hosts = HostDirectory(self._client, prober=prober)
        self.zones = ZoneIndex(self._client)
        self.aircraft_store = AircraftStore(self._client)
        self.reference = ReferenceData(self._client)

    @classmethod
    async def open(
        cls,
        host: Selector | None = None,
        zone: str | None = None,
        **kwargs: Any,
    ) -> "Session":
        """Create a session and apply optional host and zone selections."""
        session = cls(**kwargs)
        if host is not None:
            await session.select_host(host)
        if zone:
            await session.select_zone(zone)
        return session

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Hosts and zones
    # ------------------------------------------------------------------

    async def load_balancers(self, force_refresh: bool = False) -> list[str]:
        return await self.hosts.list(force_refresh)

    async def select_host(self, selector: Selector) -> SelectedHost:
        return await self.hosts.select(selector)

    def selected_host(self) -> SelectedHost | None:
        return self.hosts.selected()

    async def zone_tree(self, force_refresh: bool = False) -> ZoneNode:
        return await self.zones.fetch(force_refresh)

    async def zone_names(self, force_refresh: bool = False) -> list[str]:
        return await self.zones.names(force_refresh)

    async def select_zone(self, name: str) -> str | None:
        return await self.zones.select(name)

    def selected_zone(self) -> str | None:
        return self.zones.selected()

    async def airports(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return await self.reference.airports(force_refresh)

    async def airlines(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return await self.reference.airlines(force_refresh)

    # ------------------------------------------------------------------
    # Aircraft
    # ------------------------------------------------------------------

    def _require_selection(self) -> tuple[str, str]:
        host = self.hosts.selected()
        if host is None:
            raise PreconditionError("no host: select a load balancer first")
        zone = self.zones.selected()
        if zone is None:
            raise PreconditionError("no zone: select a zone first")
        return host.hostname, zone

    async def aircraft(self, force_refresh: bool = False) -> dict[str, AircraftRecord]:
        """Aircraft in the selected zone, keyed by flight id."""
        host, zone = self._require_selection()
        return await self.aircraft_store.fetch(host, zone, force_refresh)

    def snapshot(self) -> AircraftSnapshot | None:
        return self.aircraft_store.snapshot()

    async def aircraft_details(
        self, flight_id: str, force_refresh: bool = False
    ) -> AircraftRecord:
        """One flight's record with its details merged in.

        *force_refresh* refetches that flight's details only.
        """
        host, _zone = self._require_selection()
        await self.aircraft()
        return await self.aircraft_store.details_for(flight_id, host, force_refresh)

    async def find_by_attribute(
        self,
        field: str,
        pattern: str | re.Pattern[str],
        force_refresh: bool = False,
    ) -> list[str]:
        """Flight ids whose *field* matches *pattern* (``re.search``)."""
        if field not in AIRCRAFT_FIELDS:
            raise ValueError(f"Unknown aircraft field {field!r}")
        try:
            regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as exc:
            raise ValueError(f"Invalid pattern {pattern!r}: {exc}") from exc

        records = await self.aircraft(force_refresh)
        return [fid for fid, rec in records.items() if regex.search(rec.field_text(field))]

    async def records_by_attribute(
        self,
        field: str,
        pattern: str | re.Pattern[str],
        force_refresh: bool = False,
    ) -> list[AircraftRecord]:
        flight_ids = await self.find_by_attribute(field, pattern, force_refresh)
        records = self.aircraft_store.records()
        return [records[fid] for fid in flight_ids if fid in records]

    async def details_by_attribute(
        self,
        field: str,
        pattern: str | re.Pattern[str],
        force_refresh: bool = False,
    ) -> FanOutResult:
        """Fetch details for every match, a bounded number at a time.

        A failing flight is recorded in ``errors`` and does not abort the
        others.
        """
        flight_ids = await self.find_by_attribute(field, pattern, force_refresh)
        host, _zone = self._require_selection()
        semaphore = asyncio.Semaphore(max(1, self.settings.detail_concurrency))

        async def _one(flight_id: str) -> AircraftRecord:
            async with semaphore:
                return await self.aircraft_store.details_for(flight_id, host, force_refresh)

        outcomes = await asyncio.gather(
            *(_one(fid) for fid in flight_ids), return_exceptions=True
        )

        result = FanOutResult()
        for flight_id, outcome in zip(flight_ids, outcomes):
            if isinstance(outcome, (ApiError, NotFoundError)):
                logger.warning("Details for flight %s failed: %s", flight_id, outcome)
                result.errors.append(
                    FlightError(
                        flight_id=flight_id,
                        message=str(outcome),
                        url=getattr(outcome, "url", None),
                    )
                )
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.records.append(outcome)
        logger.info(
            "Fetched details for %d/%d flights", len(result.records), len(flight_ids)
        )
        return result
