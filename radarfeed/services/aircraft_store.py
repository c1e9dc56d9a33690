"""Aircraft position feed: fetch, decode, cache, detail enrichment."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Iterable

from pydantic import ValidationError

from radarfeed.contracts.aircraft import (
    RESERVED_KEYS,
    AircraftRecord,
    AircraftSnapshot,
)
from radarfeed.contracts.zone import ALL_ZONES
from radarfeed.errors import ApiError, DecodeError, FlightNotFoundError
from radarfeed.services.feed_client import FeedClient

logger = logging.getLogger(__name__)

PATH_ZONE_AIRCRAFT = "/zones/fcgi/{zone}_all.json"
PATH_ALL_AIRCRAFT = "/zones/fcgi/full_all.json"
PATH_AIRCRAFT_DETAILS = "/_external/planedata_json.1.3.php?f={flight_id}"


def aircraft_url(host: str, zone: str) -> str:
    """Feed URL for *zone* on *host*; ``"all"`` maps to the global feed."""
    if zone == ALL_ZONES:
        return f"http://{host}{PATH_ALL_AIRCRAFT}"
    return f"http://{host}{PATH_ZONE_AIRCRAFT.format(zone=zone)}"


def details_url(host: str, flight_id: str) -> str:
    return f"http://{host}{PATH_AIRCRAFT_DETAILS.format(flight_id=flight_id)}"


def decode_aircraft(
    payload: Any,
    host: str,
    zone: str,
    url: str = "",
    strict: bool = False,
) -> AircraftSnapshot:
    """Decode a positional feed payload into an ``AircraftSnapshot``.

    Malformed records (wrong field count, not an array) are skipped with a
    warning, or raise ``DecodeError`` when *strict*.
    """
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected an object of aircraft, got {type(payload).__name__}",
            url, host=host, zone=zone,
        )

    records: dict[str, AircraftRecord] = {}
    skipped = 0
    for flight_id, values in payload.items():
        if flight_id in RESERVED_KEYS:
            continue
        try:
            if not isinstance(values, list):
                raise ValueError(f"expected an array, got {type(values).__name__}")
            records[flight_id] = AircraftRecord.from_positional(values)
        except ValueError as exc:
            if strict:
                raise DecodeError(
                    f"Malformed aircraft record {flight_id}: {exc}",
                    url, host=host, zone=zone,
                ) from exc
            logger.warning("Skipping aircraft %s: %s", flight_id, exc)
            skipped += 1

    full_count = payload.get("full_count")
    if skipped:
        logger.warning("Skipped %d malformed aircraft records for zone %s", skipped, zone)
    try:
        return AircraftSnapshot(
            host=host,
            zone=zone,
            records=records,
            version=payload.get("version"),
            full_count=full_count if isinstance(full_count, int) else None,
        )
    except ValidationError as exc:
        raise DecodeError(
            f"Invalid aircraft feed metadata: {exc.error_count()} errors",
            url, host=host, zone=zone,
        ) from exc


class AircraftStore:
    """Single cached aircraft snapshot plus a per-flight details cache.

    The snapshot is not keyed by zone: switching zones returns the cached
    snapshot until the next refresh overwrites it. Details survive a
    snapshot refresh and are only refetched per flight; a refresh drops
    details of flights that left the feed.
    """

    def __init__(self, client: FeedClient, strict: bool = False):
        self._client = client
        self._strict = strict
        self._snapshot: AircraftSnapshot | None = None
        self._details: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()
        self._detail_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def snapshot(self) -> AircraftSnapshot | None:
        return self._snapshot

    def _merged(self, flight_id: str, record: AircraftRecord) -> AircraftRecord:
        details = self._details.get(flight_id)
        return record.with_details(details) if details is not None else record

    def records(self) -> dict[str, AircraftRecord]:
        """Cached records with any fetched details merged in."""
        if self._snapshot is None:
            return {}
        return {fid: self._merged(fid, rec) for fid, rec in self._snapshot.records.items()}

    async def fetch(
        self, host: str, zone: str, force_refresh: bool = False
    ) -> dict[str, AircraftRecord]:
        async with self._lock:
            if self._snapshot is None or not self._snapshot.records or force_refresh:
                url = aircraft_url(host, zone)
                try:
                    payload = await self._client.fetch_json(url)
                except ApiError as exc:
                    exc.context.update(host=host, zone=zone)
                    logger.error("Failed to fetch aircraft for zone %s: %s", zone, exc)
                    raise
                self._snapshot = decode_aircraft(payload, host, zone, url, strict=self._strict)
                self._prune_details(self._snapshot.records.keys())
                logger.info(
                    "Fetched %d aircraft for zone %s from %s",
                    len(self._snapshot.records), zone, host,
                )
        return self.records()

    async def details_for(
        self, flight_id: str, host: str, force_refresh: bool = False
    ) -> AircraftRecord:
        """Fetch (or reuse) details for one flight, merged into its record."""
        if self._snapshot is None or flight_id not in self._snapshot.records:
            raise FlightNotFoundError(flight_id)

        async with self._detail_locks[flight_id]:
            if flight_id not in self._details or force_refresh:
                url = details_url(host, flight_id)
                try:
                    payload = await self._client.fetch_json(url)
                except ApiError as exc:
                    exc.context.update(host=host, flight_id=flight_id)
                    raise
                if not isinstance(payload, dict):
                    raise DecodeError(
                        f"Expected a details object, got {type(payload).__name__}",
                        url, host=host, flight_id=flight_id,
                    )
                if self._snapshot is not None and flight_id in self._snapshot.records:
                    self._details = {**self._details, flight_id: payload}
                logger.debug("Fetched details for flight %s", flight_id)

        # The snapshot may have been refreshed while we waited.
        record = self._snapshot.records.get(flight_id) if self._snapshot else None
        if record is None:
            raise FlightNotFoundError(flight_id)
        return self._merged(flight_id, record)

    def _prune_details(self, live: Iterable[str]) -> None:
        """Forget details and idle locks of flights no longer in the feed."""
        live = set(live)
        self._details = {fid: d for fid, d in self._details.items() if fid in live}
        stale = [fid for fid, lock in self._detail_locks.items() if fid not in live and not lock.locked()]
        for fid in stale:
            del self._detail_locks[fid]

    def invalidate_details(self, flight_id: str) -> None:
        self._details = {fid: d for fid, d in self._details.items() if fid != flight_id}
