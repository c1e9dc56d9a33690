"""Zone tree fetching, flattening and zone selection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from radarfeed.contracts.zone import ALL_ZONES, STRUCTURAL_KEYS, ZoneNode
from radarfeed.errors import DecodeError
from radarfeed.services.feed_client import FeedClient

logger = logging.getLogger(__name__)

PATH_ZONES = "/js/zones.js.php"

# Upstream data is untrusted; real trees are three or four levels deep.
MAX_ZONE_DEPTH = 32


def _coord(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _children(raw: dict[str, Any], url: str, depth: int) -> list[ZoneNode]:
    if depth > MAX_ZONE_DEPTH:
        raise DecodeError(f"Zone tree deeper than {MAX_ZONE_DEPTH} levels", url)

    nodes = []
    for name, value in raw.items():
        if name in STRUCTURAL_KEYS:
            continue
        if not isinstance(value, dict):
            logger.debug("Skipping non-object zone entry %r", name)
            continue
        # PHP encodes an empty subzone map as [].
        sub = value.get("subzones")
        nodes.append(
            ZoneNode(
                name=name,
                tl_x=_coord(value.get("tl_x")),
                tl_y=_coord(value.get("tl_y")),
                br_x=_coord(value.get("br_x")),
                br_y=_coord(value.get("br_y")),
                subzones=_children(sub, url, depth + 1) if isinstance(sub, dict) else [],
            )
        )
    return nodes


def parse_zone_tree(payload: Any, url: str = PATH_ZONES) -> ZoneNode:
    """Parse the raw zones payload into an unnamed root node.

    The top-level ``version`` key is discarded.
    """
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a zone object, got {type(payload).__name__}", url)
    raw = {k: v for k, v in payload.items() if k != "version"}
    return ZoneNode(subzones=_children(raw, url, 1))


def flatten_zone_names(root: ZoneNode) -> list[str]:
    """Pre-order list of every zone name below *root* (parent first)."""
    names: list[str] = []
    stack = list(reversed(root.subzones))
    while stack:
        node = stack.pop()
        names.append(node.name)
        stack.extend(reversed(node.subzones))
    return names


class ZoneIndex:
    """Cached zone tree, its flattened name list and the selected zone.

    Selecting an unknown zone does not raise: the selection is cleared and
    callers check ``selected()``.
    """

    def __init__(self, client: FeedClient):
        self._client = client
        self._tree: ZoneNode | None = None
        self._names: list[str] | None = None
        self._selected: str | None = None
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._client.settings.base_url + PATH_ZONES

    async def fetch(self, force_refresh: bool = False) -> ZoneNode:
        async with self._lock:
            return await self._fetch_locked(force_refresh)

    async def _fetch_locked(self, force_refresh: bool) -> ZoneNode:
        if self._tree is not None and self._tree.subzones and not force_refresh:
            return self._tree

        url = self.url
        tree = parse_zone_tree(await self._client.fetch_json(url), url)
        names = flatten_zone_names(tree)
        self._tree, self._names = tree, names
        logger.info("Fetched zone tree: %d zones", len(names))
        return tree

    async def names(self, force_refresh: bool = False) -> list[str]:
        async with self._lock:
            if self._names is None or not self._names or force_refresh:
                await self._fetch_locked(force_refresh=True)
            return list(self._names or [])

    def selected(self) -> str | None:
        return self._selected

    async def select(self, name: str) -> str | None:
        """Select *name* (case-insensitive); unknown names clear the selection."""
        wanted = name.strip().lower()
        if wanted == ALL_ZONES:
            self._selected = ALL_ZONES
            return self._selected

        matches = [z for z in await self.names() if z.lower() == wanted]
        self._selected = matches[0] if matches else None
        if self._selected is None:
            logger.warning("Zone %r not found, selection cleared", name)
        else:
            logger.info("Selected zone %s", self._selected)
        return self._selected
