"""Tests for zone tree parsing, flattening and selection."""

from __future__ import annotations

import pytest

from radarfeed.contracts.zone import STRUCTURAL_KEYS, ZoneNode
from radarfeed.errors import DecodeError, TransportError
from radarfeed.services.zone_index import (
    MAX_ZONE_DEPTH,
    ZoneIndex,
    flatten_zone_names,
    parse_zone_tree,
)
from tests.fake_feed import BASE_URL, SAMPLE_ZONES

ZONES_URL = f"{BASE_URL}/js/zones.js.php"


def _count_nodes(raw: dict) -> int:
    count = 0
    for key, value in raw.items():
        if key in STRUCTURAL_KEYS or not isinstance(value, dict):
            continue
        count += 1
        if isinstance(value.get("subzones"), dict):
            count += _count_nodes(value["subzones"])
    return count


class TestParseZoneTree:
    def test_root_is_unnamed(self):
        root = parse_zone_tree(SAMPLE_ZONES)
        assert root.is_root
        assert [z.name for z in root.subzones] == ["europe", "northamerica"]

    def test_bounding_box_kept(self):
        europe = parse_zone_tree(SAMPLE_ZONES).subzones[0]
        assert europe.tl_y == 72.57
        assert europe.br_x == 53.05

    def test_version_discarded(self):
        names = flatten_zone_names(parse_zone_tree(SAMPLE_ZONES))
        assert "version" not in names

    def test_empty_subzones_list(self):
        root = parse_zone_tree({"egll": {"tl_x": 1, "subzones": []}})
        assert root.subzones[0].subzones == []

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            parse_zone_tree(["europe"])

    def test_depth_limit(self):
        raw: dict = {}
        node = raw
        for level in range(MAX_ZONE_DEPTH + 2):
            child: dict = {}
            node[f"z{level}"] = {"subzones": child}
            node = child
        with pytest.raises(DecodeError, match="deeper than"):
            parse_zone_tree(raw)


class TestFlattenZoneNames:
    def test_pre_order_parent_before_children(self):
        names = flatten_zone_names(parse_zone_tree(SAMPLE_ZONES))
        assert names == ["europe", "poland", "uk", "london", "egll", "northamerica", "na_n"]

    def test_length_matches_node_count(self):
        names = flatten_zone_names(parse_zone_tree(SAMPLE_ZONES))
        assert len(names) == _count_nodes(SAMPLE_ZONES)
        assert not STRUCTURAL_KEYS & set(names)

    def test_empty_root(self):
        assert flatten_zone_names(ZoneNode()) == []


class TestZoneIndex:
    async def test_names_cached_with_tree(self, feed, feed_client):
        index = ZoneIndex(feed_client)
        await index.fetch()
        await index.names()
        await index.names()
        assert feed.count(ZONES_URL) == 1

    async def test_refresh_refetches(self, feed, feed_client):
        index = ZoneIndex(feed_client)
        await index.names()
        feed.routes[ZONES_URL] = {"asia": {"tl_x": 1}, "version": 5}
        assert await index.names(force_refresh=True) == ["asia"]
        assert (await index.fetch()).subzones[0].name == "asia"

    async def test_failed_refresh_keeps_cache(self, feed, feed_client):
        index = ZoneIndex(feed_client)
        before = await index.names()
        del feed.routes[ZONES_URL]
        with pytest.raises(TransportError):
            await index.fetch(force_refresh=True)
        assert await index.names() == before

    async def test_select_case_insensitive_and_idempotent(self, feed_client):
        index = ZoneIndex(feed_client)
        upper = await index.select("EGLL")
        lower = await index.select("egll")
        again = await index.select("egll")
        assert upper == lower == again == "egll"
        assert index.selected() == "egll"

    async def test_unknown_zone_clears_selection(self, feed_client):
        index = ZoneIndex(feed_client)
        await index.select("europe")
        assert await index.select("atlantis") is None
        assert index.selected() is None

    async def test_all_is_reserved(self, feed, feed_client):
        index = ZoneIndex(feed_client)
        assert await index.select("ALL") == "all"
        assert feed.count(ZONES_URL) == 0
