"""Tests for host and zone API endpoints."""

from __future__ import annotations


class TestHostsAPI:
    async def test_list(self, client):
        resp = await client.get("/api/hosts")
        assert resp.status_code == 200
        data = resp.json()
        assert data["hosts"] == ["lb1.feed.test", "lb2.feed.test", "lb3.feed.test"]
        assert data["selected"] is None

    async def test_select_by_index(self, client):
        resp = await client.put("/api/hosts/selection", json={"selector": 1})
        assert resp.status_code == 200
        assert resp.json()["hostname"] == "lb2.feed.test"
        assert resp.json()["mode"] == "index"

    async def test_select_latency(self, client):
        resp = await client.put("/api/hosts/selection", json={"selector": "latency"})
        assert resp.status_code == 200
        assert resp.json()["hostname"] == "lb2.feed.test"

    async def test_invalid_selector(self, client):
        resp = await client.put("/api/hosts/selection", json={"selector": "fastest"})
        assert resp.status_code == 400

    async def test_non_ascii_digit_selector(self, client):
        resp = await client.put("/api/hosts/selection", json={"selector": "²"})
        assert resp.status_code == 400


class TestZonesAPI:
    async def test_list(self, client):
        resp = await client.get("/api/zones")
        assert resp.status_code == 200
        assert resp.json()["zones"][:2] == ["europe", "poland"]

    async def test_select(self, client):
        resp = await client.put("/api/zones/selection", json={"name": "UK"})
        assert resp.status_code == 200
        assert resp.json() == {"zone": "uk"}

    async def test_unknown_zone_clears(self, client):
        await client.put("/api/zones/selection", json={"name": "uk"})
        resp = await client.put("/api/zones/selection", json={"name": "atlantis"})
        assert resp.status_code == 200
        assert resp.json() == {"zone": None}


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["aircraft_cached"] == 0


def test_no_cors_middleware():
    from starlette.middleware.cors import CORSMiddleware

    from radarfeed.api.app import app

    assert all(m.cls is not CORSMiddleware for m in app.user_middleware)
