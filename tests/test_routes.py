"""Integration tests for API routes."""

import base64

import pytest

from config import CodecConfig, Config
from tid.identifier import Tid, derive, to_string
from tid.versions import VERSION_0, VERSION_1


def _auth_header(username="admin", password="admin123"):
    """Create basic auth header."""
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {credentials}"}


class TestHealthRoutes:
    """Tests for health endpoints."""

    async def test_health_endpoint(self, client):
        """GET /health returns health status."""
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert {c["name"] for c in data["checks"]} == {"event_loop", "clock", "codec"}

    async def test_heartbeat_endpoint(self, client):
        """GET /heartbeat returns clock and version info."""
        response = await client.get("/api/v1/heartbeat")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["default_version"] == VERSION_1
        assert data["versions"] == [0, 1, 2, 3, 4, 5]
        assert "timestamp" in data


class TestGenerateRoute:
    """Tests for POST /tids."""

    async def test_default_version(self, client):
        """Configured default version is used."""
        response = await client.post("/api/v1/tids")
        assert response.status_code == 200
        (item,) = response.json()["tids"]
        assert item["version"] == VERSION_1
        assert Tid.from_string(item["tid"]).value == int(item["int"])

    async def test_explicit_version_and_count(self, client):
        """Version and count are honoured."""
        response = await client.post("/api/v1/tids", params={"version": 0, "count": 5})
        items = response.json()["tids"]
        assert len(items) == 5
        assert {item["version"] for item in items} == {VERSION_0}
        assert len({item["tid"] for item in items}) == 5

    async def test_unknown_version(self, client):
        """Undefined version codes are a 400."""
        response = await client.post("/api/v1/tids", params={"version": 7})
        assert response.status_code == 400
        assert "error_id" in response.json()["detail"]

    async def test_count_limit(self, client):
        """Batches are capped."""
        response = await client.post("/api/v1/tids", params={"count": 101})
        assert response.status_code == 422


class TestInspectRoutes:
    """Tests for GET /tids/{text} and /tids/int/{value}."""

    async def test_inspect_string(self, client):
        """A valid string decodes to its fields."""
        tid = Tid.generate(VERSION_1)
        response = await client.get(f"/api/v1/tids/{tid}")
        assert response.status_code == 200
        data = response.json()
        assert data["int"] == str(tid.value)
        assert data["earliest_time"] == tid.earliest_time
        assert data["latest_time"] == tid.latest_time

    async def test_inspect_compact_uppercase(self, client):
        """Compact and uppercase forms are accepted."""
        tid = Tid.generate()
        response = await client.get(f"/api/v1/tids/{tid.compact_string().upper()}")
        assert response.json()["tid"] == str(tid)

    @pytest.mark.parametrize("text", ["f", "zzzzzzzzzzzzzz", "ab$c"])
    async def test_inspect_invalid_string(self, client, text):
        """Invalid strings are a 400."""
        response = await client.get(f"/api/v1/tids/{text}")
        assert response.status_code == 400

    async def test_inspect_int(self, client):
        """A valid integer decodes to its fields."""
        tid = Tid.generate()
        response = await client.get(f"/api/v1/tids/int/{tid.value}")
        assert response.status_code == 200
        assert response.json()["tid"] == str(tid)

    @pytest.mark.parametrize("value", [-1, 15])
    async def test_inspect_invalid_int(self, client, value):
        """Negative and undefined-version integers are a 400."""
        response = await client.get(f"/api/v1/tids/int/{value}")
        assert response.status_code == 400

    async def test_known_vector_is_not_a_tid(self, client):
        """28740015009630 formats fine but carries undefined version 14."""
        response = await client.get(f"/api/v1/tids/{to_string(28740015009630)}")
        assert response.status_code == 400


class TestDeriveRoute:
    """Tests for POST /tids/derive."""

    async def test_plain(self, client):
        """Unkeyed derivation needs no auth and is deterministic."""
        response = await client.post("/api/v1/tids/derive", json={"seed": "page:42"})
        assert response.status_code == 200
        assert response.json()["tid"] == str(derive("page:42"))

    async def test_keyed_requires_auth(self, client):
        """Keyed derivation without credentials is a 401."""
        response = await client.post("/api/v1/tids/derive", json={"seed": "page:42", "keyed": True})
        assert response.status_code == 401

    async def test_keyed_wrong_password(self, client):
        """Wrong credentials are a 401."""
        response = await client.post("/api/v1/tids/derive", json={"seed": "page:42", "keyed": True},
                                     headers=_auth_header(password="nope"))
        assert response.status_code == 401

    async def test_keyed(self, client):
        """Keyed derivation uses the configured secret."""
        response = await client.post("/api/v1/tids/derive", json={"seed": "page:42", "keyed": True},
                                     headers=_auth_header())
        assert response.status_code == 200
        assert response.json()["tid"] == str(derive("page:42", "s3cret"))

    @pytest.mark.parametrize("config", [Config(codec=CodecConfig(secret=""))])
    async def test_keyed_without_secret(self, config, client):
        """Keyed derivation with no secret configured is a 503."""
        response = await client.post("/api/v1/tids/derive", json={"seed": "x", "keyed": True},
                                     headers=_auth_header())
        assert response.status_code == 503
