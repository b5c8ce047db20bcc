"""Integration tests for the subscriber endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestSubscribe:
    """Public sign-up."""

    async def test_subscribe(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/subscribers", json={"email": "reader@example.com", "name": "Ada"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "reader@example.com"
        assert data["name"] == "Ada"

    async def test_subscribe_twice_updates(self, async_client: AsyncClient, auth_headers: dict):
        first = await async_client.post("/api/v1/subscribers", json={"email": "reader@example.com"})
        second = await async_client.post(
            "/api/v1/subscribers", json={"email": "Reader@Example.com", "name": "Ada"}
        )

        assert second.json()["id"] == first.json()["id"]
        listing = await async_client.get("/api/v1/subscribers", headers=auth_headers)
        assert listing.json()["total"] == 1
        assert listing.json()["items"][0]["name"] == "Ada"

    async def test_subscribe_invalid_email(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/subscribers", json={"email": "not-an-email"})
        assert response.status_code == 422


class TestAdminSubscribers:
    """Admin listing, deletion and export."""

    async def test_list_requires_token(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/subscribers")
        assert response.status_code == 401

    async def test_delete(self, async_client: AsyncClient, auth_headers: dict):
        created = await async_client.post("/api/v1/subscribers", json={"email": "reader@example.com"})
        subscriber_id = created.json()["id"]

        response = await async_client.delete(
            f"/api/v1/subscribers/{subscriber_id}", headers=auth_headers
        )
        assert response.status_code == 204

        missing = await async_client.delete(
            f"/api/v1/subscribers/{subscriber_id}", headers=auth_headers
        )
        assert missing.status_code == 404

    async def test_export_csv(self, async_client: AsyncClient, auth_headers: dict):
        await async_client.post(
            "/api/v1/subscribers", json={"email": "ada@example.com", "name": 'Ada "Countess"'}
        )

        response = await async_client.get("/api/v1/subscribers/export", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "grind-stories-subscribers.csv" in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert lines[0] == "name,email,subscribedAt"
        assert lines[1].startswith('"Ada ""Countess""","ada@example.com",')
