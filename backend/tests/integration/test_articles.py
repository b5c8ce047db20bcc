"""Integration tests for the article endpoints."""

import pytest
from httpx import AsyncClient

from core.domain.content import Article

pytestmark = pytest.mark.asyncio


class TestPublicReads:
    """Public reader endpoints."""

    async def test_list_empty(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/articles")
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    async def test_list_and_get(self, async_client: AsyncClient, stored_article: Article):
        listing = await async_client.get("/api/v1/articles")
        assert listing.json()["total"] == 1

        response = await async_client.get(f"/api/v1/articles/{stored_article.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == stored_article.title
        assert [(b["type"], b["id"]) for b in data["content"]] == [
            ("text", "b1"),
            ("image", "b2"),
            ("sponsorship", "b3"),
        ]
        assert data["content"][1]["caption"] == "A guilloché dial"

    async def test_get_missing(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/articles/nope")
        assert response.status_code == 404


class TestAdminWrites:
    """Admin-only create, replace and delete."""

    async def test_writes_require_token(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/articles", json={"title": "x"})
        assert response.status_code == 401

    async def test_create_with_defaults(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/v1/articles",
            json={
                "title": "On Tailoring",
                "content": [
                    {"type": "text", "id": "t1", "content": "<p>Cloth first.</p>"},
                    {"type": "audio", "id": "a1", "src": "data:audio/webm;base64,AAAA"},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("grind-article-")
        assert data["author"] == "A. Vanderbilt"
        assert data["publish_date"]
        assert data["content"][1] == {
            "type": "audio",
            "id": "a1",
            "src": "data:audio/webm;base64,AAAA",
            "title": "",
        }

        listing = await async_client.get("/api/v1/articles")
        assert listing.json()["items"][0]["id"] == data["id"]

    async def test_create_duplicate_id_conflicts(
        self, async_client: AsyncClient, auth_headers: dict, stored_article: Article
    ):
        response = await async_client.post(
            "/api/v1/articles", json={"id": stored_article.id}, headers=auth_headers
        )
        assert response.status_code == 409

    async def test_create_rejects_unknown_block_type(
        self, async_client: AsyncClient, auth_headers: dict
    ):
        response = await async_client.post(
            "/api/v1/articles",
            json={"content": [{"type": "video", "id": "v1"}]},
            headers=auth_headers,
        )
        assert response.status_code == 422

    async def test_create_rejects_duplicate_block_ids(
        self, async_client: AsyncClient, auth_headers: dict
    ):
        response = await async_client.post(
            "/api/v1/articles",
            json={"content": [{"type": "text", "id": "x"}, {"type": "image", "id": "x"}]},
            headers=auth_headers,
        )
        assert response.status_code == 422

    async def test_replace_article(
        self, async_client: AsyncClient, auth_headers: dict, stored_article: Article
    ):
        response = await async_client.put(
            f"/api/v1/articles/{stored_article.id}",
            json={
                "title": "Retitled",
                "author": stored_article.author,
                "publish_date": stored_article.publish_date,
                "content": [{"type": "text", "id": "only", "content": "<p>Only block.</p>"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        fetched = await async_client.get(f"/api/v1/articles/{stored_article.id}")
        data = fetched.json()
        assert data["title"] == "Retitled"
        assert [b["id"] for b in data["content"]] == ["only"]

    async def test_delete_article(
        self, async_client: AsyncClient, auth_headers: dict, stored_article: Article
    ):
        response = await async_client.delete(
            f"/api/v1/articles/{stored_article.id}", headers=auth_headers
        )
        assert response.status_code == 204

        assert (await async_client.get(f"/api/v1/articles/{stored_article.id}")).status_code == 404
        again = await async_client.delete(
            f"/api/v1/articles/{stored_article.id}", headers=auth_headers
        )
        assert again.status_code == 404
