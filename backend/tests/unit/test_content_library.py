"""
Unit tests for the content library cache.
"""

import dataclasses
from unittest.mock import patch

import pytest

from core.domain.content import Article, TextBlock
from core.interfaces.repositories import StoreOperationError
from services.content_library import ContentLibrary

pytestmark = pytest.mark.asyncio


async def test_refresh_loads_articles_and_subscribers(library: ContentLibrary, sample_article):
    await library.add_article(sample_article)
    await library.add_subscriber("reader@example.com", "Ada")

    assert [a.id for a in library.articles] == [sample_article.id]
    assert [s.email for s in library.subscribers] == ["reader@example.com"]
    assert library.loading is False


async def test_get_article(library: ContentLibrary, stored_article):
    assert library.get_article(stored_article.id) == stored_article
    assert library.get_article("missing") is None


async def test_update_article_refreshes_cache(library: ContentLibrary, stored_article):
    edited = dataclasses.replace(stored_article, content=(TextBlock(id="new", content="<p>n</p>"),))

    saved = await library.update_article(edited)

    assert saved == edited
    assert library.get_article(stored_article.id).content == edited.content


async def test_failed_save_leaves_cache_unchanged(library: ContentLibrary, stored_article):
    before = list(library.articles)
    broken = dataclasses.replace(
        stored_article,
        title="Broken",
        content=(TextBlock(id="dup"), TextBlock(id="dup")),
    )

    with pytest.raises(StoreOperationError):
        await library.update_article(broken)

    assert library.articles == before
    await library.refresh()
    assert library.get_article(stored_article.id).title == stored_article.title


async def test_failed_refresh_keeps_previous_collections(library: ContentLibrary, stored_article):
    before = list(library.articles)

    with patch(
        "services.content_library.ArticleGateway.list",
        side_effect=StoreOperationError("list_articles", "OperationalError"),
    ):
        with pytest.raises(StoreOperationError):
            await library.refresh()

    assert library.articles == before
    assert library.loading is False


async def test_delete_article(library: ContentLibrary, stored_article):
    assert await library.delete_article(stored_article.id) is True
    assert library.articles == []
    assert await library.delete_article(stored_article.id) is False


async def test_add_article_sets_created_at(library: ContentLibrary):
    added = await library.add_article(Article(id="fresh"))
    assert added.created_at is not None


async def test_delete_subscriber(library: ContentLibrary):
    subscriber = await library.add_subscriber("reader@example.com")
    assert await library.delete_subscriber(subscriber.id) is True
    assert library.subscribers == []


async def test_committed_save_survives_failed_refresh(library: ContentLibrary, stored_article):
    edited = dataclasses.replace(stored_article, title="Committed")

    with patch(
        "services.content_library.ArticleGateway.list",
        side_effect=StoreOperationError("list_articles", "OperationalError"),
    ):
        saved = await library.update_article(edited)

    assert saved.title == "Committed"
    # cache is stale until the next refresh
    assert library.get_article(stored_article.id).title == stored_article.title

    await library.refresh()
    assert library.get_article(stored_article.id).title == "Committed"


async def test_committed_delete_survives_failed_refresh(library: ContentLibrary, stored_article):
    with patch(
        "services.content_library.ArticleGateway.list",
        side_effect=StoreOperationError("list_articles", "OperationalError"),
    ):
        assert await library.delete_article(stored_article.id) is True

    await library.refresh()
    assert library.get_article(stored_article.id) is None
