"""
Cached read model of articles and subscribers.

Every mutation opens its own session, runs the gateway call in that session's
transaction and then re-reads both collections. A failing call leaves the
cache as it was and re-raises StoreOperationError. A committed write is
reported as done even when the re-read fails; the cache then stays stale
until the next successful refresh.

Usage::

    from services.content_library import content_library

    await content_library.refresh()
    article = content_library.get_article("grind-article-1")
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.content import Article
from core.domain.subscriber import Subscriber
from core.interfaces.repositories import StoreOperationError
from infrastructure.database.connection import async_session_maker
from services.content_gateway import ArticleGateway, SubscriberGateway

logger = logging.getLogger(__name__)


class ContentLibrary:
    """Articles and subscribers as last read from the store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.articles: list[Article] = []
        self.subscribers: list[Subscriber] = []
        self.loading: bool = False

    def get_article(self, article_id: str) -> Optional[Article]:
        for article in self.articles:
            if article.id == article_id:
                return article
        return None

    async def refresh(self) -> None:
        """Re-read both collections; the cache is replaced only if both reads succeed."""
        self.loading = True
        try:
            async with self._session_factory() as session:
                articles = await ArticleGateway(session).list()
                subscribers = await SubscriberGateway(session).list()
        except StoreOperationError as e:
            logger.error("Failed to refresh content library: %s", e)
            raise
        finally:
            self.loading = False

        self.articles = articles
        self.subscribers = subscribers
        logger.debug(
            "Content library refreshed: %d articles, %d subscribers",
            len(articles),
            len(subscribers),
        )

    async def _refresh_after_commit(self) -> bool:
        """Re-read after a committed write. Returns False when the cache is left stale."""
        try:
            await self.refresh()
        except StoreOperationError:
            logger.warning("Write committed but the content library could not be refreshed")
            return False
        return True

    # ── Article mutations ────────────────────────────────────────────────────

    async def update_article(self, article: Article) -> Article:
        async with self._session_factory() as session:
            try:
                saved = await ArticleGateway(session).save(article)
            except StoreOperationError as e:
                logger.error("Failed to save article %s: %s", article.id, e)
                raise
        if not await self._refresh_after_commit():
            return saved
        return self.get_article(saved.id) or saved

    async def add_article(self, article: Article) -> Article:
        async with self._session_factory() as session:
            try:
                added = await ArticleGateway(session).insert(article)
            except StoreOperationError as e:
                logger.error("Failed to add article %s: %s", article.id, e)
                raise
        if not await self._refresh_after_commit():
            return added
        return self.get_article(added.id) or added

    async def delete_article(self, article_id: str) -> bool:
        async with self._session_factory() as session:
            try:
                deleted = await ArticleGateway(session).delete(article_id)
            except StoreOperationError as e:
                logger.error("Failed to delete article %s: %s", article_id, e)
                raise
        await self._refresh_after_commit()
        return deleted

    # ── Subscriber mutations ─────────────────────────────────────────────────

    async def add_subscriber(self, email: str, name: Optional[str] = None) -> Subscriber:
        async with self._session_factory() as session:
            try:
                subscriber = await SubscriberGateway(session).upsert(email, name)
            except StoreOperationError as e:
                logger.error("Failed to add subscriber: %s", e)
                raise
        await self._refresh_after_commit()
        return subscriber

    async def delete_subscriber(self, subscriber_id: str) -> bool:
        async with self._session_factory() as session:
            try:
                deleted = await SubscriberGateway(session).delete(subscriber_id)
            except StoreOperationError as e:
                logger.error("Failed to delete subscriber %s: %s", subscriber_id, e)
                raise
        await self._refresh_after_commit()
        return deleted


# Singleton instance
content_library = ContentLibrary(async_session_maker)


def get_content_library() -> ContentLibrary:
    """FastAPI dependency returning the process-wide library."""
    return content_library
