"""
Persistence gateways for articles and subscribers.

Each mutating call runs as one transaction on the session it was given:
either every statement commits, or the session is rolled back and a
StoreOperationError is raised.
"""

import logging
from collections import defaultdict
from uuid import uuid4

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.content import Article
from core.domain.subscriber import Subscriber
from core.interfaces.repositories import (
    ArticleRepository,
    StoreOperationError,
    SubscriberRepository,
)
from core.serialization import article_from_row, article_to_row, serialize_blocks
from infrastructure.database.models import (
    Article as ArticleRecord,
    ContentBlock as ContentBlockRecord,
    Subscriber as SubscriberRecord,
)

logger = logging.getLogger(__name__)


class _Gateway:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def _fail(self, operation: str, exc: Exception) -> StoreOperationError:
        await self._session.rollback()
        logger.error("Store operation %s failed: %s", operation, exc)
        return StoreOperationError(operation, type(exc).__name__)


class ArticleGateway(_Gateway, ArticleRepository):
    """Reads and writes Article aggregates."""

    async def save(self, article: Article) -> Article:
        """
        Persist a finalized article.

        Existing article: update scalar columns, delete every block row, then
        insert the current blocks. New article: insert the row, then blocks.
        """
        try:
            exists = await self._session.scalar(
                select(ArticleRecord.id).where(ArticleRecord.id == article.id)
            )
            if exists is None:
                await self._insert_rows(article)
            else:
                scalars = article_to_row(article)
                scalars.pop("id")
                await self._session.execute(
                    update(ArticleRecord).where(ArticleRecord.id == article.id).values(**scalars)
                )
                await self._session.execute(
                    delete(ContentBlockRecord).where(ContentBlockRecord.article_id == article.id)
                )
                await self._insert_blocks(article)
            await self._session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("save", e) from e

        logger.info(
            "Saved article %s with %d blocks (existing=%s)",
            article.id,
            len(article.content),
            exists is not None,
            extra={"article_id": article.id},
        )
        return article

    async def insert(self, article: Article) -> Article:
        try:
            await self._insert_rows(article)
            await self._session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("insert", e) from e

        logger.info(
            "Inserted article %s with %d blocks",
            article.id,
            len(article.content),
            extra={"article_id": article.id},
        )
        return article

    async def _insert_rows(self, article: Article) -> None:
        await self._session.execute(insert(ArticleRecord).values(**article_to_row(article)))
        await self._insert_blocks(article)

    async def _insert_blocks(self, article: Article) -> None:
        rows = serialize_blocks(article.id, article.content)
        if rows:
            await self._session.execute(insert(ContentBlockRecord), rows)

    async def delete(self, article_id: str) -> bool:
        # Explicit child delete; SQLite does not enforce ON DELETE CASCADE by default
        try:
            await self._session.execute(
                delete(ContentBlockRecord).where(ContentBlockRecord.article_id == article_id)
            )
            result = await self._session.execute(
                delete(ArticleRecord).where(ArticleRecord.id == article_id)
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("delete", e) from e

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted article %s", article_id, extra={"article_id": article_id})
        return deleted

    async def list(self) -> list[Article]:
        try:
            article_rows = (
                await self._session.execute(
                    select(ArticleRecord.__table__).order_by(
                        ArticleRecord.created_at.desc(), ArticleRecord.id.desc()
                    )
                )
            ).mappings().all()
            block_rows = (
                await self._session.execute(
                    select(ContentBlockRecord.__table__).order_by(ContentBlockRecord.block_order)
                )
            ).mappings().all()
        except SQLAlchemyError as e:
            raise await self._fail("list_articles", e) from e

        blocks_by_article = defaultdict(list)
        for row in block_rows:
            blocks_by_article[row["article_id"]].append(row)

        return [article_from_row(row, blocks_by_article.get(row["id"], ())) for row in article_rows]

    async def get(self, article_id: str) -> Article | None:
        try:
            row = (
                await self._session.execute(
                    select(ArticleRecord.__table__).where(ArticleRecord.id == article_id)
                )
            ).mappings().first()
            if row is None:
                return None
            block_rows = (
                await self._session.execute(
                    select(ContentBlockRecord.__table__)
                    .where(ContentBlockRecord.article_id == article_id)
                    .order_by(ContentBlockRecord.block_order)
                )
            ).mappings().all()
        except SQLAlchemyError as e:
            raise await self._fail("get_article", e) from e

        return article_from_row(row, block_rows)


def _to_subscriber(record: SubscriberRecord) -> Subscriber:
    return Subscriber(
        id=record.id,
        email=record.email,
        name=record.name,
        subscribed_at=record.subscribed_at,
    )


class SubscriberGateway(_Gateway, SubscriberRepository):
    """Reads and writes newsletter subscribers."""

    def _dialect_insert(self):
        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as dialect_insert
        else:
            raise StoreOperationError("upsert_subscriber", f"no upsert support for {dialect}")
        return dialect_insert

    async def upsert(self, email: str, name: str | None = None) -> Subscriber:
        """Insert the subscriber; on an email conflict keep the row and refresh its name."""
        email = email.strip().lower()
        name = name.strip() if name and name.strip() else None

        dialect_insert = self._dialect_insert()
        stmt = dialect_insert(SubscriberRecord).values(id=str(uuid4()), email=email, name=name)
        stmt = stmt.on_conflict_do_update(
            index_elements=[SubscriberRecord.email],
            set_={"name": func.coalesce(stmt.excluded.name, SubscriberRecord.name)},
        )
        try:
            await self._session.execute(stmt)
            await self._session.commit()
            record = await self._session.scalar(
                select(SubscriberRecord)
                .where(SubscriberRecord.email == email)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            raise await self._fail("upsert_subscriber", e) from e

        logger.info("Upserted subscriber %s", record.id)
        return _to_subscriber(record)

    async def list(self) -> list[Subscriber]:
        try:
            result = await self._session.execute(
                select(SubscriberRecord).order_by(
                    SubscriberRecord.subscribed_at.desc(), SubscriberRecord.email
                )
            )
        except SQLAlchemyError as e:
            raise await self._fail("list_subscribers", e) from e
        return [_to_subscriber(record) for record in result.scalars().all()]

    async def delete(self, subscriber_id: str) -> bool:
        try:
            result = await self._session.execute(
                delete(SubscriberRecord).where(SubscriberRecord.id == subscriber_id)
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("delete_subscriber", e) from e
        return result.rowcount > 0
