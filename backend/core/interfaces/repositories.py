"""Repository interfaces for data access."""

from abc import ABC, abstractmethod

from ..domain.content import Article
from ..domain.subscriber import Subscriber


class StoreOperationError(Exception):
    """A store operation failed and its transaction was rolled back."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Store operation '{operation}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ArticleRepository(ABC):
    """Abstract repository for Article aggregates (article row + block rows)."""

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """Update an existing article and replace its blocks, or insert it."""
        ...

    @abstractmethod
    async def insert(self, article: Article) -> Article:
        """Insert a new article and its blocks."""
        ...

    @abstractmethod
    async def get(self, article_id: str) -> Article | None:
        """Get article by ID."""
        ...

    @abstractmethod
    async def list(self) -> list[Article]:
        """All articles, most recent first."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article and its blocks."""
        ...


class SubscriberRepository(ABC):
    """Abstract repository for Subscriber entities."""

    @abstractmethod
    async def upsert(self, email: str, name: str | None = None) -> Subscriber:
        """Insert a subscriber, or update the existing row with this email."""
        ...

    @abstractmethod
    async def list(self) -> list[Subscriber]:
        """All subscribers, most recent first."""
        ...

    @abstractmethod
    async def delete(self, subscriber_id: str) -> bool:
        """Delete a subscriber."""
        ...
