# Interfaces (Abstract Contracts)
# Gateways and adapters implement these interfaces
from .repositories import ArticleRepository, StoreOperationError, SubscriberRepository
from .services import TextGenerationService

__all__ = [
    "ArticleRepository",
    "SubscriberRepository",
    "StoreOperationError",
    "TextGenerationService",
]
