"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .content import Article, ContentBlock
from .subscriber import Subscriber

__all__ = [
    "Base",
    "TimestampMixin",
    "Article",
    "ContentBlock",
    "Subscriber",
]
