"""
API request and response schemas.
"""

from .auth import AdminResponse, LoginRequest, TokenResponse
from .content import (
    ArticleCreateRequest,
    ArticleListResponse,
    ArticleResponse,
    ArticleWriteRequest,
    BlockSchema,
    SubscribeRequest,
    SubscriberListResponse,
    SubscriberResponse,
)

__all__ = [
    "AdminResponse",
    "LoginRequest",
    "TokenResponse",
    "ArticleCreateRequest",
    "ArticleListResponse",
    "ArticleResponse",
    "ArticleWriteRequest",
    "BlockSchema",
    "SubscribeRequest",
    "SubscriberListResponse",
    "SubscriberResponse",
]
