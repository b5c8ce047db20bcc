"""
Service layer for business logic.
"""

from services.content_gateway import ArticleGateway, SubscriberGateway
from services.content_library import ContentLibrary, content_library, get_content_library
from services.editor_session import EditorSession, EditorSessionRegistry, editor_sessions

__all__ = [
    "ArticleGateway",
    "SubscriberGateway",
    "ContentLibrary",
    "content_library",
    "get_content_library",
    "EditorSession",
    "EditorSessionRegistry",
    "editor_sessions",
]
