"""
Article API routes.

Reads are public and served from the content library cache. Writes require
the admin token and refresh the cache once the store has committed.
"""

import dataclasses
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.deps_admin import get_current_admin
from api.schemas.content import (
    ArticleCreateRequest,
    ArticleListResponse,
    ArticleResponse,
    ArticleWriteRequest,
)
from api.utils import store_unavailable
from core.domain.content import new_article_template
from core.interfaces.repositories import StoreOperationError
from core.security import TokenPayload
from infrastructure.config.settings import settings
from services.content_library import ContentLibrary, get_content_library
from services.editor_session import EditorSessionRegistry, get_editor_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    library: ContentLibrary = Depends(get_content_library),
):
    """
    List all articles, newest first.
    """
    return ArticleListResponse(
        items=[ArticleResponse.from_domain(article) for article in library.articles],
        total=len(library.articles),
    )


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Get one article with its blocks.
    """
    article = library.get_article(article_id)
    if not article:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Article not found",
        )
    return ArticleResponse.from_domain(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: ArticleCreateRequest,
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Create an article.

    Missing id, author and publish date are taken from a fresh blank article.
    """
    template = new_article_template(settings.default_author, datetime.now())
    article_id = request.id or template.id

    if library.get_article(article_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An article with this id already exists",
        )

    article = request.to_domain(article_id)
    article = dataclasses.replace(
        article,
        author=article.author or template.author,
        publish_date=article.publish_date or template.publish_date,
    )

    try:
        created = await library.add_article(article)
    except StoreOperationError as e:
        raise store_unavailable(e) from e

    return ArticleResponse.from_domain(created)


@router.put("/{article_id}", response_model=ArticleResponse)
async def replace_article(
    article_id: str,
    request: ArticleWriteRequest,
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Replace an article's fields and its whole block sequence.

    Open editor sessions on the article are closed.
    """
    try:
        saved = await library.update_article(request.to_domain(article_id))
    except StoreOperationError as e:
        raise store_unavailable(e) from e

    registry.discard_article(article_id)
    return ArticleResponse.from_domain(saved)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Delete an article and its blocks, closing any editor session on it.
    """
    try:
        deleted = await library.delete_article(article_id)
    except StoreOperationError as e:
        raise store_unavailable(e) from e

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Article not found",
        )

    registry.discard_article(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
