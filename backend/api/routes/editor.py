"""
Block editor API routes.

An editor session is an in-memory working copy of one article. Block edits
only touch the session; ``/save`` writes the whole article to the store.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from adapters.ai.anthropic_adapter import get_text_generation_service
from api.deps_admin import get_current_admin
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.content import (
    ArticleResponse,
    BlockCreateRequest,
    BlockMoveRequest,
    BlockUpdateRequest,
    EditorFieldsUpdateRequest,
    EditorSessionCreateRequest,
    EditorSessionResponse,
    GenerateTextRequest,
    block_to_schema,
)
from api.utils import store_unavailable
from core.domain.content import BlockType, new_article_template
from core.interfaces.repositories import StoreOperationError
from core.interfaces.services import TextGenerationService
from infrastructure.config.settings import settings
from services.content_library import ContentLibrary, get_content_library
from services.editor_session import EditorSession, EditorSessionRegistry, get_editor_sessions

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/editor/sessions",
    tags=["editor"],
    dependencies=[Depends(get_current_admin)],
)


def _session_response(session: EditorSession) -> EditorSessionResponse:
    return EditorSessionResponse(
        session_id=session.session_id,
        is_new=session.is_new,
        article=ArticleResponse.from_domain(session.finalize()),
    )


def _get_session_or_404(registry: EditorSessionRegistry, session_id: str) -> EditorSession:
    session = registry.get(session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor session not found",
        )
    return session


def _block_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Block not found",
    )


@router.post("", response_model=EditorSessionResponse, status_code=status.HTTP_201_CREATED)
async def open_session(
    request: EditorSessionCreateRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Open an editor on an existing article, or on a blank one.
    """
    if request.article_id:
        article = library.get_article(request.article_id)
        if not article:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Article not found",
            )
        session = registry.open(article)
    else:
        session = registry.open(
            template=new_article_template(settings.default_author, datetime.now())
        )
    return _session_response(session)


@router.get("/{session_id}", response_model=EditorSessionResponse)
async def get_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    return _session_response(_get_session_or_404(registry, session_id))


@router.patch("/{session_id}", response_model=EditorSessionResponse)
async def update_fields(
    session_id: str,
    request: EditorFieldsUpdateRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Change article fields (title, subtitle, author, publish date, hero image).
    """
    session = _get_session_or_404(registry, session_id)
    for name, value in request.model_dump(exclude_unset=True).items():
        session.set_field(name, value)
    return _session_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Discard a session and any unsaved edits.
    """
    if not registry.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor session not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/save", response_model=EditorSessionResponse)
async def save_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Write the session's article to the store, replacing its stored blocks.

    On failure the session keeps its edits so the save can be retried.
    """
    session = _get_session_or_404(registry, session_id)
    try:
        saved = await library.update_article(session.finalize())
    except StoreOperationError as e:
        raise store_unavailable(e) from e

    session.mark_saved(saved)
    logger.info(
        "Editor session %s saved article %s",
        session.session_id,
        session.article_id,
        extra={"session_id": session.session_id, "article_id": session.article_id},
    )
    return _session_response(session)


# ── Blocks ───────────────────────────────────────────────────────────────────


@router.post("/{session_id}/blocks", status_code=status.HTTP_201_CREATED)
async def add_block(
    session_id: str,
    request: BlockCreateRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Append an empty block of the requested type.
    """
    session = _get_session_or_404(registry, session_id)
    return block_to_schema(session.add_block(request.type))


@router.patch("/{session_id}/blocks/{block_id}")
async def update_block(
    session_id: str,
    block_id: str,
    request: BlockUpdateRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Change fields of one block. Fields of another block type are rejected.
    """
    session = _get_session_or_404(registry, session_id)
    try:
        block = session.update_block(block_id, request.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    if block is None:
        raise _block_not_found()
    return block_to_schema(block)


@router.delete("/{session_id}/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_block(
    session_id: str,
    block_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    session = _get_session_or_404(registry, session_id)
    if not session.remove_block(block_id):
        raise _block_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/blocks/{block_id}/move", response_model=EditorSessionResponse)
async def move_block(
    session_id: str,
    block_id: str,
    request: BlockMoveRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
):
    """
    Drop the block onto the position currently held by ``target_id``.
    """
    session = _get_session_or_404(registry, session_id)
    session.move_block(block_id, request.target_id)
    return _session_response(session)


@router.post("/{session_id}/blocks/{block_id}/generate")
@limiter.limit(get_rate_limit("generate"))
async def generate_block_text(
    request: Request,
    session_id: str,
    block_id: str,
    body: GenerateTextRequest,
    registry: EditorSessionRegistry = Depends(get_editor_sessions),
    generator: TextGenerationService = Depends(get_text_generation_service),
):
    """
    Draft prose into a text block.

    The generated HTML, or the generator's error message, replaces the block's content.
    """
    session = _get_session_or_404(registry, session_id)
    block = next((b for b in session.blocks if b.id == block_id), None)
    if block is None:
        raise _block_not_found()
    if block.type is not BlockType.TEXT:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Text can only be generated into a text block",
        )

    content = await generator.generate_text(body.prompt)
    return block_to_schema(session.update_block(block_id, {"content": content}))
