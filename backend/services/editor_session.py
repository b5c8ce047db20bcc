"""
Editor sessions: mutable working copies of articles being authored.

A session is owned by a single editor. Nothing here locks; the last save to
reach the store wins.

Usage::

    session = editor_sessions.open(existing_article)
    block = session.add_block(BlockType.TEXT)
    session.update_block(block.id, {"content": "<p>Hello</p>"})
    article = session.finalize()
"""

import dataclasses
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Optional
from uuid import uuid4

from core.domain.content import (
    ARTICLE_FIELDS,
    Article,
    BlockType,
    ContentBlock,
    block_fields,
    create_block,
    parse_block_type,
)

logger = logging.getLogger(__name__)

NEW_TEXT_BLOCK_CONTENT = "<p>Start writing here...</p>"

# Oldest sessions are evicted past this many
MAX_OPEN_SESSIONS = 100


def generate_block_id() -> str:
    return str(uuid4())


class EditorSession:
    """Working copy of one article."""

    def __init__(self, article: Article, is_new: bool = False, session_id: Optional[str] = None):
        self.session_id: str = session_id or str(uuid4())
        self.article_id: str = article.id
        self.is_new: bool = is_new
        self.created_at: datetime = datetime.now(UTC)
        self.load(article)

    def load(self, article: Article) -> None:
        """Replace the working copy with ``article``."""
        self._source = article
        self._fields: dict[str, str] = {name: getattr(article, name) for name in ARTICLE_FIELDS}
        self._blocks: list[ContentBlock] = list(article.content)
        self._created_at = article.created_at

    @property
    def has_unsaved_changes(self) -> bool:
        return self.is_new or self.finalize() != self._source

    def mark_saved(self, article: Optional[Article] = None) -> None:
        """Record that the working copy now matches the store."""
        self._source = article if article is not None else self.finalize()
        self.is_new = False

    # ── Article fields ───────────────────────────────────────────────────────

    def set_field(self, name: str, value: Optional[str]) -> None:
        if name not in ARTICLE_FIELDS:
            raise ValueError(f"Unknown article field: {name!r}")
        self._fields[name] = value if value is not None else ""

    # ── Blocks ───────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> tuple[ContentBlock, ...]:
        return tuple(self._blocks)

    def _index_of(self, block_id: str) -> int:
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return -1

    def add_block(self, block_type: BlockType | str) -> ContentBlock:
        """Append an empty block of the given type and return it."""
        block_type = parse_block_type(block_type)
        block = create_block(block_type, generate_block_id())
        if block_type is BlockType.TEXT:
            block = dataclasses.replace(block, content=NEW_TEXT_BLOCK_CONTENT)
        self._blocks.append(block)
        return block

    def update_block(self, block_id: str, fields: Mapping[str, Any]) -> Optional[ContentBlock]:
        """
        Merge ``fields`` into a block.

        Returns the updated block, or None when no block has ``block_id``.
        Raises ValueError for fields the block's variant does not have.
        """
        index = self._index_of(block_id)
        if index == -1:
            return None

        block = self._blocks[index]
        allowed = block_fields(block.type)
        unknown = set(fields) - set(allowed)
        if unknown:
            raise ValueError(
                f"Fields {sorted(unknown)} are not valid for a {block.type.value} block"
            )
        changes = {name: (value if value is not None else "") for name, value in fields.items()}
        updated = dataclasses.replace(block, **changes)
        self._blocks[index] = updated
        return updated

    def remove_block(self, block_id: str) -> bool:
        index = self._index_of(block_id)
        if index == -1:
            return False
        del self._blocks[index]
        return True

    def move_block(self, dragged_id: str, target_id: str) -> bool:
        """Move the dragged block to the index the target block holds now."""
        if dragged_id == target_id:
            return False
        from_index = self._index_of(dragged_id)
        to_index = self._index_of(target_id)
        if from_index == -1 or to_index == -1:
            return False

        block = self._blocks.pop(from_index)
        self._blocks.insert(to_index, block)
        return True

    # ── Snapshot ─────────────────────────────────────────────────────────────

    def finalize(self) -> Article:
        """Immutable snapshot for the persistence gateway."""
        return Article(
            id=self.article_id,
            content=tuple(self._blocks),
            created_at=self._created_at,
            **self._fields,
        )


class EditorSessionRegistry:
    """In-memory registry of open editor sessions, one per article."""

    def __init__(self) -> None:
        self._sessions: dict[str, EditorSession] = {}

    def open(self, article: Optional[Article] = None, template: Optional[Article] = None) -> EditorSession:
        """
        Open a session on ``article``, or on ``template`` for a new article.

        An article that already has an open session gets that session back.
        A session without unsaved edits is reloaded from ``article`` first, so
        it never carries an older copy than the store.
        """
        if article is not None:
            existing = self._find_article_session(article.id)
            if existing is not None:
                if not existing.has_unsaved_changes and existing.finalize() != article:
                    existing.load(article)
                    logger.info(
                        "Reloaded editor session %s from stored article %s",
                        existing.session_id,
                        article.id,
                        extra={"session_id": existing.session_id, "article_id": article.id},
                    )
                return existing
            session = EditorSession(article)
        else:
            if template is None:
                raise ValueError("A template is required to open a session for a new article")
            session = EditorSession(template, is_new=True)

        self._sessions[session.session_id] = session
        self._evict_oldest()
        logger.info(
            "Opened editor session %s for article %s (new=%s)",
            session.session_id,
            session.article_id,
            session.is_new,
            extra={"session_id": session.session_id, "article_id": session.article_id},
        )
        return session

    def _find_article_session(self, article_id: str) -> Optional[EditorSession]:
        for session in self._sessions.values():
            if session.article_id == article_id and not session.is_new:
                return session
        return None

    def _evict_oldest(self) -> None:
        while len(self._sessions) > MAX_OPEN_SESSIONS:
            session_id = next(iter(self._sessions))
            del self._sessions[session_id]
            logger.info("Evicted editor session %s", session_id, extra={"session_id": session_id})

    def get(self, session_id: str) -> Optional[EditorSession]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Closed editor session %s", session_id, extra={"session_id": session_id})
        return True

    def discard_article(self, article_id: str) -> int:
        """Close every session on ``article_id``. Returns how many were closed."""
        stale = [sid for sid, session in self._sessions.items() if session.article_id == article_id]
        for session_id in stale:
            self.discard(session_id)
        return len(stale)

    def __len__(self) -> int:
        return len(self._sessions)


# Singleton instance
editor_sessions = EditorSessionRegistry()


def get_editor_sessions() -> EditorSessionRegistry:
    """FastAPI dependency returning the process-wide registry."""
    return editor_sessions
