"""
Mapping between domain articles and the flat ``articles`` / ``content_blocks`` rows.

Every block row carries all variant columns; the ones a variant does not use
are NULL. ``block_order`` is the block's position in the article.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from .domain.content import (
    Article,
    AudioBlock,
    BlockType,
    ContentBlock,
    ImageBlock,
    SponsorshipBlock,
    TextBlock,
    UnknownBlockTypeError,
    BLOCK_CLASSES,
)

logger = logging.getLogger(__name__)

BLOCK_COLUMNS = ("content", "src", "caption", "title", "company", "logo_src", "link")

# Block field name -> content_blocks column, per variant
_FIELD_COLUMNS: dict[type, dict[str, str]] = {
    TextBlock: {"content": "content"},
    ImageBlock: {"src": "src", "caption": "caption"},
    AudioBlock: {"src": "src", "title": "title"},
    SponsorshipBlock: {"company": "company", "logo_src": "logo_src", "link": "link"},
}


def serialize_block(block: ContentBlock, article_id: str, order: int) -> dict[str, Any]:
    """Build the ``content_blocks`` row for one block."""
    columns = _FIELD_COLUMNS.get(type(block))
    if columns is None:
        raise UnknownBlockTypeError(getattr(block, "type", type(block).__name__))

    row: dict[str, Any] = {
        "id": block.id,
        "article_id": article_id,
        "type": block.type.value,
        "block_order": order,
    }
    row.update(dict.fromkeys(BLOCK_COLUMNS))
    for field_name, column in columns.items():
        row[column] = getattr(block, field_name)
    return row


def serialize_blocks(article_id: str, blocks: Sequence[ContentBlock]) -> list[dict[str, Any]]:
    """Rows for a whole block sequence, ordered by position."""
    return [serialize_block(block, article_id, order) for order, block in enumerate(blocks)]


def deserialize_block(row: Mapping[str, Any]) -> Optional[ContentBlock]:
    """Rebuild one block, or None when the row's tag is not recognised."""
    try:
        block_type = BlockType(row["type"])
    except ValueError:
        logger.warning(
            "Skipping content block %s of article %s: unknown type %r",
            row.get("id"),
            row.get("article_id"),
            row.get("type"),
        )
        return None

    cls = BLOCK_CLASSES[block_type]
    values = {
        field_name: row.get(column) or ""
        for field_name, column in _FIELD_COLUMNS[cls].items()
    }
    return cls(id=row["id"], **values)


def deserialize_blocks(rows: Iterable[Mapping[str, Any]]) -> list[ContentBlock]:
    """Rebuild a block sequence from the rows of one article."""
    blocks = []
    for row in sorted(rows, key=lambda r: r["block_order"]):
        block = deserialize_block(row)
        if block is not None:
            blocks.append(block)
    return blocks


def article_to_row(article: Article) -> dict[str, Any]:
    """Scalar columns of the ``articles`` row (created_at is left to the store)."""
    return {
        "id": article.id,
        "title": article.title or "",
        "subtitle": article.subtitle or "",
        "author": article.author or "",
        "publish_date": article.publish_date or "",
        "hero_image": article.hero_image or "",
    }


def article_from_row(
    row: Mapping[str, Any],
    block_rows: Iterable[Mapping[str, Any]] = (),
) -> Article:
    return Article(
        id=row["id"],
        title=row.get("title") or "",
        subtitle=row.get("subtitle") or "",
        author=row.get("author") or "",
        publish_date=row.get("publish_date") or "",
        hero_image=row.get("hero_image") or "",
        content=tuple(deserialize_blocks(block_rows)),
        created_at=row.get("created_at"),
    )
