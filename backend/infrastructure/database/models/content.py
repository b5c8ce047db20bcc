"""
Content database models: Article and its flattened content blocks.
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Article(Base, TimestampMixin):
    """Article row. Blocks live in ``content_blocks``."""

    __tablename__ = "articles"

    # Caller-supplied or time-derived (``grind-article-<millis>``)
    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    subtitle: Mapped[str] = mapped_column(Text, nullable=False, default="")
    author: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # Display string, never parsed
    publish_date: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    # URL or data URL
    hero_image: Mapped[str] = mapped_column(Text, nullable=False, default="")

    blocks: Mapped[List["ContentBlock"]] = relationship(
        "ContentBlock",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContentBlock.block_order",
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title[:30]})>"


class ContentBlock(Base):
    """
    One content block, flattened into nullable variant columns.

    Only the columns belonging to ``type`` are populated:

        text         content
        image        src, caption
        audio        src, title
        sponsorship  company, logo_src, link
    """

    __tablename__ = "content_blocks"

    # Block ids are unique per article, not globally
    article_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("articles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    type: Mapped[str] = mapped_column(String(50), nullable=False)
    block_order: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    src: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    logo_src: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)

    article: Mapped["Article"] = relationship("Article", back_populates="blocks")

    def __repr__(self) -> str:
        return f"<ContentBlock(id={self.id}, type={self.type}, order={self.block_order})>"
