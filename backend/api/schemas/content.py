"""
Content API schemas for articles, blocks, subscribers and the editor.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator

from core.domain.content import (
    BLOCK_CLASSES,
    Article,
    BlockType,
    ContentBlock,
)

# ============================================================================
# Block Schemas
# ============================================================================


def _block_id() -> str:
    return str(uuid4())


class _BlockSchema(BaseModel):
    id: str = Field(default_factory=_block_id, min_length=1, max_length=255)

    def to_domain(self) -> ContentBlock:
        cls = BLOCK_CLASSES[BlockType(self.type)]
        return cls(**self.model_dump(exclude={"type"}))


class TextBlockSchema(_BlockSchema):
    """Rich-text block; ``content`` is HTML."""

    type: Literal["text"] = "text"
    content: str = ""


class ImageBlockSchema(_BlockSchema):
    type: Literal["image"] = "image"
    src: str = ""
    caption: str = ""


class AudioBlockSchema(_BlockSchema):
    type: Literal["audio"] = "audio"
    src: str = ""
    title: str = ""


class SponsorshipBlockSchema(_BlockSchema):
    type: Literal["sponsorship"] = "sponsorship"
    company: str = ""
    logo_src: str = ""
    link: str = ""


BlockSchema = Annotated[
    Union[TextBlockSchema, ImageBlockSchema, AudioBlockSchema, SponsorshipBlockSchema],
    Field(discriminator="type"),
]

_block_adapter = TypeAdapter(BlockSchema)


def block_to_schema(block: ContentBlock):
    """Wrap a domain block in its response schema."""
    return _block_adapter.validate_python({"type": block.type.value, **asdict(block)})


# ============================================================================
# Article Schemas
# ============================================================================


class ArticleWriteRequest(BaseModel):
    """Full article body for create and replace."""

    title: str = Field(default="", max_length=500)
    subtitle: str = ""
    author: str = Field(default="", max_length=255)
    publish_date: str = Field(default="", max_length=100)
    hero_image: str = ""
    content: list[BlockSchema] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def validate_unique_block_ids(cls, v: list) -> list:
        ids = [block.id for block in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Block ids must be unique within an article")
        return v

    def to_domain(self, article_id: str) -> Article:
        return Article(
            id=article_id,
            title=self.title,
            subtitle=self.subtitle,
            author=self.author,
            publish_date=self.publish_date,
            hero_image=self.hero_image,
            content=tuple(block.to_domain() for block in self.content),
        )


class ArticleCreateRequest(ArticleWriteRequest):
    """Create an article; id and empty author/date fall back to a fresh template."""

    id: Optional[str] = Field(None, min_length=1, max_length=255)


class ArticleResponse(BaseModel):
    """Article with its ordered blocks."""

    id: str
    title: str
    subtitle: str
    author: str
    publish_date: str
    hero_image: str
    content: list[BlockSchema]
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            subtitle=article.subtitle,
            author=article.author,
            publish_date=article.publish_date,
            hero_image=article.hero_image,
            content=[block_to_schema(block) for block in article.content],
            created_at=article.created_at,
        )


class ArticleListResponse(BaseModel):
    """List of articles response."""

    items: list[ArticleResponse]
    total: int


# ============================================================================
# Subscriber Schemas
# ============================================================================


class SubscribeRequest(BaseModel):
    """Newsletter sign-up."""

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)


class SubscriberResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    subscribed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscriberListResponse(BaseModel):
    items: list[SubscriberResponse]
    total: int


# ============================================================================
# Editor Schemas
# ============================================================================


class EditorSessionCreateRequest(BaseModel):
    """Open a session on an existing article, or on a blank one when ``article_id`` is omitted."""

    article_id: Optional[str] = None


class EditorSessionResponse(BaseModel):
    session_id: str
    is_new: bool
    article: ArticleResponse


class EditorFieldsUpdateRequest(BaseModel):
    """Article fields to change; omitted fields are left alone."""

    title: Optional[str] = Field(None, max_length=500)
    subtitle: Optional[str] = None
    author: Optional[str] = Field(None, max_length=255)
    publish_date: Optional[str] = Field(None, max_length=100)
    hero_image: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class BlockCreateRequest(BaseModel):
    type: BlockType


class BlockUpdateRequest(BaseModel):
    """
    Block fields to change.

    Only fields of the block's own variant are accepted; the editor rejects
    the others with 422.
    """

    content: Optional[str] = None
    src: Optional[str] = None
    caption: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    logo_src: Optional[str] = None
    link: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class BlockMoveRequest(BaseModel):
    target_id: str = Field(..., min_length=1)


# ============================================================================
# Generation / Media Schemas
# ============================================================================


class GenerateTextRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=4000)


class GenerateTextResponse(BaseModel):
    content: str


class DataUrlResponse(BaseModel):
    data_url: str
    content_type: str
    size: int
