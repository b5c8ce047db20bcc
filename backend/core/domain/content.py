"""Content domain entities: the four block variants and the article aggregate."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class BlockType(str, Enum):
    """Closed set of content block tags."""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    SPONSORSHIP = "sponsorship"


class UnknownBlockTypeError(ValueError):
    """Raised for a block tag outside :class:`BlockType`."""

    def __init__(self, block_type):
        self.block_type = block_type
        super().__init__(f"Unknown content block type: {block_type!r}")


@dataclass(frozen=True)
class TextBlock:
    """Rich-text paragraph(s); ``content`` is HTML."""

    id: str
    content: str = ""

    type = BlockType.TEXT


@dataclass(frozen=True)
class ImageBlock:
    """Image with caption. ``src`` is empty while the block is a placeholder."""

    id: str
    src: str = ""
    caption: str = ""

    type = BlockType.IMAGE


@dataclass(frozen=True)
class AudioBlock:
    id: str
    src: str = ""
    title: str = ""

    type = BlockType.AUDIO


@dataclass(frozen=True)
class SponsorshipBlock:
    id: str
    company: str = ""
    logo_src: str = ""
    link: str = ""

    type = BlockType.SPONSORSHIP


ContentBlock = Union[TextBlock, ImageBlock, AudioBlock, SponsorshipBlock]

BLOCK_CLASSES: dict[BlockType, type] = {
    BlockType.TEXT: TextBlock,
    BlockType.IMAGE: ImageBlock,
    BlockType.AUDIO: AudioBlock,
    BlockType.SPONSORSHIP: SponsorshipBlock,
}


def parse_block_type(value) -> BlockType:
    """Coerce a tag string to :class:`BlockType` or raise UnknownBlockTypeError."""
    if isinstance(value, BlockType):
        return value
    try:
        return BlockType(value)
    except ValueError:
        raise UnknownBlockTypeError(value) from None


def block_fields(block_type) -> tuple[str, ...]:
    """Payload field names of a variant, excluding ``id``."""
    cls = BLOCK_CLASSES[parse_block_type(block_type)]
    return tuple(name for name in cls.__dataclass_fields__ if name != "id")


def create_block(block_type, block_id: str) -> ContentBlock:
    """Return an empty block of the given variant."""
    cls = BLOCK_CLASSES[parse_block_type(block_type)]
    return cls(id=block_id)


@dataclass(frozen=True)
class Article:
    """An article and its ordered content blocks."""

    id: str
    title: str = ""
    subtitle: str = ""
    author: str = ""
    publish_date: str = ""
    hero_image: str = ""
    content: tuple[ContentBlock, ...] = ()

    # Set by the store; None until the article has been persisted
    created_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.content, tuple):
            object.__setattr__(self, "content", tuple(self.content))

    def get_block(self, block_id: str) -> Optional[ContentBlock]:
        for block in self.content:
            if block.id == block_id:
                return block
        return None


# Scalar fields an editor may change
ARTICLE_FIELDS = ("title", "subtitle", "author", "publish_date", "hero_image")


def format_publish_date(moment: datetime) -> str:
    """Display date in the reader's style, e.g. ``October 12, 2023``."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def new_article_template(author: str, now: datetime) -> Article:
    """Blank article with a time-derived id."""
    return Article(
        id=f"grind-article-{int(now.timestamp() * 1000)}",
        author=author,
        publish_date=format_publish_date(now),
    )
