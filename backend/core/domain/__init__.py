# Domain Entities
# Pure business objects with no external dependencies
from .content import (
    ARTICLE_FIELDS,
    Article,
    AudioBlock,
    BlockType,
    ContentBlock,
    ImageBlock,
    SponsorshipBlock,
    TextBlock,
    UnknownBlockTypeError,
    create_block,
    new_article_template,
)
from .subscriber import Subscriber

__all__ = [
    "ARTICLE_FIELDS",
    "Article",
    "AudioBlock",
    "BlockType",
    "ContentBlock",
    "ImageBlock",
    "SponsorshipBlock",
    "TextBlock",
    "UnknownBlockTypeError",
    "create_block",
    "new_article_template",
    "Subscriber",
]
