"""Inline media: uploaded image and audio bytes as base64 data URLs."""

import base64
import logging
from typing import Optional

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

ALLOWED_MEDIA_PREFIXES = ("image/", "audio/")


class MediaValidationError(ValueError):
    """Raised for uploads that cannot be inlined."""


def to_data_url(data: bytes, content_type: Optional[str], max_bytes: Optional[int] = None) -> str:
    """
    Encode ``data`` as ``data:<content_type>;base64,<payload>``.

    Raises:
        MediaValidationError: empty upload, non image/audio type, or over the size limit
    """
    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes
    content_type = (content_type or "").split(";")[0].strip().lower()

    if not content_type.startswith(ALLOWED_MEDIA_PREFIXES):
        raise MediaValidationError(f"Unsupported media type: {content_type or 'unknown'}")
    if not data:
        raise MediaValidationError("Uploaded file is empty")
    if len(data) > limit:
        raise MediaValidationError(f"File exceeds the upload limit of {limit} bytes")

    logger.debug("Encoding %d bytes of %s as data URL", len(data), content_type)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
