"""
Media upload route: image and audio files become inline data URLs.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from api.deps_admin import get_current_admin
from api.schemas.content import DataUrlResponse
from core.security import TokenPayload
from infrastructure.config.settings import settings
from services.media import MediaValidationError, to_data_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/data-url", response_model=DataUrlResponse)
async def upload_data_url(
    file: UploadFile = File(...),
    admin: TokenPayload = Depends(get_current_admin),
):
    """
    Encode an uploaded image or audio file for use as a block ``src``.
    """
    # Read one byte past the limit so oversize uploads are detected without buffering them whole
    data = await file.read(settings.max_upload_bytes + 1)
    try:
        data_url = to_data_url(data, file.content_type)
    except MediaValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    logger.info("Encoded upload %s (%d bytes)", file.filename, len(data))
    return DataUrlResponse(
        data_url=data_url,
        content_type=data_url[5:data_url.index(";")],
        size=len(data),
    )
