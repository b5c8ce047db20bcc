"""
Newsletter subscriber routes.

Sign-up is public; listing, deletion and CSV export need the admin token.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse

from api.deps_admin import get_current_admin
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.content import SubscribeRequest, SubscriberListResponse, SubscriberResponse
from api.utils import store_unavailable
from core.interfaces.repositories import StoreOperationError
from core.security import TokenPayload
from services.content_library import ContentLibrary, get_content_library
from services.subscriber_export import EXPORT_FILENAME, subscribers_to_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscribers", tags=["subscribers"])


@router.post("", response_model=SubscriberResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit("subscribe"))
async def subscribe(
    request: Request,
    body: SubscribeRequest,
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Add an email to the newsletter list; an existing email is updated in place.
    """
    try:
        return await library.add_subscriber(body.email, body.name)
    except StoreOperationError as e:
        raise store_unavailable(e) from e


@router.get("", response_model=SubscriberListResponse)
async def list_subscribers(
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    List subscribers, newest first.
    """
    return SubscriberListResponse(
        items=[SubscriberResponse.model_validate(s) for s in library.subscribers],
        total=len(library.subscribers),
    )


@router.get("/export")
async def export_subscribers(
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Download the subscriber list as CSV.
    """
    payload = subscribers_to_csv(library.subscribers)
    logger.info("Exported %d subscribers", len(library.subscribers))
    return StreamingResponse(
        iter([payload]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.delete("/{subscriber_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscriber(
    subscriber_id: str,
    admin: TokenPayload = Depends(get_current_admin),
    library: ContentLibrary = Depends(get_content_library),
):
    """
    Remove a subscriber.
    """
    try:
        deleted = await library.delete_subscriber(subscriber_id)
    except StoreOperationError as e:
        raise store_unavailable(e) from e

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subscriber not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
