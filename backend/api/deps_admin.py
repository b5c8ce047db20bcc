"""
Admin authentication dependencies.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from api.dependencies import get_current_token
from core.security import TokenPayload


async def get_current_admin(
    payload: Annotated[TokenPayload, Depends(get_current_token)],
) -> TokenPayload:
    """
    Dependency to verify the bearer token carries the admin role.

    Raises:
        HTTPException: 403 if the token is valid but not an admin token
    """
    if not payload.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required. You do not have permission to access this resource.",
        )

    return payload
