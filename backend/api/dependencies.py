"""
API dependencies for bearer-token authentication.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

from core.security import TokenPayload, TokenService
from infrastructure.config.settings import settings

# Initialize token service
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


async def get_current_token(
    authorization: Annotated[str | None, Header()] = None,
) -> TokenPayload:
    """
    Dependency returning the verified token payload from the Bearer header.

    Raises:
        HTTPException: 401 when the header is missing or the token is invalid
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        parts = authorization.split(" ", 1)
        token = parts[1].strip() if len(parts) > 1 and parts[1].strip() else None

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = token_service.verify_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload
