"""
Authentication API routes.

The dashboard is gated by one shared admin credential taken from settings.
A successful login returns a signed access token that the admin routes
check on every request.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_current_token, token_service
from api.middleware.rate_limit import limiter, get_rate_limit
from api.schemas.auth import AdminResponse, LoginRequest, TokenResponse
from core.security import ADMIN_ROLE, TokenPayload, verify_admin_credentials
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials. Please try again."

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(get_rate_limit("login"))
async def login(request: Request, login_data: LoginRequest) -> dict:
    """
    Exchange the admin email and password for an access token.
    """
    if not verify_admin_credentials(
        login_data.email,
        login_data.password,
        settings.admin_email,
        settings.admin_password,
    ):
        logger.warning("Failed admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    access_token = token_service.create_access_token(
        subject=settings.admin_email.strip().lower(),
        role=ADMIN_ROLE,
    )
    logger.info("Admin logged in")

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": token_service.expires_in,
    }


@router.get("/me", response_model=AdminResponse)
async def get_me(
    payload: Annotated[TokenPayload, Depends(get_current_token)],
) -> dict:
    """
    Identity carried by the current token.
    """
    return {"email": payload.sub, "role": payload.role or ""}
