"""
Authentication request and response schemas.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request schema."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until access token expires


class AdminResponse(BaseModel):
    """Identity carried by the admin token."""

    email: str
    role: str
