"""
Security utilities for authentication and authorization.
"""

from .credentials import verify_admin_credentials
from .tokens import ADMIN_ROLE, TokenPayload, TokenService

__all__ = [
    "ADMIN_ROLE",
    "TokenService",
    "TokenPayload",
    "verify_admin_credentials",
]
