"""
Shared API utility functions.
"""

from fastapi import HTTPException, status

from core.interfaces.repositories import StoreOperationError


def store_unavailable(exc: StoreOperationError) -> HTTPException:
    """503 for a store operation that failed and was rolled back."""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Content store unavailable ({exc.operation}). Please try again.",
    )
