"""API Routes."""

from fastapi import APIRouter

from .ai import router as ai_router
from .articles import router as articles_router
from .auth import router as auth_router
from .editor import router as editor_router
from .health import router as health_router
from .media import router as media_router
from .subscribers import router as subscribers_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(auth_router)
api_router.include_router(articles_router)
api_router.include_router(subscribers_router)
api_router.include_router(editor_router)
api_router.include_router(ai_router)
api_router.include_router(media_router)
