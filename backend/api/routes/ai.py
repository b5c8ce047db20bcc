"""
Standalone text generation route.
"""

import logging

from fastapi import APIRouter, Depends, Request

from adapters.ai.anthropic_adapter import get_text_generation_service
from api.deps_admin import get_current_admin
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.content import GenerateTextRequest, GenerateTextResponse
from core.interfaces.services import TextGenerationService
from core.security import TokenPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/generate", response_model=GenerateTextResponse)
@limiter.limit(get_rate_limit("generate"))
async def generate_text(
    request: Request,
    body: GenerateTextRequest,
    admin: TokenPayload = Depends(get_current_admin),
    generator: TextGenerationService = Depends(get_text_generation_service),
):
    """
    Draft prose for a prompt. Failures come back as an ``Error: ...`` string.
    """
    return GenerateTextResponse(content=await generator.generate_text(body.prompt))
