"""
Anthropic Claude adapter for editorial text generation.
"""

import asyncio
import logging
import random
import re
from typing import Optional

import anthropic
import markdown

from core.interfaces.services import TextGenerationService
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a sophisticated writer for a luxury newsletter. Write in an elegant, "
    "intellectual, and slightly formal tone. Your audience appreciates nuance, history, "
    "and craftsmanship. Avoid slang, clichés, and overly casual language."
)

ERROR_NOT_CONFIGURED = "Error: API key not configured."
ERROR_GENERATION_FAILED = "Error: Could not generate text."
ERROR_EMPTY_RESPONSE = "Error: the model did not return any text."

MAX_PROMPT_LENGTH = 4000


async def _retry_with_backoff(coro_factory, max_retries=3, base_delay=1.0):
    """Retry an async operation with exponential backoff + jitter."""
    for attempt in range(max_retries + 1):
        try:
            return await coro_factory()
        except Exception as e:
            error_str = str(e).lower()
            is_transient = any(k in error_str for k in ["rate_limit", "429", "500", "502", "503", "504", "overloaded", "connection", "timeout"])
            if not is_transient or attempt == max_retries:
                raise
            delay = base_delay * (2 ** attempt) + random.uniform(0, 1)
            logger.warning("Transient API error (attempt %d/%d), retrying in %.1fs: %s", attempt + 1, max_retries, delay, str(e))
            await asyncio.sleep(delay)


def markdown_to_html(text: str) -> str:
    """Render the model's markdown reply as HTML for a text block."""
    return markdown.markdown(text.strip())


class AnthropicContentService(TextGenerationService):
    """Drafts article prose using Anthropic Claude."""

    def __init__(self, api_key: Optional[str] = None, client=None):
        api_key = api_key if api_key is not None else settings.anthropic_api_key
        if client is not None:
            self._client = client
        elif api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=api_key,
                timeout=float(settings.anthropic_timeout),
            )
        else:
            self._client = None
        self._model = settings.anthropic_model
        self._max_tokens = settings.anthropic_max_tokens

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    @staticmethod
    def _sanitize_prompt_input(text: Optional[str], max_length: int) -> str:
        """Strip control characters other than newlines and limit length."""
        if not text:
            return ""
        text = re.sub(r'[\x00-\x09\x0b-\x1f\x7f]', ' ', text)
        return text.strip()[:max_length]

    async def generate_text(self, prompt: str) -> str:
        """
        Draft prose for ``prompt``.

        Returns:
            HTML rendered from the model's markdown, or one of the ``Error: ...``
            strings. Never raises.
        """
        if not self._client:
            logger.warning("Text generation requested but ANTHROPIC_API_KEY is not set")
            return ERROR_NOT_CONFIGURED

        prompt = self._sanitize_prompt_input(prompt, MAX_PROMPT_LENGTH)
        try:
            message = await _retry_with_backoff(lambda: self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            ))
        except Exception as e:
            logger.error("Failed to generate text: %s", e)
            return ERROR_GENERATION_FAILED

        response_text = "".join(
            getattr(part, "text", "") or "" for part in (message.content or [])
        )
        if not response_text.strip():
            logger.warning("Model returned an empty reply")
            return ERROR_EMPTY_RESPONSE

        logger.debug("Generated text response (%d chars)", len(response_text))
        return markdown_to_html(response_text)


# Singleton instance
content_ai_service = AnthropicContentService()


def get_text_generation_service() -> TextGenerationService:
    """FastAPI dependency returning the shared generation service."""
    return content_ai_service
