"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod


class TextGenerationService(ABC):
    """Drafts article prose from a free-text prompt."""

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        """
        Return generated rich text (HTML).

        Implementations never raise: on failure they return a message that
        starts with ``"Error:"`` so the editor always has something to show.
        """
        ...
