# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Text generation port (DIP compliant).
# ============================================================================
"""Text Generator Port."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ITextGenerator(Protocol):
    """Opaque AI text generation.

    Implementations: OllamaTextGenerator
    """

    async def generate(self, prompt: str, language: str) -> str:
        """Generate text for a prompt in the given language.

        Raises:
            TextGenerationError: If the provider fails.
        """
        ...
