"""
Text generation integrations.
"""

from .ollama import (
    OllamaTextGenerator,
    TextGenerationConnectionError,
    TextGenerationError,
    TextGenerationTimeoutError,
)

__all__ = [
    "OllamaTextGenerator",
    "TextGenerationConnectionError",
    "TextGenerationError",
    "TextGenerationTimeoutError",
]
