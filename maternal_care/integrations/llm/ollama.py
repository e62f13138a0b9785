# ============================================================================
# SCOPE: GLOBAL
# Description: Ollama implementation of the text generator used for daily tips.
# ============================================================================
"""
Ollama text generator

Local text generation through langchain's ChatOllama. Errors are raised as
TextGenerationError subclasses; ContentService decides what to do with them.
"""

import logging
import re

import httpx
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_ollama import ChatOllama

logger = logging.getLogger(__name__)

# Reasoning models may wrap their chain of thought in <think> tags
THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL)

SYSTEM_PROMPT = "You are a caring maternal health assistant. Keep answers short and safe."


class TextGenerationError(Exception):
    """Base error for text generation."""


class TextGenerationConnectionError(TextGenerationError):
    """The generation service could not be reached."""


class TextGenerationTimeoutError(TextGenerationError):
    """The generation service did not answer in time."""


class OllamaTextGenerator:
    """
    Ollama implementation of ITextGenerator.

    The ChatOllama instance is created lazily and reused.
    """

    def __init__(
        self,
        model_name: str,
        base_url: str,
        temperature: float = 0.7,
        max_tokens: int = 200,
    ):
        self._model_name = model_name
        self._base_url = base_url
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._llm: ChatOllama | None = None
        logger.info(f"Initialized OllamaTextGenerator: model={model_name}, base_url={base_url}")

    @property
    def model_name(self) -> str:
        return self._model_name

    def get_llm(self) -> ChatOllama:
        if self._llm is None:
            self._llm = ChatOllama(
                model=self._model_name,
                base_url=self._base_url,
                temperature=self._temperature,
                num_predict=self._max_tokens,
            )
        return self._llm

    async def generate(self, prompt: str, language: str) -> str:
        """Generate text from a prompt.

        Args:
            prompt: User prompt.
            language: ISO code of the language the answer must use.

        Raises:
            TextGenerationConnectionError: If Ollama is unreachable.
            TextGenerationTimeoutError: If Ollama timed out.
            TextGenerationError: For any other failure.
        """
        try:
            messages = [
                SystemMessage(content=f"{SYSTEM_PROMPT} Answer in the language with code '{language}'."),
                HumanMessage(content=prompt),
            ]
            response = await self.get_llm().ainvoke(messages)
            content = response.content if isinstance(response.content, str) else str(response.content)
            return THINK_PATTERN.sub("", content).strip()
        except httpx.ConnectError as e:
            logger.error(f"Connection error to Ollama: {e}")
            raise TextGenerationConnectionError(f"Could not connect to Ollama at {self._base_url}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout from Ollama: {e}")
            raise TextGenerationTimeoutError(f"Ollama at {self._base_url} timed out") from e
        except Exception as e:
            logger.error(f"Error generating text: {e}")
            raise TextGenerationError(f"Failed to generate text: {e}") from e
