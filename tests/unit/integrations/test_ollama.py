"""Tests for OllamaTextGenerator."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from maternal_care.integrations.llm import (
    OllamaTextGenerator,
    TextGenerationConnectionError,
    TextGenerationError,
    TextGenerationTimeoutError,
)


@pytest.fixture
def generator() -> OllamaTextGenerator:
    return OllamaTextGenerator(model_name="llama3.2:latest", base_url="http://localhost:11434")


def _llm(content=None, error: Exception | None = None) -> MagicMock:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=content), side_effect=error)
    return llm


@pytest.mark.unit
class TestOllamaTextGenerator:
    async def test_generate(self, generator):
        llm = _llm("Walk a little every day.")

        with patch.object(generator, "get_llm", return_value=llm):
            text = await generator.generate("tip for week 10", "en")

        assert text == "Walk a little every day."
        messages = llm.ainvoke.call_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "'en'" in messages[0].content
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "tip for week 10"

    async def test_strips_reasoning(self, generator):
        with patch.object(generator, "get_llm", return_value=_llm("<think>\nplan\n</think>\n Drink water.")):
            assert await generator.generate("prompt", "en") == "Drink water."

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (httpx.ConnectError("refused"), TextGenerationConnectionError),
            (httpx.ReadTimeout("slow"), TextGenerationTimeoutError),
            (ValueError("bad model"), TextGenerationError),
        ],
    )
    async def test_errors_are_translated(self, generator, error, expected):
        with patch.object(generator, "get_llm", return_value=_llm(error=error)):
            with pytest.raises(expected):
                await generator.generate("prompt", "en")

    def test_llm_is_created_once(self, generator):
        with patch("maternal_care.integrations.llm.ollama.ChatOllama") as chat_cls:
            first = generator.get_llm()
            second = generator.get_llm()

        assert first is second
        chat_cls.assert_called_once_with(
            model="llama3.2:latest",
            base_url="http://localhost:11434",
            temperature=0.7,
            num_predict=200,
        )
