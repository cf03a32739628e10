"""
Structured extraction against the text-generation service.

Defines the ExtractionClient interface consumed by the pipeline and its
Google Gemini implementation. The Gemini client normalises message content,
strips Markdown code fences and validates the JSON payload before anything
reaches the core.

Dependencies: langchain_google_genai, langchain_core
System role: Boundary to the external generation capability
"""

import logging
from typing import Any, Protocol, runtime_checkable

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from taskpilot.core.exceptions import InvalidGenerationResponse
from taskpilot.core.task_extraction.models import ExtractedChunkResult
from taskpilot.core.task_extraction.prompts import EXTRACTION_OUTPUT_PARSER

logger = logging.getLogger(__name__)


@runtime_checkable
class ExtractionClient(Protocol):
    """Generation capability used by the pipeline and the merger."""

    def execute(self, prompt_text: str) -> ExtractedChunkResult:
        """Run one extraction prompt and return the structured result."""
        ...

    async def aexecute(self, prompt_text: str) -> ExtractedChunkResult:
        """Async version of execute."""
        ...

    def summarize(self, prompt_text: str) -> str:
        """Run a free-text prompt and return the generated text."""
        ...

    async def asummarize(self, prompt_text: str) -> str:
        """Async version of summarize."""
        ...


def message_text(message: BaseMessage | str) -> str:
    """
    Flatten model output to plain text.

    Gemini may return content as a list of parts (strings or dicts with a
    "text" key) instead of a single string.

    Args:
        message: Chat model output

    Returns:
        str: Concatenated text content
    """
    content: Any = message.content if isinstance(message, BaseMessage) else message
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class GeminiExtractionClient:
    """ExtractionClient backed by a LangChain Google Gemini chat model."""

    def __init__(
        self,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        google_api_key: str | None = None,
        timeout: float | None = None,
        model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize Gemini client.

        Args:
            model_id: Google Gemini model identifier
            temperature: Model temperature (0.0 for deterministic)
            google_api_key: API key; GOOGLE_API_KEY is used when None
            timeout: Per-request timeout passed to the SDK
            model: Pre-built chat model (overrides the other arguments)
        """
        self._model_id = model_id
        if model is None:
            kwargs: dict[str, Any] = {"model": model_id, "temperature": temperature}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            if timeout is not None:
                kwargs["timeout"] = timeout
            model = ChatGoogleGenerativeAI(**kwargs)
        self._model = model

    def execute(self, prompt_text: str) -> ExtractedChunkResult:
        """
        Run an extraction prompt.

        Args:
            prompt_text: Fully formatted extraction prompt

        Returns:
            ExtractedChunkResult: Validated structured output

        Raises:
            InvalidGenerationResponse: Empty or unparseable model output
        """
        logger.info(f"{__name__}:execute - Executing prompt with {self._model_id} (len={len(prompt_text)})")
        return self._parse_result(self._model.invoke(prompt_text))

    async def aexecute(self, prompt_text: str) -> ExtractedChunkResult:
        """Async version of execute."""
        logger.info(f"{__name__}:aexecute - Executing prompt with {self._model_id} (len={len(prompt_text)})")
        return self._parse_result(await self._model.ainvoke(prompt_text))

    def summarize(self, prompt_text: str) -> str:
        """
        Run a summary prompt.

        Args:
            prompt_text: Fully formatted summary prompt

        Returns:
            str: Generated summary, stripped

        Raises:
            InvalidGenerationResponse: Empty model output
        """
        logger.info(f"{__name__}:summarize - Executing summary prompt with {self._model_id}")
        return self._parse_text(self._model.invoke(prompt_text))

    async def asummarize(self, prompt_text: str) -> str:
        """Async version of summarize."""
        logger.info(f"{__name__}:asummarize - Executing summary prompt with {self._model_id}")
        return self._parse_text(await self._model.ainvoke(prompt_text))

    def _parse_text(self, message: BaseMessage) -> str:
        text = message_text(message).strip()
        if not text:
            raise InvalidGenerationResponse("Received empty response from Gemini")
        return text

    def _parse_result(self, message: BaseMessage) -> ExtractedChunkResult:
        content = self._parse_text(message)
        logger.debug(f"{__name__}:_parse_result - Raw content: {content[:200]}")
        try:
            return EXTRACTION_OUTPUT_PARSER.parse(content)
        except OutputParserException as e:
            logger.error(f"{__name__}:_parse_result - Unparseable response: {e}")
            raise InvalidGenerationResponse(
                "Failed to parse generation response",
                details={"content_preview": content[:200]},
            ) from e
