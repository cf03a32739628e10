"""
Deterministic merge of per-chunk extraction results.

Combines ordered chunk results into one document: the first title, every
task in chunk order, and a description summarised by one extra generation
call when there is more than one chunk.

Dependencies: asyncio, taskpilot.core.task_extraction.tasks.extraction_task
System role: Final join point of the task extraction pipeline
"""

import asyncio
import logging

from langchain_core.prompts import PromptTemplate

from taskpilot.core.exceptions import GenerationTimeoutError, InvalidGenerationResponse
from taskpilot.core.task_extraction.models import ExtractedChunkResult, MergedDocument
from taskpilot.core.task_extraction.prompts import DESCRIPTION_SUMMARY_PROMPT
from taskpilot.core.task_extraction.tasks.extraction_task import ExtractionClient

logger = logging.getLogger(__name__)


class ResultMerger:
    """Merge ordered ExtractedChunkResults into a MergedDocument."""

    def __init__(
        self,
        client: ExtractionClient,
        summary_prompt: PromptTemplate = DESCRIPTION_SUMMARY_PROMPT,
        timeout_seconds: float | None = None,
        summary_fallback: bool = True,
    ) -> None:
        """
        Initialize merger.

        Args:
            client: Generation client used for the description summary
            summary_prompt: Template with a {descriptions} variable
            timeout_seconds: Timeout for the async summary call (None for no limit)
            summary_fallback: Use the first description when the summary call fails
        """
        self._client = client
        self._summary_prompt = summary_prompt
        self._timeout_seconds = timeout_seconds
        self._summary_fallback = summary_fallback

    def merge(self, results: list[ExtractedChunkResult]) -> MergedDocument | None:
        """
        Merge results synchronously.

        Args:
            results: Per-chunk results in chunk order

        Returns:
            MergedDocument | None: Merged document, None when there are no results
        """
        if not results:
            return None
        if len(results) == 1:
            return self._assemble(results, results[0].description)

        try:
            description = self._client.summarize(self._summary_text(results))
        except InvalidGenerationResponse as e:
            description = self._fallback_description(results, e)
        return self._assemble(results, description)

    async def amerge(self, results: list[ExtractedChunkResult]) -> MergedDocument | None:
        """
        Async version of merge.

        The summary call honours the configured timeout.
        """
        if not results:
            return None
        if len(results) == 1:
            return self._assemble(results, results[0].description)

        try:
            description = await self._asummarize(self._summary_text(results))
        except InvalidGenerationResponse as e:
            description = self._fallback_description(results, e)
        return self._assemble(results, description)

    async def _asummarize(self, prompt_text: str) -> str:
        if self._timeout_seconds is None:
            return await self._client.asummarize(prompt_text)
        try:
            return await asyncio.wait_for(
                self._client.asummarize(prompt_text),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(self._timeout_seconds) from e

    def _summary_text(self, results: list[ExtractedChunkResult]) -> str:
        descriptions = "\n".join(result.description for result in results)
        logger.info(
            f"{__name__}:merge - Summarising {len(results)} chunk descriptions "
            f"({len(descriptions)} chars)"
        )
        return self._summary_prompt.format(descriptions=descriptions)

    def _fallback_description(
        self,
        results: list[ExtractedChunkResult],
        error: InvalidGenerationResponse,
    ) -> str:
        if not self._summary_fallback:
            logger.error(f"{__name__}:merge - Summary call failed: {error}")
            raise error
        logger.warning(
            f"{__name__}:merge - Summary call failed ({type(error).__name__}: {error}), "
            "using first chunk description"
        )
        return results[0].description

    @staticmethod
    def _assemble(results: list[ExtractedChunkResult], description: str) -> MergedDocument:
        tasks = [task for result in results for task in result.tasks]
        return MergedDocument(title=results[0].title, description=description, tasks=tasks)
