"""
Task extraction pipeline orchestrator.

Coordinates chunking, routing, concurrent per-chunk extraction, merging and
rich text conversion.

Dependencies: All task modules, configs, taskpilot.core.rich_text
System role: Pipeline orchestration (coordinates only)
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

from taskpilot.configs import get_settings
from taskpilot.core.exceptions import (
    ChunkCountMismatch,
    GenerationTimeoutError,
    InvalidGenerationResponse,
)
from taskpilot.core.rich_text import EquationSegmenter, build_todo_items
from taskpilot.observability.correlation import clear_correlation_id, set_correlation_id
from taskpilot.observability.logger import configure_logging
from taskpilot.observability.prompt_registry.registry import PromptRegistry

from .configs import TaskExtractionSettings, get_extraction_settings
from .models import Chunk, ExtractedChunkResult, PipelineResult
from .prompts import get_summary_prompt
from .tasks import (
    DocumentChunker,
    ExtractionClient,
    GeminiExtractionClient,
    PromptRouter,
    ResultMerger,
    RoutingDecision,
)

logger = logging.getLogger(__name__)


def collect_in_order(
    chunks: list[Chunk],
    outcomes: list[tuple[int, ExtractedChunkResult]],
) -> list[ExtractedChunkResult]:
    """
    Order per-chunk results by chunk index.

    Args:
        chunks: Chunks that were dispatched
        outcomes: (chunk index, result) pairs in any order

    Returns:
        list[ExtractedChunkResult]: Results in chunk order

    Raises:
        ChunkCountMismatch: Results missing, duplicated or for unknown chunks
    """
    by_index = dict(outcomes)
    expected = {chunk.index for chunk in chunks}
    if len(outcomes) != len(chunks) or set(by_index) != expected:
        raise ChunkCountMismatch(
            expected=len(chunks),
            received=len(outcomes),
            details={"missing": sorted(expected - set(by_index))},
        )
    return [by_index[index] for index in sorted(expected)]


class TaskExtractionPipeline:
    """Orchestrate task extraction: chunk -> route -> extract -> merge -> segment."""

    def __init__(
        self,
        settings: TaskExtractionSettings | None = None,
        client: ExtractionClient | None = None,
        registry: PromptRegistry | None = None,
        segmenter: EquationSegmenter | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Pipeline settings (uses environment defaults if None)
            client: Generation client (Gemini client built from settings if None)
            registry: Prompt registry (built from settings when enabled and None)
            segmenter: Equation segmenter for todo conversion
        """
        self._settings = settings or get_extraction_settings()

        if registry is None and self._settings.use_prompt_registry:
            registry = PromptRegistry(get_settings().observability)
        self._registry = registry

        self._client = client or GeminiExtractionClient(
            model_id=self._settings.model_id,
            temperature=self._settings.temperature,
            google_api_key=self._settings.google_api_key,
            timeout=self._settings.request_timeout_seconds,
        )
        self._chunker = DocumentChunker(budget=self._settings.chunk_budget)
        self._router = PromptRouter(
            registry=self._registry,
            prompt_label=self._settings.prompt_label,
        )
        self._merger = ResultMerger(
            client=self._client,
            summary_prompt=get_summary_prompt(self._registry, self._settings.prompt_label),
            timeout_seconds=self._settings.request_timeout_seconds,
            summary_fallback=self._settings.summary_fallback,
        )
        self._segmenter = segmenter or EquationSegmenter()

    def process(
        self,
        text: str,
        equation_aware: bool = False,
        correlation_id: str | None = None,
    ) -> PipelineResult | None:
        """
        Process a document synchronously.

        Must not be called from a running event loop; use aprocess() there.
        """
        return asyncio.run(self.aprocess(text, equation_aware, correlation_id))

    async def aprocess(
        self,
        text: str,
        equation_aware: bool = False,
        correlation_id: str | None = None,
    ) -> PipelineResult | None:
        """
        Process a document through the full pipeline.

        Args:
            text: Plain document text
            equation_aware: Upstream text came from the equation-aware extractor
            correlation_id: Optional ID for log correlation (generated if None)

        Returns:
            PipelineResult | None: Extracted task list, None for a blank document

        Raises:
            InvalidGenerationResponse: A chunk extraction failed (chunk_index set)
            GenerationTimeoutError: A chunk extraction timed out
            ChunkCountMismatch: Results could not be matched to chunks
        """
        run_id = set_correlation_id(correlation_id)
        start_time = time.perf_counter()
        try:
            logger.info(
                f"{__name__}:aprocess - START run_id={run_id}, text_len={len(text)}, "
                f"equation_aware={equation_aware}"
            )

            if not text or not text.strip():
                logger.info(f"{__name__}:aprocess - Empty document, no tasks found")
                return None

            chunks = self._chunker.chunk(text)
            decision = self._router.route(text)
            logger.info(
                f"{__name__}:aprocess - {len(chunks)} chunks, template={decision.kind.value}"
            )

            outcomes = await self._extract_all(chunks, decision)
            results = collect_in_order(chunks, outcomes)

            document = await self._merger.amerge(results)
            if document is None:
                return None

            todos = build_todo_items(document.tasks, self._segmenter)
            elapsed_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                f"{__name__}:aprocess - END tasks={len(document.tasks)}, "
                f"todos={len(todos)}, elapsed_ms={elapsed_ms:.0f}"
            )
            return PipelineResult(
                document=document,
                todos=todos,
                template_kind=decision.kind,
                chunk_count=len(chunks),
                equation_aware=equation_aware,
                processing_time_ms=elapsed_ms,
            )
        finally:
            clear_correlation_id()

    async def _extract_all(
        self,
        chunks: list[Chunk],
        decision: RoutingDecision,
    ) -> list[tuple[int, ExtractedChunkResult]]:
        """Run every chunk concurrently; cancel the rest on the first failure."""
        semaphore = asyncio.Semaphore(self._settings.max_concurrency)
        tasks = [
            asyncio.create_task(
                self._extract_chunk(chunk, decision, semaphore),
                name=f"extract-chunk-{chunk.index}",
            )
            for chunk in chunks
        ]

        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            in_flight = [task for task in tasks if not task.done()]
            for task in in_flight:
                task.cancel()
            if in_flight:
                logger.warning(f"{__name__}:_extract_all - Cancelling {len(in_flight)} in-flight chunks")
                await asyncio.gather(*in_flight, return_exceptions=True)

        failures = [
            (chunk.index, task.exception())
            for chunk, task in zip(chunks, tasks)
            if not task.cancelled() and task.exception() is not None
        ]
        if failures:
            chunk_index, error = min(failures, key=lambda failure: failure[0])
            logger.error(
                f"{__name__}:_extract_all - Chunk {chunk_index} FAILED - "
                f"{type(error).__name__}: {error}"
            )
            raise error

        return [task.result() for task in tasks]

    async def _extract_chunk(
        self,
        chunk: Chunk,
        decision: RoutingDecision,
        semaphore: asyncio.Semaphore,
    ) -> tuple[int, ExtractedChunkResult]:
        async with semaphore:
            timeout = self._settings.request_timeout_seconds
            logger.debug(f"{__name__}:_extract_chunk - Chunk {chunk.index} ({len(chunk.text)} chars)")
            try:
                result = await asyncio.wait_for(
                    self._client.aexecute(decision.format(chunk.text)),
                    timeout=timeout,
                )
            except asyncio.TimeoutError as e:
                raise GenerationTimeoutError(timeout, chunk_index=chunk.index) from e
            except InvalidGenerationResponse as e:
                raise e.attach_chunk_index(chunk.index)
            except Exception as e:
                e.add_note(f"chunk_index={chunk.index}")
                raise

            logger.debug(f"{__name__}:_extract_chunk - Chunk {chunk.index} OK: {len(result.tasks)} tasks")
            return chunk.index, result


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline on a text file and print the result as JSON."""
    parser = argparse.ArgumentParser(description="Extract a task list from a text document.")
    parser.add_argument("path", type=Path, help="Plain text document")
    parser.add_argument("--equation-aware", action="store_true", help="Text came from the equation-aware extractor")
    args = parser.parse_args(argv)

    configure_logging(get_settings().effective_log_level)
    result = TaskExtractionPipeline().process(
        args.path.read_text(encoding="utf-8"),
        equation_aware=args.equation_aware,
    )
    if result is None:
        print("No tasks found")
        return 0
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
