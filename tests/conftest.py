"""
Shared test fixtures and configuration for entire test suite.

Provides: scripted generation client, pipeline settings, chunk results
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import asyncio
import re

import pytest

from taskpilot.core.exceptions import InvalidGenerationResponse
from taskpilot.core.task_extraction.configs import TaskExtractionSettings
from taskpilot.core.task_extraction.models import ExtractedChunkResult

_DOCUMENT_BLOCK = re.compile(r"---\n(.*)\n---", re.DOTALL)


def document_from_prompt(prompt_text: str) -> str:
    """Pull the chunk text back out of a formatted extraction prompt."""
    match = _DOCUMENT_BLOCK.search(prompt_text)
    return match.group(1) if match else prompt_text


class ScriptedExtractionClient:
    """
    In-memory ExtractionClient.

    Results are looked up by a marker string contained in the chunk text.
    Markers listed in ``failures`` raise InvalidGenerationResponse, ``errors``
    maps markers to other exceptions to raise, and ``delays`` holds
    per-marker sleeps used to scramble completion order.
    """

    def __init__(
        self,
        results: dict[str, ExtractedChunkResult],
        delays: dict[str, float] | None = None,
        failures: set[str] | None = None,
        summary: str = "Combined summary",
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.results = results
        self.delays = delays or {}
        self.failures = failures or set()
        self.errors = errors or {}
        self.summary = summary
        self.prompts: list[str] = []
        self.summary_prompts: list[str] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _marker(self, prompt_text: str) -> str:
        document = document_from_prompt(prompt_text)
        for marker in self.results:
            if marker in document:
                return marker
        for marker in self.failures:
            if marker in document:
                return marker
        raise AssertionError(f"No scripted result for chunk: {document[:40]!r}")

    def execute(self, prompt_text: str) -> ExtractedChunkResult:
        self.prompts.append(prompt_text)
        marker = self._marker(prompt_text)
        if marker in self.failures:
            raise InvalidGenerationResponse("Received empty response from the model")
        return self.results[marker]

    async def aexecute(self, prompt_text: str) -> ExtractedChunkResult:
        self.prompts.append(prompt_text)
        marker = self._marker(prompt_text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(marker, 0))
            if marker in self.failures:
                raise InvalidGenerationResponse("Received empty response from the model")
            if marker in self.errors:
                raise self.errors[marker]
            self.completed.append(marker)
            return self.results[marker]
        except asyncio.CancelledError:
            self.cancelled.append(marker)
            raise
        finally:
            self.in_flight -= 1

    def summarize(self, prompt_text: str) -> str:
        self.summary_prompts.append(prompt_text)
        return self.summary

    async def asummarize(self, prompt_text: str) -> str:
        self.summary_prompts.append(prompt_text)
        return self.summary


@pytest.fixture
def pipeline_settings() -> TaskExtractionSettings:
    """Pipeline settings with a small chunk budget and no external services."""
    return TaskExtractionSettings(
        chunk_budget=60,
        max_concurrency=4,
        request_timeout_seconds=2.0,
        google_api_key="test-key",
        use_prompt_registry=False,
    )


@pytest.fixture
def chunk_results() -> dict[str, ExtractedChunkResult]:
    """Three chunk results keyed by the marker in their chunk text."""
    return {
        "ALPHA": ExtractedChunkResult(
            title="Calculus Exercises",
            description="Derivatives",
            tasks=["Exercise 1.1: Differentiate (/x^2/)", "Exercise 1.2: Differentiate (/\\sin x/)"],
        ),
        "BRAVO": ExtractedChunkResult(
            title="Ignored title",
            description="Integrals",
            tasks=["Exercise 2.1: Integrate (/\\ln x/) from 1 to (/e/)"],
        ),
        "CHARLIE": ExtractedChunkResult(
            title="Also ignored",
            description="Limits",
            tasks=["Exercise 3.1: Evaluate (/\\lim_{n \\to 0} n/)", "  ", "Exercise 3.2: Prove it"],
        ),
    }


@pytest.fixture
def make_client(chunk_results):
    """Factory for scripted clients over the shared chunk results."""

    def _make(**kwargs) -> ScriptedExtractionClient:
        return ScriptedExtractionClient(chunk_results, **kwargs)

    return _make
