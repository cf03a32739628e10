"""
Document classification and prompt routing.

Classifies a whole document once and maps the resulting TemplateKind to its
extraction prompt. Every chunk of a document uses the same template.

Dependencies: re, taskpilot.core.task_extraction.prompts
System role: Template selection for the task extraction pipeline
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

from langchain_core.prompts import PromptTemplate

from taskpilot.core.task_extraction.models import TemplateKind
from taskpilot.core.task_extraction.prompts import get_extraction_prompt
from taskpilot.observability.prompt_registry.registry import PromptRegistry

logger = logging.getLogger(__name__)

EXERCISE_PATTERN = re.compile(r"exercise\s+\d+(\.\d+)*", re.IGNORECASE)

# Checked in order; the first matching predicate wins, GENERAL otherwise
ROUTES: tuple[tuple[Callable[[str], bool], TemplateKind], ...] = (
    (lambda text: EXERCISE_PATTERN.search(text) is not None, TemplateKind.EXERCISE_PATTERN),
)


def classify(text: str) -> TemplateKind:
    """
    Classify a full document.

    Args:
        text: Entire document text (never a single chunk)

    Returns:
        TemplateKind: EXERCISE_PATTERN if "Exercise <n>[.<n>...]" appears anywhere,
            GENERAL otherwise
    """
    for predicate, kind in ROUTES:
        if predicate(text):
            return kind
    return TemplateKind.GENERAL


@dataclass(frozen=True)
class RoutingDecision:
    """Template chosen for a document."""

    kind: TemplateKind
    template: PromptTemplate

    def format(self, chunk_text: str) -> str:
        """Render the prompt text for one chunk."""
        return self.template.format(document=chunk_text)


class PromptRouter:
    """Select the extraction template for a document."""

    def __init__(
        self,
        registry: PromptRegistry | None = None,
        prompt_label: str | None = None,
    ) -> None:
        """
        Initialize router.

        Args:
            registry: Optional Langfuse registry for versioned prompts
            prompt_label: Optional label filter when using registry
        """
        self._registry = registry
        self._prompt_label = prompt_label

    def classify(self, text: str) -> TemplateKind:
        return classify(text)

    def route(self, text: str) -> RoutingDecision:
        """
        Classify the document and resolve its prompt template.

        Args:
            text: Entire document text

        Returns:
            RoutingDecision: Kind plus the template to apply to every chunk
        """
        kind = classify(text)
        if kind is TemplateKind.EXERCISE_PATTERN:
            logger.info(f"{__name__}:route - Detected exercise pattern, using exercise prompt")
        else:
            logger.info(f"{__name__}:route - No exercise pattern, using general prompt")

        template = get_extraction_prompt(
            kind,
            registry=self._registry,
            label=self._prompt_label,
        )
        return RoutingDecision(kind=kind, template=template)
