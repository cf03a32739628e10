"""
Task extraction prompt templates.

Defines the two extraction templates (exercise sheets and general task
documents) and the description summary prompt. Supports Langfuse prompt
registry integration.

Dependencies: langchain_core.prompts, langchain_core.output_parsers,
    taskpilot.observability.prompt_registry
System role: Prompt templates for the extraction pipeline
"""

import logging

from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate

from taskpilot.core.task_extraction.models import ExtractedChunkResult, TemplateKind
from taskpilot.observability.prompt_registry.models import ModelConfig
from taskpilot.observability.prompt_registry.registry import PromptRegistry

logger = logging.getLogger(__name__)

EXTRACTION_OUTPUT_PARSER = PydanticOutputParser(pydantic_object=ExtractedChunkResult)

SUMMARY_PROMPT_NAME = "task-description-summary"

EXTRACTION_PROMPT_NAMES: dict[TemplateKind, str] = {
    TemplateKind.EXERCISE_PATTERN: "task-extraction-exercise",
    TemplateKind.GENERAL: "task-extraction-general",
}

EQUATION_RULES = """## Equations
- Wrap every equation or mathematical expression in (/ and /), for example (/ x^2 + 1 /).
- Keep ordinary words outside the delimiters. Split an equation around any words it contains:
  write (/ a_n = 1/n /) for (/ n < 1000 /) rather than (/ a_n = 1/n for n < 1000 /).
- Never leave a (/ without its closing /)."""

EXERCISE_PROMPT_TEMPLATE = """You are a technical writing assistant that turns exercise sheets into checklists.

## Instructions
1. Produce ONE task list containing every exercise in the document.
2. title: use the document's own title if it has one, otherwise name the kind of exercises (e.g. "Calculus Exercises").
3. description: summarise the set of exercises in one or two sentences.
4. tasks: one entry per exercise, in the order they appear, prefixed with the exercise number
   (e.g. "Exercise 3.1: Find the derivative of (/ f(x) = x^2 \\sin(x) /)").
5. Ignore notes, theory, worked examples and any other text that is not an exercise.

""" + EQUATION_RULES + """

## Output
{format_instructions}
Respond with the JSON object only.

## Document
---
{document}
---"""

GENERAL_PROMPT_TEMPLATE = """You are a project manager's assistant that turns documents into task lists.

## Instructions
1. title: a concise name for the task list, preferably the document's title or main topic.
2. description: a brief summary of the overall task list.
3. tasks: every actionable item in the document, one string per todo, in document order.

""" + EQUATION_RULES + """

## Output
{format_instructions}
Respond with the JSON object only.

## Document
---
{document}
---"""

SUMMARY_PROMPT_TEMPLATE = """The following descriptions each summarise one part of the same task list.
Write a single short description (one or two sentences) of the whole task list.
Respond with the description text only.

---
{descriptions}
---"""

_FORMAT_PARTIALS = {"format_instructions": EXTRACTION_OUTPUT_PARSER.get_format_instructions()}

EXERCISE_TASK_PROMPT = PromptTemplate.from_template(
    EXERCISE_PROMPT_TEMPLATE,
    partial_variables=_FORMAT_PARTIALS,
)
GENERAL_TASK_PROMPT = PromptTemplate.from_template(
    GENERAL_PROMPT_TEMPLATE,
    partial_variables=_FORMAT_PARTIALS,
)
DESCRIPTION_SUMMARY_PROMPT = PromptTemplate.from_template(SUMMARY_PROMPT_TEMPLATE)

LOCAL_EXTRACTION_PROMPTS: dict[TemplateKind, PromptTemplate] = {
    TemplateKind.EXERCISE_PATTERN: EXERCISE_TASK_PROMPT,
    TemplateKind.GENERAL: GENERAL_TASK_PROMPT,
}


def get_extraction_prompt(
    kind: TemplateKind,
    registry: PromptRegistry | None = None,
    label: str | None = None,
) -> PromptTemplate:
    """
    Get the extraction prompt template for a template kind.

    Args:
        kind: Template kind chosen by the router
        registry: Optional Langfuse registry to fetch from
        label: Optional label filter when using registry

    Returns:
        PromptTemplate: Template with a single {document} input variable
    """
    if registry is not None and registry.is_enabled:
        prompt = registry.get_langchain_prompt(
            EXTRACTION_PROMPT_NAMES[kind],
            label=label,
            partial_variables=_FORMAT_PARTIALS,
        )
        if prompt is not None:
            logger.debug("Using prompt from registry: kind=%s", kind.value)
            return prompt
        logger.debug("Prompt not found in registry, using local template: kind=%s", kind.value)

    return LOCAL_EXTRACTION_PROMPTS[kind]


def get_summary_prompt(
    registry: PromptRegistry | None = None,
    label: str | None = None,
) -> PromptTemplate:
    """
    Get the description summary prompt template.

    Args:
        registry: Optional Langfuse registry to fetch from
        label: Optional label filter when using registry

    Returns:
        PromptTemplate: Template with a single {descriptions} input variable
    """
    if registry is not None and registry.is_enabled:
        prompt = registry.get_langchain_prompt(SUMMARY_PROMPT_NAME, label=label)
        if prompt is not None:
            return prompt
        logger.debug("Summary prompt not found in registry, using local template")

    return DESCRIPTION_SUMMARY_PROMPT


def register_extraction_prompts(
    registry: PromptRegistry,
    model_id: str,
    temperature: float = 0.0,
    labels: list[str] | None = None,
) -> None:
    """
    Register the extraction and summary prompts with Langfuse.

    Args:
        registry: Prompt registry to register with
        model_id: Gemini model identifier
        temperature: Model temperature
        labels: Optional labels (e.g., ["production", "staging"])
    """
    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    labels = labels or ["development"]
    for kind, template in LOCAL_EXTRACTION_PROMPTS.items():
        registry.register_prompt(
            name=EXTRACTION_PROMPT_NAMES[kind],
            template=template,
            config=ModelConfig(model=model_id, temperature=temperature, template_kind=kind.value),
            labels=labels,
        )

    registry.register_prompt(
        name=SUMMARY_PROMPT_NAME,
        template=DESCRIPTION_SUMMARY_PROMPT,
        config=ModelConfig(model=model_id, temperature=temperature),
        labels=labels,
    )
    logger.info("Registered extraction prompts: count=%d", len(LOCAL_EXTRACTION_PROMPTS) + 1)
