"""
Extraction schemas.

Defines the template classification, the structured output expected from
the generation service for one chunk, and the merged document.

Dependencies: pydantic
System role: Structured output schema definitions
"""

from enum import Enum

from pydantic import BaseModel, Field


class TemplateKind(str, Enum):
    """Extraction template selected once per document."""

    EXERCISE_PATTERN = "exercise_pattern"
    GENERAL = "general"


class ExtractedChunkResult(BaseModel):
    """Structured task list extracted from a single chunk."""

    title: str = Field(description="Concise name for the task list, taken from the document title or topic")
    description: str = Field(description="Brief summary of the tasks in this part of the document")
    tasks: list[str] = Field(
        default_factory=list,
        description="Individual tasks in document order; math wrapped in (/ /)",
    )


class MergedDocument(BaseModel):
    """Task list assembled from every chunk of a document."""

    title: str = Field(description="Title taken from the first chunk")
    description: str = Field(description="Description of the whole document")
    tasks: list[str] = Field(default_factory=list, description="Tasks in chunk order")
