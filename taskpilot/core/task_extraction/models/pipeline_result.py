"""
Pipeline result model for task extraction.

Represents the outcome of running a document through the pipeline: the merged
task list plus the rich-text todos derived from it.

Dependencies: pydantic
System role: Return type for TaskExtractionPipeline.process()
"""

from pydantic import BaseModel, Field

from taskpilot.core.rich_text.models import TodoItem
from taskpilot.core.task_extraction.models.extraction import MergedDocument, TemplateKind


class PipelineResult(BaseModel):
    """Result of task extraction pipeline execution."""

    document: MergedDocument = Field(description="Merged title, description and tasks")
    todos: list[TodoItem] = Field(default_factory=list, description="Segmented todo items")
    template_kind: TemplateKind = Field(description="Template used for every chunk")
    chunk_count: int = Field(description="Number of chunks sent for extraction")
    equation_aware: bool = Field(
        default=False,
        description="Whether upstream text came from the equation-aware extractor",
    )
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
