"""
Task extraction pipeline.

Self-contained module for chunking, routing, extracting and merging task
lists from document text.

Dependencies: langchain_core, langchain_google_genai, pydantic, pydantic_settings
System role: Task extraction pipeline entrypoint
"""

from .configs import (
    TaskExtractionSettings,
    get_extraction_settings,
)
from .entrypoint import TaskExtractionPipeline, collect_in_order
from .models import (
    Chunk,
    ExtractedChunkResult,
    MergedDocument,
    PipelineResult,
    TemplateKind,
)

__all__ = [
    "TaskExtractionPipeline",
    "collect_in_order",
    "TaskExtractionSettings",
    "get_extraction_settings",
    "Chunk",
    "ExtractedChunkResult",
    "MergedDocument",
    "PipelineResult",
    "TemplateKind",
]
