"""
Models for the task extraction pipeline.

Exports: Chunk, TemplateKind, ExtractedChunkResult, MergedDocument, PipelineResult
"""

from .chunk import Chunk
from .extraction import ExtractedChunkResult, MergedDocument, TemplateKind
from .pipeline_result import PipelineResult

__all__ = [
    "Chunk",
    "TemplateKind",
    "ExtractedChunkResult",
    "MergedDocument",
    "PipelineResult",
]
