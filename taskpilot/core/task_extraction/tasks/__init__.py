"""
Task modules for the task extraction pipeline.

Exports: DocumentChunker, PromptRouter, ExtractionClient, GeminiExtractionClient, ResultMerger
"""

from .chunking_task import DocumentChunker, split_paragraphs
from .extraction_task import ExtractionClient, GeminiExtractionClient
from .merging_task import ResultMerger
from .routing_task import PromptRouter, RoutingDecision, classify

__all__ = [
    "DocumentChunker",
    "split_paragraphs",
    "PromptRouter",
    "RoutingDecision",
    "classify",
    "ExtractionClient",
    "GeminiExtractionClient",
    "ResultMerger",
]
