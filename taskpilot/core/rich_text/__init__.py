"""
Rich text conversion for extracted tasks.

Exports: EquationSegmenter, segment, join_segments, build_todo_items,
TextSegment, EquationSegment, RichSegment, TodoItem
"""

from .equation_segmenter import EquationSegmenter, join_segments, segment
from .models import EquationSegment, RichSegment, TextSegment, TodoItem
from .todo_builder import build_todo_items

__all__ = [
    "EquationSegmenter",
    "segment",
    "join_segments",
    "build_todo_items",
    "TextSegment",
    "EquationSegment",
    "RichSegment",
    "TodoItem",
]
