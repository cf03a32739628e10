"""
Todo item construction.

Turns the merged task strings into unchecked TodoItems made of rich text
segments, ready for a page-building collaborator.

Dependencies: taskpilot.core.rich_text
System role: Final stage of the extraction pipeline
"""

from taskpilot.core.rich_text.equation_segmenter import EquationSegmenter
from taskpilot.core.rich_text.models import TodoItem


def build_todo_items(
    tasks: list[str],
    segmenter: EquationSegmenter | None = None,
) -> list[TodoItem]:
    """
    Build todo items from task strings, preserving order.

    Tasks are trimmed and blank tasks are skipped.

    Args:
        tasks: Task strings from the merged document
        segmenter: Segmenter to use (default delimiters if None)

    Returns:
        list[TodoItem]: One unchecked item per non-blank task

    Raises:
        MalformedEquationMarkup: Propagated from a strict segmenter
    """
    segmenter = segmenter or EquationSegmenter()
    return [
        TodoItem(segments=segmenter.segment(task.strip()), checked=False)
        for task in tasks
        if task and task.strip()
    ]
