"""
Paragraph-aware document chunking.

Splits raw document text into ordered chunks no longer than a character
budget. Chunk texts concatenate back to the original document.

Dependencies: taskpilot.core.task_extraction.models
System role: First stage of the task extraction pipeline
"""

import logging
import re

from taskpilot.core.task_extraction.models import Chunk

logger = logging.getLogger(__name__)

# A paragraph runs up to and including the blank line(s) that end it
_PARAGRAPH = re.compile(r".*?(?:\n[ \t]*\n\s*|\Z)", re.DOTALL)


def split_paragraphs(text: str) -> list[str]:
    """
    Split text into paragraphs, each keeping its trailing blank-line separator.

    Args:
        text: Raw document text

    Returns:
        list[str]: Paragraphs whose concatenation equals ``text``
    """
    return [match.group(0) for match in _PARAGRAPH.finditer(text) if match.group(0)]


class DocumentChunker:
    """Greedy paragraph packer with a hard-split fallback."""

    def __init__(self, budget: int = 10000) -> None:
        """
        Initialize chunker.

        Args:
            budget: Maximum chunk size in characters
        """
        if budget <= 0:
            raise ValueError("Chunk budget must be positive")
        self._budget = budget

    @property
    def budget(self) -> int:
        return self._budget

    def chunk(self, text: str) -> list[Chunk]:
        """
        Split document text into ordered chunks.

        Empty text yields no chunks. Text within the budget yields exactly one.
        Otherwise paragraphs are packed greedily; a paragraph longer than the
        budget is cut at budget-sized offsets regardless of sentence or word
        boundaries, and its tail may share a chunk with following paragraphs.

        Args:
            text: Raw document text

        Returns:
            list[Chunk]: Chunks with contiguous indices starting at 0
        """
        if not text:
            return []

        if len(text) <= self._budget:
            return [Chunk(index=0, text=text)]

        pieces: list[str] = []
        current = ""
        for paragraph in split_paragraphs(text):
            if len(current) + len(paragraph) <= self._budget:
                current += paragraph
                continue

            if current:
                pieces.append(current)
                current = ""

            while len(paragraph) > self._budget:
                pieces.append(paragraph[: self._budget])
                paragraph = paragraph[self._budget :]
            current = paragraph

        if current:
            pieces.append(current)

        logger.debug(
            f"{__name__}:chunk - Split {len(text)} chars into {len(pieces)} chunks "
            f"(budget={self._budget})"
        )
        return [Chunk(index=i, text=piece) for i, piece in enumerate(pieces)]
