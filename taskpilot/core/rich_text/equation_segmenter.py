"""
Inline equation tokenizer.

Splits a task string such as "Solve (/E=mc^2/) for m." into ordered text and
equation segments. Segments keep every character of the input, so
join_segments(segment(s)) == s for any s.

Dependencies: taskpilot.core.rich_text.models, taskpilot.core.exceptions
System role: Rich text conversion for extracted tasks
"""

import logging
from typing import Literal

from taskpilot.core.exceptions import MalformedEquationMarkup
from taskpilot.core.rich_text.models import EquationSegment, RichSegment, TextSegment

logger = logging.getLogger(__name__)

OPEN_MARKER = "(/"
CLOSE_MARKER = "/)"

UnmatchedPolicy = Literal["text", "error"]


class EquationSegmenter:
    """
    Two-state scanner over a fixed open/close delimiter pair.

    Unmatched open markers are handled by ``unmatched_policy``:
    "text" keeps the marker and the rest of the string as literal text,
    "error" raises MalformedEquationMarkup.
    """

    def __init__(
        self,
        open_marker: str = OPEN_MARKER,
        close_marker: str = CLOSE_MARKER,
        unmatched_policy: UnmatchedPolicy = "text",
    ) -> None:
        if not open_marker or not close_marker:
            raise ValueError("Equation delimiters must be non-empty")
        if unmatched_policy not in ("text", "error"):
            raise ValueError(f"Unknown unmatched_policy: {unmatched_policy}")

        self.open_marker = open_marker
        self.close_marker = close_marker
        self.unmatched_policy = unmatched_policy

    def segment(self, text: str) -> list[RichSegment]:
        """
        Tokenize a task string into text and equation segments.

        Args:
            text: Task string with inline equation markup

        Returns:
            list[RichSegment]: Segments in input order; empty for empty input

        Raises:
            MalformedEquationMarkup: Open marker never closed and policy is "error"
        """
        segments: list[RichSegment] = []
        inside = False
        position = 0
        open_at = 0

        while position < len(text):
            if not inside:
                start = text.find(self.open_marker, position)
                if start == -1:
                    break
                if start > position:
                    segments.append(TextSegment(content=text[position:start]))
                open_at = start
                position = start + len(self.open_marker)
                inside = True
            else:
                end = text.find(self.close_marker, position)
                if end == -1:
                    break
                segments.append(EquationSegment(expression=text[position:end]))
                position = end + len(self.close_marker)
                inside = False

        if inside:
            return self._handle_unmatched(segments, text, open_at)

        if position < len(text):
            segments.append(TextSegment(content=text[position:]))
        return segments

    def join(self, segments: list[RichSegment]) -> str:
        """Rebuild the task string, re-inserting delimiters around equations."""
        parts = []
        for segment in segments:
            if isinstance(segment, EquationSegment):
                parts.append(f"{self.open_marker}{segment.expression}{self.close_marker}")
            else:
                parts.append(segment.content)
        return "".join(parts)

    def _handle_unmatched(
        self,
        segments: list[RichSegment],
        text: str,
        open_at: int,
    ) -> list[RichSegment]:
        if self.unmatched_policy == "error":
            raise MalformedEquationMarkup(open_at, self.open_marker)

        logger.debug(
            f"{__name__}:segment - Unterminated equation at offset {open_at}, keeping as text"
        )
        tail = text[open_at:]
        # Merge with the text flushed right before the open marker
        if segments and isinstance(segments[-1], TextSegment):
            tail = segments.pop().content + tail
        segments.append(TextSegment(content=tail))
        return segments


_default_segmenter = EquationSegmenter()


def segment(text: str) -> list[RichSegment]:
    """Tokenize with the default "(/" "/)" delimiters and literal-text policy."""
    return _default_segmenter.segment(text)


def join_segments(segments: list[RichSegment]) -> str:
    """Inverse of segment() for the default delimiters."""
    return _default_segmenter.join(segments)
