"""
Test suite for inline equation segmentation.

Covers scenario strings, delimiter edge cases, unmatched markers under both
policies, and the join_segments round trip.

System role: Verification of rich text tokenizer
"""

import pytest
from pydantic import ValidationError

from taskpilot.core.exceptions import MalformedEquationMarkup
from taskpilot.core.rich_text import (
    EquationSegment,
    EquationSegmenter,
    TextSegment,
    join_segments,
    segment,
)


class TestSegmentScenarios:
    """Documented segmentation examples."""

    def test_equation_in_middle(self) -> None:
        """Text, equation, text."""
        assert segment("1. Solve (/E=mc^2/) for m.") == [
            TextSegment(content="1. Solve "),
            EquationSegment(expression="E=mc^2"),
            TextSegment(content=" for m."),
        ]

    def test_equation_at_start_has_no_leading_text(self) -> None:
        """Leading equation produces no empty text segment."""
        assert segment("(/c/) starts here.") == [
            EquationSegment(expression="c"),
            TextSegment(content=" starts here."),
        ]

    def test_pure_text_is_single_segment(self) -> None:
        """Text without markup is returned whole."""
        assert segment("no equations here") == [TextSegment(content="no equations here")]

    def test_equation_at_end_has_no_trailing_text(self) -> None:
        """Trailing equation produces no empty text segment."""
        assert segment("ends with (/b/)") == [
            TextSegment(content="ends with "),
            EquationSegment(expression="b"),
        ]

    def test_multiple_equations(self) -> None:
        """Text and equations alternate in order."""
        result = segment("2. This task starts with text (/a/) and ends with an equation (/b/).")

        assert [type(s) for s in result] == [
            TextSegment, EquationSegment, TextSegment, EquationSegment, TextSegment,
        ]
        assert result[1].expression == "a"
        assert result[2].content == " and ends with an equation "
        assert result[4].content == "."

    def test_back_to_back_equations(self) -> None:
        """Adjacent equations have no text segment between them."""
        assert segment("(/a/)(/b/)") == [
            EquationSegment(expression="a"),
            EquationSegment(expression="b"),
        ]

    def test_spaces_inside_delimiters_are_kept(self) -> None:
        """Expressions are not trimmed."""
        assert segment("(/ E = mc^2 /)") == [EquationSegment(expression=" E = mc^2 ")]


class TestSegmentEdgeCases:
    """Boundary inputs."""

    def test_empty_string_yields_no_segments(self) -> None:
        assert segment("") == []

    def test_empty_equation_is_kept(self) -> None:
        """An empty expression survives so the round trip holds."""
        assert segment("x(//)y") == [
            TextSegment(content="x"),
            EquationSegment(expression=""),
            TextSegment(content="y"),
        ]

    def test_stray_close_marker_is_text(self) -> None:
        """A close marker outside an equation is literal text."""
        assert segment("a/) b") == [TextSegment(content="a/) b")]

    def test_nested_open_marker_belongs_to_expression(self) -> None:
        """A second open marker inside an equation is part of the expression."""
        assert segment("(/x (/ y/) z") == [
            EquationSegment(expression="x (/ y"),
            TextSegment(content=" z"),
        ]

    def test_marker_halves_do_not_match(self) -> None:
        """Overlapping open and close markers are not an empty equation."""
        assert segment("(/)") == [TextSegment(content="(/)")]

    def test_no_text_segment_is_empty(self) -> None:
        """TextSegment rejects empty content."""
        with pytest.raises(ValidationError):
            TextSegment(content="")


class TestUnmatchedDelimiters:
    """Unterminated open markers."""

    def test_text_policy_keeps_marker_as_literal_text(self) -> None:
        """The unterminated tail merges with the preceding text."""
        assert segment("Solve (/x + 1 for x") == [TextSegment(content="Solve (/x + 1 for x")]

    def test_text_policy_after_complete_equation(self) -> None:
        """Earlier equations are kept when a later one is unterminated."""
        assert segment("(/a/) then (/b") == [
            EquationSegment(expression="a"),
            TextSegment(content=" then (/b"),
        ]

    def test_text_policy_unterminated_at_start(self) -> None:
        assert segment("(/a") == [TextSegment(content="(/a")]

    def test_error_policy_raises_with_position(self) -> None:
        """Strict segmenter reports the marker offset."""
        segmenter = EquationSegmenter(unmatched_policy="error")

        with pytest.raises(MalformedEquationMarkup) as exc_info:
            segmenter.segment("ok (/a/) bad (/b")

        assert exc_info.value.position == 13
        assert exc_info.value.details["position"] == 13

    def test_error_policy_accepts_well_formed_input(self) -> None:
        segmenter = EquationSegmenter(unmatched_policy="error")
        assert segmenter.segment("(/a/)") == [EquationSegment(expression="a")]

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            EquationSegmenter(unmatched_policy="ignore")


class TestRoundTrip:
    """join_segments reverses segment."""

    @pytest.mark.parametrize(
        "text",
        [
            "1. Solve (/E=mc^2/) for m.",
            "(/c/) starts here.",
            "(/a/)(/b/)",
            "x(//)y",
            "Solve (/x + 1 for x",
            "(/ a_n = 1/n /) for (/ n<1000, 1/n² /) for (/ n≥1000 /)",
            "plain",
        ],
    )
    def test_join_reproduces_input(self, text: str) -> None:
        assert join_segments(segment(text)) == text

    def test_segment_is_idempotent(self) -> None:
        """Same input, same output."""
        text = "Find (/\\int_0^1 x dx/) and (/\\sum_{k=1}^n k/)."
        assert segment(text) == segment(text)

    def test_custom_delimiters(self) -> None:
        """Any delimiter pair works and round-trips."""
        segmenter = EquationSegmenter(open_marker="$$", close_marker="$$")

        result = segmenter.segment("area $$\\pi r^2$$ m")

        assert result == [
            TextSegment(content="area "),
            EquationSegment(expression="\\pi r^2"),
            TextSegment(content=" m"),
        ]
        assert segmenter.join(result) == "area $$\\pi r^2$$ m"
