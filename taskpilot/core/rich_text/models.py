"""
Rich text segment models.

A task string is rendered as an ordered list of segments, each either plain
text or an inline equation. TodoItem pairs that list with its checkbox state.

Dependencies: pydantic
System role: Data structures handed to the page-building collaborator
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TextSegment(BaseModel):
    """Plain text run."""

    type: Literal["text"] = "text"
    content: str = Field(min_length=1, description="Literal text, never empty")


class EquationSegment(BaseModel):
    """Inline equation with the delimiters removed."""

    type: Literal["equation"] = "equation"
    expression: str = Field(description="Expression exactly as written between the delimiters")


RichSegment = Annotated[Union[TextSegment, EquationSegment], Field(discriminator="type")]


class TodoItem(BaseModel):
    """Checklist entry built from one extracted task."""

    segments: list[RichSegment] = Field(default_factory=list)
    checked: bool = False
