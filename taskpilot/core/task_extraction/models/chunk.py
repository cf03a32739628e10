"""
Chunk domain model for the task extraction pipeline.

Represents one bounded, ordered slice of the source document.

Dependencies: pydantic
System role: Data structure for document chunks in extraction pipeline
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Contiguous slice of the raw document text."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Position of the chunk in the document (0-based)")
    text: str = Field(description="Chunk text, including paragraph separators")
