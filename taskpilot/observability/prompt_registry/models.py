"""
Pydantic models for prompt registry configuration.

Defines the generation parameters stored next to each extraction prompt.

Dependencies: pydantic
System role: Configuration validation for prompt-model pairs
"""

from typing import Any

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """
    Generation settings tracked with a prompt version.

    Attributes:
        model: LLM model identifier (e.g., "gemini-2.5-flash")
        temperature: Sampling temperature (0.0-2.0)
        max_output_tokens: Upper bound on generated tokens
        template_kind: Extraction template the prompt belongs to, if any
    """

    model: str = Field(description="LLM model identifier")
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_output_tokens: int | None = Field(
        default=None,
        gt=0,
        description="Maximum tokens in response",
    )
    template_kind: str | None = Field(
        default=None,
        description="Extraction template kind (exercise_pattern, general)",
    )

    def to_langfuse_config(self) -> dict[str, Any]:
        """
        Convert to Langfuse config dictionary, dropping unset values.

        Returns:
            dict: Configuration dict for Langfuse prompt creation
        """
        return self.model_dump(exclude_none=True)
