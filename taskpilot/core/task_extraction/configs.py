"""
Configuration settings for the task extraction pipeline.

Provides environment-based configuration for chunking, concurrency,
timeouts and the Gemini model.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TaskExtractionSettings(BaseSettings):
    """Settings for the task extraction pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_EXTRACTION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    # Chunking settings
    chunk_budget: int = Field(
        default=10000,
        gt=0,
        description="Maximum chunk size in characters",
    )

    # Concurrency settings
    max_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum per-chunk generation calls in flight",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout applied to every generation call",
    )

    # Model settings
    model_id: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini model used for extraction and summaries",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Model temperature",
    )
    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )

    # Prompt settings
    use_prompt_registry: bool = Field(
        default=False,
        description="Fetch extraction prompts from the Langfuse registry",
    )
    prompt_label: str | None = Field(
        default=None,
        description="Registry label to fetch (e.g. production)",
    )

    # Merge settings
    summary_fallback: bool = Field(
        default=True,
        description="Use the first chunk's description if the summary call fails",
    )


@lru_cache
def get_extraction_settings() -> TaskExtractionSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        TaskExtractionSettings: Singleton settings loaded from environment
    """
    return TaskExtractionSettings()
