"""
Observability module.

Provides logging configuration, correlation ID tracking, and prompt version
management through Langfuse.
"""

from taskpilot.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from taskpilot.observability.logger import configure_logging, get_logger
from taskpilot.observability.prompt_registry import ModelConfig, PromptRegistry

__all__ = [
    "PromptRegistry",
    "ModelConfig",
    "configure_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
