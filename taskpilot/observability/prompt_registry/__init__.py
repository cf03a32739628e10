"""
Langfuse prompt registry module.

Versions the extraction prompts in Langfuse with model configuration tracking.

Dependencies: langfuse, langchain_core, pydantic
System role: Prompt version management and LangChain integration
"""

from taskpilot.observability.prompt_registry.models import ModelConfig
from taskpilot.observability.prompt_registry.registry import PromptRegistry

__all__ = ["PromptRegistry", "ModelConfig"]
