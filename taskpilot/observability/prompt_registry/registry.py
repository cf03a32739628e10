"""
Langfuse prompt registry for versioned prompt management.

Registers the extraction and summary prompts in Langfuse with their model
configuration and fetches published versions back as LangChain templates.

Dependencies: langfuse, langchain_core, taskpilot.configs
System role: Prompt version control and retrieval
"""

import logging

import httpx
from langchain_core.prompts import PromptTemplate
from langfuse import Langfuse
from langfuse.api.core import ApiError

from taskpilot.configs.observability import ObservabilitySettings
from taskpilot.observability.prompt_registry.converter import convert_text_template
from taskpilot.observability.prompt_registry.models import ModelConfig

logger = logging.getLogger(__name__)


class PromptRegistry:
    """
    Registry for Langfuse-hosted text prompts.

    Constructed from explicit settings so each pipeline owns its registry.
    When the registry is disabled or keys are missing every call is a no-op
    and callers fall back to their local templates.

    Example:
        >>> registry = PromptRegistry(ObservabilitySettings(enable_prompt_registry=True, ...))
        >>> registry.register_prompt(
        ...     name="task-extraction-general",
        ...     template=GENERAL_TASK_PROMPT,
        ...     config=ModelConfig(model="gemini-2.5-flash", temperature=0.0),
        ...     labels=["production"],
        ... )
    """

    def __init__(
        self,
        settings: ObservabilitySettings,
        client: Langfuse | None = None,
    ) -> None:
        """
        Initialize Langfuse client with configuration.

        Args:
            settings: Observability settings holding Langfuse credentials
            client: Optional pre-built Langfuse client
        """
        self._client: Langfuse | None = None
        self._enabled = False

        if not settings.enable_prompt_registry:
            logger.info("Prompt registry disabled")
            return

        if client is None and (not settings.public_key or not settings.secret_key):
            logger.warning("Langfuse keys not configured, prompt registry inactive")
            return

        self._client = client or Langfuse(
            public_key=settings.public_key,
            secret_key=settings.secret_key,
            host=settings.host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", settings.host)

    @property
    def is_enabled(self) -> bool:
        """Check if registry is active."""
        return self._enabled

    def register_prompt(
        self,
        name: str,
        template: PromptTemplate,
        config: ModelConfig,
        labels: list[str] | None = None,
    ):
        """
        Register or version a text prompt in Langfuse.

        Args:
            name: Unique prompt identifier
            template: LangChain PromptTemplate
            config: Model configuration to store with prompt
            labels: Optional labels (e.g., ["production", "staging"])

        Returns:
            Created Langfuse prompt, or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, skipping registration: name=%s", name)
            return None

        labels = labels or []
        prompt = self._client.create_prompt(
            name=name,
            type="text",
            prompt=convert_text_template(template),
            config=config.to_langfuse_config(),
            labels=labels,
        )
        logger.info(
            "Registered text prompt: name=%s version=%s labels=%s",
            name, prompt.version, labels,
        )
        return prompt

    def get_langchain_prompt(
        self,
        name: str,
        label: str | None = None,
        partial_variables: dict[str, str] | None = None,
    ) -> PromptTemplate | None:
        """
        Fetch a text prompt from Langfuse as a LangChain PromptTemplate.

        Args:
            name: Prompt identifier
            label: Optional label filter
            partial_variables: Values to bind on the returned template

        Returns:
            PromptTemplate: LangChain template, or None if disabled/unavailable
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, cannot fetch: name=%s", name)
            return None

        kwargs: dict = {"name": name, "type": "text"}
        if label:
            kwargs["label"] = label

        try:
            prompt = self._client.get_prompt(**kwargs)
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(
                "Prompt fetch failed: name=%s label=%s - %s: %s",
                name, label, type(e).__name__, e,
            )
            return None

        if prompt is None or not isinstance(prompt.prompt, str):
            return None

        logger.debug("Fetched prompt: name=%s version=%s", name, prompt.version)

        # Use Langfuse's built-in LangChain conversion
        template = PromptTemplate.from_template(
            prompt.get_langchain_prompt(),
            partial_variables=partial_variables or {},
        )

        # Attach prompt metadata for tracing integration
        template.metadata = {"langfuse_prompt": prompt}

        return template
