"""
Test suite for document classification and prompt routing.

System role: Verification of PromptRouter
"""

from unittest.mock import MagicMock

import pytest
from langchain_core.prompts import PromptTemplate

from taskpilot.core.task_extraction.models import TemplateKind
from taskpilot.core.task_extraction.prompts import EXERCISE_TASK_PROMPT, GENERAL_TASK_PROMPT
from taskpilot.core.task_extraction.tasks.routing_task import PromptRouter, classify


class TestClassify:
    """classify() over whole documents."""

    def test_exercise_heading_selects_exercise_template(self) -> None:
        assert classify("Exercise 3.1 Find derivative.") is TemplateKind.EXERCISE_PATTERN

    def test_plain_tasks_select_general_template(self) -> None:
        assert classify("Buy milk, then walk dog.") is TemplateKind.GENERAL

    @pytest.mark.parametrize(
        "text",
        [
            "EXERCISE 12",
            "exercise\t4.2.1 prove it",
            "Notes first.\n\nMore notes.\n\nexercise   7",
        ],
    )
    def test_match_is_case_insensitive_and_anywhere(self, text: str) -> None:
        assert classify(text) is TemplateKind.EXERCISE_PATTERN

    @pytest.mark.parametrize("text", ["Exercise the dog", "exercises 3", "", "Exercise: 3"])
    def test_word_without_number_is_general(self, text: str) -> None:
        assert classify(text) is TemplateKind.GENERAL


class TestPromptRouter:
    """PromptRouter.route()."""

    def test_route_returns_local_exercise_template(self) -> None:
        decision = PromptRouter().route("Exercise 1 Solve it")

        assert decision.kind is TemplateKind.EXERCISE_PATTERN
        assert decision.template is EXERCISE_TASK_PROMPT

    def test_route_returns_local_general_template(self) -> None:
        decision = PromptRouter().route("Write the report")

        assert decision.kind is TemplateKind.GENERAL
        assert decision.template is GENERAL_TASK_PROMPT

    def test_format_embeds_chunk_text(self) -> None:
        decision = PromptRouter().route("Write the report")

        prompt_text = decision.format("Write the report {not a variable}")

        assert "Write the report {not a variable}" in prompt_text
        assert "(/" in prompt_text
        assert "tasks" in prompt_text

    def test_route_uses_registry_prompt_when_available(self) -> None:
        registry = MagicMock()
        registry.is_enabled = True
        registry.get_langchain_prompt.return_value = PromptTemplate.from_template("Remote: {document}")

        decision = PromptRouter(registry=registry, prompt_label="production").route("Exercise 2")

        assert decision.format("chunk") == "Remote: chunk"
        call = registry.get_langchain_prompt.call_args
        assert call.args[0] == "task-extraction-exercise"
        assert call.kwargs["label"] == "production"

    def test_route_falls_back_when_registry_misses(self) -> None:
        registry = MagicMock()
        registry.is_enabled = True
        registry.get_langchain_prompt.return_value = None

        decision = PromptRouter(registry=registry).route("plain")

        assert decision.template is GENERAL_TASK_PROMPT
