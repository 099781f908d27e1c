"""Unit tests for the prompt templates."""

import pytest

from text_summarizer.domain.entities import SummaryStyle
from text_summarizer.services.prompt_builder import (
    SYSTEM_PROMPT,
    build_length_constraint,
    build_user_prompt,
)

SOURCE = "Solar farms across the valley now supply most of the local grid."


class TestSystemPrompt:

    def test_system_prompt_is_fixed_nonempty_string(self):
        assert isinstance(SYSTEM_PROMPT, str)
        assert "summarize" in SYSTEM_PROMPT.lower()

    def test_system_prompt_forbids_adding_information(self):
        assert "Do not add information" in SYSTEM_PROMPT


class TestBuildUserPrompt:

    @pytest.mark.parametrize(
        ("style", "fragment"),
        [
            (SummaryStyle.CONCISE, "brief, direct summary"),
            (SummaryStyle.BULLET, "bulleted list summary"),
            (SummaryStyle.EXECUTIVE, "executive-level summary with strategic implications"),
        ],
    )
    def test_style_name_and_description(self, style, fragment):
        prompt = build_user_prompt(SOURCE, style)
        assert f"using the {style.value.lower()} style" in prompt
        assert fragment in prompt

    def test_includes_length_constraint_when_given(self):
        prompt = build_user_prompt(SOURCE, SummaryStyle.CONCISE, 150)
        assert "Limit the summary to approximately 150 words." in prompt

    @pytest.mark.parametrize("max_length", [None, 0, -5])
    def test_omits_length_constraint_otherwise(self, max_length):
        prompt = build_user_prompt(SOURCE, SummaryStyle.CONCISE, max_length)
        assert "Limit the summary" not in prompt
        assert "words" not in prompt

    def test_source_text_follows_delimiter(self):
        prompt = build_user_prompt(SOURCE, SummaryStyle.BULLET, 80)
        instructions, _, content = prompt.partition("\n---\n")
        assert content == SOURCE
        assert SOURCE not in instructions

    def test_is_deterministic(self):
        first = build_user_prompt(SOURCE, SummaryStyle.EXECUTIVE, 200)
        assert build_user_prompt(SOURCE, SummaryStyle.EXECUTIVE, 200) == first


def test_build_length_constraint():
    assert build_length_constraint(75) == " Limit the summary to approximately 75 words."
    assert build_length_constraint(None) == ""
