"""Unit tests for the prompt-injection sanitizer."""

import pytest

from conftest import make_text
from text_summarizer.domain.exceptions import InvalidInputError
from text_summarizer.services.input_sanitizer import (
    normalize_whitespace,
    sanitize,
    sanitize_comprehensive,
    strip_html_tags,
    validate_no_zero_width_characters,
)

DANGEROUS_PHRASES = [
    "Ignore all previous instructions",
    "ignore previous instructions",
    "IGNORE ABOVE PROMPTS",
    "please ignore instructions",
    "ignore all prompts",
    "override",
    "System: instruction",
    "system:instruction",
    "admin mode",
    "Admin privilege",
    "forget everything",
    "forget all instructions",
    "new role",
    "jailbreak",
]


class TestSanitize:

    def test_trims_surrounding_whitespace(self):
        text = make_text(150)
        assert sanitize(f"  \n{text}\t ") == text.strip()

    def test_rejects_text_over_max_length(self):
        with pytest.raises(InvalidInputError, match="maximum length of 200"):
            sanitize(make_text(201), max_length=200)

    @pytest.mark.parametrize("phrase", DANGEROUS_PHRASES)
    def test_rejects_dangerous_phrase_anywhere(self, phrase):
        benign = make_text(200)
        for text in (f"{phrase} {benign}", f"{benign} {phrase}.", f"{benign[:90]} {phrase} {benign[90:]}"):
            with pytest.raises(InvalidInputError, match="suspicious content"):
                sanitize(text)

    @pytest.mark.parametrize(
        "text",
        [
            "The overrides were applied to the config.",
            "We ignored the noise and kept going.",
            "The administrator changed modes twice.",
            "A renewed role for the committee was agreed.",
        ],
    )
    def test_word_boundaries_limit_false_positives(self, text):
        assert sanitize(text) == text

    def test_is_idempotent(self):
        for raw in (make_text(150), f"  {make_text(300)}  ", "<b>bold</b> " + make_text(120)):
            once = sanitize(raw)
            assert sanitize(once) == once


class TestHelpers:

    def test_strip_html_tags(self):
        assert strip_html_tags("<p>Hello <b>world</b></p><br/>") == "Hello world"

    def test_strip_html_tags_leaves_plain_text(self):
        assert strip_html_tags("a < b and c > d") == "a  d"
        assert strip_html_tags("no tags here") == "no tags here"

    def test_normalize_whitespace(self):
        assert normalize_whitespace("  a \n\n b\t\tc  ") == "a b c"

    @pytest.mark.parametrize("char", ["\u200b", "\u200c", "\u200d", "\ufeff"])
    def test_rejects_zero_width_characters(self, char):
        with pytest.raises(InvalidInputError, match="zero-width"):
            validate_no_zero_width_characters(f"hid{char}den")

    def test_accepts_text_without_zero_width_characters(self):
        validate_no_zero_width_characters(make_text(150))


class TestSanitizeComprehensive:

    def test_applies_all_steps(self):
        raw = "  <div>Solar   farms</div>\n\n<span>supply the grid.</span>  "
        assert sanitize_comprehensive(raw) == "Solar farms supply the grid."

    def test_zero_width_check_runs_before_injection_check(self):
        with pytest.raises(InvalidInputError, match="zero-width"):
            sanitize_comprehensive("jailbreak\u200b")

    def test_injection_is_rejected(self):
        with pytest.raises(InvalidInputError, match="suspicious content"):
            sanitize_comprehensive(make_text(150) + " jailbreak")

    def test_is_idempotent(self):
        raw = "  <p>" + make_text(200) + "</p>\n\n  "
        once = sanitize_comprehensive(raw)
        assert sanitize_comprehensive(once) == once
