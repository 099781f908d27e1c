"""Input sanitizer — guards the prompt boundary before text reaches the LLM.

Detection is purely syntactic.  The deny-list both under- and over-blocks:
text that merely *discusses* ignoring previous instructions is rejected too.
Tags are stripped only after detection, so markup that splits a phrase
(``ig<b></b>nore all previous instructions``) slips through.
"""

from __future__ import annotations

import logging
import re

from text_summarizer.domain.exceptions import InvalidInputError
from text_summarizer.services.input_validator import DEFAULT_MAX_INPUT_LENGTH

logger = logging.getLogger(__name__)

# ── Compiled patterns ───────────────────────────────────────────────────────

_DANGEROUS_PATTERN = re.compile(
    r"\bignore\s+(?:all\s+)?(?:(?:previous|above)\s+)?(?:instructions|prompts?)\b"
    r"|\boverride\b"
    r"|\bsystem\s*:\s*instruction"
    r"|\badmin\s+(?:mode|privilege)\b"
    r"|\bforget\s+(?:everything|all\s+instructions)\b"
    r"|\bnew\s+role\b"
    r"|\bjailbreak\b",
    re.IGNORECASE,
)

_HTML_TAG = re.compile(r"<[^>]*>")

_WHITESPACE_RUN = re.compile(r"\s+")

# ZWSP, ZWNJ, ZWJ, BOM
_ZERO_WIDTH_CHARACTERS = frozenset("\u200b\u200c\u200d\ufeff")


# ── Public API ──────────────────────────────────────────────────────────────


def sanitize(text: str, max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> str:
    """Trim *text*, re-check its length and reject prompt-injection signatures.

    Returns the trimmed text.
    """
    trimmed = text.strip()

    if len(trimmed) > max_length:
        logger.warning("Input exceeded maximum length: %d characters", len(trimmed))
        raise InvalidInputError(
            f"Input text exceeds maximum length of {max_length} characters"
        )

    if _DANGEROUS_PATTERN.search(trimmed):
        logger.warning("Potentially dangerous input pattern detected")
        raise InvalidInputError(
            "Input contains suspicious content that may indicate an attempt "
            "to manipulate the system"
        )

    return trimmed


def strip_html_tags(text: str) -> str:
    """Remove anything that looks like an HTML/XML tag."""
    return _HTML_TAG.sub("", text)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def validate_no_zero_width_characters(text: str) -> None:
    if any(ch in _ZERO_WIDTH_CHARACTERS for ch in text):
        logger.warning("Input contains zero-width characters")
        raise InvalidInputError(
            "Input contains invalid characters (zero-width characters)"
        )


def sanitize_comprehensive(text: str, max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> str:
    """Apply every guard in order: zero-width → injection → HTML → whitespace."""
    validate_no_zero_width_characters(text)
    cleaned = sanitize(text, max_length)
    cleaned = strip_html_tags(cleaned)
    return normalize_whitespace(cleaned)
