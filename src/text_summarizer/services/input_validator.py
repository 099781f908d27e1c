"""Service-layer input validation: size bounds and character well-formedness."""

from __future__ import annotations

import logging
import re

from text_summarizer.domain.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

MIN_INPUT_LENGTH = 100
DEFAULT_MAX_INPUT_LENGTH = 10_000

# Tab, LF and CR are allowed; every other C0 control and DEL is not.
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def validate_size(text: str, max_input_length: int = DEFAULT_MAX_INPUT_LENGTH) -> None:
    """Reject text longer than *max_input_length* or shorter than 100 chars once stripped."""
    if len(text) > max_input_length:
        logger.warning(
            "Input text exceeds maximum length: %d characters (max: %d)",
            len(text),
            max_input_length,
        )
        raise InvalidInputError(
            f"Input text exceeds maximum length of {max_input_length} characters. "
            f"Provided: {len(text)} characters"
        )

    if len(text.strip()) < MIN_INPUT_LENGTH:
        logger.warning("Input text below minimum length: %d characters", len(text))
        raise InvalidInputError(
            f"Input text must be at least {MIN_INPUT_LENGTH} characters long "
            "for meaningful summarization"
        )

    logger.debug("Input text length validation passed: %d characters", len(text))


def validate_encoding(text: str) -> None:
    """Reject text that is not valid UTF-8 or carries disallowed control characters."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        logger.warning("Input text contains invalid UTF-8 characters")
        raise InvalidInputError("Input text contains invalid UTF-8 characters") from exc

    if _CONTROL_CHARACTERS.search(text):
        logger.warning("Input text contains dangerous control characters")
        raise InvalidInputError("Input text contains invalid control characters")

    logger.debug("Character encoding validation passed")
