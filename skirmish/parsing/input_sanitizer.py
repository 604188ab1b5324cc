"""Sanitization and number parsing for operator input."""

import re
import unicodedata
from typing import Optional

from skirmish.config import DEFAULT_MAX_INPUT_LENGTH, DEFAULT_MAX_NAME_LENGTH
from skirmish.errors import AmountParseError

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_integer(text: str, what: str = "value") -> int:
    """
    Parse operator text as a signed integer.

    Args:
        text: Raw operator text
        what: Name of the value, used in the error message

    Returns:
        Parsed integer

    Raises:
        AmountParseError: If the text is not a whole number
    """
    stripped = text.strip() if isinstance(text, str) else str(text)
    if not _INTEGER_PATTERN.match(stripped):
        raise AmountParseError(stripped, f"{what} must be a whole number")
    return int(stripped)


def parse_amount(text: str, what: str = "amount") -> int:
    """Parse operator text as a non-negative integer (damage, healing, team, ...)."""
    value = parse_integer(text, what)
    if value < 0:
        raise AmountParseError(str(text).strip(), f"{what} cannot be negative")
    return value


def parse_flag(text: str) -> bool:
    """Parse a yes/no answer."""
    answer = text.strip().lower()
    if answer in ("y", "yes", "true", "1", "on"):
        return True
    if answer in ("n", "no", "false", "0", "off"):
        return False
    raise AmountParseError(answer, "expected yes or no")


class InputSanitizer:
    """Cleans operator text before it reaches the parsers."""

    MAX_INPUT_LENGTH = DEFAULT_MAX_INPUT_LENGTH
    MAX_NAME_LENGTH = DEFAULT_MAX_NAME_LENGTH

    def __init__(
        self,
        max_length: int = MAX_INPUT_LENGTH,
        max_name_length: int = MAX_NAME_LENGTH,
    ) -> None:
        """Initialize sanitizer with configurable limits."""
        self.max_length = max_length
        self.max_name_length = max_name_length

    def sanitize(self, input_text: str) -> str:
        """
        Sanitize input text by:
        1. Normalizing unicode
        2. Removing control characters
        3. Truncating to max length
        4. Stripping whitespace
        """
        if not isinstance(input_text, str):
            raise TypeError(f"Input must be a string, got {type(input_text)}")

        # NFKC folds full-width digits and slashes into their ASCII forms
        normalized = unicodedata.normalize("NFKC", input_text)

        sanitized = re.sub(r"[\x00-\x1F\x7F]", "", normalized)

        if len(sanitized) > self.max_length:
            sanitized = sanitized[: self.max_length]

        return sanitized.strip()

    def sanitize_name(self, name: str) -> str:
        """Sanitize a combatant name, collapsing inner whitespace."""
        sanitized = re.sub(r"\s+", " ", self.sanitize(name))
        return sanitized[: self.max_name_length].strip()

    def is_safe(self, input_text: str) -> tuple[bool, Optional[str]]:
        """
        Check if input is usable as-is.
        Returns (is_safe, error_message).
        """
        if not input_text or not input_text.strip():
            return False, "Input is empty"

        if len(input_text) > self.max_length:
            return False, f"Input exceeds maximum length of {self.max_length} characters"

        if re.search(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]", input_text):
            return False, "Input contains control characters"

        return True, None
