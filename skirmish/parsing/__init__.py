"""Operator input parsing."""

from skirmish.parsing.input_sanitizer import InputSanitizer, parse_amount, parse_flag, parse_integer

__all__ = [
    "InputSanitizer",
    "parse_amount",
    "parse_flag",
    "parse_integer",
]
