"""Parsers package."""

from .line_rules import (
    TOKEN_RULES,
    is_ignorable,
    parse_line,
    strip_line,
    strip_list_prefix,
    take_first_field,
)

__all__ = [
    "TOKEN_RULES",
    "is_ignorable",
    "parse_line",
    "strip_line",
    "strip_list_prefix",
    "take_first_field",
]
