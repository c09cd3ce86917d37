"""Helpers compilers and serializers use to build and read operands."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

from rulesmith.core.operator import Operator
from rulesmith.core.variables import Variable, is_field, is_literal, literal_value
from rulesmith.exceptions.dsl import StructuralMismatchError, UnsupportedConstructError


def literal(value: Any) -> Variable:
    """Wrap a literal as an anonymous variable."""
    return Variable(None, value)


def field_path(operand: Any, operator: Operator) -> str:
    """Dotted path of a field operand, or a structural mismatch."""
    if not is_field(operand):
        raise StructuralMismatchError(
            f"{type(operator).__name__} expects a field reference, got {type(operand).__name__}"
        )
    return operand.path


def literal_of(operand: Any, operator: Operator) -> Any:
    if not is_literal(operand):
        raise StructuralMismatchError(
            f"{type(operator).__name__} expects a literal operand, got {type(operand).__name__}"
        )
    return literal_value(operand)


def field_and_literal(operator: Operator) -> tuple[str, Any]:
    """Split a binary ``(field, literal)`` operator."""
    left, right = operator.get_operands()
    return field_path(left, operator), literal_of(right, operator)


def format_number(value: int | float) -> str:
    """Positional decimal text for a number, never exponent notation.

    Floats keep a fractional part so they read back as floats.
    """
    if isinstance(value, int):
        return repr(value)
    if not math.isfinite(value):
        raise StructuralMismatchError(f"Non-finite number {value!r} has no text form")
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else f"{text}.0"


def checked_pattern(pattern: str) -> str:
    """Validate a regex pattern at compile time."""
    try:
        re.compile(pattern)
    except re.error as exc:
        raise UnsupportedConstructError(f"Invalid regular expression {pattern!r}: {exc}") from exc
    return pattern


def wildcard_to_regex(pattern: str, many: str, one: str | None = None) -> str:
    """Translate a LIKE/LDAP wildcard pattern to an anchored regex."""
    parts: list[str] = ["^"]
    for char in pattern:
        if char == many:
            parts.append(".*")
        elif one is not None and char == one:
            parts.append(".")
        else:
            parts.append(re.escape(char))
    parts.append("$")
    return "".join(parts)


# Characters that may appear unescaped in a regex produced by re.escape.
_PLAIN_REGEX_CHARS: frozenset[str] = frozenset(" _-,;:'\"/@!=<>%` ")


def regex_to_wildcard(pattern: str, single: bool) -> list[tuple[str, str]] | None:
    """Reverse :func:`wildcard_to_regex`.

    Returns ``(kind, text)`` segments where kind is ``text``, ``many`` or
    ``one``, or None if *pattern* is not an anchored wildcard regex.
    """
    if not (pattern.startswith("^") and pattern.endswith("$")) or pattern.endswith("\\$"):
        return None
    body = pattern[1:-1]
    segments: list[tuple[str, str]] = []
    index = 0
    while index < len(body):
        char = body[index]
        if body.startswith(".*", index):
            segments.append(("many", ""))
            index += 2
            continue
        if char == ".":
            if not single:
                return None
            segments.append(("one", ""))
        elif char == "\\" and index + 1 < len(body):
            index += 1
            segments.append(("text", body[index]))
        elif char.isalnum() or char in _PLAIN_REGEX_CHARS:
            segments.append(("text", char))
        else:
            return None
        index += 1
    return segments
