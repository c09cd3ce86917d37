"""Shared helpers for the text grammars: quoting, parentheses and splitting.

All scanners here are quote-aware: parentheses and keywords inside a
single- or double-quoted literal are ignored.
"""

from __future__ import annotations

import re

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS
from rulesmith.exceptions.dsl import DslSyntaxError

_QUOTES: frozenset[str] = frozenset({'"', "'"})


def error_context(text: str, position: int | None, radius: int = DEFAULT_CONTEXT_RADIUS) -> str:
    """Return up to *radius* characters on either side of *position*."""
    if position is None:
        return text[: radius * 2]
    position = max(0, min(position, len(text)))
    return text[max(0, position - radius) : position + radius]


def syntax_error(message: str, text: str, position: int | None) -> DslSyntaxError:
    return DslSyntaxError(message, position, error_context(text, position))


def _scan(text: str):
    """Yield ``(index, char, depth)`` for characters outside quoted literals."""
    depth = 0
    quote: str | None = None
    index = 0
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\" and index + 1 < len(text):
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        else:
            if char == "(":
                depth += 1
            yield index, char, depth
            if char == ")":
                depth -= 1
        index += 1


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace outside quotes and trim the ends."""
    out: list[str] = []
    quote: str | None = None
    previous_space = False
    for char in text.strip():
        if quote is None and char.isspace():
            if not previous_space:
                out.append(" ")
            previous_space = True
            continue
        previous_space = False
        if quote is None and char in _QUOTES:
            quote = char
        elif char == quote:
            quote = None
        out.append(char)
    return "".join(out)


def check_balanced(text: str) -> None:
    """Raise a syntax error for unbalanced parentheses or an unterminated quote."""
    depth = 0
    opened: list[int] = []
    for index, char, _ in _scan(text):
        if char == "(":
            depth += 1
            opened.append(index)
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise syntax_error("Unexpected closing parenthesis", text, index)
            opened.pop()
    if opened:
        raise syntax_error("Unclosed parenthesis", text, opened[-1])
    quote_at = _unterminated_quote(text)
    if quote_at is not None:
        raise syntax_error("Unterminated string literal", text, quote_at)


def _unterminated_quote(text: str) -> int | None:
    quote: str | None = None
    start = 0
    index = 0
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\" and index + 1 < len(text):
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote, start = char, index
        index += 1
    return start if quote is not None else None


def matching_paren(text: str, start: int) -> int | None:
    """Index of the parenthesis closing the one at *start*."""
    target: int | None = None
    for index, char, depth in _scan(text):
        if index < start:
            continue
        if index == start:
            if char != "(":
                return None
            target = depth
        elif char == ")" and depth == target:
            return index
    return None


def strip_outer_parens(text: str) -> str:
    """Remove parentheses that wrap the whole expression, repeatedly."""
    text = text.strip()
    while text.startswith("(") and matching_paren(text, 0) == len(text) - 1:
        text = text[1:-1].strip()
    return text


def split_top_level(text: str, keyword: str) -> list[str]:
    """Split on `` keyword `` (case-insensitive) at parenthesis depth zero."""
    pattern = re.compile(rf"\s+{re.escape(keyword)}\s+", re.IGNORECASE)
    boundaries: list[tuple[int, int]] = []
    outside = {index for index, _, depth in _scan(text) if depth == 0}
    for match in pattern.finditer(text):
        if all(i in outside for i in range(match.start(), match.end())):
            boundaries.append((match.start(), match.end()))

    parts: list[str] = []
    cursor = 0
    for start, end in boundaries:
        parts.append(text[cursor:start])
        cursor = end
    parts.append(text[cursor:])
    return [part.strip() for part in parts]


def check_depth(depth: int, max_depth: int, text: str, position: int | None = None) -> None:
    if depth > max_depth:
        raise syntax_error(f"Expression nesting exceeds maximum depth of {max_depth}", text, position)
