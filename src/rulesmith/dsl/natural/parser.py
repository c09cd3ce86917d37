"""Parse English-like rule sentences into :mod:`~rulesmith.dsl.natural.nodes`.

``or`` binds looser than ``and``, which binds looser than a single
condition; parentheses group and ``not`` negates the expression after it.
Idioms that embed the connectives themselves ("is between A and B",
"is either A or B", "is greater than or equal to") are stitched back
together after each split so the embedded keyword never acts as a
connective.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from rulesmith.constants.config import DEFAULT_MAX_DEPTH
from rulesmith.constants.natural import (
    COMPARISONS,
    FALSE_WORDS,
    NEGATED_COMPARISONS,
    NULL_WORDS,
    STRING_PHRASES,
    TRUE_WORDS,
)
from rulesmith.dsl.natural.nodes import (
    BetweenNode,
    ComparisonNode,
    EmptyNode,
    InNode,
    LogicalNode,
    NaturalNode,
    NotNode,
    StringNode,
)
from rulesmith.dsl.text import (
    check_balanced,
    check_depth,
    matching_paren,
    normalize_whitespace,
    split_top_level,
    syntax_error,
)
from rulesmith.exceptions.dsl import DslSyntaxError

FIELD = r"[A-Za-z_]\w*(?:\.\w+)*"
VALUE = r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'|[^\s,()]+"

_LEAF = re.compile(rf"^(?P<field>{FIELD})\s+(?P<rest>.+)$", re.DOTALL)
_VALUE_ITEM = re.compile(VALUE)
_INTEGER = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?\d*\.\d+$")
_ESCAPE = re.compile(r"\\(.)")
_NOT = re.compile(r"^not(?:\s+|(?=\())(?P<rest>.+)$", re.IGNORECASE | re.DOTALL)

# Heads of idioms that a connective split cuts in half.
_EITHER_HEAD = re.compile(rf"(?:^|\s){FIELD}\s+is\s+either\s+(?:{VALUE})$", re.IGNORECASE)
_BETWEEN_HEAD = re.compile(rf"(?:^|\s){FIELD}\s+is\s+(?:not\s+)?between\s+(?:{VALUE})$", re.IGNORECASE)
_THAN_TAIL = re.compile(r"\b(?:greater|less)\s+than$", re.IGNORECASE)
_EQUAL_TO_HEAD = re.compile(r"^equal\s+to\b", re.IGNORECASE)

_BETWEEN = re.compile(
    rf"^is\s+(?P<negated>not\s+)?between\s+(?P<low>{VALUE})\s+and\s+(?P<high>{VALUE})$", re.IGNORECASE
)
_EMPTY = re.compile(r"^is\s+(?P<negated>not\s+)?empty$", re.IGNORECASE)
_FROM_TO = re.compile(rf"^is\s+from\s+(?P<low>{VALUE})\s+to\s+(?P<high>{VALUE})$", re.IGNORECASE)
_EITHER = re.compile(rf"^is\s+either\s+(?P<first>{VALUE})\s+or\s+(?P<second>{VALUE})$", re.IGNORECASE)
_ONE_OF = re.compile(
    rf"^is\s+(?P<negated>not\s+)?one\s+of\s+(?P<values>(?:{VALUE})(?:\s*,\s*(?:{VALUE}))*)$", re.IGNORECASE
)


def _phrase_pattern(phrase: str) -> re.Pattern[str]:
    words = r"\s+".join(re.escape(word) for word in phrase.split())
    return re.compile(rf"^{words}\s+(?P<value>{VALUE})$", re.IGNORECASE)


_STRING_PATTERNS = tuple((_phrase_pattern(phrase), code) for phrase, code in STRING_PHRASES)
_COMPARISON_PATTERNS = tuple(
    (_phrase_pattern(phrase), code) for phrase, code in (*NEGATED_COMPARISONS, *COMPARISONS)
)


def parse_value(raw: str) -> Any:
    """Literal text to a Python value: quoted strings, booleans, null, numbers, else the bare word."""
    if len(raw) >= 2 and raw[0] in "\"'" and raw[-1] == raw[0]:
        return _ESCAPE.sub(r"\1", raw[1:-1])
    lowered = raw.lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    if lowered in NULL_WORDS:
        return None
    if _INTEGER.match(raw):
        return int(raw)
    if _FLOAT.match(raw):
        return float(raw)
    return raw


def _rejoin(parts: list[str], keyword: str, joins: Callable[[str, str], bool]) -> list[str]:
    merged = [parts[0]]
    for part in parts[1:]:
        if joins(merged[-1], part):
            merged[-1] = f"{merged[-1]} {keyword} {part}"
        else:
            merged.append(part)
    return merged


def _joins_or(left: str, right: str) -> bool:
    if _EITHER_HEAD.search(left):
        return True
    return bool(_THAN_TAIL.search(left) and _EQUAL_TO_HEAD.match(right))


def _joins_and(left: str, right: str) -> bool:
    return bool(_BETWEEN_HEAD.search(left))


class NaturalParser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, text: str) -> NaturalNode:
        if not isinstance(text, str) or not text.strip():
            raise DslSyntaxError("Rule text must be a non-empty string", 0)
        source = normalize_whitespace(text)
        check_balanced(source)
        return _Parser(source, self.max_depth).expression(source, 0)


class _Parser:
    def __init__(self, source: str, max_depth: int) -> None:
        self.source = source
        self.max_depth = max_depth

    def expression(self, text: str, depth: int) -> NaturalNode:
        text = text.strip()
        while text.startswith("(") and matching_paren(text, 0) == len(text) - 1:
            depth += 1
            check_depth(depth, self.max_depth, self.source, self._position(text))
            text = text[1:-1].strip()
        if not text:
            raise syntax_error("Empty expression", self.source, self._position(text))

        parts = _rejoin(split_top_level(text, "or"), "or", _joins_or)
        if len(parts) > 1:
            return LogicalNode("or", tuple(self._operand(part, depth) for part in parts))
        parts = _rejoin(split_top_level(text, "and"), "and", _joins_and)
        if len(parts) > 1:
            return LogicalNode("and", tuple(self._operand(part, depth) for part in parts))

        negated = _NOT.match(text)
        if negated is not None:
            check_depth(depth + 1, self.max_depth, self.source, self._position(text))
            return NotNode(self.expression(negated.group("rest"), depth + 1))
        return self._condition(text)

    def _operand(self, part: str, depth: int) -> NaturalNode:
        if not part:
            raise syntax_error("Missing condition next to a connective", self.source, None)
        return self.expression(part, depth)

    def _condition(self, text: str) -> NaturalNode:
        leaf = _LEAF.match(text)
        if leaf is None:
            raise syntax_error(f"Cannot parse condition {text!r}", self.source, self._position(text))
        field, rest = leaf.group("field"), leaf.group("rest")

        if match := _BETWEEN.match(rest):
            return BetweenNode(
                field,
                parse_value(match.group("low")),
                parse_value(match.group("high")),
                negated=match.group("negated") is not None,
            )
        if match := _EMPTY.match(rest):
            return EmptyNode(field, negated=match.group("negated") is not None)
        if match := _FROM_TO.match(rest):
            return BetweenNode(field, parse_value(match.group("low")), parse_value(match.group("high")))
        if match := _EITHER.match(rest):
            return InNode(field, (parse_value(match.group("first")), parse_value(match.group("second"))))
        if match := _ONE_OF.match(rest):
            values = tuple(parse_value(item) for item in _VALUE_ITEM.findall(match.group("values")))
            return InNode(field, values, negated=match.group("negated") is not None)
        for pattern, code in _STRING_PATTERNS:
            if match := pattern.match(rest):
                return StringNode(field, code, parse_value(match.group("value")))
        for pattern, code in _COMPARISON_PATTERNS:
            if match := pattern.match(rest):
                return ComparisonNode(field, code, parse_value(match.group("value")))
        raise syntax_error(f"Unknown comparison in {text!r}", self.source, self._position(rest))

    def _position(self, fragment: str) -> int | None:
        if not fragment:
            return None
        index = self.source.find(fragment)
        return index if index >= 0 else None
