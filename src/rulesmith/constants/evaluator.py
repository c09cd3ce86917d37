"""Vocabulary of the structured combinator/operator rule format."""

from __future__ import annotations

COMBINATORS: frozenset[str] = frozenset({"and", "or", "xor", "not", "nand", "nor"})

# Operators that take no comparison value.
UNARY_OPERATORS: frozenset[str] = frozenset(
    {"isNull", "isArray", "isBoolean", "isNumeric", "isString", "isEmpty"}
)

# Operators whose ``value`` is a ``[low, high]`` pair.
RANGE_OPERATORS: frozenset[str] = frozenset({"between", "isBetweenDates"})
