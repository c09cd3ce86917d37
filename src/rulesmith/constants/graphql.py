"""Operator tables for the GraphQL-filter grammar."""

from __future__ import annotations

LOGICAL_KEYS: frozenset[str] = frozenset({"AND", "OR", "NOT"})

COMPARISON_OPERATORS: frozenset[str] = frozenset({"eq", "ne", "gt", "gte", "lt", "lte"})
LIST_OPERATORS: frozenset[str] = frozenset({"in", "notIn"})
RANGE_OPERATORS: frozenset[str] = frozenset({"between"})
STRING_OPERATORS: frozenset[str] = frozenset(
    {
        "contains",
        "notContains",
        "containsInsensitive",
        "notContainsInsensitive",
        "startsWith",
        "endsWith",
        "match",
    }
)
NULL_OPERATORS: frozenset[str] = frozenset({"isNull"})
TYPE_OPERATORS: frozenset[str] = frozenset({"isType"})

OPERATOR_KEYS: frozenset[str] = (
    COMPARISON_OPERATORS | LIST_OPERATORS | RANGE_OPERATORS | STRING_OPERATORS | NULL_OPERATORS | TYPE_OPERATORS
)

TYPE_NAMES: dict[str, str] = {
    "null": "isNull",
    "string": "isString",
    "number": "isNumeric",
    "numeric": "isNumeric",
    "boolean": "isBoolean",
    "bool": "isBoolean",
    "array": "isArray",
}
