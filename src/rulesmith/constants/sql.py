"""Token tables for the SQL-WHERE grammar."""

from __future__ import annotations

KEYWORDS: frozenset[str] = frozenset({"AND", "OR", "NOT", "IN", "LIKE", "BETWEEN", "IS", "NULL", "TRUE", "FALSE"})

# Longest first so ``<=`` is not read as ``<`` followed by ``=``.
COMPARISON_OPERATORS: tuple[str, ...] = ("!=", "<>", "<=", ">=", "=", "<", ">")

COMPARISON_SYMBOL: dict[str, str] = {
    "eq": "=",
    "ne": "!=",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
}
