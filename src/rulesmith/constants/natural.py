"""Phrase tables for the natural-language grammar.

Order matters: longer phrases must be tried before their prefixes.
"""

from __future__ import annotations

# Negated comparisons map straight to the opposite operator.
NEGATED_COMPARISONS: tuple[tuple[str, str], ...] = (
    ("is not less than or equal to", "gt"),
    ("is not greater than or equal to", "lt"),
    ("is not less than", "gte"),
    ("is not greater than", "lte"),
    ("is not at least", "lt"),
    ("is not at most", "gt"),
    ("is not more than", "lte"),
    ("is not fewer than", "gte"),
)

COMPARISONS: tuple[tuple[str, str], ...] = (
    ("is greater than or equal to", "gte"),
    ("is less than or equal to", "lte"),
    ("is at least", "gte"),
    ("is at most", "lte"),
    ("is more than", "gt"),
    ("is greater than", "gt"),
    ("is fewer than", "lt"),
    ("is less than", "lt"),
    ("does not equal", "ne"),
    ("is not", "ne"),
    ("equals", "eq"),
    ("is", "eq"),
)

STRING_PHRASES: tuple[tuple[str, str], ...] = (
    ("does not contain", "notContains"),
    ("contains", "contains"),
    ("includes", "contains"),
    ("starts with", "startsWith"),
    ("begins with", "startsWith"),
    ("ends with", "endsWith"),
)

COMPARISON_PHRASE: dict[str, str] = {
    "eq": "equals",
    "ne": "is not",
    "gt": "is greater than",
    "gte": "is greater than or equal to",
    "lt": "is less than",
    "lte": "is less than or equal to",
}

STRING_PHRASE: dict[str, str] = {
    "contains": "contains",
    "notContains": "does not contain",
    "startsWith": "starts with",
    "endsWith": "ends with",
}

TRUE_WORDS: frozenset[str] = frozenset({"true", "yes"})
FALSE_WORDS: frozenset[str] = frozenset({"false", "no"})
NULL_WORDS: frozenset[str] = frozenset({"null", "none", "nothing"})
