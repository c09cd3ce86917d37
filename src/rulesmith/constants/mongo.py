"""Operator tables for the Mongo-style query grammar."""

from __future__ import annotations

LOGICAL_KEYS: frozenset[str] = frozenset({"$and", "$or", "$nor", "$not", "$xor", "$nand"})

COMPARISON_OPERATORS: frozenset[str] = frozenset(
    {"$eq", "$ne", "$gt", "$gte", "$lt", "$lte", "$in", "$nin", "$same", "$nsame", "$all", "$nall"}
)
STRING_OPERATORS: frozenset[str] = frozenset(
    {
        "$regex",
        "$notRegex",
        "$startsWith",
        "$startsWithi",
        "$endsWith",
        "$endsWithi",
        "$contains",
        "$containsi",
        "$notContains",
        "$notContainsi",
        "$strLength",
    }
)
RANGE_OPERATORS: frozenset[str] = frozenset({"$between", "$betweenDates"})
DATE_OPERATORS: frozenset[str] = frozenset({"$after", "$before"})
TYPE_OPERATORS: frozenset[str] = frozenset({"$exists", "$type", "$size", "$empty"})

# ``$options`` modifies ``$regex`` and ``$not`` negates a field's operator map.
MODIFIER_KEYS: frozenset[str] = frozenset({"$options", "$not"})

OPERATOR_KEYS: frozenset[str] = (
    COMPARISON_OPERATORS | STRING_OPERATORS | RANGE_OPERATORS | DATE_OPERATORS | TYPE_OPERATORS | MODIFIER_KEYS
)

# Operators accepted inside ``$strLength`` / ``$size`` comparison objects.
MEASURE_OPERATORS: frozenset[str] = frozenset({"$eq", "$ne", "$gt", "$gte", "$lt", "$lte"})

REGEX_FLAGS: str = "ims"

TYPE_NAMES: dict[str, str] = {
    "null": "isNull",
    "array": "isArray",
    "bool": "isBoolean",
    "boolean": "isBoolean",
    "number": "isNumeric",
    "numeric": "isNumeric",
    "int": "isNumeric",
    "double": "isNumeric",
    "string": "isString",
}
