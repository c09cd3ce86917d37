"""Closed enumerations describing operator arity and identity."""

from __future__ import annotations

from enum import Enum, StrEnum


class Cardinality(Enum):
    """How many operands an operator accepts."""

    UNARY = "exactly 1 operand"
    BINARY = "exactly 2 operands"
    MULTIPLE = "at least 1 operand"


class OperatorKind(StrEnum):
    """Stable identity of every operator in the catalog.

    Values double as the camelCase operator names accepted by structured
    rule definitions.
    """

    EQUAL_TO = "equalTo"
    NOT_EQUAL_TO = "notEqualTo"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL_TO = "greaterThanOrEqualTo"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL_TO = "lessThanOrEqualTo"
    SAME_AS = "sameAs"
    NOT_SAME_AS = "notSameAs"
    BETWEEN = "between"
    IN = "in"
    NOT_IN = "notIn"

    AND = "and"
    OR = "or"
    NOT = "not"
    XOR = "xor"
    NAND = "nand"
    NOR = "nor"

    CONTAINS = "contains"
    CONTAINS_INSENSITIVE = "containsInsensitive"
    DOES_NOT_CONTAIN = "doesNotContain"
    DOES_NOT_CONTAIN_INSENSITIVE = "doesNotContainInsensitive"
    STARTS_WITH = "startsWith"
    STARTS_WITH_INSENSITIVE = "startsWithInsensitive"
    ENDS_WITH = "endsWith"
    ENDS_WITH_INSENSITIVE = "endsWithInsensitive"
    MATCHES = "matches"
    DOES_NOT_MATCH = "doesNotMatch"
    STRING_LENGTH = "stringLength"

    IS_NULL = "isNull"
    IS_ARRAY = "isArray"
    IS_BOOLEAN = "isBoolean"
    IS_NUMERIC = "isNumeric"
    IS_STRING = "isString"
    IS_EMPTY = "isEmpty"
    ARRAY_COUNT = "arrayCount"

    AFTER = "after"
    BEFORE = "before"
    IS_BETWEEN_DATES = "isBetweenDates"

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    EXPONENTIATE = "exponentiate"
    NEGATE = "negate"
    FLOOR = "floor"
    CEIL = "ceil"
    ABS = "abs"
    ROUND = "round"
    MAX = "max"
    MIN = "min"

    UNION = "union"
    INTERSECT = "intersect"
    COMPLEMENT = "complement"
    SYMMETRIC_DIFFERENCE = "symmetricDifference"
    CONTAINS_SUBSET = "containsSubset"
    DOES_NOT_CONTAIN_SUBSET = "doesNotContainSubset"
    SET_CONTAINS = "setContains"
    SET_DOES_NOT_CONTAIN = "setDoesNotContain"
