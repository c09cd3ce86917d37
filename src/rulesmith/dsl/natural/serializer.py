"""Render operator trees back to natural-language sentences.

Strings are always double-quoted. Disjunctions nested in a conjunction are
parenthesized; any other negation renders as ``not (...)``.
"""

from __future__ import annotations

from typing import Any

from rulesmith.constants.natural import COMPARISON_PHRASE, STRING_PHRASE
from rulesmith.core.operator import Operator
from rulesmith.core.rule import Rule
from rulesmith.core.variables import is_literal, literal_value
from rulesmith.dsl.operands import field_and_literal, field_path, format_number, literal_of
from rulesmith.exceptions.dsl import StructuralMismatchError, UnsupportedOperatorError
from rulesmith.types.operators import OperatorKind

_COMPARISON_CODES: dict[OperatorKind, str] = {
    OperatorKind.EQUAL_TO: "eq",
    OperatorKind.NOT_EQUAL_TO: "ne",
    OperatorKind.GREATER_THAN: "gt",
    OperatorKind.GREATER_THAN_OR_EQUAL_TO: "gte",
    OperatorKind.LESS_THAN: "lt",
    OperatorKind.LESS_THAN_OR_EQUAL_TO: "lte",
}

_STRING_CODES: dict[OperatorKind, str] = {
    OperatorKind.CONTAINS: "contains",
    OperatorKind.DOES_NOT_CONTAIN: "notContains",
    OperatorKind.STARTS_WITH: "startsWith",
    OperatorKind.ENDS_WITH: "endsWith",
}


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    raise StructuralMismatchError(f"{type(value).__name__} values have no natural-language form")


class NaturalSerializer:
    def serialize(self, rule: Rule | Operator) -> str:
        root = rule.condition if isinstance(rule, Rule) else rule
        return self._render(root)

    def _render(self, operator: Operator) -> str:
        kind = getattr(operator, "kind", None)
        match kind:
            case OperatorKind.AND:
                return " and ".join(self._conjunct(o) for o in operator.get_operands())
            case OperatorKind.OR:
                return " or ".join(self._render(o) for o in operator.get_operands())
            case OperatorKind.NOT:
                return self._render_not(operator)
            case OperatorKind.EQUAL_TO if _compares_to_null(operator):
                return f"{field_path(operator.get_operands()[0], operator)} is null"
            case _ if kind in _COMPARISON_CODES:
                path, value = field_and_literal(operator)
                return f"{path} {COMPARISON_PHRASE[_COMPARISON_CODES[kind]]} {format_value(value)}"
            case _ if kind in _STRING_CODES:
                path, value = field_and_literal(operator)
                return f"{path} {STRING_PHRASE[_STRING_CODES[kind]]} {format_value(value)}"
            case OperatorKind.IS_EMPTY:
                (subject,) = operator.get_operands()
                return f"{field_path(subject, operator)} is empty"
            case OperatorKind.BETWEEN:
                return self._between(operator)
            case OperatorKind.IN | OperatorKind.NOT_IN:
                return self._membership(operator, negated=kind is OperatorKind.NOT_IN)
        raise UnsupportedOperatorError(f"{type(operator).__name__} cannot be expressed in natural language")

    def _conjunct(self, operand: Operator) -> str:
        rendered = self._render(operand)
        return f"({rendered})" if getattr(operand, "kind", None) is OperatorKind.OR else rendered

    def _render_not(self, operator: Operator) -> str:
        (inner,) = operator.get_operands()
        kind = getattr(inner, "kind", None)
        if kind is OperatorKind.EQUAL_TO and _compares_to_null(inner):
            return f"{field_path(inner.get_operands()[0], inner)} is not null"
        if kind is OperatorKind.IS_EMPTY:
            (subject,) = inner.get_operands()
            return f"{field_path(subject, inner)} is not empty"
        if kind is OperatorKind.BETWEEN:
            return self._between(inner, negated=True)
        return f"not ({self._render(inner)})"

    def _between(self, operator: Operator, negated: bool = False) -> str:
        subject, low, high = operator.get_operands()
        phrase = "is not between" if negated else "is between"
        return (
            f"{field_path(subject, operator)} {phrase} "
            f"{format_value(literal_of(low, operator))} and {format_value(literal_of(high, operator))}"
        )

    def _membership(self, operator: Operator, negated: bool) -> str:
        path, values = field_and_literal(operator)
        if not isinstance(values, (list, tuple)) or not values:
            raise StructuralMismatchError("Membership needs a non-empty list of values")
        rendered = [format_value(value) for value in values]
        if not negated and len(rendered) == 2:
            return f"{path} is either {rendered[0]} or {rendered[1]}"
        phrase = "is not one of" if negated else "is one of"
        return f"{path} {phrase} {', '.join(rendered)}"


def _compares_to_null(operator: Operator) -> bool:
    _, right = operator.get_operands()
    return is_literal(right) and literal_value(right) is None
