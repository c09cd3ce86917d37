"""Render operator trees back to SQL-WHERE text.

Child disjunctions are parenthesized inside conjunctions; ``NOT`` always
wraps its operand in parentheses.
"""

from __future__ import annotations

from typing import Any

from rulesmith.constants.sql import COMPARISON_SYMBOL
from rulesmith.core.operator import Operator
from rulesmith.core.rule import Rule
from rulesmith.core.variables import is_field, is_literal, literal_value
from rulesmith.dsl.operands import field_and_literal, field_path, format_number, literal_of, regex_to_wildcard
from rulesmith.exceptions.dsl import StructuralMismatchError, UnsupportedOperatorError
from rulesmith.types.operators import OperatorKind

_SYMBOLS: dict[OperatorKind, str] = {
    OperatorKind.EQUAL_TO: COMPARISON_SYMBOL["eq"],
    OperatorKind.NOT_EQUAL_TO: COMPARISON_SYMBOL["ne"],
    OperatorKind.GREATER_THAN: COMPARISON_SYMBOL["gt"],
    OperatorKind.GREATER_THAN_OR_EQUAL_TO: COMPARISON_SYMBOL["gte"],
    OperatorKind.LESS_THAN: COMPARISON_SYMBOL["lt"],
    OperatorKind.LESS_THAN_OR_EQUAL_TO: COMPARISON_SYMBOL["lte"],
}

# Binding strength; a child weaker than its parent is parenthesized.
_PRECEDENCE: dict[OperatorKind, int] = {OperatorKind.OR: 1, OperatorKind.AND: 2}
_LEAF = 3


def format_value(value: Any) -> str:
    if value is None:
        return "NULL"
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    raise StructuralMismatchError(f"{type(value).__name__} values have no SQL literal form")


class SqlSerializer:
    def serialize(self, rule: Rule | Operator) -> str:
        root = rule.condition if isinstance(rule, Rule) else rule
        return self._render(root)

    def _render(self, operator: Operator) -> str:
        kind = getattr(operator, "kind", None)
        match kind:
            case OperatorKind.AND | OperatorKind.OR:
                joiner = " AND " if kind is OperatorKind.AND else " OR "
                return joiner.join(self._child(o, _PRECEDENCE[kind]) for o in operator.get_operands())
            case OperatorKind.NOT:
                return self._render_not(operator)
            case OperatorKind.EQUAL_TO if _compares_to_null(operator):
                return f"{field_path(operator.get_operands()[0], operator)} IS NULL"
            case _ if kind in _SYMBOLS:
                left, right = operator.get_operands()
                rhs = field_path(right, operator) if is_field(right) else format_value(literal_of(right, operator))
                return f"{field_path(left, operator)} {_SYMBOLS[kind]} {rhs}"
            case OperatorKind.BETWEEN:
                return self._between(operator)
            case OperatorKind.IN | OperatorKind.NOT_IN:
                path, values = field_and_literal(operator)
                if not isinstance(values, (list, tuple)) or not values:
                    raise StructuralMismatchError("IN needs a non-empty list of values")
                keyword = "IN" if kind is OperatorKind.IN else "NOT IN"
                return f"{path} {keyword} ({', '.join(format_value(v) for v in values)})"
            case OperatorKind.MATCHES | OperatorKind.DOES_NOT_MATCH:
                path, pattern = field_and_literal(operator)
                keyword = "LIKE" if kind is OperatorKind.MATCHES else "NOT LIKE"
                return f"{path} {keyword} {format_value(_like_pattern(pattern))}"
        raise UnsupportedOperatorError(f"{type(operator).__name__} cannot be expressed in SQL")

    def _child(self, operand: Operator, parent_precedence: int) -> str:
        rendered = self._render(operand)
        precedence = _PRECEDENCE.get(getattr(operand, "kind", None), _LEAF)  # type: ignore[arg-type]
        return f"({rendered})" if precedence < parent_precedence else rendered

    def _render_not(self, operator: Operator) -> str:
        (inner,) = operator.get_operands()
        kind = getattr(inner, "kind", None)
        if kind is OperatorKind.EQUAL_TO and _compares_to_null(inner):
            return f"{field_path(inner.get_operands()[0], inner)} IS NOT NULL"
        if kind is OperatorKind.BETWEEN:
            return self._between(inner, negated=True)
        return f"NOT ({self._render(inner)})"

    def _between(self, operator: Operator, negated: bool = False) -> str:
        subject, low, high = operator.get_operands()
        keyword = "NOT BETWEEN" if negated else "BETWEEN"
        return (
            f"{field_path(subject, operator)} {keyword} "
            f"{format_value(literal_of(low, operator))} AND {format_value(literal_of(high, operator))}"
        )


def _compares_to_null(operator: Operator) -> bool:
    _, right = operator.get_operands()
    return is_literal(right) and literal_value(right) is None


def _like_pattern(pattern: Any) -> str:
    segments = regex_to_wildcard(pattern, single=True) if isinstance(pattern, str) else None
    if segments is None:
        raise UnsupportedOperatorError(f"Regular expression {pattern!r} has no LIKE equivalent")
    parts: list[str] = []
    for kind, text in segments:
        if kind == "many":
            parts.append("%")
        elif kind == "one":
            parts.append("_")
        elif text in ("%", "_"):
            raise UnsupportedOperatorError(f"Literal {text!r} cannot be expressed in a LIKE pattern")
        else:
            parts.append(text)
    return "".join(parts)
