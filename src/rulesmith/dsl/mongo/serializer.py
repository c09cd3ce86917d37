"""Render operator trees back to Mongo-style query documents."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from rulesmith.constants.mongo import LOGICAL_KEYS
from rulesmith.core.operator import Operator
from rulesmith.core.rule import Rule
from rulesmith.core.variables import is_literal, literal_value
from rulesmith.dsl.document import json_default, merge_conjunction
from rulesmith.dsl.operands import field_and_literal, field_path, literal_of
from rulesmith.exceptions.dsl import StructuralMismatchError, UnsupportedOperatorError
from rulesmith.types.operators import OperatorKind

_LOGICAL: dict[OperatorKind, str] = {
    OperatorKind.OR: "$or",
    OperatorKind.NOR: "$nor",
    OperatorKind.XOR: "$xor",
    OperatorKind.NAND: "$nand",
}

_COMPARISONS: dict[OperatorKind, str] = {
    OperatorKind.EQUAL_TO: "$eq",
    OperatorKind.NOT_EQUAL_TO: "$ne",
    OperatorKind.GREATER_THAN: "$gt",
    OperatorKind.GREATER_THAN_OR_EQUAL_TO: "$gte",
    OperatorKind.LESS_THAN: "$lt",
    OperatorKind.LESS_THAN_OR_EQUAL_TO: "$lte",
}

_FIELD_OPERATORS: dict[OperatorKind, str] = {
    **_COMPARISONS,
    OperatorKind.IN: "$in",
    OperatorKind.NOT_IN: "$nin",
    OperatorKind.SAME_AS: "$same",
    OperatorKind.NOT_SAME_AS: "$nsame",
    OperatorKind.CONTAINS_SUBSET: "$all",
    OperatorKind.DOES_NOT_CONTAIN_SUBSET: "$nall",
    OperatorKind.DOES_NOT_MATCH: "$notRegex",
    OperatorKind.STARTS_WITH: "$startsWith",
    OperatorKind.STARTS_WITH_INSENSITIVE: "$startsWithi",
    OperatorKind.ENDS_WITH: "$endsWith",
    OperatorKind.ENDS_WITH_INSENSITIVE: "$endsWithi",
    OperatorKind.CONTAINS: "$contains",
    OperatorKind.CONTAINS_INSENSITIVE: "$containsi",
    OperatorKind.DOES_NOT_CONTAIN: "$notContains",
    OperatorKind.DOES_NOT_CONTAIN_INSENSITIVE: "$notContainsi",
    OperatorKind.AFTER: "$after",
    OperatorKind.BEFORE: "$before",
}

_TYPE_CHECKS: dict[OperatorKind, str] = {
    OperatorKind.IS_NULL: "null",
    OperatorKind.IS_ARRAY: "array",
    OperatorKind.IS_BOOLEAN: "boolean",
    OperatorKind.IS_NUMERIC: "number",
    OperatorKind.IS_STRING: "string",
}

_MEASURES: dict[OperatorKind, str] = {
    OperatorKind.ARRAY_COUNT: "$size",
    OperatorKind.STRING_LENGTH: "$strLength",
}

_INLINE_FLAGS = re.compile(r"^\(\?([ims]+)\)")


def _kind(operand: Any) -> OperatorKind | None:
    return getattr(operand, "kind", None)


class MongoSerializer:
    def serialize(self, rule: Rule | Operator) -> str:
        """Render as JSON text that :class:`MongoParser` accepts."""
        return json.dumps(self.to_document(rule), default=json_default)

    def to_document(self, rule: Rule | Operator) -> dict[str, Any]:
        root = rule.condition if isinstance(rule, Rule) else rule
        return self._render(root)

    def _render(self, operator: Operator) -> dict[str, Any]:
        kind = _kind(operator)
        match kind:
            case OperatorKind.AND:
                children = [self._render(o) for o in operator.get_operands()]
                merged = merge_conjunction(children, _is_logical, _is_operator)
                return merged if merged is not None else {"$and": children}
            case _ if kind in _LOGICAL:
                return {_LOGICAL[kind]: [self._render(o) for o in operator.get_operands()]}
            case OperatorKind.NOT:
                return self._render_not(operator)
            case OperatorKind.EQUAL_TO if _is_match_all(operator):
                return {}
            case _ if kind in _COMPARISONS and _kind(operator.get_operands()[0]) in _MEASURES:
                return self._render_measure(operator)
            case OperatorKind.EQUAL_TO:
                path, value = field_and_literal(operator)
                if value is None:
                    return {path: {"$exists": False}}
                if isinstance(value, Mapping):
                    return {path: {"$eq": value}}
                return {path: value}
            case OperatorKind.MATCHES:
                path, pattern = field_and_literal(operator)
                flags = _INLINE_FLAGS.match(pattern)
                if flags is None:
                    return {path: {"$regex": pattern}}
                return {path: {"$regex": pattern[flags.end() :], "$options": flags.group(1)}}
            case OperatorKind.BETWEEN | OperatorKind.IS_BETWEEN_DATES:
                subject, low, high = operator.get_operands()
                name = "$between" if kind is OperatorKind.BETWEEN else "$betweenDates"
                return {field_path(subject, operator): {name: [literal_of(low, operator), literal_of(high, operator)]}}
            case OperatorKind.IS_EMPTY:
                (subject,) = operator.get_operands()
                return {field_path(subject, operator): {"$empty": True}}
            case _ if kind in _TYPE_CHECKS:
                (subject,) = operator.get_operands()
                return {field_path(subject, operator): {"$type": _TYPE_CHECKS[kind]}}
            case _ if kind in _FIELD_OPERATORS:
                path, value = field_and_literal(operator)
                return {path: {_FIELD_OPERATORS[kind]: value}}
        raise UnsupportedOperatorError(f"{type(operator).__name__} cannot be expressed as a Mongo query")

    def _render_not(self, operator: Operator) -> dict[str, Any]:
        (inner,) = operator.get_operands()
        inner_kind = _kind(inner)
        if inner_kind is OperatorKind.EQUAL_TO and not _is_match_all(inner):
            left, right = inner.get_operands()
            if is_literal(right) and literal_value(right) is None:
                return {field_path(left, inner): {"$exists": True}}
        if inner_kind is OperatorKind.IS_EMPTY:
            (subject,) = inner.get_operands()
            return {field_path(subject, inner): {"$empty": False}}
        return {"$not": self._render(inner)}

    def _render_measure(self, operator: Operator) -> dict[str, Any]:
        measure, right = operator.get_operands()
        (subject,) = measure.get_operands()
        name = _MEASURES[_kind(measure)]  # type: ignore[index]
        value = literal_of(right, operator)
        if _kind(operator) is OperatorKind.EQUAL_TO:
            return {field_path(subject, measure): {name: value}}
        return {field_path(subject, measure): {name: {_COMPARISONS[_kind(operator)]: value}}}  # type: ignore[index]


def _is_match_all(operator: Operator) -> bool:
    left, right = operator.get_operands()
    if not (is_literal(left) and is_literal(right)):
        return False
    if literal_value(left) is True and literal_value(right) is True:
        return True
    raise StructuralMismatchError("EqualTo between two literals has no Mongo form other than {}")


def _is_logical(key: str) -> bool:
    return key in LOGICAL_KEYS


def _is_operator(key: str) -> bool:
    return key.startswith("$")
