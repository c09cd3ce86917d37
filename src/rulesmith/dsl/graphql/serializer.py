"""Render operator trees back to GraphQL-filter objects."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from rulesmith.constants.graphql import LOGICAL_KEYS, OPERATOR_KEYS
from rulesmith.core.operator import Operator
from rulesmith.core.rule import Rule
from rulesmith.dsl.document import json_default, merge_conjunction
from rulesmith.dsl.operands import field_and_literal, field_path, literal_of
from rulesmith.exceptions.dsl import UnsupportedOperatorError
from rulesmith.types.operators import OperatorKind

_FIELD_OPERATORS: dict[OperatorKind, str] = {
    OperatorKind.NOT_EQUAL_TO: "ne",
    OperatorKind.GREATER_THAN: "gt",
    OperatorKind.GREATER_THAN_OR_EQUAL_TO: "gte",
    OperatorKind.LESS_THAN: "lt",
    OperatorKind.LESS_THAN_OR_EQUAL_TO: "lte",
    OperatorKind.IN: "in",
    OperatorKind.NOT_IN: "notIn",
    OperatorKind.CONTAINS: "contains",
    OperatorKind.DOES_NOT_CONTAIN: "notContains",
    OperatorKind.CONTAINS_INSENSITIVE: "containsInsensitive",
    OperatorKind.DOES_NOT_CONTAIN_INSENSITIVE: "notContainsInsensitive",
    OperatorKind.STARTS_WITH: "startsWith",
    OperatorKind.ENDS_WITH: "endsWith",
    OperatorKind.MATCHES: "match",
}

_TYPE_CHECKS: dict[OperatorKind, str] = {
    OperatorKind.IS_STRING: "string",
    OperatorKind.IS_NUMERIC: "number",
    OperatorKind.IS_BOOLEAN: "boolean",
    OperatorKind.IS_ARRAY: "array",
}


class GraphQLSerializer:
    def serialize(self, rule: Rule | Operator) -> str:
        """Render as JSON text that :class:`GraphQLParser` accepts."""
        return json.dumps(self.to_document(rule), default=json_default)

    def to_document(self, rule: Rule | Operator) -> dict[str, Any]:
        root = rule.condition if isinstance(rule, Rule) else rule
        return self._render(root)

    def _render(self, operator: Operator) -> dict[str, Any]:
        kind = getattr(operator, "kind", None)
        match kind:
            case OperatorKind.AND:
                children = [self._render(o) for o in operator.get_operands()]
                merged = merge_conjunction(children, _is_logical, _is_operator)
                return merged if merged is not None else {"AND": children}
            case OperatorKind.OR:
                return {"OR": [self._render(o) for o in operator.get_operands()]}
            case OperatorKind.NOT:
                (inner,) = operator.get_operands()
                if getattr(inner, "kind", None) is OperatorKind.IS_NULL:
                    (subject,) = inner.get_operands()
                    return {field_path(subject, inner): {"isNull": False}}
                return {"NOT": self._render(inner)}
            case OperatorKind.EQUAL_TO:
                path, value = field_and_literal(operator)
                if isinstance(value, Mapping):
                    return {path: {"eq": value}}
                return {path: value}
            case OperatorKind.BETWEEN:
                subject, low, high = operator.get_operands()
                bounds = [literal_of(low, operator), literal_of(high, operator)]
                return {field_path(subject, operator): {"between": bounds}}
            case OperatorKind.IS_NULL:
                (subject,) = operator.get_operands()
                return {field_path(subject, operator): {"isNull": True}}
            case _ if kind in _TYPE_CHECKS:
                (subject,) = operator.get_operands()
                return {field_path(subject, operator): {"isType": _TYPE_CHECKS[kind]}}
            case _ if kind in _FIELD_OPERATORS:
                path, value = field_and_literal(operator)
                return {path: {_FIELD_OPERATORS[kind]: value}}
        raise UnsupportedOperatorError(f"{type(operator).__name__} cannot be expressed as a GraphQL filter")


def _is_logical(key: str) -> bool:
    return key in LOGICAL_KEYS


def _is_operator(key: str) -> bool:
    return key in OPERATOR_KEYS
