"""Compile Mongo-style ASTs to operator trees."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from typing import Any

from rulesmith.constants.mongo import MEASURE_OPERATORS, REGEX_FLAGS, TYPE_NAMES
from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Operator, Proposition
from rulesmith.dsl.mongo.nodes import FieldNode, LogicalNode, MatchAllNode, MongoNode
from rulesmith.dsl.operands import checked_pattern, literal
from rulesmith.exceptions.dsl import UnsupportedConstructError
from rulesmith.operators import (
    OPERATOR_CLASSES,
    After,
    And,
    ArrayCount,
    Before,
    Between,
    Contains,
    ContainsInsensitive,
    ContainsSubset,
    DoesNotContain,
    DoesNotContainInsensitive,
    DoesNotContainSubset,
    DoesNotMatch,
    EndsWith,
    EndsWithInsensitive,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    IsBetweenDates,
    IsEmpty,
    LessThan,
    LessThanOrEqualTo,
    Matches,
    Nand,
    Nor,
    Not,
    NotEqualTo,
    NotIn,
    NotSameAs,
    Or,
    SameAs,
    StartsWith,
    StartsWithInsensitive,
    StringLength,
    Xor,
)
from rulesmith.types.operators import OperatorKind

logger = logging.getLogger(__name__)

_LOGICAL: dict[str, type[Proposition]] = {
    "$and": And,
    "$or": Or,
    "$nor": Nor,
    "$xor": Xor,
    "$nand": Nand,
}

_BINARY: dict[str, type[Proposition]] = {
    "$eq": EqualTo,
    "$ne": NotEqualTo,
    "$gt": GreaterThan,
    "$gte": GreaterThanOrEqualTo,
    "$lt": LessThan,
    "$lte": LessThanOrEqualTo,
    "$in": In,
    "$nin": NotIn,
    "$same": SameAs,
    "$nsame": NotSameAs,
    "$all": ContainsSubset,
    "$nall": DoesNotContainSubset,
    "$startsWith": StartsWith,
    "$startsWithi": StartsWithInsensitive,
    "$endsWith": EndsWith,
    "$endsWithi": EndsWithInsensitive,
    "$contains": Contains,
    "$containsi": ContainsInsensitive,
    "$notContains": DoesNotContain,
    "$notContainsi": DoesNotContainInsensitive,
    "$after": After,
    "$before": Before,
}


def regex_with_options(pattern: str, options: str) -> str:
    """Fold Mongo ``$options`` letters into inline regex flags."""
    unknown = set(options) - set(REGEX_FLAGS)
    if unknown:
        raise UnsupportedConstructError(f"Unsupported $options flags: {''.join(sorted(unknown))}")
    flags = "".join(flag for flag in REGEX_FLAGS if flag in options)
    return f"(?{flags}){pattern}" if flags else pattern


class MongoCompiler:
    def compile(self, node: MongoNode) -> Proposition:
        resolver = FieldResolver()
        proposition = self._build(node, resolver)
        logger.debug("Compiled Mongo query with %d field references", len(resolver))
        return proposition

    def _build(self, node: MongoNode, resolver: FieldResolver) -> Proposition:
        match node:
            case MatchAllNode():
                return EqualTo(literal(True), literal(True))
            case LogicalNode(operator="$not", children=(child,)):
                return Not(self._build(child, resolver))
            case LogicalNode(operator=operator, children=children):
                cls = _LOGICAL.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported logical operator '{operator}'")
                return cls(*(self._build(child, resolver) for child in children))
            case FieldNode():
                return self._build_field(node, resolver.resolve(node.field))
        raise UnsupportedConstructError(f"Unsupported Mongo query node {node!r}")

    def _build_field(self, node: FieldNode, field: Any) -> Proposition:
        operator, value = node.operator, node.value
        if operator in _BINARY:
            return _BINARY[operator](field, literal(value))
        match operator:
            case "$regex":
                return Matches(field, literal(checked_pattern(regex_with_options(value, node.options))))
            case "$notRegex":
                return DoesNotMatch(field, literal(checked_pattern(value)))
            case "$between":
                return Between(field, literal(value[0]), literal(value[1]))
            case "$betweenDates":
                return IsBetweenDates(field, literal(value[0]), literal(value[1]))
            case "$exists":
                missing = EqualTo(field, literal(None))
                return Not(missing) if value else missing
            case "$empty":
                check = IsEmpty(field)
                return check if value else Not(check)
            case "$type":
                kind = TYPE_NAMES.get(value)
                if kind is None:
                    raise UnsupportedConstructError(f"Unsupported type '{value}' for '{node.field}'")
                return OPERATOR_CLASSES[OperatorKind(kind)](field)  # type: ignore[return-value]
            case "$size":
                return _measure(ArrayCount(field), value, operator)
            case "$strLength":
                return _measure(StringLength(field), value, operator)
        raise UnsupportedConstructError(f"Unsupported operator '{operator}' on '{node.field}'")


def _measure(measure: Operator, comparison: Any, operator: str) -> Proposition:
    """Compare a derived count against a number or a ``{"$gt": n}`` object."""
    if isinstance(comparison, numbers.Real) and not isinstance(comparison, bool):
        return EqualTo(measure, literal(comparison))
    if not isinstance(comparison, Mapping) or not comparison:
        raise UnsupportedConstructError(f"{operator} requires a number or comparison object")
    conditions: list[Proposition] = []
    for name, operand in comparison.items():
        if name not in MEASURE_OPERATORS:
            raise UnsupportedConstructError(f"Unsupported {operator} operator: {name}")
        conditions.append(_BINARY[name](measure, literal(operand)))
    return conditions[0] if len(conditions) == 1 else And(*conditions)
