"""Compile GraphQL-filter ASTs to operator trees."""

from __future__ import annotations

import logging

from rulesmith.constants.graphql import TYPE_NAMES
from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Proposition
from rulesmith.dsl.graphql.nodes import (
    ComparisonNode,
    GraphQLNode,
    ListNode,
    LogicalNode,
    NullNode,
    RangeNode,
    StringNode,
    TypeNode,
)
from rulesmith.dsl.operands import checked_pattern, literal
from rulesmith.exceptions.dsl import UnsupportedConstructError
from rulesmith.operators import (
    OPERATOR_CLASSES,
    And,
    Between,
    Contains,
    ContainsInsensitive,
    DoesNotContain,
    DoesNotContainInsensitive,
    EndsWith,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    IsNull,
    LessThan,
    LessThanOrEqualTo,
    Matches,
    Not,
    NotEqualTo,
    NotIn,
    Or,
    StartsWith,
)
from rulesmith.types.operators import OperatorKind

logger = logging.getLogger(__name__)

_COMPARISONS: dict[str, type[Proposition]] = {
    "eq": EqualTo,
    "ne": NotEqualTo,
    "gt": GreaterThan,
    "gte": GreaterThanOrEqualTo,
    "lt": LessThan,
    "lte": LessThanOrEqualTo,
}

_STRINGS: dict[str, type[Proposition]] = {
    "contains": Contains,
    "notContains": DoesNotContain,
    "containsInsensitive": ContainsInsensitive,
    "notContainsInsensitive": DoesNotContainInsensitive,
    "startsWith": StartsWith,
    "endsWith": EndsWith,
    "match": Matches,
}


class GraphQLCompiler:
    def compile(self, node: GraphQLNode) -> Proposition:
        resolver = FieldResolver()
        proposition = self._build(node, resolver)
        logger.debug("Compiled GraphQL filter with %d field references", len(resolver))
        return proposition

    def _build(self, node: GraphQLNode, resolver: FieldResolver) -> Proposition:
        match node:
            case LogicalNode(operator="AND", children=children):
                return And(*(self._build(child, resolver) for child in children))
            case LogicalNode(operator="OR", children=children):
                return Or(*(self._build(child, resolver) for child in children))
            case LogicalNode(operator="NOT", children=(child,)):
                return Not(self._build(child, resolver))
            case ComparisonNode(field=field, operator=operator, value=value):
                cls = _COMPARISONS.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported GraphQL filter operator '{operator}' on '{field}'")
                return cls(resolver.resolve(field), literal(value))
            case ListNode(field=field, operator=operator, values=values):
                cls = In if operator == "in" else NotIn
                return cls(resolver.resolve(field), literal(list(values)))
            case RangeNode(field=field, low=low, high=high):
                return Between(resolver.resolve(field), literal(low), literal(high))
            case StringNode(field=field, operator=operator, value=value):
                if operator == "match":
                    value = checked_pattern(value)
                return _STRINGS[operator](resolver.resolve(field), literal(value))
            case NullNode(field=field, is_null=is_null):
                check = IsNull(resolver.resolve(field))
                return check if is_null else Not(check)
            case TypeNode(field=field, type_name=type_name):
                kind = TYPE_NAMES.get(type_name)
                if kind is None:
                    raise UnsupportedConstructError(f"Unsupported type '{type_name}' for '{field}'")
                return OPERATOR_CLASSES[OperatorKind(kind)](resolver.resolve(field))  # type: ignore[return-value]
        raise UnsupportedConstructError(f"Unsupported GraphQL filter node {node!r}")
