"""Compile natural-language ASTs to operator trees."""

from __future__ import annotations

import logging

from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Proposition
from rulesmith.dsl.natural.nodes import (
    BetweenNode,
    ComparisonNode,
    EmptyNode,
    InNode,
    LogicalNode,
    NaturalNode,
    NotNode,
    StringNode,
)
from rulesmith.dsl.operands import literal
from rulesmith.exceptions.dsl import UnsupportedConstructError
from rulesmith.operators import (
    And,
    Between,
    Contains,
    DoesNotContain,
    EndsWith,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    IsEmpty,
    LessThan,
    LessThanOrEqualTo,
    Not,
    NotEqualTo,
    NotIn,
    Or,
    StartsWith,
)

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
    "startsWith": StartsWith,
    "endsWith": EndsWith,
}


class NaturalCompiler:
    def compile(self, node: NaturalNode) -> Proposition:
        resolver = FieldResolver()
        proposition = self._build(node, resolver)
        logger.debug("Compiled natural-language rule with %d field references", len(resolver))
        return proposition

    def _build(self, node: NaturalNode, resolver: FieldResolver) -> Proposition:
        match node:
            case LogicalNode(operator="and", children=children):
                return And(*(self._build(child, resolver) for child in children))
            case LogicalNode(operator="or", children=children):
                return Or(*(self._build(child, resolver) for child in children))
            case NotNode(child=child):
                return Not(self._build(child, resolver))
            case ComparisonNode(field=field, operator="ne", value=None):
                # "is not null" means the field exists.
                return Not(EqualTo(resolver.resolve(field), literal(None)))
            case ComparisonNode(field=field, operator=operator, value=value):
                cls = _COMPARISONS.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported comparison '{operator}'")
                return cls(resolver.resolve(field), literal(value))
            case BetweenNode(field=field, low=low, high=high, negated=negated):
                between = Between(resolver.resolve(field), literal(low), literal(high))
                return Not(between) if negated else between
            case EmptyNode(field=field, negated=negated):
                empty = IsEmpty(resolver.resolve(field))
                return Not(empty) if negated else empty
            case InNode(field=field, values=values, negated=negated):
                cls = NotIn if negated else In
                return cls(resolver.resolve(field), literal(list(values)))
            case StringNode(field=field, operator=operator, value=value):
                cls = _STRINGS.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported string operator '{operator}'")
                return cls(resolver.resolve(field), literal(value))
        raise UnsupportedConstructError(f"Unsupported natural-language node {node!r}")
