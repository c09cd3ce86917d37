"""Compile SQL-WHERE ASTs to operator trees."""

from __future__ import annotations

import logging
from typing import Any

from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Proposition
from rulesmith.dsl.operands import literal, wildcard_to_regex
from rulesmith.dsl.sql.nodes import (
    BetweenNode,
    ComparisonNode,
    FieldRef,
    InNode,
    LikeNode,
    LogicalNode,
    NotNode,
    NullNode,
    SqlNode,
)
from rulesmith.exceptions.dsl import UnsupportedConstructError
from rulesmith.operators import (
    And,
    Between,
    DoesNotMatch,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    LessThan,
    LessThanOrEqualTo,
    Matches,
    Not,
    NotEqualTo,
    NotIn,
    Or,
)

logger = logging.getLogger(__name__)

_COMPARISONS: dict[str, type[Proposition]] = {
    "=": EqualTo,
    "!=": NotEqualTo,
    "<>": NotEqualTo,
    ">": GreaterThan,
    ">=": GreaterThanOrEqualTo,
    "<": LessThan,
    "<=": LessThanOrEqualTo,
}


class SqlCompiler:
    def compile(self, node: SqlNode) -> Proposition:
        resolver = FieldResolver()
        proposition = self._build(node, resolver)
        logger.debug("Compiled SQL expression with %d field references", len(resolver))
        return proposition

    def _build(self, node: SqlNode, resolver: FieldResolver) -> Proposition:
        match node:
            case LogicalNode(operator="AND", children=children):
                return And(*(self._build(child, resolver) for child in children))
            case LogicalNode(operator="OR", children=children):
                return Or(*(self._build(child, resolver) for child in children))
            case NotNode(child=child):
                return Not(self._build(child, resolver))
            case ComparisonNode(field=field, operator=operator, value=value):
                cls = _COMPARISONS.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported SQL operator '{operator}'")
                return cls(resolver.resolve(field), self._operand(value, resolver))
            case BetweenNode(field=field, low=low, high=high, negated=negated):
                between = Between(resolver.resolve(field), literal(low), literal(high))
                return Not(between) if negated else between
            case InNode(field=field, values=values, negated=negated):
                cls = NotIn if negated else In
                return cls(resolver.resolve(field), literal(list(values)))
            case LikeNode(field=field, pattern=pattern, negated=negated):
                cls = DoesNotMatch if negated else Matches
                return cls(resolver.resolve(field), literal(wildcard_to_regex(pattern, "%", "_")))
            case NullNode(field=field, negated=negated):
                is_null = EqualTo(resolver.resolve(field), literal(None))
                return Not(is_null) if negated else is_null
        raise UnsupportedConstructError(f"Unsupported SQL node {node!r}")

    @staticmethod
    def _operand(value: Any, resolver: FieldResolver) -> Any:
        if isinstance(value, FieldRef):
            return resolver.resolve(value.path)
        return literal(value)
