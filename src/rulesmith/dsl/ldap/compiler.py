"""Compile LDAP filter ASTs to operator trees."""

from __future__ import annotations

import logging
import re

from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Proposition
from rulesmith.dsl.ldap.nodes import (
    ApproximateNode,
    ComparisonNode,
    LdapNode,
    LogicalNode,
    NotNode,
    PresenceNode,
    WildcardNode,
)
from rulesmith.dsl.operands import literal
from rulesmith.exceptions.dsl import UnsupportedConstructError
from rulesmith.operators import (
    And,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    LessThan,
    LessThanOrEqualTo,
    Matches,
    Not,
    NotEqualTo,
    Or,
)

logger = logging.getLogger(__name__)

_COMPARISONS: dict[str, type[Proposition]] = {
    "=": EqualTo,
    "!=": NotEqualTo,
    ">": GreaterThan,
    ">=": GreaterThanOrEqualTo,
    "<": LessThan,
    "<=": LessThanOrEqualTo,
}

APPROXIMATE_PREFIX: str = "(?i)"


class LdapCompiler:
    def compile(self, node: LdapNode) -> Proposition:
        resolver = FieldResolver()
        proposition = self._build(node, resolver)
        logger.debug("Compiled LDAP filter with %d field references", len(resolver))
        return proposition

    def _build(self, node: LdapNode, resolver: FieldResolver) -> Proposition:
        match node:
            case LogicalNode(operator="and", children=children):
                return And(*(self._build(child, resolver) for child in children))
            case LogicalNode(operator="or", children=children):
                return Or(*(self._build(child, resolver) for child in children))
            case NotNode(child=child):
                return Not(self._build(child, resolver))
            case PresenceNode(attribute=attribute):
                return Not(EqualTo(resolver.resolve(attribute), literal(None)))
            case WildcardNode(attribute=attribute, parts=parts):
                pattern = "^" + ".*".join(re.escape(part) for part in parts) + "$"
                return Matches(resolver.resolve(attribute), literal(pattern))
            case ApproximateNode(attribute=attribute, value=value):
                return Matches(resolver.resolve(attribute), literal(APPROXIMATE_PREFIX + re.escape(value)))
            case ComparisonNode(attribute=attribute, operator=operator, value=value):
                cls = _COMPARISONS.get(operator)
                if cls is None:
                    raise UnsupportedConstructError(f"Unsupported LDAP operator '{operator}'")
                return cls(resolver.resolve(attribute), literal(value))
        raise UnsupportedConstructError(f"Unsupported LDAP node {node!r}")
