"""Parse GraphQL-filter objects into :mod:`~rulesmith.dsl.graphql.nodes`.

Logical keys are ``AND``/``OR`` (lists) and ``NOT`` (an object). Every
other key is a field; several fields on one level, or several operators on
one field, form an implicit conjunction. A scalar is shorthand for ``eq``
and nested objects without operator keys are flattened to dotted paths.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rulesmith.constants.config import DEFAULT_MAX_DEPTH
from rulesmith.constants.graphql import (
    LIST_OPERATORS,
    NULL_OPERATORS,
    OPERATOR_KEYS,
    RANGE_OPERATORS,
    STRING_OPERATORS,
    TYPE_OPERATORS,
)
from rulesmith.dsl.document import flatten_fields, is_operator_map, load_document
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
from rulesmith.exceptions.dsl import DslSyntaxError


def _is_operator(key: str) -> bool:
    return key in OPERATOR_KEYS


class GraphQLParser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, source: str | Mapping[str, Any]) -> GraphQLNode:
        return self._parse_object(load_document(source), 1)

    def _parse_object(self, document: Mapping[str, Any], depth: int) -> GraphQLNode:
        if depth > self.max_depth:
            raise DslSyntaxError(f"Filter nesting exceeds maximum depth of {self.max_depth}")
        if not document:
            raise DslSyntaxError("Filter object must not be empty")

        conditions: list[GraphQLNode] = []
        for key, value in document.items():
            if key in ("AND", "OR"):
                if not isinstance(value, list) or not value:
                    raise DslSyntaxError(f"{key} requires a non-empty list of filter objects")
                children = tuple(self._parse_child(item, key, depth) for item in value)
                conditions.append(LogicalNode(key, children))
            elif key == "NOT":
                conditions.append(LogicalNode("NOT", (self._parse_child(value, key, depth),)))
            else:
                for path, condition in flatten_fields({key: value}, _is_operator):
                    conditions.extend(self._parse_field(path, condition))

        if len(conditions) == 1:
            return conditions[0]
        return LogicalNode("AND", tuple(conditions))

    def _parse_child(self, value: Any, key: str, depth: int) -> GraphQLNode:
        if not isinstance(value, Mapping):
            raise DslSyntaxError(f"{key} operands must be filter objects, got {type(value).__name__}")
        return self._parse_object(value, depth + 1)

    def _parse_field(self, path: str, condition: Any) -> list[GraphQLNode]:
        if not is_operator_map(condition, _is_operator):
            return [ComparisonNode(path, "eq", condition)]

        nodes: list[GraphQLNode] = []
        for operator, value in condition.items():
            if operator in LIST_OPERATORS:
                if not isinstance(value, list):
                    raise DslSyntaxError(f"{path}: '{operator}' requires a list")
                nodes.append(ListNode(path, operator, tuple(value)))
            elif operator in RANGE_OPERATORS:
                if not isinstance(value, list) or len(value) != 2:
                    raise DslSyntaxError(f"{path}: '{operator}' requires a [min, max] pair")
                nodes.append(RangeNode(path, value[0], value[1]))
            elif operator in STRING_OPERATORS:
                if not isinstance(value, str):
                    raise DslSyntaxError(f"{path}: '{operator}' requires a string")
                nodes.append(StringNode(path, operator, value))
            elif operator in NULL_OPERATORS:
                if not isinstance(value, bool):
                    raise DslSyntaxError(f"{path}: '{operator}' requires a boolean")
                nodes.append(NullNode(path, value))
            elif operator in TYPE_OPERATORS:
                if not isinstance(value, str):
                    raise DslSyntaxError(f"{path}: '{operator}' requires a type name")
                nodes.append(TypeNode(path, value))
            else:
                nodes.append(ComparisonNode(path, operator, value))
        return nodes
