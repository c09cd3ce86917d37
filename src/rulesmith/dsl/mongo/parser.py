"""Parse Mongo-style query documents into :mod:`~rulesmith.dsl.mongo.nodes`."""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any

from rulesmith.constants.config import DEFAULT_MAX_DEPTH
from rulesmith.constants.mongo import LOGICAL_KEYS
from rulesmith.dsl.document import flatten_fields, is_operator_map, load_document
from rulesmith.dsl.mongo.nodes import FieldNode, LogicalNode, MatchAllNode, MongoNode
from rulesmith.exceptions.dsl import DslSyntaxError

_LIST_OPERATORS: frozenset[str] = frozenset({"$in", "$nin", "$all", "$nall"})
_PAIR_OPERATORS: frozenset[str] = frozenset({"$between", "$betweenDates"})
_BOOL_OPERATORS: frozenset[str] = frozenset({"$exists", "$empty"})
_STRING_OPERATORS: frozenset[str] = frozenset(
    {
        "$regex",
        "$notRegex",
        "$type",
        "$startsWith",
        "$startsWithi",
        "$endsWith",
        "$endsWithi",
        "$containsi",
        "$notContainsi",
    }
)
_MEASURE_OPERATORS: frozenset[str] = frozenset({"$size", "$strLength"})


def _is_operator(key: str) -> bool:
    return key.startswith("$")


class MongoParser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, source: str | Mapping[str, Any]) -> MongoNode:
        return self._parse_query(load_document(source), 1)

    def _parse_query(self, query: Mapping[str, Any], depth: int) -> MongoNode:
        if depth > self.max_depth:
            raise DslSyntaxError(f"Query nesting exceeds maximum depth of {self.max_depth}")
        if not query:
            return MatchAllNode()

        conditions: list[MongoNode] = []
        for key, value in query.items():
            if key == "$not":
                conditions.append(LogicalNode("$not", (self._parse_negated(value, depth),)))
            elif key in LOGICAL_KEYS or (isinstance(key, str) and key.startswith("$")):
                if not isinstance(value, list) or not value:
                    raise DslSyntaxError(f"{key} requires a non-empty list of query objects")
                children = tuple(self._parse_child(item, key, depth) for item in value)
                conditions.append(LogicalNode(key, children))
            else:
                for path, condition in flatten_fields({key: value}, _is_operator):
                    conditions.extend(self._parse_field(path, condition, depth))

        if len(conditions) == 1:
            return conditions[0]
        return LogicalNode("$and", tuple(conditions))

    def _parse_child(self, value: Any, key: str, depth: int) -> MongoNode:
        if not isinstance(value, Mapping):
            raise DslSyntaxError(f"{key} operands must be query objects, got {type(value).__name__}")
        return self._parse_query(value, depth + 1)

    def _parse_negated(self, value: Any, depth: int) -> MongoNode:
        # A bare field name negates that field's existence.
        if isinstance(value, str):
            if not value:
                raise DslSyntaxError("$not field name must not be empty")
            return FieldNode(value, "$exists", True)
        return self._parse_child(value, "$not", depth)

    def _parse_field(self, path: str, condition: Any, depth: int) -> list[MongoNode]:
        if not is_operator_map(condition, _is_operator):
            return [FieldNode(path, "$eq", condition)]

        options = condition.get("$options", "")
        if "$options" in condition and ("$regex" not in condition or not isinstance(options, str)):
            raise DslSyntaxError(f"{path}: '$options' must be a string accompanying '$regex'")

        nodes: list[MongoNode] = []
        for operator, value in condition.items():
            if operator == "$options":
                continue
            if operator == "$not":
                if not is_operator_map(value, _is_operator):
                    raise DslSyntaxError(f"{path}: field-level '$not' requires an operator object")
                if depth + 1 > self.max_depth:
                    raise DslSyntaxError(f"Query nesting exceeds maximum depth of {self.max_depth}")
                inner = self._parse_field(path, value, depth + 1)
                child = inner[0] if len(inner) == 1 else LogicalNode("$and", tuple(inner))
                nodes.append(LogicalNode("$not", (child,)))
                continue
            _check_operand(path, operator, value)
            nodes.append(FieldNode(path, operator, value, options if operator == "$regex" else ""))
        return nodes


def _check_operand(path: str, operator: str, value: Any) -> None:
    if operator in _LIST_OPERATORS and not isinstance(value, list):
        raise DslSyntaxError(f"{path}: '{operator}' requires a list")
    if operator in _PAIR_OPERATORS and (not isinstance(value, list) or len(value) != 2):
        raise DslSyntaxError(f"{path}: '{operator}' requires exactly 2 values [min, max]")
    if operator in _BOOL_OPERATORS and not isinstance(value, bool):
        raise DslSyntaxError(f"{path}: '{operator}' requires a boolean")
    if operator in _STRING_OPERATORS and not isinstance(value, str):
        raise DslSyntaxError(f"{path}: '{operator}' requires a string")
    if operator in _MEASURE_OPERATORS:
        is_number = isinstance(value, numbers.Real) and not isinstance(value, bool)
        if not is_number and not isinstance(value, Mapping):
            raise DslSyntaxError(f"{path}: '{operator}' requires a number or comparison object")
