"""AST produced by :class:`GraphQLParser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class LogicalNode:
    operator: Literal["AND", "OR", "NOT"]
    children: tuple[GraphQLNode, ...]


@dataclass(frozen=True)
class ComparisonNode:
    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class ListNode:
    field: str
    operator: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class RangeNode:
    field: str
    low: Any
    high: Any


@dataclass(frozen=True)
class StringNode:
    field: str
    operator: str
    value: str


@dataclass(frozen=True)
class NullNode:
    field: str
    is_null: bool


@dataclass(frozen=True)
class TypeNode:
    field: str
    type_name: str


type GraphQLNode = LogicalNode | ComparisonNode | ListNode | RangeNode | StringNode | NullNode | TypeNode
