"""AST produced by :class:`SqlParser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class FieldRef:
    """A column reference on the right-hand side of a comparison."""

    path: str


@dataclass(frozen=True)
class LogicalNode:
    operator: Literal["AND", "OR"]
    children: tuple[SqlNode, ...]


@dataclass(frozen=True)
class NotNode:
    child: SqlNode


@dataclass(frozen=True)
class ComparisonNode:
    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class BetweenNode:
    field: str
    low: Any
    high: Any
    negated: bool = False


@dataclass(frozen=True)
class InNode:
    field: str
    values: tuple[Any, ...]
    negated: bool = False


@dataclass(frozen=True)
class LikeNode:
    field: str
    pattern: str
    negated: bool = False


@dataclass(frozen=True)
class NullNode:
    field: str
    negated: bool = False


type SqlNode = LogicalNode | NotNode | ComparisonNode | BetweenNode | InNode | LikeNode | NullNode
