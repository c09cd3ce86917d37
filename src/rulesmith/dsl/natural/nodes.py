"""AST produced by :class:`NaturalParser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class LogicalNode:
    operator: Literal["and", "or"]
    children: tuple[NaturalNode, ...]


@dataclass(frozen=True)
class NotNode:
    child: NaturalNode


@dataclass(frozen=True)
class ComparisonNode:
    """``field <phrase> value``; ``operator`` is one of eq ne gt gte lt lte."""

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
class EmptyNode:
    """``field is empty`` or ``field is not empty``."""

    field: str
    negated: bool = False


@dataclass(frozen=True)
class StringNode:
    field: str
    operator: str
    value: Any


type NaturalNode = LogicalNode | NotNode | ComparisonNode | BetweenNode | InNode | EmptyNode | StringNode
