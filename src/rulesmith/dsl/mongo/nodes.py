"""AST produced by :class:`MongoParser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MatchAllNode:
    """The empty query ``{}``."""


@dataclass(frozen=True)
class LogicalNode:
    operator: str
    children: tuple[MongoNode, ...]


@dataclass(frozen=True)
class FieldNode:
    field: str
    operator: str
    value: Any
    options: str = ""


type MongoNode = MatchAllNode | LogicalNode | FieldNode
