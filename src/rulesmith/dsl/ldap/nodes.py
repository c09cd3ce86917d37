"""AST produced by :class:`LdapParser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class LogicalNode:
    operator: Literal["and", "or"]
    children: tuple[LdapNode, ...]


@dataclass(frozen=True)
class NotNode:
    child: LdapNode


@dataclass(frozen=True)
class ComparisonNode:
    attribute: str
    operator: str
    value: Any


@dataclass(frozen=True)
class PresenceNode:
    """``(attr=*)``."""

    attribute: str


@dataclass(frozen=True)
class WildcardNode:
    """``(attr=ab*cd)``; ``parts`` are the literal pieces between stars."""

    attribute: str
    parts: tuple[str, ...]


@dataclass(frozen=True)
class ApproximateNode:
    """``(attr~=value)``: case-insensitive substring match."""

    attribute: str
    value: str


type LdapNode = LogicalNode | NotNode | ComparisonNode | PresenceNode | WildcardNode | ApproximateNode
