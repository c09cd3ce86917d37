"""Parse LDAP filter strings (RFC 4515 flavoured) into :mod:`~rulesmith.dsl.ldap.nodes`.

Beyond the standard ``= >= <= ~=`` items this grammar accepts ``!=``,
``>`` and ``<``. A single item may omit its outer parentheses, and several
top-level filters in sequence form an implicit conjunction. An item with
nothing after its operator compares against the empty string.
"""

from __future__ import annotations

import re
from typing import Any

from rulesmith.constants.config import DEFAULT_MAX_DEPTH
from rulesmith.constants.ldap import ITEM_OPERATORS
from rulesmith.dsl.ldap.lexer import Token, TokenType, tokenize
from rulesmith.dsl.ldap.nodes import (
    ApproximateNode,
    ComparisonNode,
    LdapNode,
    LogicalNode,
    NotNode,
    PresenceNode,
    WildcardNode,
)
from rulesmith.dsl.text import syntax_error
from rulesmith.exceptions.dsl import DslSyntaxError

_ITEM = re.compile(
    r"^(?P<attribute>[A-Za-z_][\w.\-]*)\s*(?P<operator>"
    + "|".join(re.escape(op) for op in ITEM_OPERATORS)
    + r")\s*(?P<value>.*)$",
    re.DOTALL,
)
_HEX_ESCAPE = re.compile(r"\\([0-9A-Fa-f]{2})")
_INTEGER = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?\d+\.\d+$")


def unescape(value: str) -> str:
    return _HEX_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value)


def parse_scalar(raw: str) -> Any:
    """Untyped LDAP text to a Python literal: booleans, null, numbers, else a string."""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    if _INTEGER.match(raw):
        return int(raw)
    if _FLOAT.match(raw):
        return float(raw)
    return unescape(raw)


def split_wildcards(value: str) -> list[str]:
    """Split on unescaped ``*``."""
    parts: list[str] = []
    current: list[str] = []
    index = 0
    while index < len(value):
        char = value[index]
        if char == "\\" and index + 1 < len(value):
            current.append(value[index : index + 2])
            index += 2
            continue
        if char == "*":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    parts.append("".join(current))
    return parts


class LdapParser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, text: str) -> LdapNode:
        if not isinstance(text, str) or not text.strip():
            raise DslSyntaxError("Filter must be a non-empty string", 0)
        stripped = text.strip()
        if not stripped.startswith("("):
            stripped = f"({stripped})"
        return _Parser(stripped, self.max_depth).parse()


class _Parser:
    def __init__(self, text: str, max_depth: int) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.max_depth = max_depth

    def parse(self) -> LdapNode:
        filters = [self._filter(1)]
        while self._peek().type is TokenType.LPAREN:
            filters.append(self._filter(1))
        token = self._peek()
        if token.type is not TokenType.EOF:
            raise syntax_error(f"Unexpected {token.value!r}", self.text, token.position)
        return filters[0] if len(filters) == 1 else LogicalNode("and", tuple(filters))

    def _filter(self, depth: int) -> LdapNode:
        open_token = self._expect(TokenType.LPAREN)
        if depth > self.max_depth:
            raise syntax_error(
                f"Filter nesting exceeds maximum depth of {self.max_depth}", self.text, open_token.position
            )
        token = self._advance()
        if token.type in (TokenType.AND, TokenType.OR):
            children: list[LdapNode] = []
            while self._peek().type is TokenType.LPAREN:
                children.append(self._filter(depth + 1))
            if not children:
                raise syntax_error(f"'{token.value}' needs at least one filter", self.text, token.position)
            node: LdapNode = LogicalNode("and" if token.type is TokenType.AND else "or", tuple(children))
        elif token.type is TokenType.NOT:
            node = NotNode(self._filter(depth + 1))
        elif token.type is TokenType.ITEM:
            node = self._item(token)
        else:
            raise syntax_error(f"Expected a filter, got {token.type.value!r}", self.text, token.position)
        self._expect(TokenType.RPAREN)
        return node

    def _item(self, token: Token) -> LdapNode:
        match = _ITEM.match(token.value)
        if match is None:
            raise syntax_error(f"Invalid filter item {token.value!r}", self.text, token.position)
        attribute, operator, raw = match.group("attribute"), match.group("operator"), match.group("value").strip()
        if operator == "=" and raw == "*":
            return PresenceNode(attribute)
        if operator == "~=":
            return ApproximateNode(attribute, unescape(raw))
        if operator == "=":
            parts = split_wildcards(raw)
            if len(parts) > 1:
                return WildcardNode(attribute, tuple(unescape(part) for part in parts))
        return ComparisonNode(attribute, operator, parse_scalar(raw))

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._peek()
        if token.type is not token_type:
            expected = "end of input" if token_type is TokenType.EOF else repr(token_type.value)
            raise syntax_error(f"Expected {expected}, got {token.value or 'end of input'!r}", self.text, token.position)
        return self._advance()
