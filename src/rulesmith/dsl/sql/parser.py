"""Recursive-descent parser for SQL-WHERE expressions.

Grammar, loosest binding first::

    or_expr    := and_expr ("OR" and_expr)*
    and_expr   := not_expr ("AND" not_expr)*
    not_expr   := "NOT" not_expr | predicate
    predicate  := "(" or_expr ")"
                | field "IS" ["NOT"] "NULL"
                | field ["NOT"] "BETWEEN" value "AND" value
                | field ["NOT"] "IN" "(" value ("," value)* ")"
                | field ["NOT"] "LIKE" string
                | field op (value | field)
"""

from __future__ import annotations

from typing import Any

from rulesmith.constants.config import DEFAULT_MAX_DEPTH
from rulesmith.dsl.sql.lexer import Token, TokenType, tokenize
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
from rulesmith.dsl.text import syntax_error
from rulesmith.exceptions.dsl import DslSyntaxError


class SqlParser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, text: str) -> SqlNode:
        if not isinstance(text, str) or not text.strip():
            raise DslSyntaxError("Expression must be a non-empty string", 0)
        return _Parser(text, self.max_depth).parse()


class _Parser:
    def __init__(self, text: str, max_depth: int) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0
        self.max_depth = max_depth

    def parse(self) -> SqlNode:
        node = self._or_expr()
        token = self._peek()
        if token.type is not TokenType.EOF:
            raise self._error(f"Unexpected {_describe(token)}", token)
        return node

    def _or_expr(self) -> SqlNode:
        children = [self._and_expr()]
        while self._accept_keyword("OR"):
            children.append(self._and_expr())
        return children[0] if len(children) == 1 else LogicalNode("OR", tuple(children))

    def _and_expr(self) -> SqlNode:
        children = [self._not_expr()]
        while self._accept_keyword("AND"):
            children.append(self._not_expr())
        return children[0] if len(children) == 1 else LogicalNode("AND", tuple(children))

    def _not_expr(self) -> SqlNode:
        if self._accept_keyword("NOT"):
            self._enter()
            node = NotNode(self._not_expr())
            self.depth -= 1
            return node
        return self._predicate()

    def _predicate(self) -> SqlNode:
        token = self._peek()
        if token.type is TokenType.LPAREN:
            self._advance()
            self._enter()
            node = self._or_expr()
            self.depth -= 1
            self._expect(TokenType.RPAREN)
            return node

        field = str(self._expect(TokenType.IDENTIFIER).value)

        if self._accept_keyword("IS"):
            negated = self._accept_keyword("NOT")
            self._expect_keyword("NULL")
            return NullNode(field, negated)

        negated = self._accept_keyword("NOT")
        if self._accept_keyword("BETWEEN"):
            low = self._value()
            self._expect_keyword("AND")
            high = self._value()
            return BetweenNode(field, low, high, negated)
        if self._accept_keyword("IN"):
            return InNode(field, self._value_list(), negated)
        if self._accept_keyword("LIKE"):
            pattern = self._expect(TokenType.STRING).value
            return LikeNode(field, str(pattern), negated)
        if negated:
            raise self._error("Expected BETWEEN, IN or LIKE after NOT", self._peek())

        operator = str(self._expect(TokenType.OPERATOR).value)
        if self._peek().type is TokenType.IDENTIFIER:
            return ComparisonNode(field, operator, FieldRef(str(self._advance().value)))
        return ComparisonNode(field, operator, self._value())

    def _value_list(self) -> tuple[Any, ...]:
        self._expect(TokenType.LPAREN)
        values = [self._value()]
        while self._peek().type is TokenType.COMMA:
            self._advance()
            values.append(self._value())
        self._expect(TokenType.RPAREN)
        return tuple(values)

    def _value(self) -> Any:
        token = self._peek()
        if token.type in (TokenType.STRING, TokenType.NUMBER):
            return self._advance().value
        if token.type is TokenType.KEYWORD and token.value in ("TRUE", "FALSE", "NULL"):
            self._advance()
            return {"TRUE": True, "FALSE": False, "NULL": None}[str(token.value)]
        raise self._error(f"Expected a value, got {_describe(token)}", token)

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self._error(f"Expression nesting exceeds maximum depth of {self.max_depth}", self._peek())

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def _accept_keyword(self, keyword: str) -> bool:
        token = self._peek()
        if token.type is TokenType.KEYWORD and token.value == keyword:
            self._advance()
            return True
        return False

    def _expect_keyword(self, keyword: str) -> Token:
        token = self._peek()
        if token.type is not TokenType.KEYWORD or token.value != keyword:
            raise self._error(f"Expected {keyword}, got {_describe(token)}", token)
        return self._advance()

    def _expect(self, token_type: TokenType) -> Token:
        token = self._peek()
        if token.type is not token_type:
            raise self._error(f"Expected {token_type.value}, got {_describe(token)}", token)
        return self._advance()

    def _error(self, message: str, token: Token) -> DslSyntaxError:
        return syntax_error(message, self.text, token.position)


def _describe(token: Token) -> str:
    if token.type is TokenType.EOF:
        return "end of input"
    return f"{token.type.value} {token.value!r}"
