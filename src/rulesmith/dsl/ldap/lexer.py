"""Tokenizer for LDAP filters: parentheses, ``& | !`` and item text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rulesmith.dsl.text import syntax_error


class TokenType(Enum):
    LPAREN = "("
    RPAREN = ")"
    AND = "&"
    OR = "|"
    NOT = "!"
    ITEM = "item"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int


_SYMBOLS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "&": TokenType.AND,
    "|": TokenType.OR,
    "!": TokenType.NOT,
}


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char.isspace():
            index += 1
            continue
        previous = tokens[-1].type if tokens else None
        # ``& | !`` are operators only right after an opening parenthesis.
        if char in "()" or (char in "&|!" and previous is TokenType.LPAREN):
            tokens.append(Token(_SYMBOLS[char], char, index))
            index += 1
            continue
        start = index
        while index < length and text[index] not in "()":
            if text[index] == "\\":
                index += 1
            index += 1
        item = text[start:index].rstrip()
        if not item:
            raise syntax_error(f"Unexpected character {char!r}", text, start)
        tokens.append(Token(TokenType.ITEM, item, start))
    tokens.append(Token(TokenType.EOF, "", length))
    return tokens
