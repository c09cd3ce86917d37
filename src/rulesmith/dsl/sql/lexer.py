"""Tokenizer for SQL-WHERE expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rulesmith.constants.sql import COMPARISON_OPERATORS, KEYWORDS
from rulesmith.dsl.text import syntax_error


class TokenType(Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str | int | float
    position: int


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char.isspace():
            index += 1
            continue
        if char == "(":
            tokens.append(Token(TokenType.LPAREN, char, index))
            index += 1
        elif char == ")":
            tokens.append(Token(TokenType.RPAREN, char, index))
            index += 1
        elif char == ",":
            tokens.append(Token(TokenType.COMMA, char, index))
            index += 1
        elif char == "'":
            start = index
            value, index = _read_string(text, index)
            tokens.append(Token(TokenType.STRING, value, start))
        elif char.isdigit() or (char == "-" and index + 1 < length and text[index + 1].isdigit()):
            start = index
            index += 1
            while index < length and text[index].isdigit():
                index += 1
            if index + 1 < length and text[index] == "." and text[index + 1].isdigit():
                index += 1
                while index < length and text[index].isdigit():
                    index += 1
                tokens.append(Token(TokenType.NUMBER, float(text[start:index]), start))
            else:
                tokens.append(Token(TokenType.NUMBER, int(text[start:index]), start))
        elif char.isalpha() or char == "_":
            start = index
            while index < length and (text[index].isalnum() or text[index] in "_."):
                index += 1
            word = text[start:index]
            if word.upper() in KEYWORDS:
                tokens.append(Token(TokenType.KEYWORD, word.upper(), start))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, word, start))
        else:
            for operator in COMPARISON_OPERATORS:
                if text.startswith(operator, index):
                    tokens.append(Token(TokenType.OPERATOR, operator, index))
                    index += len(operator)
                    break
            else:
                raise syntax_error(f"Unexpected character {char!r}", text, index)
    tokens.append(Token(TokenType.EOF, "", length))
    return tokens


def _read_string(text: str, start: int) -> tuple[str, int]:
    """Read a single-quoted literal; ``''`` is an escaped quote."""
    chars: list[str] = []
    index = start + 1
    while index < len(text):
        char = text[index]
        if char == "'":
            if index + 1 < len(text) and text[index + 1] == "'":
                chars.append("'")
                index += 2
                continue
            return "".join(chars), index + 1
        chars.append(char)
        index += 1
    raise syntax_error("Unterminated string literal", text, start)
