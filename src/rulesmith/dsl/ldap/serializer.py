"""Render operator trees back to LDAP filter strings."""

from __future__ import annotations

from typing import Any

from rulesmith.constants.ldap import OPERATOR_LEADS, VALUE_ESCAPES
from rulesmith.core.operator import Operator
from rulesmith.core.rule import Rule
from rulesmith.core.variables import is_literal, literal_value
from rulesmith.dsl.ldap.compiler import APPROXIMATE_PREFIX
from rulesmith.dsl.ldap.parser import parse_scalar
from rulesmith.dsl.operands import field_and_literal, field_path, format_number, regex_to_wildcard
from rulesmith.exceptions.dsl import StructuralMismatchError, UnsupportedOperatorError
from rulesmith.types.operators import OperatorKind

_SYMBOLS: dict[OperatorKind, str] = {
    OperatorKind.EQUAL_TO: "=",
    OperatorKind.NOT_EQUAL_TO: "!=",
    OperatorKind.GREATER_THAN: ">",
    OperatorKind.GREATER_THAN_OR_EQUAL_TO: ">=",
    OperatorKind.LESS_THAN: "<",
    OperatorKind.LESS_THAN_OR_EQUAL_TO: "<=",
}


def escape_value(value: str) -> str:
    """RFC 4515 escapes, plus hex escapes for leading and trailing whitespace.

    The parser trims item values, so edge whitespace only survives escaped.
    """
    head = len(value) - len(value.lstrip())
    tail = max(len(value.rstrip()), head)
    return "".join(
        _hex(char) if index < head or index >= tail else VALUE_ESCAPES.get(char, char)
        for index, char in enumerate(value)
    )


def _hex(char: str) -> str:
    if ord(char) > 0xFF:
        raise StructuralMismatchError(f"Cannot escape {char!r} in an LDAP value")
    return f"\\{ord(char):02x}"


def format_string(value: str) -> str:
    """Escape *value* so the parser reads it back as this exact string.

    Text the parser would type as a number, boolean or null gets its first
    character hex-escaped, as does a leading operator character.
    """
    escaped = escape_value(value)
    if escaped and (escaped[0] in OPERATOR_LEADS or not isinstance(parse_scalar(escaped), str)):
        return _hex(escaped[0]) + escaped[1:]
    return escaped


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return format_string(value)
    raise StructuralMismatchError(f"{type(value).__name__} values have no LDAP form")


class LdapSerializer:
    def serialize(self, rule: Rule | Operator) -> str:
        root = rule.condition if isinstance(rule, Rule) else rule
        return self._render(root)

    def _render(self, operator: Operator) -> str:
        kind = getattr(operator, "kind", None)
        match kind:
            case OperatorKind.AND | OperatorKind.OR:
                symbol = "&" if kind is OperatorKind.AND else "|"
                return f"({symbol}{''.join(self._render(o) for o in operator.get_operands())})"
            case OperatorKind.NOT:
                (inner,) = operator.get_operands()
                if getattr(inner, "kind", None) is OperatorKind.EQUAL_TO and _is_null_check(inner):
                    return f"({field_path(inner.get_operands()[0], inner)}=*)"
                return f"(!{self._render(inner)})"
            case OperatorKind.EQUAL_TO if _is_null_check(operator):
                return f"(!({field_path(operator.get_operands()[0], operator)}=*))"
            case _ if kind in _SYMBOLS:
                path, value = field_and_literal(operator)
                return f"({path}{_SYMBOLS[kind]}{format_value(value)})"
            case OperatorKind.MATCHES:
                path, pattern = field_and_literal(operator)
                return f"({path}{_match_item(pattern)})"
        raise UnsupportedOperatorError(f"{type(operator).__name__} cannot be expressed as an LDAP filter")


def _is_null_check(operator: Operator) -> bool:
    _, right = operator.get_operands()
    return is_literal(right) and literal_value(right) is None


def _match_item(pattern: Any) -> str:
    """``~=value`` for approximate matches, ``=a*b`` for anchored wildcards."""
    if not isinstance(pattern, str):
        raise StructuralMismatchError("Matches expects a string pattern")
    if pattern.startswith(APPROXIMATE_PREFIX):
        segments = regex_to_wildcard("^" + pattern[len(APPROXIMATE_PREFIX) :] + "$", single=False)
        if segments is not None and all(kind == "text" for kind, _ in segments):
            return "~=" + escape_value("".join(text for _, text in segments))
    segments = regex_to_wildcard(pattern, single=False)
    if segments is None or not any(kind == "many" for kind, _ in segments):
        raise UnsupportedOperatorError(f"Regular expression {pattern!r} has no LDAP filter form")
    return "=" + "".join("*" if kind == "many" else escape_value(text) for kind, text in segments)
