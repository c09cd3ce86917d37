"""DSL pipeline exceptions (parse, compile, serialize)."""

from __future__ import annotations

from rulesmith.exceptions.base import RulesmithError


class DslError(RulesmithError):
    """Base class for DSL parsing, compilation and serialization errors."""


class DslSyntaxError(DslError, ValueError):
    """Raised by a parser on malformed surface syntax.

    ``position`` is a best-effort zero-based character offset into the input,
    ``context`` a short excerpt around it.
    """

    def __init__(self, message: str, position: int | None = None, context: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.context = context


class JsonDecodeError(DslSyntaxError):
    """Raised when a document-query parser is handed malformed JSON."""


class UnsupportedConstructError(DslError, ValueError):
    """Raised by a compiler for an operator name or node shape it does not know."""


class UnsupportedOperatorError(DslError, TypeError):
    """Raised by a serializer for an operator the grammar cannot represent."""


class StructuralMismatchError(DslError, TypeError):
    """Raised by a serializer when an operand has an unexpected shape."""
