"""Operator tree exceptions."""

from __future__ import annotations

from rulesmith.exceptions.base import RulesmithError


class CardinalityError(RulesmithError, ValueError):
    """Raised when an operator's operand count does not match its cardinality."""

    def __init__(self, operator: str, expected: str, actual: int) -> None:
        super().__init__(f"{operator} takes {expected}, {actual} given")
        self.operator = operator
        self.expected = expected
        self.actual = actual


class ArithmeticOperandError(RulesmithError, ArithmeticError):
    """Raised when a math operator receives operands it cannot combine."""


class OperandError(RulesmithError, ValueError):
    """Raised when a runtime operand cannot be used by its operator (an invalid regex fact, say)."""
