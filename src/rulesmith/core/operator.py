"""Operator tree base classes.

Every IR node is an :class:`Operator` holding an ordered operand list.
Cardinality is checked when operands are read, not when they are stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from rulesmith.core.context import Context
from rulesmith.core.value import Value
from rulesmith.exceptions.operators import CardinalityError
from rulesmith.types.operators import Cardinality, OperatorKind


class VariableOperand(ABC):
    """Anything that can be turned into a :class:`Value` against a context."""

    @abstractmethod
    def prepare_value(self, context: Context) -> Value: ...


class Operator:
    """Base class for every node in a compiled rule."""

    kind: ClassVar[OperatorKind]
    cardinality: ClassVar[Cardinality] = Cardinality.MULTIPLE
    # Fixed operand count for MULTIPLE operators that need an exact arity.
    exact_operands: ClassVar[int | None] = None

    def __init__(self, *operands: Any) -> None:
        self._operands: list[Any] = list(operands)

    def add_operand(self, operand: Any) -> None:
        """Append an operand; a unary operator refuses a second one."""
        if self.cardinality is Cardinality.UNARY and self._operands:
            raise CardinalityError(type(self).__name__, self.cardinality.value, len(self._operands) + 1)
        self._operands.append(operand)

    def get_operands(self) -> list[Any]:
        """Return the operands after checking them against the cardinality."""
        count = len(self._operands)
        name = type(self).__name__
        match self.cardinality:
            case Cardinality.UNARY if count != 1:
                raise CardinalityError(name, self.cardinality.value, count)
            case Cardinality.BINARY if count != 2:
                raise CardinalityError(name, self.cardinality.value, count)
            case Cardinality.MULTIPLE if count < 1:
                raise CardinalityError(name, self.cardinality.value, count)
        if self.exact_operands is not None and count != self.exact_operands:
            raise CardinalityError(name, f"exactly {self.exact_operands} operands", count)
        return list(self._operands)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._operands == other._operands  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(repr(operand) for operand in self._operands)
        return f"{type(self).__name__}({inner})"


class Proposition(Operator, ABC):
    """An operator whose evaluation is a boolean gate."""

    @abstractmethod
    def evaluate(self, context: Context) -> bool: ...


class ValueOperator(Operator, VariableOperand, ABC):
    """An operator that produces a value instead of a boolean."""

    def values(self, context: Context) -> list[Any]:
        return [resolve(operand, context).value for operand in self.get_operands()]


def resolve(operand: Any, context: Context) -> Value:
    """Turn any operand (variable, nested operator or literal) into a Value."""
    if isinstance(operand, VariableOperand):
        return operand.prepare_value(context)
    if isinstance(operand, Proposition):
        return Value(operand.evaluate(context))
    return Value(operand)


def truth(operand: Any, context: Context) -> bool:
    """Boolean reading of an operand used by the logical operators."""
    if isinstance(operand, Proposition):
        return operand.evaluate(context)
    return bool(resolve(operand, context).value)
