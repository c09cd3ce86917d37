"""Value-producing math operators, usable as comparison operands."""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable
from functools import reduce

from rulesmith.core.context import Context
from rulesmith.core.operator import ValueOperator, resolve
from rulesmith.core.value import Value
from rulesmith.exceptions.operators import ArithmeticOperandError, CardinalityError
from rulesmith.types.operators import Cardinality, OperatorKind


def _numbers(operator: ValueOperator, context: Context) -> list[int | float]:
    values = operator.values(context)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ArithmeticOperandError(f"{type(operator).__name__}: {value!r} is not a number")
    return values


class Add(ValueOperator):
    kind = OperatorKind.ADD

    def prepare_value(self, context: Context) -> Value:
        return Value(sum(_numbers(self, context)))


class Subtract(ValueOperator):
    kind = OperatorKind.SUBTRACT

    def prepare_value(self, context: Context) -> Value:
        return Value(reduce(lambda a, b: a - b, _numbers(self, context)))


class Multiply(ValueOperator):
    kind = OperatorKind.MULTIPLY

    def prepare_value(self, context: Context) -> Value:
        return Value(math.prod(_numbers(self, context)))


class Divide(ValueOperator):
    kind = OperatorKind.DIVIDE
    cardinality = Cardinality.BINARY

    def prepare_value(self, context: Context) -> Value:
        dividend, divisor = _numbers(self, context)
        if divisor == 0:
            raise ArithmeticOperandError("Divide: division by zero")
        return Value(dividend / divisor)


class Modulo(ValueOperator):
    kind = OperatorKind.MODULO
    cardinality = Cardinality.BINARY

    def prepare_value(self, context: Context) -> Value:
        dividend, divisor = _numbers(self, context)
        if divisor == 0:
            raise ArithmeticOperandError("Modulo: division by zero")
        return Value(dividend % divisor)


class Exponentiate(ValueOperator):
    kind = OperatorKind.EXPONENTIATE
    cardinality = Cardinality.BINARY

    def prepare_value(self, context: Context) -> Value:
        base, exponent = _numbers(self, context)
        try:
            result = base**exponent
        except (ZeroDivisionError, OverflowError) as exc:
            raise ArithmeticOperandError(f"Exponentiate: {base!r} ** {exponent!r} is undefined") from exc
        if isinstance(result, complex):
            raise ArithmeticOperandError(f"Exponentiate: {base!r} ** {exponent!r} is not a real number")
        return Value(result)


class Negate(ValueOperator):
    kind = OperatorKind.NEGATE
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = _numbers(self, context)
        return Value(-value)


class Floor(ValueOperator):
    kind = OperatorKind.FLOOR
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = _numbers(self, context)
        return Value(_integral(math.floor, value, "Floor"))


class Ceil(ValueOperator):
    kind = OperatorKind.CEIL
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = _numbers(self, context)
        return Value(_integral(math.ceil, value, "Ceil"))


class Abs(ValueOperator):
    kind = OperatorKind.ABS
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = _numbers(self, context)
        return Value(abs(value))


class Round(ValueOperator):
    """``Round(value)`` or ``Round(value, precision)``; always yields a float."""

    kind = OperatorKind.ROUND

    def prepare_value(self, context: Context) -> Value:
        operands = _numbers(self, context)
        if len(operands) > 2:
            raise CardinalityError(type(self).__name__, "1 or 2 operands", len(operands))
        value = operands[0]
        precision = _integral(int, operands[1], "Round") if len(operands) == 2 else 0
        try:
            number = float(value)
        except OverflowError as exc:
            raise ArithmeticOperandError(f"Round: {value!r} is out of range") from exc
        if not math.isfinite(number):
            raise ArithmeticOperandError(f"Round: {value!r} is not finite")
        return Value(round(number, precision))


class Max(ValueOperator):
    """Largest number in a list operand; None for an empty list."""

    kind = OperatorKind.MAX
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        members = _numeric_members(self, context)
        return Value(max(members) if members else None)


class Min(ValueOperator):
    """Smallest number in a list operand; None for an empty list."""

    kind = OperatorKind.MIN
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        members = _numeric_members(self, context)
        return Value(min(members) if members else None)


def _integral(function: Callable[[float], int], value: int | float, name: str) -> int:
    try:
        return function(value)
    except (OverflowError, ValueError) as exc:
        raise ArithmeticOperandError(f"{name}: {value!r} has no integral value") from exc


def _numeric_members(operator: ValueOperator, context: Context) -> list[int | float]:
    (operand,) = operator.get_operands()
    members = resolve(operand, context).as_set()
    for member in members:
        if isinstance(member, bool) or not isinstance(member, numbers.Real):
            raise ArithmeticOperandError(f"{type(operator).__name__}: {member!r} is not a number")
    return members
