"""Type and emptiness checks."""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sized

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, ValueOperator, resolve
from rulesmith.core.value import Value
from rulesmith.types.operators import Cardinality, OperatorKind


class _TypeCheck(Proposition):
    cardinality = Cardinality.UNARY

    def _subject(self, context: Context) -> object:
        (operand,) = self.get_operands()
        return resolve(operand, context).value


class IsNull(_TypeCheck):
    kind = OperatorKind.IS_NULL

    def evaluate(self, context: Context) -> bool:
        return self._subject(context) is None


class IsArray(_TypeCheck):
    kind = OperatorKind.IS_ARRAY

    def evaluate(self, context: Context) -> bool:
        return isinstance(self._subject(context), (list, tuple))


class IsBoolean(_TypeCheck):
    kind = OperatorKind.IS_BOOLEAN

    def evaluate(self, context: Context) -> bool:
        return isinstance(self._subject(context), bool)


class IsNumeric(_TypeCheck):
    """Numbers (but not booleans) and strings that parse as numbers."""

    kind = OperatorKind.IS_NUMERIC

    def evaluate(self, context: Context) -> bool:
        return is_numeric(self._subject(context))


class IsString(_TypeCheck):
    kind = OperatorKind.IS_STRING

    def evaluate(self, context: Context) -> bool:
        return isinstance(self._subject(context), str)


class IsEmpty(_TypeCheck):
    """None, False, zero, empty strings and empty containers are empty."""

    kind = OperatorKind.IS_EMPTY

    def evaluate(self, context: Context) -> bool:
        value = self._subject(context)
        if value is None or value is False:
            return True
        if isinstance(value, numbers.Number):
            return value == 0
        if isinstance(value, (str, Sized)):
            return len(value) == 0
        return False


class ArrayCount(ValueOperator):
    """Element count of a list or mapping; zero for anything else."""

    kind = OperatorKind.ARRAY_COUNT
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = self.values(context)
        if isinstance(value, (list, tuple, set, frozenset, Mapping)):
            return Value(len(value))
        return Value(0)


def is_numeric(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Real):
        return True
    if isinstance(value, str):
        try:
            float(value.strip())
        except ValueError:
            return False
        return bool(value.strip())
    return False
