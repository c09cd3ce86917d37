"""Comparison operators."""

from __future__ import annotations

import numbers

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, resolve
from rulesmith.core.value import Value, is_member
from rulesmith.types.operators import Cardinality, OperatorKind


class _BinaryComparison(Proposition):
    cardinality = Cardinality.BINARY

    def _pair(self, context: Context) -> tuple[Value, Value]:
        left, right = self.get_operands()
        return resolve(left, context), resolve(right, context)


class EqualTo(_BinaryComparison):
    kind = OperatorKind.EQUAL_TO

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.equal_to(right)


class NotEqualTo(_BinaryComparison):
    kind = OperatorKind.NOT_EQUAL_TO

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return not left.equal_to(right)


class GreaterThan(_BinaryComparison):
    kind = OperatorKind.GREATER_THAN

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.greater_than(right)


class GreaterThanOrEqualTo(_BinaryComparison):
    kind = OperatorKind.GREATER_THAN_OR_EQUAL_TO

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.greater_than_or_equal_to(right)


class LessThan(_BinaryComparison):
    kind = OperatorKind.LESS_THAN

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.less_than(right)


class LessThanOrEqualTo(_BinaryComparison):
    kind = OperatorKind.LESS_THAN_OR_EQUAL_TO

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.less_than_or_equal_to(right)


class SameAs(_BinaryComparison):
    kind = OperatorKind.SAME_AS

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return left.same_as(right)


class NotSameAs(_BinaryComparison):
    kind = OperatorKind.NOT_SAME_AS

    def evaluate(self, context: Context) -> bool:
        left, right = self._pair(context)
        return not left.same_as(right)


class Between(Proposition):
    """Inclusive numeric range check: ``Between(value, minimum, maximum)``."""

    kind = OperatorKind.BETWEEN
    exact_operands = 3

    def evaluate(self, context: Context) -> bool:
        value, minimum, maximum = (resolve(o, context).value for o in self.get_operands())
        if not all(_is_number(v) for v in (value, minimum, maximum)):
            return False
        return minimum <= value <= maximum


class In(_BinaryComparison):
    """Membership of the first operand in the list given as the second."""

    kind = OperatorKind.IN

    def evaluate(self, context: Context) -> bool:
        needle, haystack = self._pair(context)
        if not isinstance(haystack.value, (list, tuple, set, frozenset)):
            return False
        return is_member(needle.value, haystack.value)


class NotIn(_BinaryComparison):
    kind = OperatorKind.NOT_IN

    def evaluate(self, context: Context) -> bool:
        needle, haystack = self._pair(context)
        if not isinstance(haystack.value, (list, tuple, set, frozenset)):
            return True
        return not is_member(needle.value, haystack.value)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)
