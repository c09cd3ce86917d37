"""Set operators over list-like facts.

Operands are read through :meth:`Value.as_set`, so scalars act as
one-element sets and duplicates collapse. Results keep first-seen order and
are returned as lists.
"""

from __future__ import annotations

from typing import Any

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, ValueOperator, resolve
from rulesmith.core.value import Value
from rulesmith.types.operators import Cardinality, OperatorKind


def _members(operator: Proposition | ValueOperator, context: Context) -> list[list[Any]]:
    return [resolve(operand, context).as_set() for operand in operator.get_operands()]


class Union(ValueOperator):
    kind = OperatorKind.UNION

    def prepare_value(self, context: Context) -> Value:
        union: list[Any] = []
        for members in _members(self, context):
            union.extend(member for member in members if member not in union)
        return Value(union)


class Intersect(ValueOperator):
    kind = OperatorKind.INTERSECT

    def prepare_value(self, context: Context) -> Value:
        first, *others = _members(self, context)
        return Value([member for member in first if all(member in other for other in others)])


class Complement(ValueOperator):
    """Members of the first operand found in none of the others."""

    kind = OperatorKind.COMPLEMENT

    def prepare_value(self, context: Context) -> Value:
        first, *others = _members(self, context)
        return Value([member for member in first if not any(member in other for other in others)])


class SymmetricDifference(ValueOperator):
    kind = OperatorKind.SYMMETRIC_DIFFERENCE
    cardinality = Cardinality.BINARY

    def prepare_value(self, context: Context) -> Value:
        left, right = _members(self, context)
        return Value([m for m in left if m not in right] + [m for m in right if m not in left])


class ContainsSubset(Proposition):
    """True when every member of the second operand is in the first."""

    kind = OperatorKind.CONTAINS_SUBSET
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        superset, subset = _members(self, context)
        return all(member in superset for member in subset)


class DoesNotContainSubset(Proposition):
    kind = OperatorKind.DOES_NOT_CONTAIN_SUBSET
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        superset, subset = _members(self, context)
        return not all(member in superset for member in subset)


class SetContains(Proposition):
    """Membership of the second operand, taken whole, in the first as a set."""

    kind = OperatorKind.SET_CONTAINS
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        container, needle = self.get_operands()
        return resolve(needle, context).value in resolve(container, context).as_set()


class SetDoesNotContain(Proposition):
    kind = OperatorKind.SET_DOES_NOT_CONTAIN
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        container, needle = self.get_operands()
        return resolve(needle, context).value not in resolve(container, context).as_set()
