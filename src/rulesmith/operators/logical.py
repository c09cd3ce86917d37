"""Logical connectives over propositions."""

from __future__ import annotations

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, truth
from rulesmith.types.operators import Cardinality, OperatorKind


class And(Proposition):
    kind = OperatorKind.AND

    def evaluate(self, context: Context) -> bool:
        return all(truth(operand, context) for operand in self.get_operands())


class Or(Proposition):
    kind = OperatorKind.OR

    def evaluate(self, context: Context) -> bool:
        return any(truth(operand, context) for operand in self.get_operands())


class Not(Proposition):
    kind = OperatorKind.NOT
    cardinality = Cardinality.UNARY

    def evaluate(self, context: Context) -> bool:
        (operand,) = self.get_operands()
        return not truth(operand, context)


class Xor(Proposition):
    """True when exactly one operand is true."""

    kind = OperatorKind.XOR

    def evaluate(self, context: Context) -> bool:
        matched = 0
        for operand in self.get_operands():
            if truth(operand, context):
                matched += 1
                if matched > 1:
                    return False
        return matched == 1


class Nand(Proposition):
    kind = OperatorKind.NAND

    def evaluate(self, context: Context) -> bool:
        return not all(truth(operand, context) for operand in self.get_operands())


class Nor(Proposition):
    kind = OperatorKind.NOR

    def evaluate(self, context: Context) -> bool:
        return not any(truth(operand, context) for operand in self.get_operands())
