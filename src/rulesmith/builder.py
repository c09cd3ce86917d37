"""Fluent construction of rule trees from Python code.

``RuleBuilder`` hands out variables that know how to build operators on
themselves::

    rb = RuleBuilder()
    rule = rb.create(
        rb.logical_and(
            rb["age"].greater_than_or_equal_to(18),
            rb["user"]["roles"].set_contains("admin"),
        )
    )

Plain Python values passed to a fluent method become literal operands.
Value-producing methods (``add``, ``union``, ``max``...) return a new
builder variable wrapping the operator, so calls chain.
"""

from __future__ import annotations

import logging
from typing import Any

from rulesmith.core.operator import Operator, Proposition, ValueOperator, VariableOperand
from rulesmith.core.rule import Action, Rule
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.exceptions.evaluation import RuleDefinitionError
from rulesmith.operators import (
    OPERATOR_CLASSES,
    Abs,
    Add,
    And,
    Ceil,
    Complement,
    ContainsInsensitive,
    ContainsSubset,
    Divide,
    DoesNotContain,
    DoesNotContainInsensitive,
    DoesNotContainSubset,
    EndsWith,
    EndsWithInsensitive,
    EqualTo,
    Exponentiate,
    Floor,
    GreaterThan,
    GreaterThanOrEqualTo,
    Intersect,
    LessThan,
    LessThanOrEqualTo,
    Max,
    Min,
    Modulo,
    Multiply,
    Negate,
    Not,
    NotEqualTo,
    NotSameAs,
    Or,
    Round,
    SameAs,
    SetContains,
    SetDoesNotContain,
    StartsWith,
    StartsWithInsensitive,
    Subtract,
    SymmetricDifference,
    Union,
    Xor,
)
from rulesmith.operators import Contains as StringContains
from rulesmith.types.operators import OperatorKind

logger = logging.getLogger(__name__)


def _operand(value: Any) -> Any:
    if isinstance(value, (VariableOperand, Operator)):
        return value
    return Variable(None, value)


class FluentOperand:
    """Operator factory methods shared by builder variables and properties."""

    _builder: RuleBuilder
    _properties: dict[str, BuilderProperty]

    def __getitem__(self, name: str) -> BuilderProperty:
        prop = self._properties.get(name)
        if prop is None:
            prop = BuilderProperty(self._builder, self, name)  # type: ignore[arg-type]
            self._properties[name] = prop
        return prop

    def _wrap(self, operator: ValueOperator) -> BuilderVariable:
        return BuilderVariable(self._builder, None, operator)

    # Comparisons

    def equal_to(self, other: Any) -> EqualTo:
        return EqualTo(self, _operand(other))

    def not_equal_to(self, other: Any) -> NotEqualTo:
        return NotEqualTo(self, _operand(other))

    def greater_than(self, other: Any) -> GreaterThan:
        return GreaterThan(self, _operand(other))

    def greater_than_or_equal_to(self, other: Any) -> GreaterThanOrEqualTo:
        return GreaterThanOrEqualTo(self, _operand(other))

    def less_than(self, other: Any) -> LessThan:
        return LessThan(self, _operand(other))

    def less_than_or_equal_to(self, other: Any) -> LessThanOrEqualTo:
        return LessThanOrEqualTo(self, _operand(other))

    def same_as(self, other: Any) -> SameAs:
        return SameAs(self, _operand(other))

    def not_same_as(self, other: Any) -> NotSameAs:
        return NotSameAs(self, _operand(other))

    # Strings

    def string_contains(self, needle: Any) -> StringContains:
        return StringContains(self, _operand(needle))

    def string_does_not_contain(self, needle: Any) -> DoesNotContain:
        return DoesNotContain(self, _operand(needle))

    def string_contains_insensitive(self, needle: Any) -> ContainsInsensitive:
        return ContainsInsensitive(self, _operand(needle))

    def string_does_not_contain_insensitive(self, needle: Any) -> DoesNotContainInsensitive:
        return DoesNotContainInsensitive(self, _operand(needle))

    def starts_with(self, prefix: Any) -> StartsWith:
        return StartsWith(self, _operand(prefix))

    def starts_with_insensitive(self, prefix: Any) -> StartsWithInsensitive:
        return StartsWithInsensitive(self, _operand(prefix))

    def ends_with(self, suffix: Any) -> EndsWith:
        return EndsWith(self, _operand(suffix))

    def ends_with_insensitive(self, suffix: Any) -> EndsWithInsensitive:
        return EndsWithInsensitive(self, _operand(suffix))

    # Sets

    def contains_subset(self, subset: Any) -> ContainsSubset:
        return ContainsSubset(self, _operand(subset))

    def does_not_contain_subset(self, subset: Any) -> DoesNotContainSubset:
        return DoesNotContainSubset(self, _operand(subset))

    def set_contains(self, member: Any) -> SetContains:
        return SetContains(self, _operand(member))

    def set_does_not_contain(self, member: Any) -> SetDoesNotContain:
        return SetDoesNotContain(self, _operand(member))

    def union(self, *others: Any) -> BuilderVariable:
        return self._wrap(Union(self, *map(_operand, others)))

    def intersect(self, *others: Any) -> BuilderVariable:
        return self._wrap(Intersect(self, *map(_operand, others)))

    def complement(self, *others: Any) -> BuilderVariable:
        return self._wrap(Complement(self, *map(_operand, others)))

    def symmetric_difference(self, other: Any) -> BuilderVariable:
        return self._wrap(SymmetricDifference(self, _operand(other)))

    def min(self) -> BuilderVariable:
        return self._wrap(Min(self))

    def max(self) -> BuilderVariable:
        return self._wrap(Max(self))

    # Math

    def add(self, *others: Any) -> BuilderVariable:
        return self._wrap(Add(self, *map(_operand, others)))

    def subtract(self, *others: Any) -> BuilderVariable:
        return self._wrap(Subtract(self, *map(_operand, others)))

    def multiply(self, *others: Any) -> BuilderVariable:
        return self._wrap(Multiply(self, *map(_operand, others)))

    def divide(self, divisor: Any) -> BuilderVariable:
        return self._wrap(Divide(self, _operand(divisor)))

    def modulo(self, divisor: Any) -> BuilderVariable:
        return self._wrap(Modulo(self, _operand(divisor)))

    def exponentiate(self, exponent: Any) -> BuilderVariable:
        return self._wrap(Exponentiate(self, _operand(exponent)))

    def negate(self) -> BuilderVariable:
        return self._wrap(Negate(self))

    def ceil(self) -> BuilderVariable:
        return self._wrap(Ceil(self))

    def floor(self) -> BuilderVariable:
        return self._wrap(Floor(self))

    def abs(self) -> BuilderVariable:
        return self._wrap(Abs(self))

    def round(self, precision: Any = None) -> BuilderVariable:
        if precision is None:
            return self._wrap(Round(self))
        return self._wrap(Round(self, _operand(precision)))


class BuilderVariable(FluentOperand, Variable):
    """A :class:`Variable` with fluent operator methods."""

    def __init__(self, builder: RuleBuilder, name: str | None = None, value: Any = None) -> None:
        super().__init__(name, value)
        self._builder = builder
        self._properties = {}


class BuilderProperty(FluentOperand, VariableProperty):
    """A :class:`VariableProperty` with fluent operator methods."""

    def __init__(self, builder: RuleBuilder, parent: VariableOperand, name: str, default: Any = None) -> None:
        super().__init__(parent, name, default)
        self._builder = builder
        self._properties = {}


class RuleBuilder:
    """Factory for rules, logical connectives and cached variables.

    ``rb["name"]`` returns the same :class:`BuilderVariable` on every access;
    ``rb["name"] = value`` binds the value used when the context has no fact
    of that name.
    """

    def __init__(self) -> None:
        self._variables: dict[str, BuilderVariable] = {}

    def create(self, condition: Proposition, action: Action | None = None) -> Rule:
        if not isinstance(condition, Proposition):
            raise RuleDefinitionError(f"Rule condition must be a proposition, got {type(condition).__name__}")
        logger.debug("Built rule %r", condition)
        return Rule(condition, action)

    def logical_and(self, *propositions: Proposition) -> And:
        return And(*propositions)

    def logical_or(self, *propositions: Proposition) -> Or:
        return Or(*propositions)

    def logical_not(self, proposition: Proposition) -> Not:
        return Not(proposition)

    def logical_xor(self, *propositions: Proposition) -> Xor:
        return Xor(*propositions)

    def operator(self, name: str, *operands: Any) -> Operator:
        """Build any catalog operator by its camelCase name, e.g. ``"isEmpty"``."""
        try:
            kind = OperatorKind(name)
        except ValueError:
            raise RuleDefinitionError(f"Unknown operator: {name}") from None
        return OPERATOR_CLASSES[kind](*map(_operand, operands))

    def __getitem__(self, name: str) -> BuilderVariable:
        variable = self._variables.get(name)
        if variable is None:
            variable = BuilderVariable(self, name)
            self._variables[name] = variable
        return variable

    def __setitem__(self, name: str, value: Any) -> None:
        self[name].value = value

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __delitem__(self, name: str) -> None:
        del self._variables[name]
