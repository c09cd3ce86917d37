"""Tests for operand cardinality and structural equality of operators."""

from __future__ import annotations

import pytest

from rulesmith.core.variables import Variable
from rulesmith.exceptions import CardinalityError
from rulesmith.operators import And, Between, EqualTo, IsNull, Negate, Not, StringLength


@pytest.mark.parametrize(
    ("operator", "expected"),
    [
        (EqualTo(Variable("a")), "exactly 2 operands"),
        (EqualTo(Variable("a"), 1, 2), "exactly 2 operands"),
        (Not(), "exactly 1 operand"),
        (IsNull(Variable("a"), Variable("b")), "exactly 1 operand"),
        (And(), "at least 1 operand"),
        (Between(Variable("a"), 1), "exactly 3 operands"),
    ],
    ids=["binary_short", "binary_long", "unary_empty", "unary_long", "multiple_empty", "between_short"],
)
def test_wrong_operand_count_raises(operator: object, expected: str) -> None:
    with pytest.raises(CardinalityError, match=expected):
        operator.get_operands()  # type: ignore[attr-defined]


def test_cardinality_error_carries_counts() -> None:
    with pytest.raises(CardinalityError) as exc_info:
        EqualTo(1, 2, 3).get_operands()

    assert exc_info.value.expected == "exactly 2 operands"
    assert exc_info.value.actual == 3
    assert isinstance(exc_info.value, ValueError)


def test_construction_does_not_check_cardinality() -> None:
    operator = EqualTo(Variable("a"))
    operator.add_operand(5)

    assert operator.get_operands() == [Variable("a"), 5]


def test_unary_operator_refuses_second_operand() -> None:
    operator = StringLength(Variable("name"))

    with pytest.raises(CardinalityError):
        operator.add_operand(Variable("other"))


def test_value_operators_check_cardinality_too() -> None:
    with pytest.raises(CardinalityError):
        Negate(1, 2).get_operands()


def test_structural_equality() -> None:
    assert And(EqualTo(Variable("a"), Variable(None, 1))) == And(EqualTo(Variable("a"), Variable(None, 1)))
    assert EqualTo(Variable("a"), 1) != EqualTo(Variable("b"), 1)
    assert EqualTo(Variable("a"), 1) != Not(EqualTo(Variable("a"), 1))
