"""Tests for the SQL-WHERE parser, compiler and serializer."""

from __future__ import annotations

import pytest

from rulesmith.core.context import Context
from rulesmith.core.variables import Variable
from rulesmith.dsl.sql import SqlCompiler, SqlParser, SqlSerializer
from rulesmith.dsl.sql.nodes import (
    BetweenNode,
    ComparisonNode,
    FieldRef,
    InNode,
    LikeNode,
    LogicalNode,
    NotNode,
    NullNode,
)
from rulesmith.exceptions import DslSyntaxError, StructuralMismatchError, UnsupportedOperatorError
from rulesmith.operators import (
    And,
    Between,
    Contains,
    DoesNotMatch,
    EqualTo,
    GreaterThanOrEqualTo,
    In,
    Matches,
    Not,
    Or,
)


def _compile(text: str):
    return SqlCompiler().compile(SqlParser().parse(text))


def test_and_binds_tighter_than_or() -> None:
    node = SqlParser().parse("a = 1 OR b = 2 AND c = 3")

    assert node == LogicalNode(
        "OR",
        (
            ComparisonNode("a", "=", 1),
            LogicalNode("AND", (ComparisonNode("b", "=", 2), ComparisonNode("c", "=", 3))),
        ),
    )


def test_keywords_are_case_insensitive() -> None:
    upper = SqlParser().parse("age BETWEEN 1 AND 5 AND name IS NOT NULL")
    lower = SqlParser().parse("age between 1 and 5 and name is not null")

    assert upper == lower
    assert upper == LogicalNode("AND", (BetweenNode("age", 1, 5), NullNode("name", negated=True)))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("role IN ('admin', 'owner')", InNode("role", ("admin", "owner"))),
        ("role NOT IN (1, 2)", InNode("role", (1, 2), negated=True)),
        ("name LIKE 'Jo%'", LikeNode("name", "Jo%")),
        ("name NOT LIKE '_x'", LikeNode("name", "_x", negated=True)),
        ("age NOT BETWEEN 18 AND 65", BetweenNode("age", 18, 65, negated=True)),
        ("score >= -1.5", ComparisonNode("score", ">=", -1.5)),
        ("a <> b", ComparisonNode("a", "<>", FieldRef("b"))),
        ("name = 'O''Brien'", ComparisonNode("name", "=", "O'Brien")),
        ("active = TRUE", ComparisonNode("active", "=", True)),
        ("NOT (age > 5)", NotNode(ComparisonNode("age", ">", 5))),
    ],
    ids=["in", "not-in", "like", "not-like", "not-between", "negative-float", "field-rhs", "escaped-quote", "bool", "not"],
)
def test_parses_predicates(text: str, expected: object) -> None:
    assert SqlParser().parse(text) == expected


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("age >= 18 AND", "Expected identifier, got end of input"),
        ("name = 'open", "Unterminated string literal"),
        ("age NOT = 5", "Expected BETWEEN, IN or LIKE after NOT"),
        ("(age > 5", r"Expected \), got end of input"),
        ("age > 5 extra", "Unexpected identifier 'extra'"),
        ("   ", "non-empty string"),
    ],
    ids=["dangling-and", "unterminated", "bare-not", "unclosed", "trailing", "blank"],
)
def test_rejects_malformed_input(text: str, message: str) -> None:
    with pytest.raises(DslSyntaxError, match=message):
        SqlParser().parse(text)


def test_syntax_error_carries_position_and_context() -> None:
    with pytest.raises(DslSyntaxError) as excinfo:
        SqlParser().parse("age >= 18 AND")

    assert excinfo.value.position == 13
    assert "AND" in excinfo.value.context


def test_nesting_beyond_max_depth_is_rejected() -> None:
    text = "(" * 4 + "a = 1" + ")" * 4

    assert SqlParser(max_depth=4).parse(text) == ComparisonNode("a", "=", 1)
    with pytest.raises(DslSyntaxError, match="maximum depth of 3"):
        SqlParser(max_depth=3).parse(text)


def test_compiles_between_example() -> None:
    condition = _compile("age BETWEEN 18 AND 65")

    assert condition == Between(Variable("age"), Variable(None, 18), Variable(None, 65))
    assert condition.evaluate(Context({"age": 30}))
    assert not condition.evaluate(Context({"age": 70}))


def test_compiles_null_checks() -> None:
    assert _compile("email IS NULL") == EqualTo(Variable("email"), Variable(None, None))
    assert _compile("email IS NOT NULL") == Not(EqualTo(Variable("email"), Variable(None, None)))


def test_compiles_like_to_anchored_regex() -> None:
    condition = _compile("name LIKE 'J_n%'")

    assert condition == Matches(Variable("name"), Variable(None, "^J.n.*$"))
    assert condition.evaluate(Context({"name": "Jane"}))
    assert not condition.evaluate(Context({"name": "Joan"}))
    assert isinstance(_compile("name NOT LIKE 'x%'"), DoesNotMatch)


def test_compiled_field_references_share_resolver() -> None:
    condition = _compile("a.b = 1 OR a.b = c")

    first, second = condition.get_operands()
    assert first.get_operands()[0] is second.get_operands()[0]
    assert condition.evaluate(Context({"a": {"b": 2}, "c": 2}))


def test_compiles_in_list() -> None:
    condition = _compile("role IN ('admin', 'owner')")

    assert condition == In(Variable("role"), Variable(None, ["admin", "owner"]))
    assert condition.evaluate(Context({"role": "owner"}))


@pytest.mark.parametrize(
    "text",
    [
        "age >= 18 AND country = 'US'",
        "(a = 1 OR b = 2) AND c = 3",
        "a = 1 AND b = 2 OR c = 3",
        "NOT (age > 5)",
        "age NOT BETWEEN 18 AND 65",
        "role IN ('admin', 'owner')",
        "email IS NOT NULL",
        "name LIKE 'Jo%'",
        "a <> b",
    ],
    ids=["and", "or-in-and", "and-in-or", "not", "not-between", "in", "not-null", "like", "field-rhs"],
)
def test_canonical_text_round_trips(text: str) -> None:
    expected = text.replace("<>", "!=")

    assert SqlSerializer().serialize(_compile(text)) == expected


def test_serializes_values() -> None:
    rule = And(
        EqualTo(Variable("name"), Variable(None, "O'Brien")),
        Or(EqualTo(Variable("active"), Variable(None, True)), GreaterThanOrEqualTo(Variable("x"), Variable(None, 1.5))),
    )

    assert SqlSerializer().serialize(rule) == "name = 'O''Brien' AND (active = TRUE OR x >= 1.5)"


def test_unsupported_operator_raises() -> None:
    with pytest.raises(UnsupportedOperatorError, match="Contains"):
        SqlSerializer().serialize(Contains(Variable("name"), Variable(None, "x")))


def test_regex_without_like_form_raises() -> None:
    with pytest.raises(UnsupportedOperatorError, match="no LIKE equivalent"):
        SqlSerializer().serialize(Matches(Variable("name"), Variable(None, "^a+$")))


@pytest.mark.parametrize(
    ("value", "text"),
    [(1e-05, "x >= 0.00001"), (1e20, "x >= 100000000000000000000.0"), (-3.0, "x >= -3.0")],
    ids=["small", "large", "negative-whole"],
)
def test_floats_serialize_without_exponent(value: float, text: str) -> None:
    rule = GreaterThanOrEqualTo(Variable("x"), Variable(None, value))

    assert SqlSerializer().serialize(rule) == text
    assert _compile(text) == rule


def test_non_finite_float_raises() -> None:
    with pytest.raises(StructuralMismatchError, match="Non-finite"):
        SqlSerializer().serialize(EqualTo(Variable("x"), Variable(None, float("inf"))))
