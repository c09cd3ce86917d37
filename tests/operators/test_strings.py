"""Tests for string, type and date operators."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from rulesmith.core.context import Context
from rulesmith.core.variables import Variable
from rulesmith.exceptions import OperandError
from rulesmith.operators import (
    After,
    ArrayCount,
    Before,
    Contains,
    ContainsInsensitive,
    DoesNotContain,
    DoesNotContainInsensitive,
    DoesNotMatch,
    EndsWith,
    EndsWithInsensitive,
    EqualTo,
    IsArray,
    IsBetweenDates,
    IsBoolean,
    IsEmpty,
    IsNull,
    IsNumeric,
    IsString,
    Matches,
    StartsWith,
    StartsWithInsensitive,
    StringLength,
)

S = Variable("s")


def _lit(value: object) -> Variable:
    return Variable(None, value)


@pytest.mark.parametrize(
    ("operator", "s", "expected"),
    [
        (Contains(S, _lit("ell")), "hello", True),
        (Contains(S, _lit("b")), ["a", "b"], True),
        (ContainsInsensitive(S, _lit("ELL")), "hello", True),
        (DoesNotContain(S, _lit("xyz")), "hello", True),
        (DoesNotContainInsensitive(S, _lit("ELL")), "hello", False),
        (StartsWith(S, _lit("he")), "hello", True),
        (StartsWithInsensitive(S, _lit("HE")), "hello", True),
        (EndsWith(S, _lit("LO")), "hello", False),
        (EndsWithInsensitive(S, _lit("LO")), "hello", True),
        (Matches(S, _lit(r"^h.*o$")), "hello", True),
        (Matches(S, _lit("(?i)HELLO")), "hello", True),
        (Matches(S, _lit("1")), 1, False),
        (DoesNotMatch(S, _lit(r"\d")), "hello", True),
    ],
    ids=[
        "contains_substring",
        "contains_member",
        "contains_insensitive",
        "does_not_contain",
        "does_not_contain_insensitive",
        "starts_with",
        "starts_with_insensitive",
        "ends_with_case",
        "ends_with_insensitive",
        "matches",
        "matches_inline_flag",
        "matches_non_string",
        "does_not_match",
    ],
)
def test_string_operators(operator: object, s: object, expected: bool) -> None:
    assert operator.evaluate(Context({"s": s})) is expected  # type: ignore[attr-defined]


def test_string_length_produces_value() -> None:
    assert EqualTo(StringLength(S), _lit(5)).evaluate(Context({"s": "hello"}))
    assert EqualTo(StringLength(S), _lit(0)).evaluate(Context({"s": 12}))


def test_array_count_produces_value() -> None:
    assert EqualTo(ArrayCount(S), _lit(2)).evaluate(Context({"s": [1, 2]}))


@pytest.mark.parametrize(
    ("operator_cls", "value", "expected"),
    [
        (IsNull, None, True),
        (IsArray, [1], True),
        (IsArray, "abc", False),
        (IsBoolean, False, True),
        (IsNumeric, "3.5", True),
        (IsNumeric, True, False),
        (IsString, "x", True),
        (IsEmpty, "", True),
        (IsEmpty, [], True),
        (IsEmpty, "x", False),
    ],
    ids=[
        "null",
        "array",
        "string_not_array",
        "bool",
        "numeric_string",
        "bool_not_numeric",
        "string",
        "empty_str",
        "empty_list",
        "not_empty",
    ],
)
def test_type_checks(operator_cls: type, value: object, expected: bool) -> None:
    assert operator_cls(S).evaluate(Context({"s": value})) is expected


def test_dates_accept_iso_strings_and_dates() -> None:
    context = Context({"s": "2024-06-01T12:00:00"})

    assert After(S, _lit(date(2024, 1, 1))).evaluate(context)
    assert Before(S, _lit("2025-01-01")).evaluate(context)
    assert IsBetweenDates(S, _lit("2024-06-01"), _lit(datetime(2024, 6, 2, tzinfo=timezone.utc))).evaluate(context)


def test_unparseable_dates_are_false() -> None:
    assert not After(S, _lit("2020-01-01")).evaluate(Context({"s": "yesterday"}))


@pytest.mark.parametrize(
    "timestamp",
    [1e20, float("inf"), float("nan")],
    ids=["overflow", "infinity", "nan"],
)
def test_out_of_range_timestamps_are_false(timestamp: float) -> None:
    context = Context({"s": timestamp})

    assert not After(S, _lit("2020-01-01")).evaluate(context)
    assert not Before(S, _lit("2020-01-01")).evaluate(context)


@pytest.mark.parametrize("operator_cls", [Matches, DoesNotMatch], ids=["matches", "does_not_match"])
def test_invalid_pattern_fact_raises_operand_error(operator_cls: type) -> None:
    condition = operator_cls(S, Variable("pattern"))

    with pytest.raises(OperandError, match="Invalid regular expression '\\('"):
        condition.evaluate(Context({"s": "abc", "pattern": "("}))
