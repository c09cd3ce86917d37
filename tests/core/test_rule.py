"""Tests for rules and rule sets."""

from __future__ import annotations

from rulesmith.core.context import Context
from rulesmith.core.rule import Rule, RuleSet
from rulesmith.core.variables import Variable
from rulesmith.operators import GreaterThan


def _adult_rule(action=None) -> Rule:
    return Rule(GreaterThan(Variable("age"), Variable(None, 17)), action)


def test_rule_evaluates_condition() -> None:
    rule = _adult_rule()

    assert rule.evaluate(Context({"age": 18}))
    assert not rule.evaluate(Context({"age": 17}))


def test_execute_runs_action_only_when_true() -> None:
    seen: list[int] = []
    rule = _adult_rule(lambda ctx: seen.append(ctx["age"]))

    assert rule.execute(Context({"age": 30})) is True
    assert rule.execute(Context({"age": 10})) is False
    assert seen == [30]


def test_execute_without_action_is_noop() -> None:
    assert _adult_rule().execute(Context({"age": 40})) is True


def test_rule_is_reusable_across_contexts() -> None:
    rule = _adult_rule()

    results = [rule.evaluate(Context({"age": age})) for age in (5, 50, 17, 18)]

    assert results == [False, True, False, True]


def test_rule_set_ignores_duplicate_instances() -> None:
    rule = _adult_rule()
    rule_set = RuleSet([rule])

    rule_set.add_rule(rule)
    rule_set.add_rule(_adult_rule())

    assert len(rule_set) == 2


def test_rule_set_executes_each_rule_in_order() -> None:
    fired: list[str] = []
    first = Rule(GreaterThan(Variable("age"), Variable(None, 17)), lambda ctx: fired.append("adult"))
    second = Rule(GreaterThan(Variable("age"), Variable(None, 64)), lambda ctx: fired.append("senior"))
    rule_set = RuleSet([first, second])

    rule_set.execute_rules(Context({"age": 70}))

    assert fired == ["adult", "senior"]
    assert rule_set.evaluate_rules(Context({"age": 30})) == [True, False]
    assert list(rule_set) == [first, second]
