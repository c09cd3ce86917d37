"""Rules and rule sets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition

logger = logging.getLogger(__name__)

type Action = Callable[[Context], Any]


class Rule:
    """A boolean condition with an optional action run when it holds."""

    def __init__(self, condition: Proposition, action: Action | None = None) -> None:
        self.condition = condition
        self.action = action

    def evaluate(self, context: Context) -> bool:
        return self.condition.evaluate(context)

    def execute(self, context: Context) -> bool:
        """Evaluate and, if true, run the action with *context*.

        Returns the evaluation result so callers can tell whether the action
        fired.
        """
        matched = self.evaluate(context)
        if matched and self.action is not None:
            self.action(context)
        return matched

    def __repr__(self) -> str:
        return f"Rule({self.condition!r})"


class RuleSet:
    """An ordered collection of distinct rule instances."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: list[Rule] = []
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        if any(existing is rule for existing in self._rules):
            return
        self._rules.append(rule)

    def execute_rules(self, context: Context) -> None:
        for rule in self._rules:
            rule.execute(context)
        logger.debug("Executed %d rules", len(self._rules))

    def evaluate_rules(self, context: Context) -> list[bool]:
        return [rule.evaluate(context) for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)
