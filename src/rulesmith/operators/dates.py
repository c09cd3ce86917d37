"""Date comparisons over ``datetime``/``date`` values or ISO-8601 strings."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, resolve
from rulesmith.types.operators import Cardinality, OperatorKind


def to_datetime(value: object) -> datetime | None:
    """Coerce a date-like value to an aware datetime, or None if impossible.

    Naive values are taken as UTC so mixed inputs stay comparable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class After(Proposition):
    kind = OperatorKind.AFTER
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = (to_datetime(resolve(o, context).value) for o in self.get_operands())
        return left is not None and right is not None and left > right


class Before(Proposition):
    kind = OperatorKind.BEFORE
    cardinality = Cardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = (to_datetime(resolve(o, context).value) for o in self.get_operands())
        return left is not None and right is not None and left < right


class IsBetweenDates(Proposition):
    """Inclusive: ``IsBetweenDates(value, start, end)``."""

    kind = OperatorKind.IS_BETWEEN_DATES
    exact_operands = 3

    def evaluate(self, context: Context) -> bool:
        value, start, end = (to_datetime(resolve(o, context).value) for o in self.get_operands())
        if value is None or start is None or end is None:
            return False
        return start <= value <= end
