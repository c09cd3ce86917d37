"""Parse-and-report validation shared by every grammar.

Validators only parse; compilation errors such as unsupported operator
names are not reported here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS
from rulesmith.dsl.text import error_context
from rulesmith.exceptions.base import RulesmithError
from rulesmith.exceptions.dsl import DslSyntaxError
from rulesmith.exceptions.validation import ValidationIssue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one input."""

    valid: bool
    errors: tuple[ValidationIssue, ...] = ()

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def failure(cls, errors: list[ValidationIssue] | tuple[ValidationIssue, ...]) -> ValidationResult:
        if not errors:
            raise ValueError("failure() needs at least one error")
        return cls(valid=False, errors=tuple(errors))

    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]

    @property
    def first_error(self) -> ValidationIssue | None:
        return self.errors[0] if self.errors else None

    def __bool__(self) -> bool:
        return self.valid


class Validator:
    """Wrap a parser and turn its failures into a :class:`ValidationResult`."""

    def __init__(
        self,
        parse: Callable[[Any], Any],
        dialect: str = "",
        context_radius: int = DEFAULT_CONTEXT_RADIUS,
    ) -> None:
        self._parse = parse
        self.dialect = dialect
        self.context_radius = context_radius

    def validate(self, source: Any) -> bool:
        return self.validate_with_errors(source).valid

    def validate_with_errors(self, source: Any) -> ValidationResult:
        try:
            self._parse(source)
        except DslSyntaxError as exc:
            context = exc.context
            if isinstance(source, str) and exc.position is not None:
                context = error_context(source, exc.position, self.context_radius)
            logger.debug("%s validation failed: %s", self.dialect or "dsl", exc.message)
            return ValidationResult.failure(
                [ValidationIssue(exc.message, exc.position, context, self.dialect)]
            )
        except RulesmithError as exc:
            return ValidationResult.failure([ValidationIssue(str(exc), dialect=self.dialect)])
        return ValidationResult.success()
