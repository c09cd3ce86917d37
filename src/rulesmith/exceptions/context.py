"""Fact store exceptions."""

from __future__ import annotations

from rulesmith.exceptions.base import RulesmithError


class FactError(RulesmithError):
    """Base class for fact store failures."""

    def __init__(self, message: str, key: str) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class UndefinedFactError(FactError, KeyError):
    """Raised when a fact is looked up that was never defined."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Fact "{key}" is not defined.', key)


class FrozenFactError(FactError):
    """Raised when overwriting a shared fact that has already been resolved."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Cannot override frozen fact "{key}".', key)


class CyclicFactError(FactError):
    """Raised when a shared factory resolves its own key while running."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Shared fact "{key}" was requested while it was being resolved.', key)
