"""Fact store used as the evaluation environment for rules.

Facts are literals or factories. A plain factory is invoked on every
lookup; a shared factory runs once, after which its result is memoized and
the key is frozen; a protected callable is returned without being invoked.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from rulesmith.exceptions.context import CyclicFactError, FrozenFactError, UndefinedFactError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shared:
    """Marks a factory whose result is computed once and then frozen."""

    factory: Callable[..., Any]


@dataclass(frozen=True)
class Protected:
    """Marks a callable that must be stored and returned as-is."""

    function: Callable[..., Any]


class Context:
    """Ordered mapping from fact names to fact definitions."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        self._raw: dict[str, Any] = {}
        self._frozen: set[str] = set()
        self._resolving: set[str] = set()
        for key, value in (values or {}).items():
            self.set(key, value)

    @staticmethod
    def share(factory: Callable[..., Any]) -> Shared:
        """Wrap *factory* so it is resolved once and memoized."""
        return Shared(factory)

    @staticmethod
    def protect(function: Callable[..., Any]) -> Protected:
        """Wrap *function* so lookups return it instead of calling it."""
        return Protected(function)

    def get(self, key: str) -> Any:
        """Resolve a fact, invoking or memoizing its factory as needed."""
        if key not in self._values:
            raise UndefinedFactError(key)

        definition = self._values[key]
        if key in self._frozen:
            return definition
        if isinstance(definition, Protected):
            return definition.function
        if isinstance(definition, Shared):
            return self._resolve_shared(key, definition)
        if callable(definition) and not isinstance(definition, type):
            return self._invoke(definition)
        return definition

    def set(self, key: str, definition: Any) -> None:
        if key in self._frozen:
            raise FrozenFactError(key)
        self._values[key] = definition

    def has(self, key: str) -> bool:
        return key in self._values

    def raw(self, key: str) -> Any:
        """Return the definition for *key* without invoking it."""
        if key not in self._values:
            raise UndefinedFactError(key)
        return self._raw.get(key, self._values[key])

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
        self._raw.pop(key, None)
        self._frozen.discard(key)

    def keys(self) -> list[str]:
        return list(self._values)

    def _resolve_shared(self, key: str, definition: Shared) -> Any:
        if key in self._resolving:
            raise CyclicFactError(key)
        self._resolving.add(key)
        try:
            value = self._invoke(definition.factory)
        finally:
            self._resolving.discard(key)
        self._raw[key] = definition
        self._values[key] = value
        self._frozen.add(key)
        logger.debug("Froze shared fact %r", key)
        return value

    def _invoke(self, factory: Callable[..., Any]) -> Any:
        """Call a factory with the context, or with no arguments if it takes none."""
        try:
            parameters = inspect.signature(factory).parameters
        except (TypeError, ValueError):
            return factory(self)
        if not parameters:
            return factory()
        return factory(self)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, definition: Any) -> None:
        self.set(key, definition)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Context(keys={self.keys()!r})"
