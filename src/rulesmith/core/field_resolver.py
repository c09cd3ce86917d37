"""Dotted field paths to variable chains, with per-instance identity caching."""

from __future__ import annotations

from rulesmith.core.operator import VariableOperand
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.exceptions.dsl import DslSyntaxError


class FieldResolver:
    """Resolve ``a.b.c`` into ``VariableProperty(VariableProperty(Variable(a), b), c)``.

    Each instance owns its cache, so one compilation reuses the same objects
    for repeated references while separate compilations never share them.
    """

    def __init__(self, default: object = None) -> None:
        self.default = default
        self._cache: dict[str, VariableOperand] = {}

    def resolve(self, path: str) -> VariableOperand:
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        segments = path.split(".")
        if not path or any(not segment.strip() for segment in segments):
            raise DslSyntaxError(f"Invalid field path {path!r}")

        prefix = segments[0]
        current = self._cache.get(prefix)
        if current is None:
            current = Variable(prefix)
            self._cache[prefix] = current
        for segment in segments[1:]:
            prefix = f"{prefix}.{segment}"
            cached = self._cache.get(prefix)
            if cached is None:
                cached = VariableProperty(current, segment, self.default)
                self._cache[prefix] = cached
            current = cached
        return current

    def __len__(self) -> int:
        return len(self._cache)
