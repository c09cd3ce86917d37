"""Natural-language rule validation."""

from __future__ import annotations

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import NATURAL
from rulesmith.dsl.natural.parser import NaturalParser
from rulesmith.dsl.validation import Validator


class NaturalValidator(Validator):
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        super().__init__(NaturalParser(max_depth).parse, NATURAL, context_radius)
