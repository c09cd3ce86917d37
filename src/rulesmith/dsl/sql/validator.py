"""SQL-WHERE validation."""

from __future__ import annotations

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import SQL
from rulesmith.dsl.sql.parser import SqlParser
from rulesmith.dsl.validation import Validator


class SqlValidator(Validator):
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        super().__init__(SqlParser(max_depth).parse, SQL, context_radius)
