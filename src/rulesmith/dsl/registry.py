"""Central dialect registry.

Maps grammar names to their parser, compiler, serializer and validator
classes. Only registered dialects can be selected from configuration or
the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import DIALECT_NAMES, GRAPHQL, LDAP, MONGO, NATURAL, SQL
from rulesmith.core.operator import Operator, Proposition
from rulesmith.core.rule import Action, Rule
from rulesmith.dsl.graphql import GraphQLCompiler, GraphQLParser, GraphQLSerializer, GraphQLValidator
from rulesmith.dsl.ldap import LdapCompiler, LdapParser, LdapSerializer, LdapValidator
from rulesmith.dsl.mongo import MongoCompiler, MongoParser, MongoSerializer, MongoValidator
from rulesmith.dsl.natural import NaturalCompiler, NaturalParser, NaturalSerializer, NaturalValidator
from rulesmith.dsl.sql import SqlCompiler, SqlParser, SqlSerializer, SqlValidator
from rulesmith.dsl.validation import ValidationResult, Validator
from rulesmith.exceptions.config import ConfigError

logger = logging.getLogger(__name__)

DIALECTS: dict[str, tuple[type, type, type, type[Validator]]] = {
    NATURAL: (NaturalParser, NaturalCompiler, NaturalSerializer, NaturalValidator),
    SQL: (SqlParser, SqlCompiler, SqlSerializer, SqlValidator),
    LDAP: (LdapParser, LdapCompiler, LdapSerializer, LdapValidator),
    GRAPHQL: (GraphQLParser, GraphQLCompiler, GraphQLSerializer, GraphQLValidator),
    MONGO: (MongoParser, MongoCompiler, MongoSerializer, MongoValidator),
}


@dataclass(frozen=True)
class Dialect:
    """One grammar's pipeline bundled behind a single interface."""

    name: str
    parser: Any
    compiler: Any
    serializer: Any
    validator: Validator

    def parse(self, source: Any) -> Any:
        """Surface syntax to this grammar's AST."""
        return self.parser.parse(source)

    def compile(self, source: Any) -> Proposition:
        """Parse *source* and compile the AST to an operator tree."""
        return self.compiler.compile(self.parser.parse(source))

    def serialize(self, rule: Rule | Operator) -> str:
        return self.serializer.serialize(rule)

    def validate(self, source: Any) -> bool:
        return self.validator.validate(source)

    def validate_with_errors(self, source: Any) -> ValidationResult:
        return self.validator.validate_with_errors(source)

    def to_rule(self, source: Any, action: Action | None = None) -> Rule:
        return Rule(self.compile(source), action)


def get_dialect(
    name: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> Dialect:
    """Build the named dialect; unknown names raise :class:`ConfigError`."""
    key = name.strip().lower() if isinstance(name, str) else name
    if key not in DIALECTS:
        raise ConfigError(f"Unknown dialect {name!r}; expected one of: {', '.join(DIALECT_NAMES)}")
    parser_cls, compiler_cls, serializer_cls, validator_cls = DIALECTS[key]
    logger.debug("Loading %s dialect (max_depth=%d)", key, max_depth)
    return Dialect(
        name=key,
        parser=parser_cls(max_depth),
        compiler=compiler_cls(),
        serializer=serializer_cls(),
        validator=validator_cls(max_depth, context_radius),
    )
