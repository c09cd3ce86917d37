"""GraphQL-filter validation."""

from __future__ import annotations

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import GRAPHQL
from rulesmith.dsl.graphql.parser import GraphQLParser
from rulesmith.dsl.validation import Validator


class GraphQLValidator(Validator):
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        super().__init__(GraphQLParser(max_depth).parse, GRAPHQL, context_radius)
