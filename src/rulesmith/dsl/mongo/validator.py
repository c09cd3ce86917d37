"""Mongo-style query validation."""

from __future__ import annotations

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import MONGO
from rulesmith.dsl.mongo.parser import MongoParser
from rulesmith.dsl.validation import Validator


class MongoValidator(Validator):
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        super().__init__(MongoParser(max_depth).parse, MONGO, context_radius)
