"""LDAP filter validation."""

from __future__ import annotations

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_MAX_DEPTH
from rulesmith.constants.dialects import LDAP
from rulesmith.dsl.ldap.parser import LdapParser
from rulesmith.dsl.validation import Validator


class LdapValidator(Validator):
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        super().__init__(LdapParser(max_depth).parse, LDAP, context_radius)
