"""LDAP filter expressions."""

from __future__ import annotations

from .compiler import LdapCompiler
from .parser import LdapParser
from .serializer import LdapSerializer
from .validator import LdapValidator

__all__ = ["LdapCompiler", "LdapParser", "LdapSerializer", "LdapValidator"]
