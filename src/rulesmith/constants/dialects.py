"""Names of the supported surface grammars."""

from __future__ import annotations

NATURAL: str = "natural"
SQL: str = "sql"
LDAP: str = "ldap"
GRAPHQL: str = "graphql"
MONGO: str = "mongo"

DIALECT_NAMES: tuple[str, ...] = (NATURAL, SQL, LDAP, GRAPHQL, MONGO)
