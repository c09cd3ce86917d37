"""GraphQL-filter style document queries."""

from __future__ import annotations

from .compiler import GraphQLCompiler
from .parser import GraphQLParser
from .serializer import GraphQLSerializer
from .validator import GraphQLValidator

__all__ = ["GraphQLCompiler", "GraphQLParser", "GraphQLSerializer", "GraphQLValidator"]
