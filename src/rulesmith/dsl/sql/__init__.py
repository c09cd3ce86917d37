"""SQL-WHERE style expressions."""

from __future__ import annotations

from .compiler import SqlCompiler
from .parser import SqlParser
from .serializer import SqlSerializer
from .validator import SqlValidator

__all__ = ["SqlCompiler", "SqlParser", "SqlSerializer", "SqlValidator"]
