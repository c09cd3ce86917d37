"""Mongo-style document queries."""

from __future__ import annotations

from .compiler import MongoCompiler
from .parser import MongoParser
from .serializer import MongoSerializer
from .validator import MongoValidator

__all__ = ["MongoCompiler", "MongoParser", "MongoSerializer", "MongoValidator"]
