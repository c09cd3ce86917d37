"""English-like rule sentences."""

from __future__ import annotations

from .compiler import NaturalCompiler
from .parser import NaturalParser
from .serializer import NaturalSerializer
from .validator import NaturalValidator

__all__ = ["NaturalCompiler", "NaturalParser", "NaturalSerializer", "NaturalValidator"]
