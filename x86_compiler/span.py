"""
Source spans for the x86 C Compiler.

A Span is a half-open range of offsets into the source text that was fed
to the Lexer. Every token and every error carries one, so diagnostics can
point back at the exact characters involved.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) offsets into the original source string."""
    start: int
    end: int

    @classmethod
    def single(cls, pos: int) -> Span:
        """Point span used for single characters and "insert here" errors."""
        return cls(pos, pos + 1)

    def text(self, source: str) -> str:
        return source[self.start:self.end]
