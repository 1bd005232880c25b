"""
AST Node definitions for the x86 C Compiler.

Defines the Abstract Syntax Tree produced by the parser and consumed by
the code generator. The supported language is a single function whose
body is one ``return <constant>;`` statement, so every node has exactly
one shape and no child is optional.

Each node remembers the Span it was parsed from. Spans are left out of
equality, so two trees compare equal when their structure matches.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .span import Span


class ASTNode:
    """Base class for all AST nodes."""


# ──────────────────────────────────────────────
# Expressions
# ──────────────────────────────────────────────

@dataclass
class ConstantInt(ASTNode):
    """64-bit integer constant."""
    value: int
    span: Optional[Span] = field(default=None, compare=False, repr=False)


Expression = ConstantInt


# ──────────────────────────────────────────────
# Statements
# ──────────────────────────────────────────────

@dataclass
class ReturnStmt(ASTNode):
    """return expr;"""
    value: Expression
    span: Optional[Span] = field(default=None, compare=False, repr=False)


Statement = ReturnStmt


# ──────────────────────────────────────────────
# Top level
# ──────────────────────────────────────────────

@dataclass
class Function(ASTNode):
    """int name(void) { body }"""
    name: str
    body: Statement
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass
class Program(ASTNode):
    """Root node: exactly one function definition."""
    function: Function
    span: Optional[Span] = field(default=None, compare=False, repr=False)
