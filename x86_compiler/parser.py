"""
Recursive-descent parser for the x86 C Compiler.

Pulls tokens from the Lexer on demand and builds the AST defined in
ast_nodes. One method per grammar rule, no backtracking:

    Program    := Function EOF
    Function   := "int" Identifier "(" "void" ")" "{" Statement "}"
    Statement  := "return" Expression ";"
    Expression := IntegerConstant

Parsing stops at the first error. Every ParseError exposes a ``span``
so the diagnostic renderer can point at the offending source text.
"""

from __future__ import annotations
from typing import Iterable, Iterator

from .span import Span
from .lexer import LexerError, Token, TokenType
from .ast_nodes import ConstantInt, Expression, Function, Program, ReturnStmt, Statement


# ──────────────────────────────────────────────
# Parse errors
# ──────────────────────────────────────────────

class ParseError(Exception):
    """Base class for syntax errors; ``span`` locates the problem."""

    def __init__(self, message: str, span: Span):
        self.span = span
        super().__init__(message)


class UnexpectedEof(ParseError):
    def __init__(self, span: Span):
        super().__init__("unexpected end of input", span)


class UnexpectedToken(ParseError):
    def __init__(self, token: Token, expected: TokenType):
        self.token = token
        self.expected = expected
        super().__init__(f"expected {expected.describe()}, found {token.describe()}", token.span)


class UnexpectedTrailing(ParseError):
    def __init__(self, token: Token):
        self.token = token
        super().__init__(f"unexpected {token.describe()} after end of function", token.span)


class LexerFailure(ParseError):
    """A LexerError hit while pulling the next token."""

    def __init__(self, error: LexerError):
        self.error = error
        super().__init__(str(error), error.span)


# ──────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────

class Parser:
    """Recursive descent parser producing an AST from a token stream."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._last_end = 0          # offset just past the last consumed token

    # ── Helpers ─────────────────────────────

    def _pull(self) -> Token | None:
        try:
            tok = next(self._tokens)
        except StopIteration:
            return None
        except LexerError as e:
            raise LexerFailure(e) from e
        self._last_end = tok.span.end
        return tok

    def _next(self) -> Token:
        tok = self._pull()
        if tok is None:
            raise UnexpectedEof(Span.single(self._last_end))
        return tok

    def expect(self, ttype: TokenType) -> Token:
        tok = self._next()
        if tok.type != ttype:
            raise UnexpectedToken(tok, ttype)
        return tok

    def _expect_eof(self):
        tok = self._pull()
        if tok is not None:
            raise UnexpectedTrailing(tok)

    # ── Grammar rules ───────────────────────

    def parse(self) -> Program:
        """Parse the full token stream into a Program AST."""
        func = self.parse_function()
        self._expect_eof()
        return Program(func, span=func.span)

    def parse_function(self) -> Function:
        start = self.expect(TokenType.KW_INT)
        name = self.expect(TokenType.IDENT)
        self.expect(TokenType.LPAREN)
        self.expect(TokenType.KW_VOID)
        self.expect(TokenType.RPAREN)
        self.expect(TokenType.LBRACE)
        body = self.parse_statement()
        end = self.expect(TokenType.RBRACE)
        return Function(name.value, body, span=Span(start.span.start, end.span.end))

    def parse_statement(self) -> Statement:
        start = self.expect(TokenType.KW_RETURN)
        value = self.parse_expression()
        end = self.expect(TokenType.SEMI)
        return ReturnStmt(value, span=Span(start.span.start, end.span.end))

    def parse_expression(self) -> Expression:
        tok = self.expect(TokenType.CONSTANT)
        return ConstantInt(tok.value, span=tok.span)
