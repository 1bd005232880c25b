"""
x86 C Compiler
==============
A minimal C compiler: one ``int name(void)`` function whose body is a
single ``return <constant>;`` statement, compiled to x86-64 AT&T
assembly for Linux or macOS.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────┐
    │ C Source │───>│  Lexer   │───>│  Parser  │───>│ CodeGen  │───>│  Emitter  │
    │ (.i)     │    │ (tokens) │    │  (AST)   │    │ (asm IR) │    │ (asm text)│
    └──────────┘    └──────────┘    └──────────┘    └──────────┘    └───────────┘

    - span.py:        Span, the half-open source range carried by tokens and errors
    - lexer.py:       Lazy generator of Tokens, raises LexerError
    - parser.py:      Recursive descent, pulls tokens on demand, raises ParseError
    - diagnostics.py: line/column report with a caret underline for any located error
    - ast_nodes.py:   Dataclass tree produced by the parser
    - codegen.py:     AST -> assembly model (asm_nodes.py)
    - emitter.py:     Assembly model -> target text (linux / macos)
    - toolchain.py:   gcc as preprocessor, assembler and linker
"""

from __future__ import annotations
import logging

__version__ = "0.1.0"

from .span import Span
from .lexer import Lexer, LexerError, LexerErrorKind, Token, TokenType
from .ast_nodes import *
from .parser import (
    LexerFailure, ParseError, Parser, UnexpectedEof, UnexpectedToken, UnexpectedTrailing,
)
from .diagnostics import render_diagnostic, report_diagnostic
from .asm_nodes import AsmFunction, AsmProgram, Immediate, Mov, Register, Ret
from .codegen import CodeGenerator
from .emitter import DEFAULT_TARGET, TARGET_PLATFORMS, AsmEmitter
from .pretty import format_tree

log = logging.getLogger(__name__)


def lex(source: str) -> list:
    """Tokenize ``source`` completely; raises LexerError."""
    return Lexer(source).tokenize()


def parse(source: str) -> Program:
    """Parse ``source`` into a Program AST; raises ParseError."""
    return Parser(Lexer(source)).parse()


def lower(program: Program) -> AsmProgram:
    return CodeGenerator().lower(program)


def emit(program: AsmProgram, target: str = DEFAULT_TARGET) -> str:
    return AsmEmitter(target).emit(program)


def compile_source(source: str, *, target: str = DEFAULT_TARGET) -> str:
    """Compile pre-processed C source to assembly text for ``target``.

    Full pipeline: Lexer -> Parser -> AST -> CodeGenerator -> AsmEmitter.
    Lexical and syntax errors surface as ParseError (lexer failures are
    wrapped in LexerFailure); lowering and emission cannot fail.
    """
    emitter = AsmEmitter(target)
    ast = parse(source)
    log.debug("parsed function %s", ast.function.name)
    return emitter.emit(lower(ast))
