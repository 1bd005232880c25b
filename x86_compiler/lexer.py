"""
Lexer / Tokenizer for the x86 C Compiler.

Converts pre-processed C source text into a lazy stream of tokens for the
parser. The supported token set is deliberately tiny: the keywords
``int``, ``void`` and ``return``, identifiers, decimal integer constants
and the punctuation ``( ) { } ;``.

Tokens are produced one at a time by a generator, so the parser only
scans as far as it needs and the first lexical error stops the scan.
Every token carries a Span into the original source text.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .span import Span


# 64-bit signed range for integer constants
INT64_MAX = 2 ** 63 - 1
INT64_MAX_DIGITS = str(INT64_MAX)

ASCII_DIGITS = "0123456789"


# ──────────────────────────────────────────────
# Token types
# ──────────────────────────────────────────────

class TokenType(enum.Enum):
    # Literals
    CONSTANT = "CONSTANT"

    # Identifier
    IDENT = "IDENT"

    # Keywords
    KW_INT = "int"
    KW_VOID = "void"
    KW_RETURN = "return"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    SEMI = ";"

    def describe(self) -> str:
        """Human-readable name used in parse error messages."""
        if self is TokenType.IDENT:
            return "identifier"
        if self is TokenType.CONSTANT:
            return "integer constant"
        return f"'{self.value}'"


# ──────────────────────────────────────────────
# Token data class
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str | int
    span: Span

    def describe(self) -> str:
        if self.type is TokenType.IDENT:
            return f"identifier '{self.value}'"
        if self.type is TokenType.CONSTANT:
            return f"constant {self.value}"
        return f"'{self.value}'"

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.span.start}..{self.span.end})"


# ──────────────────────────────────────────────
# Keyword map
# ──────────────────────────────────────────────

KEYWORDS: Dict[str, TokenType] = {
    "int": TokenType.KW_INT,
    "void": TokenType.KW_VOID,
    "return": TokenType.KW_RETURN,
}

PUNCTUATION: Dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMI,
}


# ──────────────────────────────────────────────
# Lexer errors
# ──────────────────────────────────────────────

class LexerErrorKind(enum.Enum):
    UNEXPECTED_CHARACTER = "unexpected character"
    INVALID_CONST_SUFFIX = "invalid constant suffix"
    INVALID_INTEGER_LITERAL = "invalid integer literal"


class LexerError(Exception):
    def __init__(self, kind: LexerErrorKind, span: Span, char: Optional[str] = None):
        self.kind = kind
        self.span = span
        self.char = char
        super().__init__(self._message())

    def _message(self) -> str:
        if self.kind is LexerErrorKind.UNEXPECTED_CHARACTER:
            return f"unexpected character {self.char!r}"
        if self.kind is LexerErrorKind.INVALID_CONST_SUFFIX:
            return "invalid suffix on integer constant"
        return "integer constant does not fit in a 64-bit int"


# ──────────────────────────────────────────────
# Lexer
# ──────────────────────────────────────────────

def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or ch in ASCII_DIGITS


def _fits_int64(digits: str) -> bool:
    """Range check on digit text without leading zeros; int() refuses very long strings."""
    if len(digits) != len(INT64_MAX_DIGITS):
        return len(digits) < len(INT64_MAX_DIGITS)
    return digits <= INT64_MAX_DIGITS


class Lexer:
    """Tokenizes pre-processed C source into a lazy stream of Tokens.

    Iterating a Lexer always starts again from the beginning of the
    source, so the same buffer yields the same tokens on every pass.
    """

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yield tokens left to right; raises LexerError on the first bad input."""
        src = self.source
        pos = 0
        n = len(src)

        while True:
            while pos < n and src[pos].isspace():
                pos += 1
            if pos >= n:
                return

            ch = src[pos]

            # Identifier or keyword
            if _is_ident_start(ch):
                start = pos
                pos += 1
                while pos < n and _is_ident_char(src[pos]):
                    pos += 1
                text = src[start:pos]
                ttype = KEYWORDS.get(text, TokenType.IDENT)
                yield Token(ttype, text, Span(start, pos))
                continue

            # Integer constant
            if ch in ASCII_DIGITS:
                start = pos
                pos += 1
                while pos < n and src[pos] in ASCII_DIGITS:
                    pos += 1
                if pos < n and (src[pos].isalpha() or src[pos] == "_"):
                    raise LexerError(LexerErrorKind.INVALID_CONST_SUFFIX, Span.single(pos))
                digits = src[start:pos].lstrip("0") or "0"
                if not _fits_int64(digits):
                    raise LexerError(LexerErrorKind.INVALID_INTEGER_LITERAL, Span(start, pos))
                yield Token(TokenType.CONSTANT, int(digits), Span(start, pos))
                continue

            # Punctuation
            if ch in PUNCTUATION:
                yield Token(PUNCTUATION[ch], ch, Span.single(pos))
                pos += 1
                continue

            raise LexerError(LexerErrorKind.UNEXPECTED_CHARACTER, Span.single(pos), char=ch)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source and return a list of tokens."""
        return list(self.tokens())
