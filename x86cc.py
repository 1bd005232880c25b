#!/usr/bin/env python3
"""
x86cc — minimal C compiler driver

Usage:
    python x86cc.py <input.c> [--lex | --parse | --codegen | -S] [-o output]
                              [--target linux|macos] [--cc gcc] [--verbose]

Stages:
    --lex       run the lexer, stop before parsing
    --parse     run lexer and parser, stop before lowering
    --codegen   lex, parse and lower, stop before emitting assembly
    -S          emit <input>.s (or -o) and stop before assembling
    (default)   emit, assemble and link into <input> (or -o)

Examples:
    python x86cc.py return_2.c                  # builds ./return_2
    python x86cc.py return_2.c -S --target macos
    python x86cc.py return_2.c --ast            # dump AST and exit

Exit status: 0 ok, 1 I/O error, 2 lexical error, 3 syntax error,
4 toolchain error, 5 internal compiler error.
"""

import argparse
import logging
import sys
import tempfile
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from x86_compiler import __version__
from x86_compiler.lexer import Lexer, LexerError
from x86_compiler.parser import Parser, ParseError, LexerFailure
from x86_compiler.codegen import CodeGenerator
from x86_compiler.emitter import AsmEmitter, DEFAULT_TARGET, TARGET_PLATFORMS
from x86_compiler.diagnostics import report_diagnostic
from x86_compiler.pretty import format_tree
from x86_compiler.toolchain import DEFAULT_CC, ToolchainError, assemble_and_link, preprocess

log = logging.getLogger("x86cc")

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_LEXER_ERROR = 2
EXIT_PARSE_ERROR = 3
EXIT_TOOLCHAIN_ERROR = 4
EXIT_INTERNAL_ERROR = 5


def setup_logging(verbose: bool = False):
    """Route log records to stderr through rich (WARNING+, DEBUG with -v)."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="x86cc",
        description="Minimal C compiler targeting x86-64 assembly",
        epilog="Targets: " + ", ".join(TARGET_PLATFORMS.keys()),
    )
    parser.add_argument("input", help="Input C source file")
    stage = parser.add_mutually_exclusive_group()
    stage.add_argument("--lex", action="store_true",
                       help="Run the lexer, but stop before parsing")
    stage.add_argument("--parse", action="store_true",
                       help="Run the lexer and parser, but stop before assembly generation")
    stage.add_argument("--codegen", action="store_true",
                       help="Lex, parse and generate assembly, but stop before emission")
    stage.add_argument("-S", dest="emit_only", action="store_true",
                       help="Emit an assembly file, but stop before assembling and linking")
    parser.add_argument("-o", "--output",
                        help="Output file (default: <input>.s with -S, else <input> without suffix)")
    parser.add_argument("--target", default=DEFAULT_TARGET,
                        choices=list(TARGET_PLATFORMS.keys()),
                        help=f"Target platform conventions (default: {DEFAULT_TARGET})")
    parser.add_argument("--cc", default=DEFAULT_CC,
                        help=f"C compiler driver used to preprocess, assemble and link (default: {DEFAULT_CC})")
    parser.add_argument("--tokens", action="store_true",
                        help="Dump token stream and exit (debug)")
    parser.add_argument("--ast", action="store_true",
                        help="Dump AST and exit (debug)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print compilation details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"x86cc {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return EXIT_IO_ERROR

    log.debug("input:  %s", input_path)
    log.debug("target: %s (%s)", args.target, TARGET_PLATFORMS[args.target]["description"])

    try:
        source = preprocess(input_path, cc=args.cc)
    except ToolchainError as e:
        print(f"Preprocessor error: {e}", file=sys.stderr)
        return EXIT_TOOLCHAIN_ERROR

    try:
        return _compile(args, input_path, source)
    except (LexerError, LexerFailure) as e:
        report_diagnostic(source, e)
        return EXIT_LEXER_ERROR
    except ParseError as e:
        report_diagnostic(source, e)
        return EXIT_PARSE_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except ToolchainError as e:
        print(f"Toolchain error: {e}", file=sys.stderr)
        return EXIT_TOOLCHAIN_ERROR
    except Exception:
        log.exception("internal compiler error")
        return EXIT_INTERNAL_ERROR


def _compile(args, input_path: Path, source: str) -> int:
    # Token dump / lex-only modes
    if args.tokens or args.lex:
        tokens = Lexer(source).tokenize()
        if args.tokens:
            for tok in tokens:
                print(tok)
        log.debug("lexed %d tokens", len(tokens))
        return EXIT_OK

    ast = Parser(Lexer(source)).parse()
    if args.ast:
        print(format_tree(ast), end="")
        return EXIT_OK
    if args.parse:
        return EXIT_OK

    asm = CodeGenerator().lower(ast)
    if args.codegen:
        log.debug("assembly model:\n%s", format_tree(asm))
        return EXIT_OK

    text = AsmEmitter(args.target).emit(asm)

    if args.emit_only:
        asm_path = Path(args.output) if args.output else input_path.with_suffix(".s")
        if _same_file(asm_path, input_path):
            print(f"Error: output {asm_path} would overwrite the input", file=sys.stderr)
            return EXIT_IO_ERROR
        asm_path.write_text(text, encoding="utf-8")
        log.debug("output: %s", asm_path)
        return EXIT_OK

    exe_path = Path(args.output) if args.output else input_path.with_suffix("")
    if _same_file(exe_path, input_path):
        print(f"Error: output {exe_path} would overwrite the input", file=sys.stderr)
        return EXIT_IO_ERROR

    # intermediate .s goes to the temp dir, never next to the input
    with tempfile.NamedTemporaryFile("w", suffix=".s", prefix=f"{input_path.stem}-",
                                     delete=False, encoding="utf-8") as f:
        f.write(text)
    asm_path = Path(f.name)
    try:
        assemble_and_link(asm_path, exe_path, cc=args.cc)
    finally:
        asm_path.unlink(missing_ok=True)
    log.debug("output: %s", exe_path)
    return EXIT_OK


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


if __name__ == "__main__":
    sys.exit(main())
