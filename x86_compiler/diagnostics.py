"""
Diagnostic rendering for the x86 C Compiler.

Turns any located error (anything with a ``span`` and a message) into a
three-line report:

    line 2, col 1
    }
    ^ expected ';', found '}'

Rendering is a pure function of the source text and the error; it never
changes either.
"""

from __future__ import annotations
import sys
from typing import TextIO

TAB_WIDTH = 4


def _expand_tabs(text: str) -> str:
    return text.replace("\t", " " * TAB_WIDTH)


def render_diagnostic(source: str, error) -> str:
    """Format ``error`` against the source text it was raised for."""
    start = min(error.span.start, len(source))
    end = min(error.span.end, len(source))

    line_start = source.rfind("\n", 0, start) + 1
    # search from the last spanned character so a span over "\n" stays on its line
    line_end = source.find("\n", max(start, end - 1))
    if line_end == -1:
        line_end = len(source)

    line_no = source.count("\n", 0, line_start) + 1
    col = max(len(source[line_start:start]), 1)

    pad = len(_expand_tabs(source[line_start:start]))
    width = max(len(_expand_tabs(source[start:end])), 1)

    return (
        f"line {line_no}, col {col}\n"
        f"{_expand_tabs(source[line_start:line_end])}\n"
        f"{' ' * pad}{'^' * width} {error}\n"
    )


def report_diagnostic(source: str, error, stream: TextIO | None = None):
    """Write the rendered diagnostic to ``stream`` (stderr by default)."""
    (stream or sys.stderr).write(render_diagnostic(source, error))
