"""
Debug tree printer for AST and assembly-model nodes.

Walks any dataclass tree and renders it one node per line, four spaces
per level. Spans are skipped.
"""

from __future__ import annotations
import dataclasses
from typing import List

INDENT = "    "


def _fields(node):
    return [(f.name, getattr(node, f.name)) for f in dataclasses.fields(node) if f.compare]


def _is_branch(value) -> bool:
    return dataclasses.is_dataclass(value) or isinstance(value, list)


def _format(node, depth: int, label: str, out: List[str]):
    pad = INDENT * depth
    if dataclasses.is_dataclass(node):
        name = type(node).__name__
        fields = _fields(node)
        if not any(_is_branch(v) for _, v in fields):
            out.append(f"{pad}{label}{name}({', '.join(str(v) for _, v in fields)})")
            return
        out.append(f"{pad}{label}{name}(")
        # a lone child is printed without its field name
        named = len(fields) > 1
        for fname, val in fields:
            _format(val, depth + 1, f"{fname}=" if named else "", out)
        out.append(f"{pad})")
    elif isinstance(node, list):
        out.append(f"{pad}{label}[")
        for item in node:
            _format(item, depth + 1, "", out)
        out.append(f"{pad}]")
    else:
        out.append(f"{pad}{label}{node}")


def format_tree(node) -> str:
    """Pretty-print an AST or assembly-model node tree."""
    out: List[str] = []
    _format(node, 0, "", out)
    return "\n".join(out) + "\n"
