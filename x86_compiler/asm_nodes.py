"""
Assembly model for the x86 C Compiler.

One level below the AST: a program is one function, a function is a flat
list of instructions, and instructions work on immediates and the
return-value register. The emitter turns this model into target text.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union


# ──────────────────────────────────────────────
# Operands
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Immediate:
    value: int


@dataclass(frozen=True)
class Register:
    """The return-value register (%eax)."""


Operand = Union[Immediate, Register]


# ──────────────────────────────────────────────
# Instructions
# ──────────────────────────────────────────────

@dataclass
class Mov:
    src: Operand
    dst: Operand


@dataclass
class Ret:
    pass


Instruction = Union[Mov, Ret]


# ──────────────────────────────────────────────
# Functions / program
# ──────────────────────────────────────────────

@dataclass
class AsmFunction:
    name: str
    instructions: List[Instruction] = field(default_factory=list)


@dataclass
class AsmProgram:
    function: AsmFunction
