"""
Assembly emitter for the x86 C Compiler.

Renders the assembly model as AT&T-syntax x86-64 text. Symbol naming and
section directives depend on the selected target platform, which is an
explicit setting: the host the compiler runs on is never consulted, so
either convention can be produced from any machine.
"""

from __future__ import annotations
from typing import List

from .asm_nodes import AsmFunction, AsmProgram, Immediate, Instruction, Mov, Operand, Register, Ret


# ──────────────────────────────────────────────
# Target platforms
# ──────────────────────────────────────────────

TARGET_PLATFORMS = {
    "linux": {
        "symbol_prefix": "",
        "stack_note": True,
        "description": "Linux / ELF (GNU as)",
    },
    "macos": {
        "symbol_prefix": "_",
        "stack_note": False,
        "description": "macOS / Mach-O",
    },
}

DEFAULT_TARGET = "linux"

INDENT = "    "
STACK_NOTE = '.section .note.GNU-stack,"",@progbits'


class AsmEmitter:
    """Turns an AsmProgram into assembly text for one target platform."""

    def __init__(self, target: str = DEFAULT_TARGET):
        if target not in TARGET_PLATFORMS:
            raise ValueError(
                f"unknown target {target!r} (choose from {', '.join(TARGET_PLATFORMS)})")
        self.target = target
        self.profile = TARGET_PLATFORMS[target]

    def symbol(self, name: str) -> str:
        return f"{self.profile['symbol_prefix']}{name}"

    def emit(self, program: AsmProgram) -> str:
        lines = self._emit_function(program.function)
        if self.profile["stack_note"]:
            lines.append("")
            lines.append(f"{INDENT}{STACK_NOTE}")
        return "\n".join(lines) + "\n"

    def _emit_function(self, func: AsmFunction) -> List[str]:
        name = self.symbol(func.name)
        lines = [f"{INDENT}.globl {name}", f"{name}:"]
        for instr in func.instructions:
            lines.append(f"{INDENT}{self._emit_instruction(instr)}")
        return lines

    def _emit_instruction(self, instr: Instruction) -> str:
        if isinstance(instr, Mov):
            return f"movl {self._operand(instr.src)}, {self._operand(instr.dst)}"
        if isinstance(instr, Ret):
            return "ret"
        raise TypeError(f"cannot emit instruction {instr!r}")

    @staticmethod
    def _operand(op: Operand) -> str:
        if isinstance(op, Immediate):
            return f"${op.value}"
        if isinstance(op, Register):
            return "%eax"
        raise TypeError(f"cannot emit operand {op!r}")
